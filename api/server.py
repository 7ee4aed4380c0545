# api/server.py
import uvicorn

from api.app import create_app
from core.config import load_settings
from core.logger import configure_logging


def main():
    settings = load_settings()
    configure_logging(settings)
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
