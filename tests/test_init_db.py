from core.auth_service import authenticate_user, get_user_by_email
from core.config import Settings
from core.db import create_session_factory
from init_db import init_db, promote
from models.food_item import FoodItem


def test_init_db_seeds_admin_demo_user_and_menu(tmp_path):
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'bigbite.db'}")
    init_db(settings)
    # Running again rebuilds rather than duplicating
    init_db(settings)

    db = create_session_factory(settings.database_url)()
    try:
        assert get_user_by_email(db, settings.admin_email).is_admin
        demo, _ = authenticate_user(db, "demo@bigbite.com", "demo123")
        assert demo is not None and not demo.is_admin
        assert demo.delivery_address

        foods = db.query(FoodItem).all()
        assert len(foods) == 10
        assert {f.category for f in foods} >= {"Pizza", "Burgers", "Drinks"}
        assert all(f.available for f in foods)
    finally:
        db.close()


def test_promote_command(tmp_path):
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'bigbite.db'}")
    init_db(settings)

    assert promote(settings, "demo@bigbite.com").is_admin
    assert promote(settings, "chef@bigbite.com", "chef123").email == "chef@bigbite.com"
