"""
Database setup for Big-Bite.

    python init_db.py                      rebuild tables, seed admin/demo user/menu
    python init_db.py promote EMAIL [PW]   make EMAIL an admin (creates it if missing)
"""
import argparse
import logging

import models  # noqa: F401  registers every table on Base.metadata
from core.auth_service import create_user, get_user_by_email
from core.config import load_settings
from core.db import Base, create_engine_for, create_session_factory
from core.logger import configure_logging
from core.user_service import create_default_admin, promote_to_admin
from models.food_item import FoodItem

logger = logging.getLogger(__name__)

DEMO_USER = dict(
    full_name="Demo Customer",
    email="demo@bigbite.com",
    password="demo123",
    phone_number="0912-345-678",
    delivery_address="1 Demo Street, Taipei",
)

def seed_food_items(db):
    existing = db.query(FoodItem).first()
    if existing:
        logger.info("Food items already seeded.")
        return
    sample_items = [
        FoodItem(name="Margherita Pizza", description="Tomato, mozzarella, fresh basil.", category="Pizza", price=250.0),
        FoodItem(name="Pepperoni Pizza", description="Double pepperoni, mozzarella.", category="Pizza", price=290.0),
        FoodItem(name="Classic Cheeseburger", description="Beef patty, cheddar, pickles.", category="Burgers", price=180.0),
        FoodItem(name="Big Bite Double", description="Two patties, bacon, house sauce.", category="Burgers", price=260.0),
        FoodItem(name="Chicken Club Sandwich", description="Grilled chicken, bacon, lettuce.", category="Sandwiches", price=160.0),
        FoodItem(name="Carbonara", description="Spaghetti, pancetta, egg yolk, pecorino.", category="Pasta", price=220.0),
        FoodItem(name="Caesar Salad", description="Romaine, croutons, parmesan.", category="Salads", price=150.0),
        FoodItem(name="Chocolate Lava Cake", description="Warm cake with a molten center.", category="Desserts", price=120.0),
        FoodItem(name="Iced Lemon Tea", description="Fresh brewed, lightly sweet.", category="Drinks", price=60.0),
        FoodItem(name="Cola", description="330ml can.", category="Drinks", price=45.0),
    ]
    db.add_all(sample_items)
    db.commit()
    logger.info("Seeded %d food items.", len(sample_items))

def seed_demo_user(db):
    if get_user_by_email(db, DEMO_USER["email"]):
        logger.info("Demo user already exists.")
        return
    create_user(db, **DEMO_USER)
    logger.info("Demo user created: %s / %s", DEMO_USER["email"], DEMO_USER["password"])

def init_db(settings):
    logger.info("Rebuilding database (drop/create) at %s", settings.database_url)
    engine = create_engine_for(settings.database_url)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

    session_factory = create_session_factory(settings.database_url)
    db = session_factory()
    try:
        create_default_admin(db, settings)
        seed_demo_user(db)
        seed_food_items(db)
    finally:
        db.close()
    logger.info("Database initialization complete. Default admin: %s / %s",
                settings.admin_email, settings.admin_password)

def promote(settings, email, password=None):
    session_factory = create_session_factory(settings.database_url)
    db = session_factory()
    try:
        user, created = promote_to_admin(db, email, password, default_password=settings.admin_password)
    finally:
        db.close()
    if created:
        logger.info("Created admin %s", user.email)
    else:
        logger.info("Promoted %s to admin", user.email)
    return user

def main(argv=None):
    parser = argparse.ArgumentParser(description="Create and seed the Big-Bite database.")
    sub = parser.add_subparsers(dest="command")
    promote_parser = sub.add_parser("promote", help="Grant the admin role to a user")
    promote_parser.add_argument("email")
    promote_parser.add_argument("password", nargs="?", default=None)
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings)
    if args.command == "promote":
        promote(settings, args.email, args.password)
    else:
        init_db(settings)

if __name__ == "__main__":
    main()
