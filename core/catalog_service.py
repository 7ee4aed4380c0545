# core/catalog_service.py
import logging
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from core.access import Actor, require_admin
from core.errors import NotFoundError, ValidationError
from core.logger import log_action
from models.cart import Cart
from models.food_item import FoodItem, normalize_category

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "description", "category", "price", "available", "image")


def _clean_price(value) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Price must be a number")
    if price != price or price < 0:  # NaN or negative
        raise ValidationError("Price must be zero or more")
    return round(price, 2)


def _clean_name(value) -> str:
    name = str(value).strip() if value is not None else ""
    if not name:
        raise ValidationError("Food name is required")
    return name


def list_foods(db: Session, category: Optional[str] = None, available_only: bool = False) -> List[FoodItem]:
    """All menu items ordered by category then name; category matches on the display form."""
    query = db.query(FoodItem)
    if available_only:
        query = query.filter(FoodItem.available.is_(True))
    items = query.order_by(FoodItem.category, FoodItem.name).all()
    if category and category != "All":
        wanted = normalize_category(category)
        items = [i for i in items if i.display_category == wanted]
    return items


def list_categories(db: Session) -> List[str]:
    raw = [row[0] for row in db.query(FoodItem.category).distinct().all()]
    return sorted({normalize_category(c) for c in raw})


def get_food(db: Session, food_id: int) -> FoodItem:
    food = db.query(FoodItem).filter(FoodItem.id == food_id).first()
    if not food:
        raise NotFoundError("Food not found")
    return food


def find_available_by_ids(db: Session, ids: Iterable[int]) -> List[FoodItem]:
    """Exactly the requested foods that exist and are marked available."""
    ids = list(ids)
    if not ids:
        return []
    return db.query(FoodItem).filter(FoodItem.id.in_(ids), FoodItem.available.is_(True)).all()


def create_food(db: Session, actor: Actor, name, price, category: str = "", description: str = "",
                image: Optional[str] = None, available: bool = True) -> FoodItem:
    require_admin(actor)
    food = FoodItem(
        name=_clean_name(name),
        price=_clean_price(price),
        category=(category or "").strip(),
        description=(description or "").strip(),
        image=image or None,
        available=bool(available),
    )
    db.add(food)
    db.commit()
    db.refresh(food)
    log_action(db, actor.email, f"Created food #{food.id} '{food.name}'")
    logger.info("Food #%s created by user %s", food.id, actor.user_id)
    return food


def update_food(db: Session, actor: Actor, food_id: int, **fields) -> FoodItem:
    """Apply a partial update; unknown keys are rejected, None values are ignored."""
    require_admin(actor)
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown food field(s): {', '.join(sorted(unknown))}")

    food = get_food(db, food_id)
    for key, value in fields.items():
        if value is None:
            continue
        if key == "name":
            value = _clean_name(value)
        elif key == "price":
            value = _clean_price(value)
        elif key in ("category", "description"):
            value = str(value).strip()
        elif key == "available":
            value = bool(value)
        setattr(food, key, value)
    db.commit()
    db.refresh(food)
    log_action(db, actor.email, f"Updated food #{food.id} ({', '.join(sorted(fields))})")
    return food


def set_availability(db: Session, actor: Actor, food_id: int, available: bool) -> FoodItem:
    return update_food(db, actor, food_id, available=bool(available))


def delete_food(db: Session, actor: Actor, food_id: int):
    """Remove a menu item. Past orders keep their snapshot lines; carts drop the item."""
    require_admin(actor)
    food = get_food(db, food_id)
    name = food.name
    db.query(Cart).filter(Cart.food_id == food_id).delete(synchronize_session=False)
    db.delete(food)
    db.commit()
    log_action(db, actor.email, f"Deleted food #{food_id} '{name}'")
    logger.info("Food #%s deleted by user %s", food_id, actor.user_id)
