# api/routes_orders.py
from typing import List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query

from api.deps import get_actor, get_context, get_db
from api.schemas import OrderCreate, OrderOut, StatusUpdate
from core import analytics_service, order_service

router = APIRouter(prefix="/orders", tags=["orders"])


# Analytics first so "/analytics/..." is never read as an order id
@router.get("/analytics/overview")
def analytics_overview(days: Optional[str] = Query(default=None, description="Window size, clamped to 1..30"),
                       db=Depends(get_db), actor=Depends(get_actor)):
    """KPIs, status counts and the per-day series (admin only)."""
    return analytics_service.get_overview(db, actor, days)


@router.get("/analytics/best-sellers")
def analytics_best_sellers(limit: int = Query(default=5, ge=1, le=50), db=Depends(get_db), actor=Depends(get_actor)):
    return analytics_service.get_best_selling_items(db, actor, limit=limit)


@router.post("", response_model=OrderOut, status_code=201)
def place_order(payload: OrderCreate, background_tasks: BackgroundTasks,
                db=Depends(get_db), actor=Depends(get_actor), context=Depends(get_context)):
    order = order_service.create_order(
        db,
        actor,
        items=[item.model_dump() for item in payload.items],
        delivery_address=payload.delivery_address,
        phone_number=payload.phone_number,
        recipient_name=payload.recipient_name,
    )
    if actor.email:
        background_tasks.add_task(context.mailer.send_order_confirmation, actor.email, order)
    return order


@router.get("", response_model=List[OrderOut])
def all_orders(status: Optional[str] = None, db=Depends(get_db), actor=Depends(get_actor)):
    """Every order, newest first (admin only)."""
    return order_service.list_all_orders(db, actor, status=status)


@router.get("/user/{user_id}", response_model=List[OrderOut])
def orders_for_user(user_id: int, db=Depends(get_db), actor=Depends(get_actor)):
    return order_service.list_orders_by_user(db, actor, user_id)


@router.get("/{order_id}", response_model=OrderOut)
def order_detail(order_id: int, db=Depends(get_db), actor=Depends(get_actor)):
    return order_service.get_order(db, actor, order_id)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_status(order_id: int, payload: StatusUpdate, db=Depends(get_db), actor=Depends(get_actor)):
    return order_service.transition_order(db, actor, order_id, payload.status)
