# api/routes_foods.py
from typing import List, Optional
from fastapi import APIRouter, Depends

from api.deps import get_actor, get_db
from api.schemas import FoodCreate, FoodOut, FoodUpdate
from core import catalog_service

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("", response_model=List[FoodOut])
def list_foods(category: Optional[str] = None, available: Optional[bool] = None, db=Depends(get_db)):
    """Public menu. `available=true` hides items switched off by the kitchen."""
    return catalog_service.list_foods(db, category=category, available_only=bool(available))


@router.get("/categories", response_model=List[str])
def list_categories(db=Depends(get_db)):
    return catalog_service.list_categories(db)


@router.get("/{food_id}", response_model=FoodOut)
def food_detail(food_id: int, db=Depends(get_db)):
    return catalog_service.get_food(db, food_id)


@router.post("", response_model=FoodOut, status_code=201)
def create_food(payload: FoodCreate, db=Depends(get_db), actor=Depends(get_actor)):
    return catalog_service.create_food(db, actor, **payload.model_dump())


@router.put("/{food_id}", response_model=FoodOut)
def update_food(food_id: int, payload: FoodUpdate, db=Depends(get_db), actor=Depends(get_actor)):
    return catalog_service.update_food(db, actor, food_id, **payload.model_dump(exclude_unset=True))


@router.delete("/{food_id}")
def delete_food(food_id: int, db=Depends(get_db), actor=Depends(get_actor)):
    catalog_service.delete_food(db, actor, food_id)
    return {"message": "Food deleted"}
