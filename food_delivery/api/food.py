"""
Food catalog API router
"""
from typing import Any
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session
from food_delivery.core.database import get_db
from food_delivery.models.food import FoodListResponse, FoodRemoveRequest
from food_delivery.services.catalog import CatalogStore
from food_delivery.services.storage import ImageStorage

router = APIRouter(prefix="/food", tags=["food"])

def get_catalog(db: Session = Depends(get_db)) -> CatalogStore:
    return CatalogStore(db)

def get_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage

@router.post("/add")
def add_food(
    name: str = Form(...),
    price: float = Form(...),
    category: str = Form(...),
    description: str = Form(""),
    image: UploadFile = File(...),
    catalog: CatalogStore = Depends(get_catalog),
    storage: ImageStorage = Depends(get_storage),
) -> Any:
    """Add a food item with its image"""
    filename = storage.save(image)
    try:
        catalog.add_item(name, description, price, category, filename)
    except Exception:
        storage.delete(filename)
        raise
    return {"success": True, "message": "Food Added"}

@router.get("/list", response_model=FoodListResponse)
def list_food(catalog: CatalogStore = Depends(get_catalog)) -> Any:
    """List all food items"""
    return {"success": True, "data": catalog.list_items()}

@router.post("/remove")
def remove_food(
    payload: FoodRemoveRequest,
    catalog: CatalogStore = Depends(get_catalog),
    storage: ImageStorage = Depends(get_storage),
) -> Any:
    """Remove a food item and its stored image"""
    item = catalog.remove_item(payload.id)
    storage.delete(item.image)
    return {"success": True, "message": "Food Removed"}
