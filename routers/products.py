# routers/products.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pymongo.database import Database
from pymongo.errors import PyMongoError

import crud
from auth import utils as auth_utils
from database import get_db
from errors import InternalError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])


class ProductCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    imageUrl: Optional[str] = None


# Any valid token carries products:write; there is no admin role check.
@router.post("", status_code=status.HTTP_201_CREATED)
def add_product(
    product: ProductCreate,
    user_id: str = Depends(auth_utils.require_capability(auth_utils.CAP_PRODUCTS_WRITE)),
    db: Database = Depends(get_db),
):
    try:
        product_id = crud.add_product(db, product.model_dump())
    except PyMongoError as e:
        raise ValidationError(f"Error adding product: {e}")
    logger.info("Product %s added by %s", product_id, user_id)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content={"message": "Product added"})


@router.get("")
def get_products(db: Database = Depends(get_db)):
    try:
        return crud.list_products(db)
    except PyMongoError as e:
        raise InternalError(f"Error fetching products: {e}")
