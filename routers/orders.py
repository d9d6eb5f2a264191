# routers/orders.py

import logging
import smtplib
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pymongo.database import Database
from pymongo.errors import PyMongoError

import crud
import mailer
from auth import utils as auth_utils
from database import get_db
from errors import ExternalServiceError, InternalError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


class OrderCreate(BaseModel):
    # Line items and total are stored exactly as the client sends them
    products: List[Any] = []
    total: Optional[float] = None


@router.post("", status_code=status.HTTP_201_CREATED)
def place_order(
    order: OrderCreate,
    user_id: str = Depends(auth_utils.require_capability(auth_utils.CAP_ORDERS)),
    db: Database = Depends(get_db),
    mail: mailer.Mailer = Depends(mailer.get_mailer),
):
    try:
        order_id = crud.create_order(db, user_id, order.products, order.total)
        user = crud.get_user_by_id(db, user_id)
    except PyMongoError as e:
        raise InternalError(f"Error placing order: {e}")
    logger.info("Order %s placed by %s", order_id, user_id)

    # The confirmation is required: a failure here fails the request even
    # though the order is already stored. Nothing is rolled back.
    if not user:
        raise InternalError("Error placing order: user not found")
    subject, text = mailer.order_confirmation(order.total or 0)
    try:
        mail.send(user["email"], subject, text)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Confirmation email for order %s failed: %s", order_id, e)
        raise ExternalServiceError(f"Error placing order: {e}")

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "Order placed and confirmation email sent"},
    )


@router.get("")
def get_orders(
    user_id: str = Depends(auth_utils.get_current_user_id),
    db: Database = Depends(get_db),
):
    try:
        return crud.list_orders(db, user_id)
    except PyMongoError as e:
        raise InternalError(f"Error fetching orders: {e}")
