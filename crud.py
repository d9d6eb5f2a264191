# crud.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database

from auth.utils import get_password_hash
from database import CONTACTS, LOGIN_LOGS, ORDERS, PRODUCTS, USERS

LOGIN_SUCCESS = "Success"
LOGIN_FAILURE = "Failure"


def serialize(doc: Dict[str, Any]) -> Dict[str, Any]:
    # _id -> str, datetimes -> ISO strings
    out = {}
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            value = str(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        out[key] = value
    return out


# Users
def create_user(db: Database, email: str, password: str) -> str:
    doc = {"email": email, "password": get_password_hash(password)}
    return str(db[USERS].insert_one(doc).inserted_id)


def get_user_by_email(db: Database, email: str) -> Optional[Dict[str, Any]]:
    return db[USERS].find_one({"email": email})


def get_user_by_id(db: Database, user_id: str) -> Optional[Dict[str, Any]]:
    try:
        oid = ObjectId(user_id)
    except (InvalidId, TypeError):
        return None
    return db[USERS].find_one({"_id": oid})


# Login audit log
def log_login_attempt(db: Database, email: str, status: str) -> None:
    db[LOGIN_LOGS].insert_one({
        "email": email,
        "loginTime": datetime.now(timezone.utc),
        "status": status,
    })


def list_login_attempts(db: Database, email: Optional[str] = None) -> List[Dict[str, Any]]:
    query = {"email": email} if email is not None else {}
    return [serialize(d) for d in db[LOGIN_LOGS].find(query)]


# Products
def add_product(db: Database, data: Dict[str, Any]) -> str:
    return str(db[PRODUCTS].insert_one(dict(data)).inserted_id)


def list_products(db: Database) -> List[Dict[str, Any]]:
    return [serialize(d) for d in db[PRODUCTS].find()]


# Orders
def create_order(db: Database, user_id: str, products: List[Any], total: float) -> str:
    doc = {
        "userId": user_id,
        "products": products,
        "total": total,
        "createdAt": datetime.now(timezone.utc),
    }
    return str(db[ORDERS].insert_one(doc).inserted_id)


def list_orders(db: Database, user_id: str) -> List[Dict[str, Any]]:
    return [serialize(d) for d in db[ORDERS].find({"userId": user_id})]


# Contact submissions
def create_contact(db: Database, name: Optional[str], email: Optional[str], message: Optional[str]) -> Dict[str, Any]:
    doc = {
        "name": name,
        "email": email,
        "message": message,
        "createdAt": datetime.now(timezone.utc),
    }
    doc["_id"] = db[CONTACTS].insert_one(doc).inserted_id
    return doc
