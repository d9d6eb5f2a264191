# database.py

import logging

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from config import Settings

logger = logging.getLogger(__name__)

USERS = "users"
LOGIN_LOGS = "loginlogs"
PRODUCTS = "products"
ORDERS = "orders"
CONTACTS = "contacts"


def get_client(settings: Settings) -> MongoClient:
    # MongoClient connects lazily, so this never blocks the import
    return MongoClient(settings.MONGO_URI, serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS)


def ping(client: MongoClient) -> bool:
    """Check the deployment is reachable. Failures are logged, never raised."""
    try:
        client.admin.command("ping")
        logger.info("Connected to MongoDB")
        return True
    except PyMongoError as e:
        logger.error("MongoDB connection error: %s", e)
        return False


def ensure_indexes(db: Database) -> None:
    try:
        db[USERS].create_index([("email", ASCENDING)], unique=True)
        db[ORDERS].create_index([("userId", ASCENDING)])
    except PyMongoError as e:
        logger.error("Could not create indexes: %s", e)


def get_db(request: Request) -> Database:
    return request.app.state.db
