import logging
import re

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

import crud
from database import get_db
from errors import ConflictError, InternalError, InvalidCredential, ValidationError
from . import schemas, utils

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Authentication"]
)

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}$")


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserRegister, db: Database = Depends(get_db)):
    if not user.email or not user.password:
        raise ValidationError("Email and password are required.")
    if not EMAIL_RE.match(user.email):
        raise ValidationError("Invalid email format.")

    try:
        if crud.get_user_by_email(db, user.email):
            raise ConflictError("Email already in use.")
        crud.create_user(db, user.email, user.password)
    except DuplicateKeyError:
        # lost a race against a concurrent registration
        raise ConflictError("Email already in use.")
    except PyMongoError as e:
        logger.error("Error registering %s: %s", user.email, e)
        raise InternalError(f"Error registering user: {e}")

    logger.info("Registered user %s", user.email)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "User registered successfully!"}
    )


@router.post("/login", response_model=schemas.Token)
def login(form_data: schemas.UserLogin, db: Database = Depends(get_db)):
    try:
        user = crud.get_user_by_email(db, form_data.email)
        # Same answer for unknown email and wrong password
        if not user or not utils.verify_password(form_data.password, user["password"]):
            crud.log_login_attempt(db, form_data.email, crud.LOGIN_FAILURE)
            logger.info("Failed login for %s", form_data.email)
            raise InvalidCredential("Invalid credentials")

        token = utils.create_access_token(str(user["_id"]))
        crud.log_login_attempt(db, form_data.email, crud.LOGIN_SUCCESS)
    except PyMongoError as e:
        logger.error("Login error for %s: %s", form_data.email, e)
        raise InternalError("Server error")

    logger.info("Successful login for %s", form_data.email)
    return {"token": token}
