from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from fastapi import Depends, Header
from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode
from passlib.context import CryptContext

from config import settings
from errors import InvalidCredential, Unauthenticated

# --- Security & JWT Configuration ---
SECRET_KEY = settings.JWT_SECRET_KEY
ALGORITHM = settings.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Capabilities granted to every logged-in user. Product creation is open to
# any authenticated user, there is no admin role yet.
CAP_PRODUCTS_WRITE = "products:write"
CAP_ORDERS = "orders"
DEFAULT_CAPABILITIES = (CAP_PRODUCTS_WRITE, CAP_ORDERS)


# --- Password Hashing Functions ---
def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)


# --- JWT Token Creation ---
def create_access_token(user_id: str, capabilities: Iterable[str] = DEFAULT_CAPABILITIES,
                        expires_delta: timedelta | None = None):
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "userId": user_id,
        "caps": list(capabilities),
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _is_canonical(token: str) -> bool:
    # base64url decoding ignores the unused trailing bits of a segment, so a
    # changed last character can still decode to the same bytes
    segments = token.split(".")
    if len(segments) != 3:
        return False
    try:
        return all(
            base64url_encode(base64url_decode(seg.encode("ascii"))).decode("ascii") == seg
            for seg in segments
        )
    except (ValueError, UnicodeError):
        return False


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry. Raises InvalidCredential on any failure."""
    if not _is_canonical(token):
        raise InvalidCredential("Invalid token")
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise InvalidCredential("Invalid token")
    if not payload.get("userId"):
        raise InvalidCredential("Invalid token")
    return payload


# --- Auth Guard ---
def _token_from_header(authorization: Optional[str]) -> str:
    if not authorization:
        raise Unauthenticated("Access denied")
    # Raw tokens are the convention; a "Bearer " prefix is tolerated.
    if authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip()
    return authorization.strip()


def get_token_payload(authorization: Optional[str] = Header(None)) -> dict:
    return decode_access_token(_token_from_header(authorization))


def get_current_user_id(payload: dict = Depends(get_token_payload)) -> str:
    return payload["userId"]


def require_capability(capability: str):
    def checker(payload: dict = Depends(get_token_payload)) -> str:
        caps = payload.get("caps", DEFAULT_CAPABILITIES)
        if capability not in caps:
            raise InvalidCredential("Insufficient permissions", status_code=401)
        return payload["userId"]
    return checker
