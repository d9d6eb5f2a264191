from pydantic import BaseModel
from typing import Optional


class UserRegister(BaseModel):
    # Both optional so the handler can answer with its own messages
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    email: str
    password: str


class Token(BaseModel):
    token: str
