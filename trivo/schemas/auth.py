from pydantic import BaseModel

from .usuario import Usuario


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserLogin(BaseModel):
    email: str
    password: str


class LoginResponse(Token):
    user: Usuario
