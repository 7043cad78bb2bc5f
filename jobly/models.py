from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)


class TokenResponse(BaseModel):
    token: str


class User(BaseModel):
    username: str
    is_admin: bool = False
