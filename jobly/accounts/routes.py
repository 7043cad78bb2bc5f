from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from jobly import auth
from jobly.db import get_engine
from jobly.errors import UnauthorizedError
from jobly.models import LoginRequest, RegisterRequest, TokenResponse, User
from .db import authenticate_user, register_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def login(req: LoginRequest, engine: Engine = Depends(get_engine)):
    acct = authenticate_user(engine, req.username, req.password)
    if not acct:
        raise UnauthorizedError("Invalid username/password")
    return TokenResponse(token=auth.create_access_token(acct.username, acct.is_admin))


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(req: RegisterRequest, engine: Engine = Depends(get_engine)):
    acct = register_user(engine, req.username, req.password)
    return TokenResponse(token=auth.create_access_token(acct.username, acct.is_admin))


@router.get("/me")
async def me(user: User = Depends(auth.ensure_logged_in)):
    return {"user": {"username": user.username, "isAdmin": user.is_admin}}
