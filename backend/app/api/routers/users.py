# app/api/routers/users.py
from typing import Any

from fastapi import APIRouter, Body, Depends

from app.api.deps import get_token_service
from app.core.security import TokenService
from app.schemas import LoginIn, RegisterIn, parse_body
from app.services import accounts

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register")
async def register(payload: Any = Body(default=None)):
    """
    Register a new account.

    Body:
        - name: str (3-50)
        - email: str (valid address, stored lowercase, unique)
        - password: str (5-500, stored as a bcrypt hash)
        - confirmpw: str (must equal password)

    Returns:
        dict: Public fields of the new user: id, name, email (never the hash)

    Errors (400, key ``register_error``):
        invalid body, email already registered, passwords do not match
    """
    body = parse_body(RegisterIn, payload, key="register_error")
    user = await accounts.register(body)
    return {"id": str(user.id), "name": user.name, "email": user.email}


@router.post("/login")
async def login(payload: Any = Body(default=None), tokens: TokenService = Depends(get_token_service)):
    """
    Authenticate and issue a token valid for two hours.

    Returns:
        dict: ``{"success": True, "token": "Bearer <token>"}``

    Errors (key ``signin_error``):
        400 invalid body or wrong password, 404 unknown email
    """
    body = parse_body(LoginIn, payload, key="signin_error")
    token = await accounts.login(body, tokens)
    return {"success": True, "token": f"Bearer {token}"}
