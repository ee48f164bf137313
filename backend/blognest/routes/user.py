"""
BlogNest Backend — User Route Handlers
========================================

What:  The /user endpoints: register, login, list.
How:   Thin handlers over AccountService. Responses only ever contain
       UserPublic, which has no password field.
"""

from fastapi import APIRouter, Depends, status

from blognest.routes.deps import get_account_service
from blognest.schemas.common import ErrorResponse
from blognest.schemas.user import (
    UserEnvelope,
    UserListEnvelope,
    UserLogin,
    UserRegister,
)
from blognest.services import AccountService

router = APIRouter(prefix="/user", tags=["Users"])


@router.post(
    "/register",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Register a new account",
)
async def register(
    payload: UserRegister,
    accounts: AccountService = Depends(get_account_service),
) -> UserEnvelope:
    user = await accounts.register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return UserEnvelope(message="Welcome aboard", user=user)


@router.post(
    "/login",
    response_model=UserEnvelope,
    responses={
        400: {"description": "Missing fields", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Check an email/password pair",
)
async def login(
    payload: UserLogin,
    accounts: AccountService = Depends(get_account_service),
) -> UserEnvelope:
    user = await accounts.login(email=payload.email, password=payload.password)
    return UserEnvelope(message="Welcome back", user=user)


@router.get(
    "/get-all-user",
    response_model=UserListEnvelope,
    summary="List every registered user",
)
async def get_all_users(
    accounts: AccountService = Depends(get_account_service),
) -> UserListEnvelope:
    users = await accounts.list_all()
    return UserListEnvelope(message="All users listed", user_count=len(users), users=users)
