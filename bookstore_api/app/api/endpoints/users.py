"""
User endpoints: registration and login.

Registered users are held in memory only.  Login answers every
failure with the same 401 so that it does not reveal whether a
username exists.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from bookstore_api.app.api.deps import get_user_service
from bookstore_api.app.core.errors import ConflictError, InvalidInputError, UnauthorizedError
from bookstore_api.app.schemas.user import Credentials, LoginResponse, MessageResponse
from bookstore_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    credentials: Credentials,
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Register a new user.

    Both ``username`` and ``password`` are required (400 otherwise);
    an existing username is rejected with 409.
    """
    try:
        await run_in_threadpool(service.register, credentials.username, credentials.password)
    except (InvalidInputError, ConflictError) as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login_user(
    credentials: Credentials,
    service: UserService = Depends(get_user_service),
) -> LoginResponse:
    """Authenticate a user and return a session token valid for one hour."""
    try:
        token = await run_in_threadpool(service.login, credentials.username, credentials.password)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return LoginResponse(message="Login successful!", token=token)
