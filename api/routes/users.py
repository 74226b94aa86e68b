"""
api/routes/users.py -- Profile and admin user listing endpoints.

Routes:
  GET /users            -- list all users (ADMIN only)
  GET /users/profile    -- current user's profile (requires auth)
  GET /users/{user_id}  -- one user's profile (ADMIN only); 404 if unknown

/users/profile is registered before /users/{user_id} so "profile" is not
captured as a path parameter.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.models import UserResponse
from auth import service
from auth.dependencies import get_current_user, require_admin
from auth.models import User
from auth.store import UserStore

router = APIRouter(prefix="/users")


@router.get("", response_model=list[UserResponse])
async def list_users(
    request: Request,
    current_user: User = Depends(require_admin),
) -> list[UserResponse]:
    user_store: UserStore = request.app.state.user_store
    return [UserResponse.from_user(u) for u in user_store.list_users()]


@router.get("/profile", response_model=UserResponse)
async def profile(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_user(current_user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    request: Request,
    user_id: str,
    current_user: User = Depends(require_admin),
) -> UserResponse:
    user_store: UserStore = request.app.state.user_store
    return UserResponse.from_user(service.get_user(user_store, user_id))
