from fastapi import APIRouter, Depends, status

from inventory_api.dependencies import get_auth_service, get_current_user
from inventory_api.models.user import User
from inventory_api.schemas.common import MessageResponse
from inventory_api.schemas.user import (
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from inventory_api.services import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    user = auth.register(payload.name, payload.email, payload.password, payload.role)
    return {
        "success": True,
        "message": "User registered successfully",
        "token": auth.issue_token(user),
        "data": user,
    }


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    user = auth.authenticate(payload.email, payload.password)
    return {
        "success": True,
        "message": "Login successful",
        "token": auth.issue_token(user),
        "data": user,
    }


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return {"success": True, "data": user}


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    user = auth.update_profile(user, name=payload.name, email=payload.email)
    return {"success": True, "message": "Profile updated successfully", "data": user}


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: PasswordChange,
    user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    auth.change_password(user, payload.current_password, payload.new_password)
    return {"success": True, "message": "Password changed successfully"}
