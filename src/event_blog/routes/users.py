"""User registration and login routes."""

from fastapi import APIRouter, Depends, status

from event_blog.models.user_models import LoginRequest, RegisterRequest, UserResponse
from event_blog.routes.dependencies import get_services
from event_blog.services import Services

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(payload: RegisterRequest, services: Services = Depends(get_services)):
    """Register a new user. Duplicate email answers 409."""
    return await services.users.register_user(payload)


@router.post("/login", response_model=UserResponse)
async def login_user(payload: LoginRequest, services: Services = Depends(get_services)):
    """Authenticate by email and password. Bad credentials answer 401."""
    return await services.users.login_user(payload)
