"""
Session endpoints: login, logout, registration and the current user.

Login failures are ordinary 400s here; only an expired token on some other
call produces the 401 redirect to /login.
"""

from fastapi import APIRouter, Depends

from backend.dependencies import get_auth_screen, get_session
from backend.responses import to_schema
from backend.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    ScreenResponseSchema,
)
from familyhub.core import Session
from familyhub.screens import AuthScreen

router = APIRouter(prefix="/session", tags=["session"])


@router.get("/")
def session_state(session: Session = Depends(get_session)):
    """Whether a token is held, and where the UI should be."""
    return {
        "authenticated": session.is_authenticated,
        "username": session.user.username if session.user else None,
        "location": session.location,
    }


@router.post("/login", response_model=ScreenResponseSchema)
def login(body: LoginRequest, screen: AuthScreen = Depends(get_auth_screen)):
    return to_schema(screen.process("login", body.model_dump()))


@router.post("/register", response_model=ScreenResponseSchema, status_code=201)
def register(body: RegisterRequest, screen: AuthScreen = Depends(get_auth_screen)):
    return to_schema(screen.process("register", body.model_dump()))


@router.get("/me", response_model=ScreenResponseSchema)
def me(screen: AuthScreen = Depends(get_auth_screen)):
    return to_schema(screen.process("me"))


@router.post("/change-password", response_model=ScreenResponseSchema)
def change_password(body: ChangePasswordRequest, screen: AuthScreen = Depends(get_auth_screen)):
    return to_schema(screen.process("change_password", body.model_dump()))


@router.post("/logout", response_model=ScreenResponseSchema)
def logout(screen: AuthScreen = Depends(get_auth_screen)):
    return to_schema(screen.process("logout"))
