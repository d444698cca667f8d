"""
Authentication API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from ..core import SessionManager
from ..models import AuthResult, Session
from .dependencies import get_session_manager, require_session, serialize_session

router = APIRouter(prefix="/auth", tags=["authentication"])


class LoginRequest(BaseModel):
    """Login form fields."""
    email: str = ""
    password: str = ""


class SignupRequest(LoginRequest):
    """Signup form fields."""
    confirm_password: str = Field("", alias="confirmPassword")

    class Config:
        populate_by_name = True


def _session_response(result: AuthResult) -> dict:
    """Translate an AuthResult into a response body, raising on failure."""
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.error.value,
        )

    body = {"session": serialize_session(result.session)}
    if result.persistence_error is not None:
        body["warning"] = result.persistence_error.message
    return body


@router.post("/login")
async def login(
    credentials: LoginRequest,
    session_manager: SessionManager = Depends(get_session_manager)
):
    """
    Log in and open a session.

    Returns:
        The new session

    Raises:
        HTTPException: 400 with the AuthError code if the credentials are rejected
    """
    result = session_manager.login(credentials.email, credentials.password)
    return _session_response(result)


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    form: SignupRequest,
    session_manager: SessionManager = Depends(get_session_manager)
):
    """
    Sign up and open a session.

    Raises:
        HTTPException: 400 with the AuthError code if validation fails
    """
    result = session_manager.signup(form.email, form.password, form.confirm_password)
    return _session_response(result)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(session_manager: SessionManager = Depends(get_session_manager)):
    """Log out. Succeeds even if no session is active."""
    session_manager.logout()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session")
async def get_current_session(session: Session = Depends(require_session)):
    """Get the active session."""
    return {"session": serialize_session(session)}
