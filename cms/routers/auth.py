import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from cms.schemas.auth import LoginRequest
from cms.schemas.blog import OperationResult
from cms.security import get_settings, session_token, verify_admin_password
from cms.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=OperationResult)
def login(
    body: LoginRequest,
    response: Response,
    current_settings: Settings = Depends(get_settings),
):
    if not body.password:
        raise HTTPException(status_code=400, detail="Password is required")

    if not verify_admin_password(body.password, current_settings):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(status_code=401, detail="Invalid password")

    response.set_cookie(
        key=current_settings.SESSION_COOKIE_NAME,
        value=session_token(current_settings),
        max_age=current_settings.SESSION_MAX_AGE,
        path="/",
        httponly=True,
        secure=current_settings.is_production,
        samesite="lax",
    )
    return OperationResult()


@router.post("/logout", response_model=OperationResult)
def logout(response: Response, current_settings: Settings = Depends(get_settings)):
    response.delete_cookie(key=current_settings.SESSION_COOKIE_NAME, path="/")
    return OperationResult()
