import hashlib
import hmac
import logging

from fastapi import Depends, HTTPException, Request, Security
from fastapi.security.api_key import APIKeyHeader
from starlette.status import HTTP_401_UNAUTHORIZED

from cms.settings import Settings, settings

logger = logging.getLogger(__name__)

API_KEY_NAME = "X-CMS-Key"
api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)

SESSION_SALT = b"admin-session"


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def _matches(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def session_token(current_settings: Settings) -> str:
    """Cookie value for an authenticated admin; changes when the password does."""
    return hmac.new(
        current_settings.ADMIN_PASSWORD.encode("utf-8"), SESSION_SALT, hashlib.sha256
    ).hexdigest()


def verify_admin_password(password: str, current_settings: Settings) -> bool:
    if not current_settings.ADMIN_PASSWORD:
        logger.error("ADMIN_PASSWORD environment variable not set")
        return False
    return _matches(password, current_settings.ADMIN_PASSWORD)


def require_admin(
    request: Request,
    api_key: str = Security(api_key_header),
    current_settings: Settings = Depends(get_settings),
):
    if api_key and current_settings.CMS_API_KEY:
        if _matches(api_key, current_settings.CMS_API_KEY):
            return True

    cookie = request.cookies.get(current_settings.SESSION_COOKIE_NAME)
    if cookie and current_settings.ADMIN_PASSWORD:
        if _matches(cookie, session_token(current_settings)):
            return True

    raise HTTPException(
        status_code=HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )
