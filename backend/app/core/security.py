"""
# `app/core/security.py` — Authentication

FastAPI dependencies that authenticate the caller with a **Firebase ID token**.

## Flow
- **Header:** `Authorization: Bearer <Firebase ID token>` (read with `HTTPBearer(auto_error=False)`
  so that a missing token is reported by us, with a `WWW-Authenticate` header).
- **Verification:** `firebase_auth.verify_id_token(..., check_revoked=True)`; tokens revoked by a
  logout are rejected.
- **Development:** when `ALLOW_MOCK_TOKENS=true`, tokens shaped like `mock_jwt_token_<uid>` are
  accepted without contacting Firebase.
- **Result:** a `Principal` (`uid`, `role`, `email`, `display_name`). The custom claim
  `admin=True` maps to `role="admin"`.

Store ownership is checked by the routers, not here.
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth

from app.config import init_firebase, settings
from app.schemas.principal import Principal

logger = logging.getLogger("pos.auth")

MOCK_PREFIX = "mock_jwt_token_"

# HTTPBearer is a FastAPI provided security scheme for "Authorization: Bearer <token>" header
oauth2_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _decode_mock_token(mock_token: str) -> dict:
    """
    Format: mock_jwt_token_<uid>
    """
    uid = mock_token[len(MOCK_PREFIX):]
    if not uid:
        raise _unauthorized("Invalid mock token format")
    return {"uid": uid, "email": None, "name": None, "admin": False}


def _decode_id_token(id_token: str) -> dict:
    if settings.allow_mock_tokens and id_token.startswith(MOCK_PREFIX):
        return _decode_mock_token(id_token)

    init_firebase()
    try:
        return firebase_auth.verify_id_token(id_token, check_revoked=True)
    except firebase_auth.ExpiredIdTokenError:
        raise _unauthorized("Token expired")
    except firebase_auth.RevokedIdTokenError:
        raise _unauthorized("Session revoked")
    except (firebase_auth.InvalidIdTokenError, ValueError) as exc:
        logger.debug("Rejected ID token: %s", exc)
        raise _unauthorized("Invalid authentication token")


def _token_to_principal(decoded: dict) -> Principal:
    uid = decoded.get("uid") or decoded.get("user_id")
    if not uid:
        raise _unauthorized("Invalid token payload")
    return Principal(
        uid=uid,
        role="admin" if decoded.get("admin") is True else "user",
        email=decoded.get("email"),
        display_name=decoded.get("name"),
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme),
) -> Principal:
    """
    Verifies the Firebase ID token and returns the caller.
    """
    if not credentials or not credentials.scheme or not credentials.credentials:
        raise _unauthorized("Authentication credentials were not provided")
    return _token_to_principal(_decode_id_token(credentials.credentials))
