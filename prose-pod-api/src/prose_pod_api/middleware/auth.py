"""Authentication dependencies for JWT bearer tokens."""

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import ExpiredSignatureError, PyJWTError
from prose_pod_common.config.settings import config
from prose_pod_common.logging import get_logger
from pydantic import BaseModel, ValidationError

from ..errors import Forbidden, Unauthorized

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


class TokenPayload(BaseModel):
    """JWT token payload."""
    sub: str
    role: str | None = None
    exp: int | None = None
    iat: int | None = None


async def verify_token(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> TokenPayload:
    """Verify the bearer token and return its payload."""
    if credentials is None:
        raise Unauthorized("Missing bearer token")

    token = credentials.credentials
    try:
        payload = jwt.decode(token, config.jwt_secret_key, algorithms=[config.jwt_algorithm])
    except ExpiredSignatureError:
        logger.warning(f"Token validation failed: token has expired token={token[:20]}...")
        raise Unauthorized("Token has expired")
    except PyJWTError as e:
        logger.warning(f"Token validation failed: {e} token={token[:20]}...")
        raise Unauthorized(f"Token validation failed: {e}")

    try:
        token_data = TokenPayload.model_validate(payload)
    except ValidationError:
        logger.warning("Token validation failed: missing subject claim")
        raise Unauthorized("Token missing subject claim")

    logger.debug(f"Token verified: user={token_data.sub} role={token_data.role}")
    return token_data


async def require_admin(token_payload: TokenPayload = Depends(verify_token)) -> TokenPayload:
    """Only let administrators through."""
    if token_payload.role != ADMIN_ROLE:
        logger.info(f"User {token_payload.sub} is not an administrator")
        raise Forbidden()
    return token_payload
