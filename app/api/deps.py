# app/api/deps.py
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.core.config import settings
from app.db.gateway import PersistenceGateway
from app.schemas.token import TokenPayload


def get_gateway(request: Request) -> PersistenceGateway:
    """The process-wide gateway opened by the application lifespan."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None or not gateway.is_open:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not available",
        )
    return gateway


# Tokens are issued by the user service; this service only verifies them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def get_current_user(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        token_data = TokenPayload(**payload)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise credentials_exception

    return token_data


ADMIN_ROLE = "admin"


def get_current_admin(current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
    """Only administrators may use the back-office API."""
    if (current_user.role or "").lower() != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user
