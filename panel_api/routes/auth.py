"""Authentication endpoints"""
from fastapi import APIRouter, Depends, HTTPException, status
from datetime import timedelta
from panel_api.models.schemas import TokenRequest, TokenResponse
from panel_api.core.config import settings
from panel_api.core.security import create_access_token, verify_bearer_token
from panel_api.services.user_service import UserService, get_user_service
from panel_api.utils.logger import logger

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/token", response_model=TokenResponse, summary="Get JWT Access Token")
def login(credentials: TokenRequest, service: UserService = Depends(get_user_service)):
    """
    Authenticate a user and return a JWT access token.

    The token carries the scopes stored on the user (for example
    `users.view users.edit`) and is valid for `ACCESS_TOKEN_EXPIRE_MINUTES`.
    """
    user = service.authenticate(credentials.username, credentials.password)

    if user is None:
        logger.warning(f"Failed login attempt for username: {credentials.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    scopes = user.scope_list
    access_token = create_access_token(
        data={"sub": user.username, "scopes": scopes},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    logger.info(f"User {credentials.username} logged in successfully")

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        scopes=scopes
    )


@router.get("/verify", summary="Verify Token")
def verify_token_endpoint(payload: dict = Depends(verify_bearer_token)):
    """
    Verify that the supplied bearer token is valid.

    Returns the subject and scopes the token carries.
    """
    return {
        "status": "valid",
        "username": payload.get("sub"),
        "scopes": payload.get("scopes", [])
    }
