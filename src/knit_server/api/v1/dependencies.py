"""Shared API dependencies for authentication and data access."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from knit_server.core.settings import Settings
from knit_server.db.session import get_db
from knit_server.models import Profile
from knit_server.services.gateway import KnitGateway

# HTTP Bearer scheme for identity-provider tokens
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Return the settings the running app was created with."""
    return request.app.state.settings


# Type aliases for injected dependencies
SessionDep = Annotated[Session, Depends(get_db)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_gateway(db: SessionDep, app_settings: SettingsDep) -> KnitGateway:
    """Construct the data access gateway for this request."""
    return KnitGateway(
        db,
        community_search_limit=app_settings.search_community_limit,
        people_search_limit=app_settings.search_people_limit,
    )


GatewayDep = Annotated[KnitGateway, Depends(get_gateway)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_profile(token: str, db: Session, app_settings: Settings) -> Profile:
    """Verify an identity-provider token and load the matching profile.

    Raises:
        HTTPException: If the token is invalid or no profile matches its subject.
    """
    if not app_settings.auth_jwt_secret:
        raise _credentials_error("Authentication is not configured")

    options = {"verify_aud": app_settings.auth_jwt_audience is not None}
    try:
        payload = jwt.decode(
            token,
            app_settings.auth_jwt_secret,
            algorithms=[app_settings.auth_jwt_algorithm],
            audience=app_settings.auth_jwt_audience,
            options=options,
        )
    except JWTError as err:
        raise _credentials_error() from err

    subject = payload.get("sub")
    if not subject:
        raise _credentials_error()

    profile = db.get(Profile, str(subject))
    if profile is None:
        raise _credentials_error("User not found")
    return profile


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
    app_settings: SettingsDep,
) -> Profile:
    """Get the signed-in member from the bearer token.

    Raises:
        HTTPException: If the token is missing, invalid or unknown.
    """
    return _resolve_profile(credentials.credentials, db, app_settings)


def get_optional_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)
    ],
    db: SessionDep,
    app_settings: SettingsDep,
) -> Profile | None:
    """Return the signed-in member when a token is supplied, otherwise ``None``.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return _resolve_profile(credentials.credentials, db, app_settings)


# Type aliases for current user dependencies
CurrentUserDep = Annotated[Profile, Depends(get_current_user)]
OptionalUserDep = Annotated[Profile | None, Depends(get_optional_user)]
