"""Administrator credential check"""
import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from scoreboard.models import Settings


security = HTTPBasic()


def check_admin_credentials(username: str, password: str, settings: Settings) -> bool:
    user_ok = secrets.compare_digest(username.encode(), settings.admin_username.encode())
    pass_ok = secrets.compare_digest(password.encode(), settings.admin_password.encode())
    return user_ok and pass_ok


def require_admin(request: Request, credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """FastAPI dependency gating admin endpoints"""
    settings: Settings = request.app.state.settings
    if not check_admin_credentials(credentials.username, credentials.password, settings):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid administrator credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
