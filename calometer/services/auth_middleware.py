from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from calometer.config import settings
from calometer.database import get_db
from calometer.models.user import User
from calometer.models.user_session import UserSession


def _get_auth_context(token: str, db: Session):
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token. Please login again.")

    user_id = payload.get("sub")
    jti = payload.get("jti")
    token_type = payload.get("type") or "access"
    if not user_id or not jti:
        raise HTTPException(status_code=401, detail="Invalid token payload")
    if token_type != "access":
        raise HTTPException(status_code=401, detail="Invalid token type")

    session = db.query(UserSession).filter(
        UserSession.jti == jti,
        UserSession.user_id == user_id,
        UserSession.is_active == True
    ).first()

    if not session:
        raise HTTPException(status_code=401, detail="Session expired. Please login again.")

    user = db.query(User).filter(User.id == user_id).first()

    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    return {"user": user, "session": session, "payload": payload}


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(settings.bearer_scheme),
    db: Session = Depends(get_db)
):
    token = credentials.credentials
    auth_context = _get_auth_context(token, db)
    return auth_context["user"]


def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(settings.bearer_scheme),
    db: Session = Depends(get_db)
):
    token = credentials.credentials
    context = _get_auth_context(token, db)
    context["db"] = db
    return context
