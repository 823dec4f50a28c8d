import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from calometer.config import settings
from calometer.database import get_db
from calometer.models.user import User
from calometer.schemas.user import LoginRequest, SignupRequest
from calometer.services.auth_middleware import get_current_session
from calometer.services.auth_service import hash_password, open_session, verify_password
from calometer.services.errors import AuthenticationError
from calometer.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/users", tags=["Auth"])
logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"
INVALID_CREDENTIALS = "Username or password is incorrect."


@router.post("/signup")
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    try:
        existing = db.query(User.id).filter(User.username == body.username).first()
        if existing:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

        user = User(name=body.name, username=body.username, password_hash=hash_password(body.password))
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")
        db.refresh(user)

        logger.info("Created user %s (%s)", user.id, user.username)
        return create_response(
            message="Signed up successfully",
            data={"u_id": user.id},
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    try:
        if not body.username or not body.password:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please enter correct details.")

        user = db.query(User).filter(User.username == body.username).first()
        if not user or not verify_password(body.password, user.password_hash):
            logger.info("Rejected login for username %s", body.username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = open_session(db, user.id, user.username)
        db.commit()

        logger.info("User %s logged in", user.id)
        response = create_response(
            message="Logged in successfully.",
            data={"access_token": token, "token_type": "bearer"},
            status_code=status.HTTP_200_OK,
        )
        response.set_cookie(
            TOKEN_COOKIE,
            token,
            max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            path="/",
            httponly=True,
            secure=settings.is_production,
        )
        return response
    except Exception as exc:
        return handle_exception(exc)


@router.post("/logout")
def logout(auth_context=Depends(get_current_session)):
    try:
        session = auth_context["session"]
        db: Session = auth_context["db"]
        user: User = auth_context["user"]

        session.is_active = False
        session.revoked_at = datetime.utcnow()
        db.commit()

        logger.info("User %s logged out of session %s", user.id, session.id)
        response = create_response(
            message="Logout successful",
            data={"u_id": user.id},
            status_code=status.HTTP_200_OK,
        )
        response.delete_cookie(TOKEN_COOKIE, path="/", httponly=True, secure=settings.is_production)
        return response
    except Exception as exc:
        return handle_exception(exc)
