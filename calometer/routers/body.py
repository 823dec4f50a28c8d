import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from calometer.database import get_db
from calometer.models.user import User
from calometer.schemas.body import BodyDetailsResponse, BodyDetailsUpdate, WeightGoalUpdate
from calometer.services.auth_middleware import get_current_user
from calometer.services.body_service import (
    body_details_exist,
    get_body_details,
    set_weight_goal,
    upsert_body_details,
)
from calometer.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/users", tags=["Body Details"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger(__name__)


@router.post("/add_body_details")
def add_body_details(
    body: BodyDetailsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("User %s submitted body details", current_user.id)
        details = upsert_body_details(db, current_user.id, body)
        return create_response(
            message="Body details saved",
            data=BodyDetailsResponse.model_validate(details).model_dump(),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/body_details")
def read_body_details(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("Fetching body details for user %s", current_user.id)
        details = get_body_details(db, current_user.id)
        return create_response(
            message="Body details fetched",
            data=BodyDetailsResponse.model_validate(details).model_dump(),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/body_details/exists")
def do_body_details_exist(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("Checking body details for user %s", current_user.id)
        exists = body_details_exist(db, current_user.id)
        return create_response(
            message="Body details lookup complete",
            data={"exists": exists},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.post("/set_weight_goal")
def update_weight_goal(
    body: WeightGoalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("User %s setting weight goal to %s", current_user.id, body.goal.value if body.goal else None)
        record = set_weight_goal(db, current_user.id, body.goal)
        return create_response(
            message="Weight goal saved",
            data={"goal": record.goal},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
