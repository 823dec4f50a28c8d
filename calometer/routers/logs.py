import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from calometer.database import get_db
from calometer.models.calorie_log import CalorieLog
from calometer.models.user import User
from calometer.schemas.calorie_log import (
    CalorieLogEntry,
    LogCreate,
    LogDateRequest,
    LogStatusUpdate,
    LogUpdate,
)
from calometer.services import log_lifecycle
from calometer.services.auth_middleware import get_current_user
from calometer.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/users/log", tags=["Calorie Logs"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger(__name__)


def _log_payload(log: CalorieLog) -> dict:
    return CalorieLogEntry.model_validate(log).model_dump()


@router.post("/create")
def create_calorie_log(
    body: LogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("User %s requested a calorie log for %s", current_user.id, body.log_date or "today")
        log = log_lifecycle.create_log(db, current_user.id, body.log_date)
        return create_response(
            message="Calorie log created",
            data=_log_payload(log),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/get")
def get_calorie_logs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("Fetching calorie logs for user %s", current_user.id)
        logs = log_lifecycle.get_logs(db, current_user.id)
        payload = [_log_payload(log) for log in logs]
        logger.info("User %s has %s calorie logs", current_user.id, len(payload))
        return create_response(
            message="Calorie logs fetched",
            data={"count": len(payload), "logs": payload},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.put("/update")
def update_calorie_log(
    body: LogUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info(
            "User %s updating calorie log for %s: consumed=%s burnt=%s",
            current_user.id,
            body.log_date,
            body.calories_consumed,
            body.calories_burnt,
        )
        log = log_lifecycle.update_calorie_log(
            db,
            current_user.id,
            body.log_date,
            calories_consumed=body.calories_consumed,
            calories_burnt=body.calories_burnt,
        )
        return create_response(
            message="Calorie log updated",
            data=_log_payload(log),
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.post("/mark_status")
def mark_logging_status(
    body: LogStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("User %s marking log for %s as %s", current_user.id, body.log_date, body.status.value)
        log, balance = log_lifecycle.mark_status(db, current_user.id, body.log_date, body.status)
        payload = _log_payload(log)
        payload["caloric_balance"] = balance
        return create_response(
            message="Logging status updated",
            data=payload,
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)


@router.delete("/delete")
def delete_calorie_log(
    body: LogDateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        logger.info("User %s deleting calorie log for %s", current_user.id, body.log_date)
        log_lifecycle.delete_log(db, current_user.id, body.log_date)
        return create_response(
            message="Calorie log deleted",
            data={"log_date": body.log_date.isoformat(), "deleted": True},
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc)
