"""
Daily calorie log lifecycle.

A log moves from pending (``P``) to done (``D``) and back, and can be
deleted from either state. Completing a log records the day's caloric
balance; reopening it zeroes that balance in place.
"""
import logging
import math
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from calometer.database import unit_of_work
from calometer.enums.app_enum import CalorieKindEnum, LogStatusEnum
from calometer.models.calorie_log import CalorieLog
from calometer.services import caloric_balance_store, calorie_log_store
from calometer.services.body_service import find_bmr
from calometer.services.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _ensure_not_future(log_date: date, today: date) -> None:
    if log_date > today:
        raise ValidationError("Log date cannot be a future date.")


def _require_log(db: Session, user_id: str, log_date: date) -> CalorieLog:
    log = calorie_log_store.find_log(db, user_id, log_date)
    if log is None:
        raise NotFoundError("No log exists for this day.")
    return log


def _require_pending(db: Session, user_id: str, log_date: date) -> CalorieLog:
    log = _require_log(db, user_id, log_date)
    if log.log_status == LogStatusEnum.done.value:
        raise ConflictError("Log is already completed.")
    return log


def _current_total(log: CalorieLog, kind: CalorieKindEnum) -> float:
    return log.calories_burnt if kind == CalorieKindEnum.burnt else log.calories_consumed


def _check_resulting_total(log: CalorieLog, kind: CalorieKindEnum, delta: float) -> None:
    if not math.isfinite(delta):
        raise ValidationError(f"Calories {kind.value} must be a finite number.")
    if _current_total(log, kind) + delta < 0:
        raise ValidationError(f"Resulting calories {kind.value} can't be negative.")


def _apply_increment(db: Session, user_id: str, log_date: date, kind: CalorieKindEnum, delta: float) -> None:
    updated = calorie_log_store.increment_calories(db, user_id, log_date, kind, delta)
    if updated:
        return
    # the guarded update matched nothing: work out which precondition failed
    db.expire_all()
    log = _require_pending(db, user_id, log_date)
    _check_resulting_total(log, kind, delta)
    raise ConflictError("Log changed while updating, please try again.")


def create_log(
    db: Session,
    user_id: str,
    log_date: date | None = None,
    today: date | None = None,
) -> CalorieLog:
    """Open a pending log for the day, seeding its TDEE from the user's BMR."""
    today = today or date.today()
    log_date = log_date or today
    _ensure_not_future(log_date, today)

    with unit_of_work(db, "create calorie log"):
        if calorie_log_store.log_exists(db, user_id, log_date):
            raise ConflictError("Log already exists for this day.")

        bmr = find_bmr(db, user_id)
        if bmr is None:
            raise NotFoundError("Body details not found, please add them first.")

        try:
            log = calorie_log_store.insert_log(db, user_id, log_date, bmr)
        except IntegrityError as exc:
            raise ConflictError("Log already exists for this day.") from exc

    db.refresh(log)
    logger.info("User %s created calorie log %s for %s with tdee=%s", user_id, log.id, log_date, log.tdee)
    return log


def accumulate(
    db: Session,
    user_id: str,
    log_date: date,
    kind: CalorieKindEnum,
    delta: float,
) -> CalorieLog:
    """Add consumed or burnt calories to a pending log."""
    with unit_of_work(db, f"log calories {kind.value}"):
        log = _require_pending(db, user_id, log_date)
        if delta != 0:
            _check_resulting_total(log, kind, delta)
            _apply_increment(db, user_id, log_date, kind, delta)

    db.refresh(log)
    logger.info("User %s added %s calories %s on %s", user_id, delta, kind.value, log_date)
    return log


def update_calorie_log(
    db: Session,
    user_id: str,
    log_date: date,
    calories_consumed: float = 0.0,
    calories_burnt: float = 0.0,
) -> CalorieLog:
    """
    Apply consumed and burnt deltas to a pending log together.

    Zero deltas are skipped. Both resulting totals are checked before
    either is written, so a rejected update leaves the log untouched.
    """
    deltas = [
        (kind, delta)
        for kind, delta in (
            (CalorieKindEnum.burnt, calories_burnt),
            (CalorieKindEnum.consumed, calories_consumed),
        )
        if delta != 0
    ]

    with unit_of_work(db, "update calorie log"):
        log = _require_pending(db, user_id, log_date)
        for kind, delta in deltas:
            _check_resulting_total(log, kind, delta)
        for kind, delta in deltas:
            _apply_increment(db, user_id, log_date, kind, delta)

    db.refresh(log)
    logger.info(
        "User %s updated calorie log for %s: consumed %+g, burnt %+g",
        user_id,
        log_date,
        calories_consumed,
        calories_burnt,
    )
    return log


def mark_status(db: Session, user_id: str, log_date: date, status: LogStatusEnum) -> tuple[CalorieLog, float]:
    """
    Set the log's status and keep its caloric balance in step.

    The status is stored before the balance is read, so marking done
    computes ``tdee - calories_consumed`` from the completed row. Returns
    the log together with the balance now recorded for it.
    """
    with unit_of_work(db, "mark logging status"):
        log = _require_log(db, user_id, log_date)
        calorie_log_store.set_log_status(db, user_id, log_date, status)

        if status == LogStatusEnum.done:
            balance = caloric_balance_store.balance_for_completed_day(db, user_id, log_date)
            try:
                caloric_balance_store.upsert_balance(db, log.id, balance)
            except IntegrityError as exc:
                raise ConflictError("Log is being completed by another request.") from exc
        else:
            caloric_balance_store.reset_balance(db, log.id)
            balance = 0.0

    db.refresh(log)
    logger.info("User %s marked log %s for %s as %s (balance=%s)", user_id, log.id, log_date, status.value, balance)
    return log, balance


def delete_log(db: Session, user_id: str, log_date: date, today: date | None = None) -> None:
    """Delete the day's log, removing its caloric balance row first."""
    _ensure_not_future(log_date, today or date.today())

    with unit_of_work(db, "delete calorie log"):
        log = _require_log(db, user_id, log_date)
        log_id = log.id
        caloric_balance_store.delete_balance_for_log(db, log_id)
        calorie_log_store.delete_log_row(db, log_id)

    logger.info("User %s deleted calorie log %s for %s", user_id, log_id, log_date)


def get_logs(db: Session, user_id: str) -> list[CalorieLog]:
    with unit_of_work(db, "fetch calorie logs"):
        logs = calorie_log_store.list_logs(db, user_id)
    return logs
