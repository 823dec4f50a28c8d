from datetime import date, datetime

from sqlalchemy.orm import Session

from calometer.enums.app_enum import CalorieKindEnum, LogStatusEnum
from calometer.models.calorie_log import CalorieLog


def find_log(db: Session, user_id: str, log_date: date) -> CalorieLog | None:
    return (
        db.query(CalorieLog)
        .filter(CalorieLog.user_id == user_id, CalorieLog.log_date == log_date)
        .first()
    )


def log_exists(db: Session, user_id: str, log_date: date) -> bool:
    found = (
        db.query(CalorieLog.id)
        .filter(CalorieLog.user_id == user_id, CalorieLog.log_date == log_date)
        .first()
    )
    return found is not None


def insert_log(db: Session, user_id: str, log_date: date, bmr: float) -> CalorieLog:
    log = CalorieLog(
        user_id=user_id,
        log_date=log_date,
        tdee=bmr,
        calories_consumed=0.0,
        calories_burnt=0.0,
        log_status=LogStatusEnum.pending.value,
    )
    db.add(log)
    db.flush()
    return log


def increment_calories(
    db: Session,
    user_id: str,
    log_date: date,
    kind: CalorieKindEnum,
    delta: float,
) -> int:
    """
    Add ``delta`` to the consumed or burnt total in a single UPDATE.

    Burnt calories also raise the day's TDEE. The row is only touched while
    the log is pending and the resulting total stays non-negative; the
    number of updated rows tells the caller whether that held.
    """
    column = CalorieLog.calories_burnt if kind == CalorieKindEnum.burnt else CalorieLog.calories_consumed
    values = {column: column + delta, CalorieLog.updated_at: datetime.utcnow()}
    if kind == CalorieKindEnum.burnt:
        values[CalorieLog.tdee] = CalorieLog.tdee + delta

    return (
        db.query(CalorieLog)
        .filter(
            CalorieLog.user_id == user_id,
            CalorieLog.log_date == log_date,
            CalorieLog.log_status == LogStatusEnum.pending.value,
            column + delta >= 0,
        )
        .update(values, synchronize_session=False)
    )


def set_log_status(db: Session, user_id: str, log_date: date, status: LogStatusEnum) -> int:
    return (
        db.query(CalorieLog)
        .filter(CalorieLog.user_id == user_id, CalorieLog.log_date == log_date)
        .update(
            {CalorieLog.log_status: status.value, CalorieLog.updated_at: datetime.utcnow()},
            synchronize_session=False,
        )
    )


def list_logs(db: Session, user_id: str) -> list[CalorieLog]:
    return (
        db.query(CalorieLog)
        .filter(CalorieLog.user_id == user_id)
        .order_by(CalorieLog.log_date.desc())
        .all()
    )


def delete_log_row(db: Session, log_id: int) -> int:
    return db.query(CalorieLog).filter(CalorieLog.id == log_id).delete(synchronize_session="fetch")
