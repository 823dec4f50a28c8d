from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from calometer.enums.app_enum import LogStatusEnum
from calometer.models.calorie_log import CaloricBalance, CalorieLog


def balance_for_completed_day(db: Session, user_id: str, log_date: date) -> float | None:
    """Return ``tdee - calories_consumed`` for the day, or None unless the stored log is done."""
    return (
        db.query(CalorieLog.tdee - CalorieLog.calories_consumed)
        .filter(
            CalorieLog.user_id == user_id,
            CalorieLog.log_date == log_date,
            CalorieLog.log_status == LogStatusEnum.done.value,
        )
        .scalar()
    )


def find_balance(db: Session, log_id: int) -> CaloricBalance | None:
    return db.query(CaloricBalance).filter(CaloricBalance.calorie_log_id == log_id).first()


def upsert_balance(db: Session, log_id: int, value: float) -> CaloricBalance:
    """Store the balance for a log, keeping at most one row per log."""
    record = find_balance(db, log_id)
    if record is None:
        record = CaloricBalance(calorie_log_id=log_id, caloric_balance=value)
        db.add(record)
    else:
        record.caloric_balance = value
    # a concurrent insert for the same log trips uq_caloric_balance_log here
    db.flush()
    return record


def reset_balance(db: Session, log_id: int) -> int:
    return (
        db.query(CaloricBalance)
        .filter(CaloricBalance.calorie_log_id == log_id)
        .update({CaloricBalance.caloric_balance: 0.0}, synchronize_session=False)
    )


def delete_balance_for_log(db: Session, log_id: int) -> int:
    return (
        db.query(CaloricBalance)
        .filter(CaloricBalance.calorie_log_id == log_id)
        .delete(synchronize_session="fetch")
    )


def sum_balance_for_user(db: Session, user_id: str) -> float:
    total = (
        db.query(func.sum(CaloricBalance.caloric_balance))
        .join(CalorieLog, CalorieLog.id == CaloricBalance.calorie_log_id)
        .filter(CalorieLog.user_id == user_id)
        .scalar()
    )
    return float(total) if total is not None else 0.0
