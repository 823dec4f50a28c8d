from datetime import date, datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from calometer.database import Base
from calometer.enums.app_enum import LogStatusEnum


class CalorieLog(Base):
    __tablename__ = "user_calorie_logs"
    __table_args__ = (UniqueConstraint("user_id", "log_date", name="uq_calorie_log_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    log_date = Column(Date, default=date.today, nullable=False)
    tdee = Column(Float, nullable=False)
    calories_consumed = Column(Float, default=0.0, nullable=False)
    calories_burnt = Column(Float, default=0.0, nullable=False)
    log_status = Column(String(1), default=LogStatusEnum.pending.value, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class CaloricBalance(Base):
    __tablename__ = "user_caloric_balance"
    __table_args__ = (UniqueConstraint("calorie_log_id", name="uq_caloric_balance_log"),)

    id = Column(Integer, primary_key=True, index=True)
    calorie_log_id = Column(Integer, ForeignKey("user_calorie_logs.id"), nullable=False, index=True)
    caloric_balance = Column(Float, default=0.0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
