from datetime import date, datetime

from pydantic import BaseModel, field_validator

from calometer.enums.app_enum import LogStatusEnum


def _coerce_log_date(value):
    """Accept plain dates as well as full ISO timestamps, keeping the calendar day."""
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    if isinstance(value, datetime):
        return value.date()
    return value


class LogCreate(BaseModel):
    log_date: date | None = None

    @field_validator("log_date", mode="before")
    @classmethod
    def validate_date(cls, value):
        return _coerce_log_date(value)


class LogDateRequest(BaseModel):
    log_date: date

    @field_validator("log_date", mode="before")
    @classmethod
    def validate_date(cls, value):
        return _coerce_log_date(value)


class LogUpdate(LogDateRequest):
    calories_consumed: float = 0.0
    calories_burnt: float = 0.0

    model_config = {"allow_inf_nan": False}


class LogStatusUpdate(LogDateRequest):
    status: LogStatusEnum


class CalorieLogEntry(BaseModel):
    log_date: date
    calories_burnt: float
    calories_consumed: float
    tdee: float
    updated_at: datetime
    log_status: LogStatusEnum

    model_config = {"from_attributes": True}


class NetCaloricBalanceResponse(BaseModel):
    net_caloric_balance: float
