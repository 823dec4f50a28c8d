from pydantic import BaseModel, field_validator

from calometer.enums.app_enum import GenderEnum, WeightGoalEnum


class BodyDetailsUpdate(BaseModel):
    """Partial body details; a missing, zero or empty field means "leave unchanged"."""

    age: int | None = None
    height: float | None = None
    weight: float | None = None
    gender: GenderEnum | None = None

    model_config = {"allow_inf_nan": False}

    @field_validator("age", "height", "weight")
    @classmethod
    def validate_measurement(cls, value):
        if value is None or value == 0:
            return None
        if value < 0:
            raise ValueError("value must be positive")
        return value

    @field_validator("gender", mode="before")
    @classmethod
    def blank_gender(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BodyDetailsResponse(BaseModel):
    age: int
    height_cm: float
    weight_kg: float
    gender: GenderEnum
    bmr: float

    model_config = {"from_attributes": True}


class WeightGoalUpdate(BaseModel):
    goal: WeightGoalEnum | None = None

    @field_validator("goal", mode="before")
    @classmethod
    def blank_goal(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
