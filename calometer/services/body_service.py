import logging
from datetime import datetime

from sqlalchemy.orm import Session

from calometer.database import unit_of_work
from calometer.enums.app_enum import WeightGoalEnum
from calometer.models.body import BodyDetails, WeightGoal
from calometer.schemas.body import BodyDetailsUpdate
from calometer.services.bmr_service import compute_bmr
from calometer.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

BODY_FIELDS = ("age", "height_cm", "weight_kg", "gender")


def _merged_values(current: BodyDetails | None, update: BodyDetailsUpdate) -> dict:
    requested = {
        "age": update.age,
        "height_cm": update.height,
        "weight_kg": update.weight,
        "gender": update.gender.value if update.gender else None,
    }
    merged = {}
    for field, value in requested.items():
        if value is not None:
            merged[field] = value
        elif current is not None:
            merged[field] = getattr(current, field)
        else:
            merged[field] = None
    return merged


def upsert_body_details(db: Session, user_id: str, update: BodyDetailsUpdate) -> BodyDetails:
    """
    Insert or merge the user's body details.

    Absent fields keep their stored value. BMR is recomputed only when at
    least one field actually changes; otherwise the stored BMR is kept.
    """
    with unit_of_work(db, "upsert body details"):
        details = db.query(BodyDetails).filter(BodyDetails.user_id == user_id).first()
        merged = _merged_values(details, update)

        if details is None:
            missing = [field for field, value in merged.items() if value is None]
            if missing:
                raise ValidationError(f"Missing body details: {', '.join(missing)}")
            details = BodyDetails(
                user_id=user_id,
                bmr=compute_bmr(merged["gender"], merged["age"], merged["weight_kg"], merged["height_cm"]),
                **merged,
            )
            db.add(details)
            logger.info("User %s added body details bmr=%s", user_id, details.bmr)
        else:
            changed = any(getattr(details, field) != merged[field] for field in BODY_FIELDS)
            if changed:
                for field in BODY_FIELDS:
                    setattr(details, field, merged[field])
                details.bmr = compute_bmr(
                    merged["gender"], merged["age"], merged["weight_kg"], merged["height_cm"]
                )
                details.updated_at = datetime.utcnow()
                logger.info("User %s updated body details, bmr recomputed to %s", user_id, details.bmr)
            else:
                logger.info("User %s body details unchanged", user_id)

    db.refresh(details)
    return details


def set_weight_goal(db: Session, user_id: str, goal: WeightGoalEnum | None) -> WeightGoal:
    with unit_of_work(db, "set weight goal"):
        record = db.query(WeightGoal).filter(WeightGoal.user_id == user_id).first()
        if record is None:
            if goal is None:
                raise ValidationError("Weight goal is required")
            record = WeightGoal(user_id=user_id, goal=goal.value)
            db.add(record)
        elif goal is not None and record.goal != goal.value:
            record.goal = goal.value
            record.updated_at = datetime.utcnow()

    db.refresh(record)
    logger.info("User %s weight goal is %s", user_id, record.goal)
    return record


def body_details_exist(db: Session, user_id: str) -> bool:
    with unit_of_work(db, "check body details"):
        found = db.query(BodyDetails.id).filter(BodyDetails.user_id == user_id).first()
    return found is not None


def get_body_details(db: Session, user_id: str) -> BodyDetails:
    with unit_of_work(db, "fetch body details"):
        details = db.query(BodyDetails).filter(BodyDetails.user_id == user_id).first()
    if details is None:
        raise NotFoundError("Body details not found")
    return details


def find_bmr(db: Session, user_id: str) -> float | None:
    return db.query(BodyDetails.bmr).filter(BodyDetails.user_id == user_id).scalar()


def get_user_bmr(db: Session, user_id: str) -> float:
    with unit_of_work(db, "fetch bmr"):
        bmr = find_bmr(db, user_id)
    if bmr is None:
        raise NotFoundError("Body details not found, please add them first")
    return bmr


def get_weight_goal(db: Session, user_id: str) -> WeightGoalEnum | None:
    with unit_of_work(db, "fetch weight goal"):
        goal = db.query(WeightGoal.goal).filter(WeightGoal.user_id == user_id).scalar()
    return WeightGoalEnum(goal) if goal else None
