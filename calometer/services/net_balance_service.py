import logging

from sqlalchemy.orm import Session

from calometer.database import unit_of_work
from calometer.enums.app_enum import WeightGoalEnum
from calometer.services.body_service import get_weight_goal
from calometer.services.caloric_balance_store import sum_balance_for_user

logger = logging.getLogger(__name__)


def apply_goal_direction(raw_balance: float, goal: WeightGoalEnum | None) -> float:
    """
    Orient the summed balance towards the user's goal.

    A positive balance is a deficit, which is progress when losing weight.
    For a gain goal the sign is flipped so that a surplus reads as progress.
    """
    if goal != WeightGoalEnum.gain:
        return raw_balance
    if raw_balance < 0:
        return abs(raw_balance)
    if raw_balance > 0:
        return -raw_balance
    return raw_balance


def get_net_caloric_balance(db: Session, user_id: str) -> float:
    with unit_of_work(db, "fetch net caloric balance"):
        raw_balance = sum_balance_for_user(db, user_id)
    goal = get_weight_goal(db, user_id)
    net_balance = apply_goal_direction(raw_balance, goal)
    logger.info(
        "User %s net caloric balance raw=%s goal=%s reported=%s",
        user_id,
        raw_balance,
        goal.value if goal else None,
        net_balance,
    )
    return net_balance
