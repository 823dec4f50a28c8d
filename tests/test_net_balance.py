from datetime import date

import pytest

from calometer.enums.app_enum import CalorieKindEnum, LogStatusEnum, WeightGoalEnum
from calometer.services import log_lifecycle
from calometer.services.body_service import set_weight_goal
from calometer.services.net_balance_service import apply_goal_direction, get_net_caloric_balance


@pytest.mark.parametrize(
    "raw, expected",
    [(-300.0, 300.0), (300.0, -300.0), (0.0, 0.0)],
)
def test_gain_goal_flips_the_sign(raw, expected):
    assert apply_goal_direction(raw, WeightGoalEnum.gain) == expected


@pytest.mark.parametrize("goal", [WeightGoalEnum.lose, WeightGoalEnum.maintain, None])
@pytest.mark.parametrize("raw", [-300.0, 300.0, 0.0])
def test_other_goals_report_raw_sum(goal, raw):
    assert apply_goal_direction(raw, goal) == raw


def test_no_completed_logs_means_zero(db, user_with_bmr):
    log_lifecycle.create_log(db, user_with_bmr.id, date(2024, 1, 1))

    assert get_net_caloric_balance(db, user_with_bmr.id) == 0.0


def _complete_day(db, user_id, day, consumed):
    log_lifecycle.create_log(db, user_id, day)
    log_lifecycle.accumulate(db, user_id, day, CalorieKindEnum.consumed, consumed)
    log_lifecycle.mark_status(db, user_id, day, LogStatusEnum.done)


def test_sums_completed_days_for_the_user_only(db, user_with_bmr, other_user_with_bmr):
    _complete_day(db, user_with_bmr.id, date(2024, 1, 1), 500)
    _complete_day(db, user_with_bmr.id, date(2024, 1, 2), 2400)
    _complete_day(db, other_user_with_bmr.id, date(2024, 1, 1), 100)

    # 1500 deficit then 400 surplus
    assert get_net_caloric_balance(db, user_with_bmr.id) == pytest.approx(1100.0)
    assert get_net_caloric_balance(db, other_user_with_bmr.id) == pytest.approx(1700.0)


def test_gain_goal_reports_a_deficit_as_negative(db, user_with_bmr):
    set_weight_goal(db, user_with_bmr.id, WeightGoalEnum.gain)
    _complete_day(db, user_with_bmr.id, date(2024, 1, 1), 500)

    assert get_net_caloric_balance(db, user_with_bmr.id) == pytest.approx(-1500.0)


def test_single_day_scenario(db, user_with_bmr):
    set_weight_goal(db, user_with_bmr.id, WeightGoalEnum.lose)
    day = date(2024, 1, 1)

    log = log_lifecycle.create_log(db, user_with_bmr.id, day)
    assert (log.tdee, log.calories_consumed, log.calories_burnt, log.log_status) == (2000.0, 0.0, 0.0, "P")

    log = log_lifecycle.accumulate(db, user_with_bmr.id, day, CalorieKindEnum.consumed, 500)
    assert log.calories_consumed == 500.0

    _, balance = log_lifecycle.mark_status(db, user_with_bmr.id, day, LogStatusEnum.done)
    assert balance == 1500.0
    assert get_net_caloric_balance(db, user_with_bmr.id) == 1500.0
