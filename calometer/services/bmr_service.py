"""Basal metabolic rate calculation."""

from calometer.enums.app_enum import GenderEnum


def compute_bmr(gender: GenderEnum | str, age: int, weight_kg: float, height_cm: float) -> float:
    """
    Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Args:
        gender: gender code, 'M' for male, anything else uses the female constant
        age: age in years
        weight_kg: weight in kg
        height_cm: height in cm

    Returns:
        BMR in kcal/day
    """
    code = gender.value if isinstance(gender, GenderEnum) else gender
    base = (10 * weight_kg) + (6.25 * height_cm) - (5 * age)
    if code == GenderEnum.male.value:
        return float(base + 5)
    return float(base - 161)
