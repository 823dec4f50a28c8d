from enum import Enum


class GenderEnum(str, Enum):
    male = "M"
    female = "F"


class WeightGoalEnum(str, Enum):
    lose = "L"
    gain = "G"
    maintain = "M"


class LogStatusEnum(str, Enum):
    pending = "P"
    done = "D"


class CalorieKindEnum(str, Enum):
    consumed = "consumed"
    burnt = "burnt"
