import math
from numbers import Real

from backend.app.schedule.errors import InvalidInputError

# A 50 m2 project is the baseline (multiplier 1.0)
BASELINE_AREA_M2 = 50.0
MIN_MULTIPLIER = 0.8
MAX_MULTIPLIER = 1.5


def area_multiplier(area: float) -> float:
    """Map project area (m2) to a duration multiplier clamped to [0.8, 1.5]."""
    if isinstance(area, bool) or not isinstance(area, Real):
        raise InvalidInputError(f"area must be a number, got {area!r}")
    if not math.isfinite(area) or area <= 0:
        raise InvalidInputError(f"area must be a positive finite number, got {area!r}")
    return max(MIN_MULTIPLIER, min(MAX_MULTIPLIER, float(area) / BASELINE_AREA_M2))


def check_multiplier(multiplier: float) -> float:
    if isinstance(multiplier, bool) or not isinstance(multiplier, Real):
        raise InvalidInputError(f"multiplier must be a number, got {multiplier!r}")
    if not math.isfinite(multiplier) or multiplier <= 0:
        raise InvalidInputError(f"multiplier must be a positive finite number, got {multiplier!r}")
    return float(multiplier)


def scaled_duration(nominal_duration: int, multiplier: float) -> int:
    """Scale a nominal duration, rounding half up, never below 1 unit."""
    multiplier = check_multiplier(multiplier)
    return max(1, int(math.floor(nominal_duration * multiplier + 0.5)))
