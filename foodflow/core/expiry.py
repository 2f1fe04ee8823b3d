"""Expiry Advisor - Pure functions for suggesting and predicting expiry dates.

All functions are pure: same input always produces same output, no side effects.
Missing or malformed input degrades to None / permissive defaults instead of
raising, so a half-filled donation draft never fails.
"""

import re
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Optional, TypeVar

from .clock import UTC, TimestampInput, to_instant
from .food_types import food_type_label, temperature_label
from .models import (
    ExpiryPrediction,
    ExpirySuggestion,
    FoodType,
    PackagingType,
    TemperatureCategory,
)
from .shelf_life import collect_warnings, lookup_shelf_life


PREDICTION_VERSION = "rules_v1"

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_NOT_AT_ROOM_TEMPERATURE = frozenset({
    FoodType.PREPARED,
    FoodType.DAIRY_EGGS,
    FoodType.MEAT_POULTRY,
    FoodType.SEAFOOD,
})
_NOT_HOT_COOKED = frozenset({
    FoodType.DAIRY_EGGS,
    FoodType.MEAT_POULTRY,
    FoodType.SEAFOOD,
})

E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: type[E], value: E | str | None) -> E | None:
    # Blank form fields mean "not chosen yet"; unknown values are a caller bug.
    if value is None or value == "":
        return None
    return enum_cls(value)


def parse_calendar_date(value: TimestampInput) -> date | None:
    """Parse a fabrication or expiry date into a calendar date.

    A "YYYY-MM-DD" string is a calendar date, not a UTC instant. Full
    timestamps keep the calendar date as written, whatever their offset.

    Args:
        value: Date string, ISO timestamp, date, datetime, or None

    Returns:
        The calendar date, or None if absent or malformed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        if _DATE_ONLY.match(text):
            return date.fromisoformat(text)
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def is_eligible(
    food_type: Optional[FoodType],
    temperature_category: Optional[TemperatureCategory],
) -> bool:
    """Check whether a food type may be donated at a storage temperature.

    Absent data is permissive: only a known unsafe combination is ineligible.
    """
    if food_type is None or temperature_category is None:
        return True
    if temperature_category == TemperatureCategory.ROOM_TEMPERATURE:
        return food_type not in _NOT_AT_ROOM_TEMPERATURE
    if temperature_category == TemperatureCategory.HOT_COOKED:
        return food_type not in _NOT_HOT_COOKED
    return True


def suggest_expiry(
    food_type: FoodType | str | None,
    temperature_category: TemperatureCategory | str | None,
    packaging_type: PackagingType | str | None,
    fabrication_date: TimestampInput,
) -> ExpirySuggestion:
    """Suggest an expiry date from food type, storage temperature and fabrication date.

    Args:
        food_type: Canonical food type (enum or its value), None if not chosen
        temperature_category: Storage temperature, None if not chosen
        packaging_type: Packaging, used only for advisory warnings
        fabrication_date: When the food was made (date string or timestamp)

    Returns:
        ExpirySuggestion; suggested_expiry_date is None when data is insufficient

    Raises:
        ValueError: If an enum argument is a non-empty string outside its set
    """
    food = _coerce(FoodType, food_type)
    temperature = _coerce(TemperatureCategory, temperature_category)
    packaging = _coerce(PackagingType, packaging_type)

    eligible = is_eligible(food, temperature)
    warnings = collect_warnings(food, temperature, packaging)
    shelf_life_days = lookup_shelf_life(food, temperature)
    fabricated_on = parse_calendar_date(fabrication_date)

    if fabricated_on is None or shelf_life_days is None:
        return ExpirySuggestion(
            suggested_expiry_date=None,
            shelf_life_days=shelf_life_days,
            eligible=eligible,
            warnings=warnings,
            explanation=None,
        )

    suggested = fabricated_on + timedelta(days=shelf_life_days)
    explanation = (
        f"Suggested expiry: {suggested.isoformat()} "
        f"(based on {food_type_label(food)} + {temperature_label(temperature)})"
    )

    return ExpirySuggestion(
        suggested_expiry_date=suggested,
        shelf_life_days=shelf_life_days,
        eligible=eligible,
        warnings=warnings,
        explanation=explanation,
    )


# ==================== Expiry Prediction ====================


def _is_ambient(temperature: TemperatureCategory) -> bool:
    return temperature in (TemperatureCategory.ROOM_TEMPERATURE, TemperatureCategory.HOT_COOKED)


def _base_shelf_life(food: FoodType, temperature: TemperatureCategory) -> timedelta:
    ambient = _is_ambient(temperature)
    if food == FoodType.PREPARED:
        return timedelta(hours=6) if ambient else timedelta(days=1)
    if food == FoodType.PRODUCE:
        return timedelta(days=1) if ambient else timedelta(days=3)
    if food == FoodType.BAKERY:
        return timedelta(days=2) if ambient else timedelta(days=4)
    if food == FoodType.DAIRY_EGGS:
        return timedelta(days=5)
    if food == FoodType.MEAT_POULTRY:
        return timedelta(hours=6) if ambient else timedelta(days=1)
    if food == FoodType.SEAFOOD:
        return timedelta(hours=4) if ambient else timedelta(days=1)
    if food == FoodType.PANTRY:
        return timedelta(days=30)
    return timedelta(days=30) if ambient else timedelta(days=7)


def _adjust_for_temperature(shelf_life: timedelta, temperature: TemperatureCategory) -> timedelta:
    if temperature == TemperatureCategory.FROZEN:
        return min(shelf_life + timedelta(days=30), timedelta(days=60))
    return shelf_life


def _adjust_for_packaging(shelf_life: timedelta, packaging: Optional[PackagingType]) -> timedelta:
    minutes = int(shelf_life.total_seconds() // 60)
    if packaging in (PackagingType.SEALED, PackagingType.VACUUM_PACKED):
        return shelf_life + timedelta(minutes=int(minutes * 0.20))
    if packaging in (PackagingType.LOOSE, PackagingType.BULK, PackagingType.OTHER):
        return timedelta(minutes=max(int(minutes * 0.70), 60))
    return shelf_life


def predict_expiry(
    food_type: FoodType | str | None,
    temperature_category: TemperatureCategory | str | None,
    packaging_type: PackagingType | str | None,
    fabrication_date: TimestampInput,
    created_at: TimestampInput,
    now: TimestampInput,
) -> ExpiryPrediction:
    """Predict the instant a donation expires using rule-based shelf lives.

    The clock starts at the fabrication date (UTC midnight), else at the
    post's creation time, else at now. Missing food type defaults to pantry
    and missing temperature to room temperature.

    Args:
        food_type: Canonical food type, or None
        temperature_category: Storage temperature, or None
        packaging_type: Packaging, or None
        fabrication_date: When the food was made, or None
        created_at: When the post was created (naive means UTC), or None
        now: Current instant supplied by the caller

    Returns:
        ExpiryPrediction with the predicted instant and a confidence score

    Raises:
        ValueError: If no fabrication date, creation time or valid now is given
    """
    food = _coerce(FoodType, food_type)
    temperature = _coerce(TemperatureCategory, temperature_category)
    packaging = _coerce(PackagingType, packaging_type)
    fabricated_on = parse_calendar_date(fabrication_date)

    if fabricated_on is not None:
        base = datetime.combine(fabricated_on, time.min, tzinfo=UTC)
    else:
        base = to_instant(created_at) or to_instant(now)
    if base is None:
        raise ValueError("now must be a valid timestamp when no other base time is known")

    shelf_life = _base_shelf_life(
        food or FoodType.PANTRY,
        temperature or TemperatureCategory.ROOM_TEMPERATURE,
    )
    shelf_life = _adjust_for_temperature(shelf_life, temperature)
    shelf_life = _adjust_for_packaging(shelf_life, packaging)

    confidence = 0.55
    if fabricated_on is not None:
        confidence += 0.15
    if temperature is not None:
        confidence += 0.10
    if packaging is not None:
        confidence += 0.10
    if food is not None:
        confidence += 0.10

    return ExpiryPrediction(
        predicted_expiry=base + shelf_life,
        confidence=round(min(confidence, 0.95), 2),
        version=PREDICTION_VERSION,
        inputs={
            "food_type": food.value if food else None,
            "temperature_category": temperature.value if temperature else None,
            "packaging_type": packaging.value if packaging else None,
            "fabrication_date_used": fabricated_on is not None,
            "base_timestamp": base.isoformat(),
            "version": PREDICTION_VERSION,
        },
    )
