"""Shelf Life Table - Days until expiry per food type and storage temperature.

The table is static and read-only. All functions are pure.
"""

from typing import Optional

from .models import FoodType, PackagingType, TemperatureCategory


SHELF_LIFE_DAYS: dict[FoodType, dict[TemperatureCategory, int]] = {
    FoodType.PREPARED: {
        TemperatureCategory.FROZEN: 30,
        TemperatureCategory.REFRIGERATED: 3,
        TemperatureCategory.ROOM_TEMPERATURE: 0,
        TemperatureCategory.HOT_COOKED: 0,
    },
    FoodType.PRODUCE: {
        TemperatureCategory.FROZEN: 30,
        TemperatureCategory.REFRIGERATED: 5,
        TemperatureCategory.ROOM_TEMPERATURE: 2,
        TemperatureCategory.HOT_COOKED: 2,
    },
    FoodType.BAKERY: {
        TemperatureCategory.FROZEN: 30,
        TemperatureCategory.REFRIGERATED: 3,
        TemperatureCategory.ROOM_TEMPERATURE: 1,
        TemperatureCategory.HOT_COOKED: 1,
    },
    FoodType.DAIRY_EGGS: {
        TemperatureCategory.FROZEN: 30,
        TemperatureCategory.REFRIGERATED: 3,
        TemperatureCategory.ROOM_TEMPERATURE: 0,
        TemperatureCategory.HOT_COOKED: 0,
    },
    FoodType.MEAT_POULTRY: {
        TemperatureCategory.FROZEN: 30,
        TemperatureCategory.REFRIGERATED: 1,
        TemperatureCategory.ROOM_TEMPERATURE: 0,
        TemperatureCategory.HOT_COOKED: 0,
    },
    FoodType.SEAFOOD: {
        TemperatureCategory.FROZEN: 30,
        TemperatureCategory.REFRIGERATED: 1,
        TemperatureCategory.ROOM_TEMPERATURE: 0,
        TemperatureCategory.HOT_COOKED: 0,
    },
    FoodType.PANTRY: {
        TemperatureCategory.FROZEN: 60,
        TemperatureCategory.REFRIGERATED: 30,
        TemperatureCategory.ROOM_TEMPERATURE: 30,
        TemperatureCategory.HOT_COOKED: 30,
    },
    FoodType.BEVERAGES: {
        TemperatureCategory.FROZEN: 30,
        TemperatureCategory.REFRIGERATED: 7,
        TemperatureCategory.ROOM_TEMPERATURE: 7,
        TemperatureCategory.HOT_COOKED: 0,
    },
}

COLD_STORAGE_WARNING = "Packaging suggests cold storage, confirm temperature"
FROZEN_STORAGE_WARNING = "Packaging suggests frozen storage, confirm temperature"

# Food-type specific advice when an item is declared hot/cooked
_HOT_COOKED_WARNINGS: dict[FoodType, str] = {
    FoodType.PREPARED: "Hot food must be cooled and refrigerated to be eligible for donation",
    FoodType.PRODUCE: "Produce is usually not hot/cooked",
    FoodType.PANTRY: "Pantry items are usually stored at room temperature",
    FoodType.BEVERAGES: "Hot beverages are same-day donations",
}


def lookup_shelf_life(
    food_type: Optional[FoodType],
    temperature_category: Optional[TemperatureCategory],
) -> int | None:
    """Look up days until expiry for a food type stored at a temperature.

    Args:
        food_type: Canonical food type, or None if not chosen yet
        temperature_category: Storage temperature, or None if not chosen yet

    Returns:
        Days until expiry (0 = same day only), or None if unknown
    """
    if food_type is None or temperature_category is None:
        return None
    return SHELF_LIFE_DAYS.get(food_type, {}).get(temperature_category)


def collect_warnings(
    food_type: Optional[FoodType],
    temperature_category: Optional[TemperatureCategory],
    packaging_type: Optional[PackagingType],
) -> list[str]:
    """Collect advisory warnings about inconsistent packaging or temperature.

    Warnings never block a donation. Order is stable: packaging checks first,
    then food-type checks.
    """
    warnings = []

    if packaging_type == PackagingType.REFRIGERATED_CONTAINER and temperature_category in (
        TemperatureCategory.ROOM_TEMPERATURE,
        TemperatureCategory.HOT_COOKED,
    ):
        warnings.append(COLD_STORAGE_WARNING)

    if (
        packaging_type == PackagingType.FROZEN_CONTAINER
        and temperature_category is not None
        and temperature_category != TemperatureCategory.FROZEN
    ):
        warnings.append(FROZEN_STORAGE_WARNING)

    if temperature_category == TemperatureCategory.HOT_COOKED and food_type in _HOT_COOKED_WARNINGS:
        warnings.append(_HOT_COOKED_WARNINGS[food_type])

    return warnings
