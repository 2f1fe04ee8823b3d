"""Food Type Labels - Display labels and legacy category code compatibility.

Older clients and stored posts use the fine-grained category codes of the
previous catalogue (e.g. FRUITS_VEGETABLES, LEAFY_GREENS). Several of those
collapse onto one canonical FoodType; each FoodType has exactly one primary
legacy code used when talking to older clients.
"""

from typing import Optional

from .models import FoodType, TemperatureCategory


FOOD_TYPE_LABELS: dict[FoodType, str] = {
    FoodType.PREPARED: "Prepared Meals",
    FoodType.PRODUCE: "Fruits & Vegetables",
    FoodType.BAKERY: "Bakery & Pastry",
    FoodType.DAIRY_EGGS: "Dairy & Eggs",
    FoodType.MEAT_POULTRY: "Meat & Poultry",
    FoodType.SEAFOOD: "Seafood",
    FoodType.PANTRY: "Pantry Items",
    FoodType.BEVERAGES: "Beverages",
}

TEMPERATURE_LABELS: dict[TemperatureCategory, str] = {
    TemperatureCategory.FROZEN: "Frozen",
    TemperatureCategory.REFRIGERATED: "Refrigerated",
    TemperatureCategory.ROOM_TEMPERATURE: "Room Temperature",
    TemperatureCategory.HOT_COOKED: "Hot/Cooked",
}

# Primary code first. Dietary labels, perishability tags and catch-all
# codes carry no storage hint of their own and fall under PANTRY, except
# the generic FROZEN and PERISHABLE codes which take the shortest shelf life.
_LEGACY_CODES: dict[FoodType, tuple[str, ...]] = {
    FoodType.PREPARED: (
        "PREPARED_MEALS", "READY_TO_EAT", "SANDWICHES", "SALADS", "SOUPS",
        "STEWS", "CASSEROLES", "LEFTOVERS", "FROZEN_MEALS", "FROZEN",
        "PERISHABLE", "BREAKFAST_ITEMS", "LUNCH_ITEMS", "DINNER_ITEMS",
    ),
    FoodType.PRODUCE: (
        "FRUITS_VEGETABLES", "LEAFY_GREENS", "ROOT_VEGETABLES", "BERRIES",
        "CITRUS_FRUITS", "TROPICAL_FRUITS", "FROZEN_VEGETABLES", "FROZEN_FRUITS",
    ),
    FoodType.BAKERY: (
        "BAKERY_PASTRY", "BAKED_GOODS", "BAKERY_ITEMS", "BREAD", "CAKES_PASTRIES",
        "DESSERTS", "COOKIES",
    ),
    FoodType.DAIRY_EGGS: (
        "DAIRY_COLD", "DAIRY", "MILK", "CHEESE", "YOGURT", "BUTTER", "CREAM", "EGGS",
        "MILK_ALTERNATIVES", "PLANT_BASED_DAIRY", "ICE_CREAM", "FROZEN_DESSERTS",
        "REFRIGERATED",
    ),
    FoodType.MEAT_POULTRY: (
        "FRESH_MEAT", "GROUND_MEAT", "POULTRY", "FROZEN_MEAT",
        "TOFU_TEMPEH", "PLANT_BASED_PROTEIN",
    ),
    FoodType.SEAFOOD: ("SEAFOOD", "FISH", "FROZEN_SEAFOOD"),
    FoodType.PANTRY: (
        "PACKAGED_PANTRY", "PACKAGED",
        # grains and legumes
        "CEREALS", "WHOLE_GRAINS", "PASTA", "DRIED_PASTA", "RICE", "FLOUR_BAKING_MIXES",
        "INSTANT_NOODLES", "LEGUMES", "BEANS", "LENTILS", "CHICKPEAS",
        # canned and jarred
        "CANNED_VEGETABLES", "CANNED_FRUITS", "CANNED_BEANS", "CANNED_SOUP",
        "CANNED_MEAT_FISH", "TOMATO_PRODUCTS", "PICKLED_ITEMS", "PRESERVES_JAMS",
        "PEANUT_BUTTER", "NUT_BUTTERS",
        # dried
        "DRIED_FRUITS", "DRIED_VEGETABLES", "DRIED_HERBS",
        # snacks
        "CHIPS_CRACKERS", "CANDY", "CHOCOLATE", "GRANOLA_BARS", "ENERGY_BARS",
        "POPCORN", "PRETZELS", "TRAIL_MIX",
        # condiments and cooking
        "CONDIMENTS", "SAUCES", "SALAD_DRESSING", "COOKING_SAUCES", "GRAVY",
        "MAYONNAISE", "KETCHUP", "MUSTARD", "HOT_SAUCE", "SOY_SAUCE", "VINEGAR",
        "COOKING_OIL", "OLIVE_OIL", "VEGETABLE_OIL", "SPICES", "SEASONINGS",
        "SALT_PEPPER", "SUGAR", "HONEY", "SYRUP", "BAKING_INGREDIENTS",
        "BAKING_POWDER_SODA", "YEAST", "VANILLA_EXTRACT",
        # nuts and seeds
        "NUTS", "SEEDS", "ALMONDS", "WALNUTS", "CASHEWS", "PEANUTS",
        "SUNFLOWER_SEEDS", "CHIA_SEEDS",
        # baby and special dietary
        "BABY_FOOD", "INFANT_FORMULA", "BABY_CEREAL", "BABY_SNACKS",
        "GLUTEN_FREE_PRODUCTS", "DIABETIC_FRIENDLY", "LOW_SODIUM", "LOW_FAT",
        "SUGAR_FREE", "PROTEIN_SUPPLEMENTS", "MEAL_REPLACEMENT",
        # labels and catch-alls
        "VEGETARIAN", "VEGAN", "GLUTEN_FREE", "DAIRY_FREE", "NUT_FREE", "SOY_FREE",
        "EGG_FREE", "KOSHER", "HALAL", "ORGANIC", "NON_GMO", "FAIR_TRADE", "LOCAL",
        "NON_PERISHABLE", "SHELF_STABLE", "MIXED_ITEMS", "ASSORTED", "BULK_ITEMS",
        "EMERGENCY_FOOD_KIT", "MRE_MILITARY_RATIONS", "PET_FOOD", "OTHER",
    ),
    FoodType.BEVERAGES: (
        "BEVERAGES", "WATER", "JUICE", "SOFT_DRINKS", "SPORTS_DRINKS", "TEA", "COFFEE",
        "HOT_CHOCOLATE", "PROTEIN_SHAKES", "SMOOTHIES", "NUTRITIONAL_SHAKES",
    ),
}

LEGACY_TO_CANONICAL: dict[str, FoodType] = {
    code: food_type
    for food_type, codes in _LEGACY_CODES.items()
    for code in codes
}

CANONICAL_TO_LEGACY: dict[FoodType, str] = {
    food_type: codes[0] for food_type, codes in _LEGACY_CODES.items()
}


class UnknownFoodTypeError(ValueError):
    """Raised when a category code is neither canonical nor a known legacy code."""


def legacy_to_canonical_food_type(code: str | FoodType) -> FoodType:
    """Resolve a legacy or canonical category code to its canonical FoodType.

    Args:
        code: Legacy code (e.g. "FRUITS_VEGETABLES") or canonical FoodType value

    Returns:
        The canonical FoodType

    Raises:
        UnknownFoodTypeError: If the code is not recognised
    """
    if isinstance(code, FoodType):
        return code

    normalized = (code or "").strip().upper()
    if normalized in LEGACY_TO_CANONICAL:
        return LEGACY_TO_CANONICAL[normalized]
    try:
        return FoodType(normalized)
    except ValueError:
        raise UnknownFoodTypeError(f"Unknown food category code: {code!r}") from None


def canonical_to_legacy_food_type(food_type: FoodType | str) -> str:
    """Return the primary legacy code for a canonical FoodType."""
    return CANONICAL_TO_LEGACY[FoodType(food_type)]


def food_type_label(food_type: Optional[FoodType]) -> str:
    """Human-readable label, empty string if absent."""
    if food_type is None:
        return ""
    return FOOD_TYPE_LABELS[food_type]


def temperature_label(temperature_category: Optional[TemperatureCategory]) -> str:
    """Human-readable label, empty string if absent."""
    if temperature_category is None:
        return ""
    return TEMPERATURE_LABELS[temperature_category]
