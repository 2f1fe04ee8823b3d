"""Unit tests for the expiry advisor - pure functions, no mocks needed."""

from datetime import date, datetime, timezone

import pytest

from foodflow.core.expiry import (
    is_eligible,
    parse_calendar_date,
    predict_expiry,
    suggest_expiry,
)
from foodflow.core.models import FoodType, PackagingType, TemperatureCategory


class TestSuggestExpiry:
    """Tests for suggest_expiry."""

    def test_prepared_refrigerated(self):
        """Prepared food kept cold gets three days."""
        suggestion = suggest_expiry(
            FoodType.PREPARED,
            TemperatureCategory.REFRIGERATED,
            PackagingType.SEALED,
            "2026-02-17",
        )

        assert suggestion.suggested_expiry_date == date(2026, 2, 20)
        assert suggestion.shelf_life_days == 3
        assert suggestion.eligible is True
        assert suggestion.warnings == []
        assert suggestion.explanation == "Suggested expiry: 2026-02-20 (based on Prepared Meals + Refrigerated)"

    def test_prepared_room_temperature_is_same_day_and_ineligible(self):
        """Prepared food at room temperature expires the same day and cannot be donated."""
        suggestion = suggest_expiry(
            FoodType.PREPARED,
            TemperatureCategory.ROOM_TEMPERATURE,
            PackagingType.SEALED,
            "2026-02-17",
        )

        assert suggestion.suggested_expiry_date == date(2026, 2, 17)
        assert suggestion.shelf_life_days == 0
        assert suggestion.eligible is False

    def test_pantry_room_temperature(self):
        """Pantry items keep thirty days, crossing a month boundary."""
        suggestion = suggest_expiry(
            FoodType.PANTRY,
            TemperatureCategory.ROOM_TEMPERATURE,
            PackagingType.BOXED,
            "2026-02-17",
        )

        assert suggestion.suggested_expiry_date == date(2026, 3, 19)
        assert suggestion.eligible is True

    def test_accepts_string_values(self):
        """Raw form strings are accepted in place of enum members."""
        suggestion = suggest_expiry("PRODUCE", "REFRIGERATED", "LOOSE", "2026-02-17")

        assert suggestion.suggested_expiry_date == date(2026, 2, 22)

    def test_is_pure(self):
        """Identical inputs give identical suggestions."""
        args = (FoodType.BAKERY, TemperatureCategory.FROZEN, PackagingType.WRAPPED, "2026-02-17")

        assert suggest_expiry(*args) == suggest_expiry(*args)

    def test_missing_food_type_is_permissive(self):
        """No food type means no suggestion but still eligible."""
        suggestion = suggest_expiry(None, TemperatureCategory.ROOM_TEMPERATURE, None, "2026-02-17")

        assert suggestion.suggested_expiry_date is None
        assert suggestion.shelf_life_days is None
        assert suggestion.eligible is True
        assert suggestion.explanation is None

    def test_blank_strings_are_absent(self):
        """Empty form fields are treated like missing values."""
        suggestion = suggest_expiry("", "", "", "")

        assert suggestion.suggested_expiry_date is None
        assert suggestion.eligible is True
        assert suggestion.warnings == []

    def test_missing_fabrication_date_keeps_shelf_life(self):
        """Without a fabrication date the shelf life is still reported."""
        suggestion = suggest_expiry(FoodType.DAIRY_EGGS, TemperatureCategory.REFRIGERATED, None, None)

        assert suggestion.suggested_expiry_date is None
        assert suggestion.shelf_life_days == 3
        assert suggestion.explanation is None

    def test_malformed_fabrication_date(self):
        """A malformed date degrades to no suggestion instead of raising."""
        suggestion = suggest_expiry(FoodType.PRODUCE, TemperatureCategory.FROZEN, None, "2026-13-45")

        assert suggestion.suggested_expiry_date is None
        assert suggestion.shelf_life_days == 30

    def test_timestamp_keeps_written_calendar_date(self):
        """A late-evening timestamp with an offset does not shift the date."""
        suggestion = suggest_expiry(
            FoodType.PREPARED,
            TemperatureCategory.REFRIGERATED,
            None,
            "2026-02-17T23:30:00-05:00",
        )

        assert suggestion.suggested_expiry_date == date(2026, 2, 20)

    def test_warnings_in_stable_order(self):
        """Packaging warnings come before food-type warnings."""
        suggestion = suggest_expiry(
            FoodType.PREPARED,
            TemperatureCategory.HOT_COOKED,
            PackagingType.REFRIGERATED_CONTAINER,
            "2026-02-17",
        )

        assert suggestion.warnings == [
            "Packaging suggests cold storage, confirm temperature",
            "Hot food must be cooled and refrigerated to be eligible for donation",
        ]
        assert suggestion.eligible is True

    def test_unknown_enum_value_raises(self):
        """A value outside the closed set is a programming error."""
        with pytest.raises(ValueError):
            suggest_expiry("CANDY", TemperatureCategory.FROZEN, None, "2026-02-17")


class TestShelfLifeForEveryPair:
    """The advisor reports the table value for every known pair."""

    @pytest.mark.parametrize("food_type,expected", [
        (FoodType.PREPARED, (30, 3, 0, 0)),
        (FoodType.PRODUCE, (30, 5, 2, 2)),
        (FoodType.BAKERY, (30, 3, 1, 1)),
        (FoodType.DAIRY_EGGS, (30, 3, 0, 0)),
        (FoodType.MEAT_POULTRY, (30, 1, 0, 0)),
        (FoodType.SEAFOOD, (30, 1, 0, 0)),
        (FoodType.PANTRY, (60, 30, 30, 30)),
        (FoodType.BEVERAGES, (30, 7, 7, 0)),
    ])
    def test_shelf_life_days(self, food_type, expected):
        """Days match the published table, in FROZEN/REFRIGERATED/ROOM/HOT order."""
        temperatures = (
            TemperatureCategory.FROZEN,
            TemperatureCategory.REFRIGERATED,
            TemperatureCategory.ROOM_TEMPERATURE,
            TemperatureCategory.HOT_COOKED,
        )
        actual = tuple(
            suggest_expiry(food_type, temperature, None, "2026-02-17").shelf_life_days
            for temperature in temperatures
        )
        assert actual == expected


class TestIsEligible:
    """Tests for is_eligible."""

    @pytest.mark.parametrize("food_type", [
        FoodType.PREPARED,
        FoodType.DAIRY_EGGS,
        FoodType.MEAT_POULTRY,
        FoodType.SEAFOOD,
    ])
    def test_room_temperature_perishables_ineligible(self, food_type):
        """Perishables left at room temperature cannot be donated."""
        assert is_eligible(food_type, TemperatureCategory.ROOM_TEMPERATURE) is False

    @pytest.mark.parametrize("food_type", [
        FoodType.DAIRY_EGGS,
        FoodType.MEAT_POULTRY,
        FoodType.SEAFOOD,
    ])
    def test_hot_animal_products_ineligible(self, food_type):
        """Hot dairy, meat and seafood cannot be donated."""
        assert is_eligible(food_type, TemperatureCategory.HOT_COOKED) is False

    def test_hot_prepared_food_is_eligible_with_warning(self):
        """Hot prepared food is allowed; the advisor only warns."""
        assert is_eligible(FoodType.PREPARED, TemperatureCategory.HOT_COOKED) is True

    def test_cold_storage_always_eligible(self):
        """Frozen and refrigerated items are always eligible."""
        for food_type in FoodType:
            assert is_eligible(food_type, TemperatureCategory.FROZEN) is True
            assert is_eligible(food_type, TemperatureCategory.REFRIGERATED) is True

    def test_missing_data_is_eligible(self):
        """Absent data never blocks a donor."""
        assert is_eligible(None, TemperatureCategory.ROOM_TEMPERATURE) is True
        assert is_eligible(FoodType.SEAFOOD, None) is True


class TestParseCalendarDate:
    """Tests for parse_calendar_date."""

    def test_date_only_string(self):
        """YYYY-MM-DD is a calendar date."""
        assert parse_calendar_date("2026-02-17") == date(2026, 2, 17)

    def test_utc_timestamp(self):
        """Z-suffixed timestamps are accepted."""
        assert parse_calendar_date("2026-02-17T10:00:00Z") == date(2026, 2, 17)

    def test_date_and_datetime_objects(self):
        """Date and datetime objects pass through as calendar dates."""
        assert parse_calendar_date(date(2026, 2, 17)) == date(2026, 2, 17)
        assert parse_calendar_date(datetime(2026, 2, 17, 22, 0)) == date(2026, 2, 17)

    @pytest.mark.parametrize("value", [None, "", "   ", "tomorrow", "2026-02-30", "17/02/2026", 20260217])
    def test_malformed_returns_none(self, value):
        """Malformed input returns None rather than raising."""
        assert parse_calendar_date(value) is None


class TestPredictExpiry:
    """Tests for predict_expiry."""

    NOW = datetime(2026, 2, 20, 9, 0, tzinfo=timezone.utc)

    def test_sealed_refrigerated_prepared(self):
        """Sealed packaging adds twenty percent to a one-day shelf life."""
        prediction = predict_expiry(
            FoodType.PREPARED,
            TemperatureCategory.REFRIGERATED,
            PackagingType.SEALED,
            "2026-02-17",
            None,
            self.NOW,
        )

        assert prediction.predicted_expiry == datetime(2026, 2, 18, 4, 48, tzinfo=timezone.utc)
        assert prediction.confidence == pytest.approx(0.95)
        assert prediction.version == "rules_v1"
        assert prediction.inputs["fabrication_date_used"] is True

    def test_frozen_is_capped_at_sixty_days(self):
        """Freezing extends shelf life by thirty days up to sixty."""
        prediction = predict_expiry(
            FoodType.PANTRY,
            TemperatureCategory.FROZEN,
            None,
            None,
            "2026-02-10T12:00:00",
            self.NOW,
        )

        assert prediction.predicted_expiry == datetime(2026, 4, 11, 12, 0, tzinfo=timezone.utc)
        assert prediction.confidence == pytest.approx(0.75)

    def test_loose_packaging_shortens_shelf_life(self):
        """Loose packaging keeps seventy percent of the shelf life."""
        prediction = predict_expiry(
            FoodType.SEAFOOD,
            TemperatureCategory.ROOM_TEMPERATURE,
            PackagingType.LOOSE,
            "2026-02-17",
            None,
            self.NOW,
        )

        assert prediction.predicted_expiry == datetime(2026, 2, 17, 2, 48, tzinfo=timezone.utc)

    def test_defaults_when_nothing_known(self):
        """With no data the clock starts now with a pantry shelf life."""
        prediction = predict_expiry(None, None, None, None, None, self.NOW)

        assert prediction.predicted_expiry == datetime(2026, 3, 22, 9, 0, tzinfo=timezone.utc)
        assert prediction.confidence == pytest.approx(0.55)
        assert prediction.inputs["food_type"] is None

    def test_invalid_now_without_other_base_raises(self):
        """A base time is required."""
        with pytest.raises(ValueError):
            predict_expiry(None, None, None, None, None, "not a time")
