"""Unit tests for core data models."""

from datetime import date, time

import pytest
from pydantic import ValidationError

from foodflow.core.models import (
    ExpirySuggestion,
    PickupSlot,
    PickupTolerance,
    SlotError,
    SlotValidationResult,
)


class TestPickupSlot:
    """Tests for PickupSlot model."""

    def test_parses_strings(self):
        """ISO strings are coerced to date and time."""
        slot = PickupSlot(pickup_date="2026-02-12", start_time="10:00", end_time="12:30")

        assert slot.pickup_date == date(2026, 2, 12)
        assert slot.start_time == time(10, 0)
        assert slot.end_time == time(12, 30)

    def test_fields_optional(self):
        """Draft slots may be incomplete."""
        slot = PickupSlot()
        assert slot.pickup_date is None
        assert slot.notes is None

    def test_invalid_date(self):
        """Malformed dates fail validation."""
        with pytest.raises(ValidationError):
            PickupSlot(pickup_date="2026-02-30")

    def test_frozen(self):
        """Slots are immutable."""
        slot = PickupSlot(pickup_date="2026-02-12")
        with pytest.raises(ValidationError):
            slot.pickup_date = date(2026, 2, 13)


class TestExpirySuggestion:
    """Tests for ExpirySuggestion model."""

    def test_defaults(self):
        """An empty suggestion is permissive."""
        suggestion = ExpirySuggestion()
        assert suggestion.eligible is True
        assert suggestion.warnings == []

    def test_negative_shelf_life_rejected(self):
        """Shelf life cannot be negative."""
        with pytest.raises(ValidationError):
            ExpirySuggestion(shelf_life_days=-1)


class TestSlotValidationResult:
    """Tests for SlotValidationResult model."""

    def test_ok(self):
        """No error means ok."""
        result = SlotValidationResult()
        assert result.ok is True
        assert result.message is None

    def test_error_message(self):
        """Each error has a user-facing message."""
        result = SlotValidationResult(error=SlotError.END_BEFORE_START, slot_index=2)
        assert result.ok is False
        assert result.message == "End time must be after start time."

    def test_every_error_has_message(self):
        """No error code is missing a message."""
        for error in SlotError:
            assert SlotValidationResult(error=error).message


class TestPickupTolerance:
    """Tests for PickupTolerance model."""

    def test_defaults(self):
        """Defaults are 15 minutes early and 30 late."""
        tolerance = PickupTolerance()
        assert tolerance.early_minutes == 15
        assert tolerance.late_minutes == 30

    def test_negative_rejected(self):
        """Tolerances cannot be negative."""
        with pytest.raises(ValidationError):
            PickupTolerance(early_minutes=-5)
