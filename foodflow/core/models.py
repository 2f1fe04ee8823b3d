"""Core Data Models - Enums and Pydantic value objects for the donation rules.

All models are immutable value objects with no behavior beyond validation.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FoodType(str, Enum):
    """Canonical category of donated food."""

    PREPARED = "PREPARED"
    PRODUCE = "PRODUCE"
    BAKERY = "BAKERY"
    DAIRY_EGGS = "DAIRY_EGGS"
    MEAT_POULTRY = "MEAT_POULTRY"
    SEAFOOD = "SEAFOOD"
    PANTRY = "PANTRY"
    BEVERAGES = "BEVERAGES"


class TemperatureCategory(str, Enum):
    """Storage condition of the item at donation time."""

    FROZEN = "FROZEN"
    REFRIGERATED = "REFRIGERATED"
    ROOM_TEMPERATURE = "ROOM_TEMPERATURE"
    HOT_COOKED = "HOT_COOKED"


class PackagingType(str, Enum):
    """How the item is packed. Advisory only, never blocks a donation."""

    SEALED = "SEALED"
    LOOSE = "LOOSE"
    REFRIGERATED_CONTAINER = "REFRIGERATED_CONTAINER"
    FROZEN_CONTAINER = "FROZEN_CONTAINER"
    VACUUM_PACKED = "VACUUM_PACKED"
    BOXED = "BOXED"
    WRAPPED = "WRAPPED"
    BULK = "BULK"
    OTHER = "OTHER"


class DisplayPhase(str, Enum):
    """User-facing lifecycle phase derived from the raw donation status."""

    CLAIMED = "CLAIMED"
    READY_FOR_PICKUP = "READY_FOR_PICKUP"
    COMPLETED = "COMPLETED"
    NOT_COMPLETED = "NOT_COMPLETED"
    EXPIRED = "EXPIRED"


class SlotError(str, Enum):
    """Reason a set of pickup slots was rejected."""

    INVALID_TARGET = "INVALID_TARGET"
    MISSING_EXPIRY = "MISSING_EXPIRY"
    ALREADY_EXPIRED = "ALREADY_EXPIRED"
    INCOMPLETE_SLOT = "INCOMPLETE_SLOT"
    PAST_PICKUP_DATE = "PAST_PICKUP_DATE"
    PICKUP_AFTER_EXPIRY = "PICKUP_AFTER_EXPIRY"
    END_BEFORE_START = "END_BEFORE_START"
    WINDOW_ALREADY_PASSED = "WINDOW_ALREADY_PASSED"


SLOT_ERROR_MESSAGES: dict[SlotError, str] = {
    SlotError.INVALID_TARGET: "Invalid donation. Please try again.",
    SlotError.MISSING_EXPIRY: "This donation has no expiry date and cannot be rescheduled.",
    SlotError.ALREADY_EXPIRED: "This donation is expired and cannot be rescheduled.",
    SlotError.INCOMPLETE_SLOT: "Please fill out all pickup slot fields.",
    SlotError.PAST_PICKUP_DATE: "Pickup dates must be today or later.",
    SlotError.PICKUP_AFTER_EXPIRY: "Pickup dates must be on or before the expiry date.",
    SlotError.END_BEFORE_START: "End time must be after start time.",
    SlotError.WINDOW_ALREADY_PASSED: "Pickup end time must be in the future.",
}


class PickupSlot(BaseModel):
    """A single date + time window during which a receiver may collect a donation.

    Fields are optional because a draft slot may still be incomplete;
    completeness is checked by the slot validator, not at construction.
    """

    model_config = ConfigDict(frozen=True)

    pickup_date: Optional[date] = Field(default=None, description="Calendar date of the pickup")
    start_time: Optional[time] = Field(default=None, description="Window start (wall clock)")
    end_time: Optional[time] = Field(default=None, description="Window end (wall clock)")
    notes: Optional[str] = Field(default=None, description="Free-form instructions for the receiver")


class ExpirySuggestion(BaseModel):
    """Suggested expiry computed from food type, temperature and fabrication date."""

    model_config = ConfigDict(frozen=True)

    suggested_expiry_date: Optional[date] = Field(default=None, description="None if data is insufficient")
    shelf_life_days: Optional[int] = Field(default=None, ge=0, description="0 means same day only")
    eligible: bool = Field(default=True, description="Whether the combination may be donated at all")
    warnings: list[str] = Field(default_factory=list)
    explanation: Optional[str] = Field(default=None)


class SlotValidationResult(BaseModel):
    """Outcome of validating a donation's pickup slots."""

    model_config = ConfigDict(frozen=True)

    error: Optional[SlotError] = Field(default=None, description="None when all slots are accepted")
    slot_index: Optional[int] = Field(
        default=None, ge=0, description="Index of the offending slot; None for donation-level rules"
    )

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        if self.error is None:
            return None
        return SLOT_ERROR_MESSAGES[self.error]


class PickupTolerance(BaseModel):
    """Minutes around a scheduled window in which pickup may still be confirmed."""

    model_config = ConfigDict(frozen=True)

    early_minutes: int = Field(default=15, ge=0)
    late_minutes: int = Field(default=30, ge=0)


class PickupConfirmation(BaseModel):
    """Whether a pickup may be confirmed right now, and why."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str = Field(description="WITHIN_WINDOW, EARLY_TOLERANCE, LATE_TOLERANCE, TOO_EARLY, TOO_LATE or NO_SCHEDULE")
    message: str


class ExpiryPrediction(BaseModel):
    """Rule-based prediction of the instant a donation expires."""

    model_config = ConfigDict(frozen=True)

    predicted_expiry: datetime
    confidence: float = Field(ge=0, le=1)
    version: str
    inputs: dict[str, Any] = Field(default_factory=dict)
