"""Pickup Slot Validation - Pure functions for checking pickup windows.

All functions are pure: "now" and the zone are supplied by the caller, and
rejections are returned as values, never raised.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from .clock import TimestampInput, ZoneInput, combine_local, get_zone, to_instant
from .expiry import parse_calendar_date
from .models import (
    PickupConfirmation,
    PickupSlot,
    PickupTolerance,
    SlotError,
    SlotValidationResult,
)


def _minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def _parse_clock_time(value: Any) -> time | None:
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return time.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_pickup_slot(slot: PickupSlot | Mapping[str, Any]) -> PickupSlot:
    """Build a PickupSlot from raw form fields.

    Blank or unparseable dates and times become None, so the slot is
    reported as incomplete instead of failing to parse.
    """
    if isinstance(slot, PickupSlot):
        return slot

    notes = slot.get("notes")
    return PickupSlot(
        pickup_date=parse_calendar_date(slot.get("pickup_date")),
        start_time=_parse_clock_time(slot.get("start_time")),
        end_time=_parse_clock_time(slot.get("end_time")),
        notes=notes if isinstance(notes, str) and notes.strip() else None,
    )


def _reject(error: SlotError, slot_index: int | None = None) -> SlotValidationResult:
    return SlotValidationResult(error=error, slot_index=slot_index)


def validate_pickup_slots(
    slots: Iterable[PickupSlot | Mapping[str, Any]],
    expiry_date: TimestampInput,
    now: TimestampInput,
    zone: ZoneInput = "UTC",
    *,
    has_target: bool = True,
) -> SlotValidationResult:
    """Validate proposed pickup slots for a donation or claim.

    Donation-level rules run first, then each slot in order. The first
    violation wins, so the returned error is stable for a given input.
    An empty slot list is rejected as INCOMPLETE_SLOT.

    Args:
        slots: Proposed slots in creation order (models or plain mappings)
        expiry_date: The donation's expiry date; unparseable means absent
        now: Current instant (naive means UTC)
        zone: IANA zone in which slot dates and times are expressed
        has_target: False when the donation/claim reference is missing

    Returns:
        SlotValidationResult; ok is True when every slot is accepted

    Raises:
        ValueError: If now is not a valid timestamp
    """
    if not has_target:
        return _reject(SlotError.INVALID_TARGET)

    expires_on = parse_calendar_date(expiry_date)
    if expires_on is None:
        return _reject(SlotError.MISSING_EXPIRY)

    current = to_instant(now)
    if current is None:
        raise ValueError("now must be a valid timestamp")
    today = current.astimezone(get_zone(zone)).date()

    if expires_on < today:
        return _reject(SlotError.ALREADY_EXPIRED)

    proposed = list(slots)
    if not proposed:
        return _reject(SlotError.INCOMPLETE_SLOT, 0)

    for index, slot in enumerate(proposed):
        error = _check_slot(parse_pickup_slot(slot), expires_on, today, current, zone)
        if error is not None:
            return _reject(error, index)

    return SlotValidationResult()


def _check_slot(
    slot: PickupSlot,
    expires_on: date,
    today: date,
    now: datetime,
    zone: ZoneInput,
) -> SlotError | None:
    if slot.pickup_date is None or slot.start_time is None or slot.end_time is None:
        return SlotError.INCOMPLETE_SLOT
    if slot.pickup_date < today:
        return SlotError.PAST_PICKUP_DATE
    if slot.pickup_date > expires_on:
        return SlotError.PICKUP_AFTER_EXPIRY
    if _minutes_of_day(slot.end_time) <= _minutes_of_day(slot.start_time):
        return SlotError.END_BEFORE_START
    if slot.pickup_date == today:
        window_end = combine_local(slot.pickup_date, slot.end_time.replace(second=0, microsecond=0), zone)
        if window_end <= now:
            return SlotError.WINDOW_ALREADY_PASSED
    return None


# ==================== Pickup Confirmation ====================


def _hhmm(value: datetime | time) -> str:
    return value.strftime("%H:%M")


def _whole_minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)


def check_pickup_confirmation(
    pickup_date: Optional[date],
    start_time: Optional[time],
    end_time: Optional[time],
    now: TimestampInput,
    zone: ZoneInput = "UTC",
    tolerance: PickupTolerance | None = None,
) -> PickupConfirmation:
    """Decide whether a pickup may be confirmed at the current instant.

    The scheduled window is widened by the early and late tolerances.
    A missing schedule never blocks confirmation.

    Args:
        pickup_date: Scheduled pickup date, or None
        start_time: Scheduled window start, or None
        end_time: Scheduled window end, or None
        now: Current instant (naive means UTC)
        zone: IANA zone in which the schedule is expressed
        tolerance: Early/late tolerance in minutes (defaults 15/30)

    Returns:
        PickupConfirmation with the decision, a reason code and a message

    Raises:
        ValueError: If now is not a valid timestamp
    """
    tolerance = tolerance or PickupTolerance()

    if pickup_date is None or start_time is None or end_time is None:
        return PickupConfirmation(
            allowed=True,
            reason="NO_SCHEDULE",
            message="No scheduled pickup time set",
        )

    current = to_instant(now)
    if current is None:
        raise ValueError("now must be a valid timestamp")
    current = current.astimezone(get_zone(zone))

    scheduled_start = combine_local(pickup_date, start_time, zone)
    scheduled_end = combine_local(pickup_date, end_time, zone)
    early_boundary = scheduled_start - timedelta(minutes=tolerance.early_minutes)
    late_boundary = scheduled_end + timedelta(minutes=tolerance.late_minutes)

    if current < early_boundary:
        wait = _whole_minutes(early_boundary - current)
        return PickupConfirmation(
            allowed=False,
            reason="TOO_EARLY",
            message=(
                f"Pickup confirmation not yet allowed. Please wait until {_hhmm(early_boundary)} "
                f"(in {wait} minutes). Early tolerance window starts {tolerance.early_minutes} "
                f"minutes before scheduled pickup time of {_hhmm(start_time)}."
            ),
        )

    if current > late_boundary:
        overdue = _whole_minutes(current - late_boundary)
        return PickupConfirmation(
            allowed=False,
            reason="TOO_LATE",
            message=(
                f"Pickup confirmation window has expired. The late tolerance window ended at "
                f"{_hhmm(late_boundary)} ({tolerance.late_minutes} minutes after scheduled end time "
                f"of {_hhmm(end_time)}). Window expired {overdue} minutes ago."
            ),
        )

    if current < scheduled_start:
        early_by = _whole_minutes(scheduled_start - current)
        return PickupConfirmation(
            allowed=True,
            reason="EARLY_TOLERANCE",
            message=(
                f"Pickup confirmed within early tolerance window ({early_by} minutes before "
                f"scheduled start time of {_hhmm(start_time)})."
            ),
        )

    if current > scheduled_end:
        late_by = _whole_minutes(current - scheduled_end)
        return PickupConfirmation(
            allowed=True,
            reason="LATE_TOLERANCE",
            message=(
                f"Pickup confirmed within late tolerance window ({late_by} minutes after "
                f"scheduled end time of {_hhmm(end_time)})."
            ),
        )

    return PickupConfirmation(
        allowed=True,
        reason="WITHIN_WINDOW",
        message="Pickup confirmed within scheduled pickup window.",
    )
