"""Donation Status Classification - Collapse raw lifecycle statuses into display phases.

This is the single place that decides which phase a donation is in; views
branch on the returned DisplayPhase only.
"""

from typing import Optional

from .models import DisplayPhase


PHASE_LABELS: dict[DisplayPhase, str] = {
    DisplayPhase.CLAIMED: "Claimed",
    DisplayPhase.READY_FOR_PICKUP: "Ready for Pickup",
    DisplayPhase.COMPLETED: "Completed",
    DisplayPhase.NOT_COMPLETED: "Not Completed",
    DisplayPhase.EXPIRED: "Expired",
}

_PHASES_BY_STATUS: dict[str, DisplayPhase] = {
    "READY_FOR_PICKUP": DisplayPhase.READY_FOR_PICKUP,
    "COMPLETED": DisplayPhase.COMPLETED,
    "NOT_COMPLETED": DisplayPhase.NOT_COMPLETED,
    "EXPIRED": DisplayPhase.EXPIRED,
}


def classify_donation_status(raw_status: Optional[str]) -> DisplayPhase:
    """Map a raw persisted status to its display phase.

    Total function: AVAILABLE, CLAIMED, blank, None and unknown statuses all
    display as CLAIMED. Matching is exact.

    Args:
        raw_status: Status string from the system of record

    Returns:
        The DisplayPhase to render
    """
    if not isinstance(raw_status, str):
        return DisplayPhase.CLAIMED
    return _PHASES_BY_STATUS.get(raw_status, DisplayPhase.CLAIMED)


def display_status_label(raw_status: Optional[str]) -> str:
    """Human-readable label for a raw status, e.g. "Ready for Pickup"."""
    return PHASE_LABELS[classify_donation_status(raw_status)]
