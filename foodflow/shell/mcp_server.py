"""MCP Server - Tool definitions exposing the donation rules to assistants.

Each tool reads the clock and default zone here, calls the pure core, and
renders a short human-readable answer.
"""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from ..core.clock import format_date
from ..core.expiry import parse_calendar_date, suggest_expiry
from ..core.pickup import validate_pickup_slots
from ..core.status import PHASE_LABELS, classify_donation_status
from ..core.timezones import resolve_timezone
from .settings import get_settings, utc_now


logger = logging.getLogger(__name__)

transport_security = TransportSecuritySettings(
    enable_dns_rebinding_protection=True,
    allowed_hosts=[
        "localhost:*",
        "127.0.0.1:*",
    ],
)

mcp = FastMCP(
    "foodflow-rules",
    instructions="""FoodFlow Rules - Food donation safety and scheduling checks.

Use these tools when helping donors post surplus food or reschedule pickups.

Call suggest_expiry_date before a donor picks an expiry date, and always
mention any warnings it returns. Call check_pickup_slots before submitting
pickup windows. Use classify_status to explain where a donation stands.""",
    stateless_http=True,
    transport_security=transport_security,
)


@mcp.tool()
def suggest_expiry_date(
    food_type: str,
    temperature_category: str,
    fabrication_date: str,
    packaging_type: str | None = None,
) -> str:
    """Suggest a safe expiry date for a donation.

    Args:
        food_type: PREPARED, PRODUCE, BAKERY, DAIRY_EGGS, MEAT_POULTRY, SEAFOOD, PANTRY or BEVERAGES
        temperature_category: FROZEN, REFRIGERATED, ROOM_TEMPERATURE or HOT_COOKED
        fabrication_date: Date the food was made (YYYY-MM-DD)
        packaging_type: Optional packaging, e.g. SEALED or REFRIGERATED_CONTAINER

    Returns:
        Suggested expiry, eligibility and warnings
    """
    try:
        suggestion = suggest_expiry(food_type, temperature_category, packaging_type, fabrication_date)
    except ValueError as e:
        return f"Cannot suggest an expiry: {e}"

    lines = []
    if not suggestion.eligible:
        lines.append("This food cannot be donated at this storage temperature.")
    if suggestion.explanation:
        lines.append(suggestion.explanation)
    else:
        lines.append("Not enough information to suggest an expiry date.")
    for warning in suggestion.warnings:
        lines.append(f"Warning: {warning}")

    return "\n".join(lines)


@mcp.tool()
def check_pickup_slots(
    slots: list[dict[str, Any]],
    expiry_date: str,
    timezone: str | None = None,
) -> str:
    """Check proposed pickup windows against today and the expiry date.

    Args:
        slots: Windows as {"pickup_date": "YYYY-MM-DD", "start_time": "HH:MM", "end_time": "HH:MM"}
        expiry_date: The donation's expiry date (YYYY-MM-DD)
        timezone: IANA zone the windows are expressed in (defaults to service zone)

    Returns:
        Confirmation, or which slot is invalid and why
    """
    zone = timezone or get_settings().default_timezone
    result = validate_pickup_slots(slots, expiry_date, utc_now(), zone)

    if result.ok:
        expires_on = parse_calendar_date(expiry_date)
        return f"All {len(slots)} pickup slot(s) are valid (expiry {format_date(expires_on, 'UTC')})."

    logger.info("Pickup slots rejected: %s (slot %s)", result.error.value, result.slot_index)
    if result.slot_index is None:
        return result.message
    return f"Slot {result.slot_index + 1}: {result.message}"


@mcp.tool()
def classify_status(status: str | None = None) -> str:
    """Explain which display phase a raw donation status belongs to.

    Args:
        status: Raw status such as AVAILABLE, CLAIMED, READY_FOR_PICKUP or COMPLETED

    Returns:
        The display phase label
    """
    phase = classify_donation_status(status)
    return f"{status or 'No status'} is shown as: {PHASE_LABELS[phase]}"


@mcp.tool()
def resolve_user_timezone(city: str, country: str) -> str:
    """Find the IANA time zone for a city and country."""
    return resolve_timezone(city, country)
