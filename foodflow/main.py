"""FoodFlow Rules Server - Entry point.

Serves the donation rule engine as JSON routes plus an MCP endpoint.
Uses Starlette with the MCP HTTP app mounted at the root.
"""

import logging
from typing import Any

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from .core.expiry import suggest_expiry
from .core.models import ExpirySuggestion
from .core.pickup import check_pickup_confirmation, parse_pickup_slot, validate_pickup_slots
from .core.status import PHASE_LABELS, classify_donation_status
from .core.timezones import offset_to_timezone, resolve_timezone
from .shell.mcp_server import mcp
from .shell.settings import get_settings, utc_now


logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class BadRequest(ValueError):
    """Request body is missing or not a JSON object."""


async def _json_body(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        raise BadRequest("Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return body


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _slot_fields(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise BadRequest("Each pickup slot must be an object")
    return {
        "pickup_date": payload.get("pickupDate"),
        "start_time": payload.get("startTime"),
        "end_time": payload.get("endTime"),
        "notes": payload.get("notes"),
    }


def _suggestion_to_json(suggestion: ExpirySuggestion) -> dict[str, Any]:
    expiry = suggestion.suggested_expiry_date
    return {
        "suggestedExpiryDate": expiry.isoformat() if expiry else None,
        "shelfLifeDays": suggestion.shelf_life_days,
        "eligible": suggestion.eligible,
        "warnings": suggestion.warnings,
        "explanation": suggestion.explanation,
    }


# ==================== Route Handlers ====================


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "healthy", "service": "foodflow-rules"})


async def expiry_suggestion(request: Request) -> JSONResponse:
    """Suggest an expiry date for a donation draft."""
    try:
        body = await _json_body(request)
        suggestion = suggest_expiry(
            _blank_to_none(body.get("foodType")),
            _blank_to_none(body.get("temperatureCategory")),
            _blank_to_none(body.get("packagingType")),
            body.get("fabricationDate"),
        )
        return JSONResponse(_suggestion_to_json(suggestion))

    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except Exception as e:
        logger.error("Expiry suggestion failed: %s", str(e))
        return JSONResponse({"error": "Expiry suggestion failed."}, status_code=500)


async def pickup_slots(request: Request) -> JSONResponse:
    """Validate proposed pickup slots for a donation."""
    try:
        body = await _json_body(request)
        raw_slots = body.get("slots") or []
        if not isinstance(raw_slots, list):
            raise BadRequest("slots must be a list")

        slots = [_slot_fields(slot) for slot in raw_slots]
        zone = body.get("timezone") or get_settings().default_timezone
        has_target = "donationId" not in body or body["donationId"] not in (None, "")

        result = validate_pickup_slots(
            slots,
            body.get("expiryDate"),
            utc_now(),
            zone,
            has_target=has_target,
        )
        if not result.ok:
            logger.info("Pickup slots rejected: %s (slot %s)", result.error.value, result.slot_index)

        return JSONResponse({
            "valid": result.ok,
            "error": result.error.value if result.error else None,
            "message": result.message,
            "slotIndex": result.slot_index,
        })

    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except Exception as e:
        logger.error("Pickup slot validation failed: %s", str(e))
        return JSONResponse({"error": "Pickup slot validation failed."}, status_code=500)


async def pickup_confirmation(request: Request) -> JSONResponse:
    """Check whether a pickup may be confirmed now."""
    try:
        body = await _json_body(request)
        slot = parse_pickup_slot(_slot_fields(body))
        settings = get_settings()

        decision = check_pickup_confirmation(
            slot.pickup_date,
            slot.start_time,
            slot.end_time,
            utc_now(),
            body.get("timezone") or settings.default_timezone,
            settings.pickup_tolerance,
        )
        logger.info("Pickup confirmation %s: %s", "allowed" if decision.allowed else "denied", decision.reason)

        return JSONResponse(decision.model_dump())

    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except Exception as e:
        logger.error("Pickup confirmation check failed: %s", str(e))
        return JSONResponse({"error": "Pickup confirmation check failed."}, status_code=500)


async def donation_status(request: Request) -> JSONResponse:
    """Classify a raw donation status into its display phase."""
    phase = classify_donation_status(request.query_params.get("status"))
    return JSONResponse({"phase": phase.value, "label": PHASE_LABELS[phase]})


async def timezone_lookup(request: Request) -> JSONResponse:
    """Resolve an IANA zone from a city/country pair or a UTC offset."""
    params = request.query_params
    if "offset" in params:
        return JSONResponse({"timezone": offset_to_timezone(params.get("offset"))})
    return JSONResponse({"timezone": resolve_timezone(params.get("city"), params.get("country"))})


# ==================== Create ASGI App ====================


def create_app() -> Starlette:
    """Build the rules app: JSON rule routes first, then the MCP catch-all mount.

    The rule routes must precede the root mount or it would shadow them.
    The MCP session manager only starts inside its own lifespan, so the
    app adopts it.
    """
    mcp_app = mcp.streamable_http_app()

    routes = [
        Route("/health", health_check, methods=["GET"]),
        Route("/rules/expiry", expiry_suggestion, methods=["POST"]),
        Route("/rules/pickup-slots", pickup_slots, methods=["POST"]),
        Route("/rules/pickup-confirmation", pickup_confirmation, methods=["POST"]),
        Route("/rules/status", donation_status, methods=["GET"]),
        Route("/rules/timezone", timezone_lookup, methods=["GET"]),
        Mount("/", app=mcp_app),
    ]

    app = Starlette(
        routes=routes,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=get_settings().allowed_origins,
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["*"],
            ),
        ],
        lifespan=mcp_app.router.lifespan_context,
    )

    return app


app = create_app()


def main() -> None:
    """Run the server."""
    settings = get_settings()

    logger.info("Starting FoodFlow rules server on %s:%d", settings.host, settings.port)

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
