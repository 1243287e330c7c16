"""
TARIFF RAIL - Production FastAPI Server

Bill estimation API for the published electricity tariffs.

Endpoints:
- POST /calculate-bill - Compute an itemized invoice for a consumption payload
- OPTIONS /calculate-bill - CORS preflight (204)
- GET /tariffs - The loaded tariff schedule and group catalogue
- GET /health - Service health

The calculation route is also mounted at /.netlify/functions/calculate-bill,
the path existing form clients post to.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import json
import os
import structlog

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.dispatcher import calculate
from core.errors import PayloadError
from core.tariff import TariffGroup, TariffSchedule
from tariffs.loader import get_tariff_schedule
from transport.normalize import normalize_payload

logger = structlog.get_logger()

VERSION = "1.0.0"

CALCULATE_PATHS = ("/calculate-bill", "/.netlify/functions/calculate-bill")


# ============================================================================
# Pydantic Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    tariff_schedule: str
    uptime_seconds: float


class GroupInfo(BaseModel):
    group: str
    label: str
    tariff_key: str


class TariffsResponse(BaseModel):
    """Loaded tariff schedule, for rendering rate tables."""
    schedule: str
    groups: List[GroupInfo]
    tariffs: Dict[str, Any]


# ============================================================================
# Application State
# ============================================================================

def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class AppState:
    """Application state container."""

    def __init__(self, schedule: Optional[TariffSchedule] = None):
        self.schedule = schedule or get_tariff_schedule()
        self.strict_groups = _env_flag("STRICT_GROUP_VALIDATION")
        self.start_time = datetime.now(timezone.utc)


app_state: Optional[AppState] = None


# ============================================================================
# Application Factory
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global app_state
    app_state = AppState()
    logger.info(
        "tariff_service_starting",
        version=VERSION,
        schedule=app_state.schedule.name,
        strict_groups=app_state.strict_groups,
    )
    yield
    logger.info("tariff_service_stopping")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="Tariff Rail",
        description="""
# Electricity Bill Estimator

Computes an itemized bill for every published tariff group:

- **Households**: two-rate (A1/A2) and one-rate meters with 800 kWh blocks
- **Business**: 35 kV, 10 kV and 0.4 kV categories, incl. demand and reactive energy
- **Public lighting** and per-meter household tariffs

All amounts include 8% tax.
        """,
        version=VERSION,
        lifespan=lifespan,
    )

    # CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=os.environ.get("CORS_ORIGINS", "*").split(","),
        allow_credentials=True,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )

    return application


app = create_app()


# ============================================================================
# Dependencies
# ============================================================================

def get_state() -> AppState:
    """Get application state."""
    if app_state is None:
        raise HTTPException(status_code=503, detail="Application not initialized")
    return app_state


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(state: AppState = Depends(get_state)):
    """Health check endpoint."""
    uptime = (datetime.now(timezone.utc) - state.start_time).total_seconds()
    return HealthResponse(
        status="healthy",
        version=VERSION,
        tariff_schedule=state.schedule.name,
        uptime_seconds=uptime,
    )


@app.get("/tariffs", response_model=TariffsResponse, tags=["Tariffs"])
async def get_tariffs(state: AppState = Depends(get_state)):
    """Return the tariff schedule used for calculations."""
    return TariffsResponse(
        schedule=state.schedule.name,
        groups=[
            GroupInfo(group=g.value, label=g.label, tariff_key=g.schedule_key)
            for g in TariffGroup
        ],
        tariffs=state.schedule.to_dict(),
    )


async def calculate_bill(request: Request, state: AppState = Depends(get_state)):
    """
    Calculate an electricity bill.

    Accepts any payload shape the form sends, plus the legacy
    consumption_high_rate / consumption_low_rate body.
    """
    raw = await request.body()
    try:
        body = json.loads(raw or b"{}")
    except ValueError as e:
        logger.warning("bill_request_rejected", reason="invalid_json", error=str(e))
        return _error(400, f"Invalid JSON body: {e}")

    try:
        payload = normalize_payload(body, strict=state.strict_groups)
    except PayloadError as e:
        logger.warning("bill_request_rejected", reason="invalid_payload", error=str(e))
        return _error(400, str(e))

    invoice = calculate(state.schedule, payload)

    logger.info(
        "bill_calculated",
        group=invoice.group.value,
        net_amount=invoice.totals.net_amount,
        final_bill=invoice.totals.final_bill,
    )

    return JSONResponse(content=invoice.to_dict())


async def calculate_bill_preflight():
    """CORS preflight for cross-origin form posts."""
    return Response(
        status_code=204,
        headers={
            "Access-Control-Allow-Origin": os.environ.get("CORS_ORIGINS", "*").split(",")[0],
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )


async def method_not_allowed():
    return _error(405, "Method Not Allowed")


for _path in CALCULATE_PATHS:
    app.add_api_route(_path, calculate_bill, methods=["POST"], tags=["Billing"])
    app.add_api_route(_path, calculate_bill_preflight, methods=["OPTIONS"], include_in_schema=False)
    app.add_api_route(
        _path,
        method_not_allowed,
        methods=["GET", "PUT", "PATCH", "DELETE"],
        include_in_schema=False,
    )


# ============================================================================
# Run
# ============================================================================

def run():
    """Run the server."""
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(
        "api.server:app",
        host="0.0.0.0",
        port=port,
        reload=os.environ.get("DEBUG", "false").lower() == "true",
    )


if __name__ == "__main__":
    run()
