"""FastAPI server for the tire savings calculator.

Run with:
    uvicorn tire_savings.api.server:app --reload --port 8000

Or:
    tire-savings-api

Endpoints:
    GET  /context               — self-describing manifest (formulas + schemas)
    GET  /schema                — JSON Schema for the calculation input
    GET  /defaults              — default percentages in effect
    GET  /formulas              — formula list
    POST /calculate             — run one calculation
    POST /calculate/report      — calculation + annual figure + narrative
    POST /calculate/compare     — compare several submissions
    POST /calculate/sensitivity — one-at-a-time sweep → tornado data
    POST /calculate/export      — CSV export of several submissions
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from tire_savings.api.context import KEY_FORMULAS, FormulaInfo, build_context, get_input_schema
from tire_savings.api.narrative import generate_comparison_narrative, generate_narrative
from tire_savings.config import CalculationInput, SavingsPercentages, Submission
from tire_savings.engine.savings import compute_savings
from tire_savings.finance.comparison import compare_submissions
from tire_savings.finance.sensitivity import run_sensitivity
from tire_savings.finance.summary import build_report
from tire_savings.models.results import CalculationReport, SavingsResult
from tire_savings.reports.export import export_csv
from tire_savings.settings import configure_logging, get_settings

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Tire Savings Calculator API",
    version="1.0",
    description=(
        "Monthly savings estimate for fleet tire management: fuel, cost per "
        "kilometre, carcass retreading and tracking. Start with GET /context."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class SubmissionsRequest(BaseModel):
    """Request body for /calculate/compare and /calculate/export."""
    submissions: list[Submission] = Field(default_factory=list)


class SweepSpec(BaseModel):
    """One parameter sweep for /calculate/sensitivity."""
    name: str | None = Field(default=None, description="Label for the bar; defaults to the field name")
    field: str = Field(description="CalculationInput field to sweep, e.g. 'fuel_price'")
    low_pct: float = Field(default=-0.10, description="Low end as a fraction of the base value")
    high_pct: float = Field(default=0.10, description="High end as a fraction of the base value")


class SensitivityRequest(BaseModel):
    """Request body for /calculate/sensitivity."""
    calculation: CalculationInput
    sweeps: list[SweepSpec] | None = Field(
        default=None,
        description="Optional override of the default sweeps.",
    )


class ReportResponse(BaseModel):
    """Response from /calculate/report."""
    report: CalculationReport
    narrative: str


class CompareResponse(BaseModel):
    """Response from /calculate/compare."""
    rows: list[dict[str, Any]]
    differing_fields: list[str]
    ranking: list[dict[str, Any]]
    comparison_narrative: str


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def get_percentages() -> SavingsPercentages:
    """Default percentages from settings, handed explicitly to the engine."""
    return get_settings().percentages()


def _error_field(loc: tuple[Any, ...]) -> str:
    parts = [str(p) for p in loc if p != "body"]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject invalid input with HTTP 400 and one message per field."""
    errors = [
        {"field": _error_field(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning("Rejected %s %s: %d invalid field(s)", request.method, request.url.path, len(errors))
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid calculation input", "errors": errors},
    )


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointer to /context."""
    return {
        "name": "Tire Savings Calculator API",
        "version": "1.0",
        "start_here": "GET /context?detail_level=full",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/context")
def get_context(
    detail_level: Literal["compact", "full"] = Query(
        default="full",
        description="'compact' for schemas only, 'full' for business model + formulas + guide",
    ),
    percentages: SavingsPercentages = Depends(get_percentages),
):
    """Self-describing context manifest."""
    return build_context(detail_level, percentages)


@app.get("/schema")
def get_schema():
    """JSON Schema for the calculation input — types, defaults, constraints."""
    return get_input_schema()


@app.get("/defaults", response_model=SavingsPercentages)
def get_defaults(percentages: SavingsPercentages = Depends(get_percentages)):
    """Percentages applied when a calculation leaves them unset."""
    return percentages


@app.get("/formulas", response_model=list[FormulaInfo])
def get_formulas():
    """Formulas behind every term of the result."""
    return KEY_FORMULAS


@app.post("/calculate", response_model=SavingsResult)
def calculate(
    calc: CalculationInput,
    percentages: SavingsPercentages = Depends(get_percentages),
):
    """Run one savings calculation.

    Example minimal request:
    ```json
    {"fleetSize": 50, "totalTires": 300, "fuelConsumption": 2.5, "fuelPrice": 5.79,
     "monthlyMileage": 10000, "tireLifespan": 80000, "tirePrice": 2800,
     "retreadPrice": 600, "retreadingCycles": "0"}
    ```
    """
    result = compute_savings(calc, percentages)
    logger.info(
        "Calculated savings: fleet=%d tires=%d retreads=%s total=%.2f per_tire=%.2f",
        calc.fleet_size, calc.total_tires, calc.retreading_cycles,
        result.itemized_savings.total, result.savings_per_tire_per_month,
    )
    return result


@app.post("/calculate/report", response_model=ReportResponse)
def calculate_report(
    submission: Submission,
    percentages: SavingsPercentages = Depends(get_percentages),
):
    """Run a calculation for a lead and return the report with its narrative."""
    report = build_report(submission, percentages)
    logger.info(
        "Report for %r: monthly=%.2f annual=%.2f",
        report.company_name, report.result.itemized_savings.total, report.annual_savings,
    )
    return ReportResponse(report=report, narrative=generate_narrative(report))


@app.post("/calculate/compare", response_model=CompareResponse)
def calculate_compare(
    req: SubmissionsRequest,
    percentages: SavingsPercentages = Depends(get_percentages),
):
    """Compare submissions side by side and rank them by total monthly savings."""
    try:
        comparison = compare_submissions(req.submissions, percentages)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info(
        "Compared %d submissions; %d field(s) differ",
        len(comparison.rows), len(comparison.differing_fields),
    )
    return CompareResponse(
        rows=comparison.rows,
        differing_fields=comparison.differing_fields,
        ranking=[
            {
                "position": entry.position,
                "index": entry.index,
                "company_name": entry.company_name,
                "total_savings": round(entry.total_savings, 2),
                "savings_per_tire_per_month": round(entry.savings_per_tire_per_month, 2),
            }
            for entry in comparison.ranking
        ],
        comparison_narrative=generate_comparison_narrative(comparison.reports),
    )


@app.post("/calculate/sensitivity")
def calculate_sensitivity(
    req: SensitivityRequest,
    percentages: SavingsPercentages = Depends(get_percentages),
):
    """Sweep inputs one at a time and rank them by impact on total monthly savings."""
    sweeps = None
    if req.sweeps:
        sweeps = [(sp.name or sp.field, sp.field, sp.low_pct, sp.high_pct) for sp in req.sweeps]

    try:
        sensitivity = run_sensitivity(req.calculation, percentages, sweeps)
    except ValueError as exc:
        logger.warning("Rejected sensitivity sweep: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return {
        "base_total": sensitivity.base_total,
        "tornado_bars": [
            {
                "param_name": bar.param_name,
                "param_field": bar.param_field,
                "base_value": bar.base_value,
                "low_value": bar.low_value,
                "high_value": bar.high_value,
                "total_at_low": bar.total_at_low,
                "total_at_high": bar.total_at_high,
                "delta_total": bar.delta_total,
            }
            for bar in sensitivity.bars
        ],
        "interpretation": (
            "Sorted by swing in total monthly savings (largest first). "
            "The assumptions at the top are the ones worth confirming with the customer."
        ),
    }


@app.post("/calculate/export")
def calculate_export(
    req: SubmissionsRequest,
    percentages: SavingsPercentages = Depends(get_percentages),
):
    """CSV with one row per submission, columns named like the stored record."""
    if not req.submissions:
        raise HTTPException(status_code=400, detail="at least one submission is required for an export")

    reports = [build_report(s, percentages) for s in req.submissions]
    logger.info("Exporting %d calculation(s) as CSV", len(reports))
    return Response(
        content=export_csv(req.submissions, reports),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=calculations.csv"},
    )


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "tire_savings.api.server:app",
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    main()
