"""Context manifest — makes the calculator self-describing.

Produces structured context at two detail levels:
  - ``compact``: parameter schemas + outputs + endpoints
  - ``full``:    adds the business model, formulas and an interpretation guide

The formula list is the same one the back-office formulas page shows.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from tire_savings.config import CalculationInput, SavingsPercentages, Submission


# ═══════════════════════════════════════════════════════════════════════════
# Public response models
# ═══════════════════════════════════════════════════════════════════════════

class ParameterInfo(BaseModel):
    """One input parameter, machine-readable."""
    name: str
    alias: str
    type: str
    default: Any
    required: bool
    description: str
    constraints: dict[str, Any] = Field(default_factory=dict)


class SectionSchema(BaseModel):
    """Schema for one input section."""
    section: str
    description: str
    parameters: list[ParameterInfo]


class OutputFieldInfo(BaseModel):
    """One output field, machine-readable."""
    name: str
    type: str
    description: str
    unit: str = ""


class EndpointInfo(BaseModel):
    """Description of one API endpoint."""
    method: str
    path: str
    description: str
    request_body: str = ""
    response: str = ""


class FormulaInfo(BaseModel):
    name: str
    formula: str
    meaning: str


class CalculatorContext(BaseModel):
    """Full self-describing context."""
    name: str
    version: str
    description: str
    business_model: str
    default_percentages: dict[str, float]
    key_formulas: list[FormulaInfo]
    input_sections: list[SectionSchema]
    key_outputs: list[OutputFieldInfo]
    endpoints: list[EndpointInfo]
    interpretation_guide: str


# ═══════════════════════════════════════════════════════════════════════════
# Schema extraction from Pydantic models
# ═══════════════════════════════════════════════════════════════════════════

def _extract_params(model_cls: type[BaseModel], skip: tuple[str, ...] = ()) -> list[ParameterInfo]:
    """Extract parameter info from a Pydantic model class."""
    params: list[ParameterInfo] = []
    for name, field_info in model_cls.model_fields.items():
        if name in skip:
            continue
        constraints: dict[str, Any] = {}
        for attr in ("ge", "gt", "le", "lt", "min_length"):
            meta_val = _get_field_metadata(field_info, attr)
            if meta_val is not None:
                constraints[attr] = meta_val

        required = field_info.is_required()
        default = None if required else field_info.get_default(call_default_factory=True)

        type_str = str(field_info.annotation) if field_info.annotation else "Any"
        type_str = type_str.replace("typing.", "").replace("<class '", "").replace("'>", "")

        params.append(ParameterInfo(
            name=name,
            alias=field_info.alias or name,
            type=type_str,
            default=default,
            required=required,
            description=field_info.description or "",
            constraints=constraints,
        ))
    return params


def _get_field_metadata(field_info: Any, attr: str) -> Any:
    """Extract constraint metadata from Pydantic field info."""
    for m in field_info.metadata:
        if hasattr(m, attr):
            return getattr(m, attr)
    return None


# ═══════════════════════════════════════════════════════════════════════════
# Static content
# ═══════════════════════════════════════════════════════════════════════════

_BUSINESS_MODEL = """
Tire Savings Calculator — fleet tire-management savings estimate

WHAT IT DOES:
Estimates the monthly savings a truck or bus fleet gets from a tire-management
service, from a handful of fleet, fuel and tire figures:
  - Fuel: better-maintained tires burn less fuel (a percentage of fuel spend)
  - CPK: tires last longer, so the cost per kilometre drops
  - Carcass: well-kept carcasses can be retreaded, extending their life
  - Tracking: the tracking subscription cost is added to the total

THE CYCLE:
  A carcass runs new, then optionally after one (R1) and two (R2) retreads.
  The cycle length in months is the carcass kilometres over monthly mileage.
"""

_INTERPRETATION_GUIDE = """
HOW TO INTERPRET RESULTS:

1. itemizedSavings.total is monthly. Multiply by 12 for the annual figure.
2. savingsPerTirePerMonth = total / totalTires — the per-tire price anchor.
3. carcassSavings is 0 whenever retreadingCycles is '0'.
4. tireCycle values are months; tireCycle.total is the full carcass life.
5. Values are unrounded. Round only for display.
"""

KEY_FORMULAS: list[FormulaInfo] = [
    FormulaInfo(
        name="Fuel savings",
        formula="(monthlyMileage / fuelConsumption) × fuelPrice × fleetSize × (fuelSavingsPercentage / 100)",
        meaning="Monthly fleet fuel spend times the share saved",
    ),
    FormulaInfo(
        name="Tire cycle",
        formula="totalKm = tireLifespan + r1Km + r2Km; totalMonths = totalKm / monthlyMileage",
        meaning="Kilometres and months one carcass lasts, counting only the retreads performed",
    ),
    FormulaInfo(
        name="Cost per km",
        formula="(tirePrice + retreadingCycles × retreadPrice) / totalKm",
        meaning="What one kilometre of tire life costs",
    ),
    FormulaInfo(
        name="CPK improvement",
        formula="(totalKm × cpkImprovementPercentage / 100) / totalMonths × costPerKm × totalTires",
        meaning="Extra kilometres gained per month, valued at the cost per km, for every tire",
    ),
    FormulaInfo(
        name="Carcass savings",
        formula=(
            "(carcass% / 100) × ((12 / (totalMonths / retreadingCycles)) / 12) × totalTires"
            " × (totalCost / totalKm) × (1 − carcass% / 100) × (totalKm − tireLifespan)"
        ),
        meaning="Retreadings per month scaled by the value of the retreaded kilometres; 0 without retreads",
    ),
    FormulaInfo(
        name="Tracking",
        formula="vehiclesWithTracking × trackingCostPerVehicle",
        meaning="Monthly tracking subscription for the tracked vehicles",
    ),
    FormulaInfo(
        name="Total",
        formula="fuelSavings + cpkImprovement + carcassSavings + trackingTotalCost",
        meaning="Monthly total; divided by totalTires it gives savingsPerTirePerMonth",
    ),
]

_KEY_OUTPUTS = [
    OutputFieldInfo(name="itemizedSavings.fuelSavings", type="float", description="Monthly fuel savings", unit="currency/month"),
    OutputFieldInfo(name="itemizedSavings.cpkImprovement", type="float", description="Monthly savings from longer tire life", unit="currency/month"),
    OutputFieldInfo(name="itemizedSavings.carcassSavings", type="float", description="Monthly savings from retreading", unit="currency/month"),
    OutputFieldInfo(name="itemizedSavings.total", type="float", description="All terms plus tracking", unit="currency/month"),
    OutputFieldInfo(name="tracking.trackingTotalCost", type="float", description="vehiclesWithTracking × trackingCostPerVehicle", unit="currency/month"),
    OutputFieldInfo(name="tireCycle.new", type="float", description="Months on the new tire", unit="months"),
    OutputFieldInfo(name="tireCycle.r1", type="float", description="Months after the first retread", unit="months"),
    OutputFieldInfo(name="tireCycle.r2", type="float", description="Months after the second retread", unit="months"),
    OutputFieldInfo(name="tireCycle.total", type="float", description="Full carcass life", unit="months"),
    OutputFieldInfo(name="savingsPerTirePerMonth", type="float", description="Total divided by total tires", unit="currency/tire/month"),
]

_ENDPOINTS = [
    EndpointInfo(method="GET", path="/context", description="This manifest. detail_level='compact' or 'full'.", response="CalculatorContext"),
    EndpointInfo(method="GET", path="/schema", description="JSON schema of the calculation input.", response="JSON Schema object"),
    EndpointInfo(method="GET", path="/defaults", description="Default percentages in effect.", response="SavingsPercentages"),
    EndpointInfo(method="GET", path="/formulas", description="Formula list used by the calculator.", response="list[FormulaInfo]"),
    EndpointInfo(method="POST", path="/calculate", description="Run one calculation.", request_body="CalculationInput", response="SavingsResult"),
    EndpointInfo(method="POST", path="/calculate/report", description="Calculation plus annual figure, additional gains and narrative.", request_body="Submission", response="ReportResponse"),
    EndpointInfo(method="POST", path="/calculate/compare", description="Compare several submissions side by side.", request_body="{submissions: [Submission]}", response="CompareResponse"),
    EndpointInfo(method="POST", path="/calculate/sensitivity", description="Tornado data: which input moves the total most.", request_body="{calculation, sweeps?}", response="tornado bars"),
    EndpointInfo(method="POST", path="/calculate/export", description="CSV export of several submissions.", request_body="{submissions: [Submission]}", response="text/csv"),
]


# ═══════════════════════════════════════════════════════════════════════════
# Context builders
# ═══════════════════════════════════════════════════════════════════════════

def build_input_sections() -> list[SectionSchema]:
    return [
        SectionSchema(
            section="calculation",
            description="Fleet, fuel, tire, retreading and tracking figures. Percentages left unset use the defaults.",
            parameters=_extract_params(CalculationInput),
        ),
        SectionSchema(
            section="submission",
            description="Lead information sent with a calculation for reports, comparisons and exports.",
            parameters=_extract_params(Submission, skip=("calculation",)),
        ),
        SectionSchema(
            section="percentages",
            description="Server-side default percentages applied when a calculation leaves them unset.",
            parameters=_extract_params(SavingsPercentages),
        ),
    ]


def build_context(
    detail_level: Literal["compact", "full"] = "full",
    percentages: SavingsPercentages | None = None,
) -> CalculatorContext:
    """Build the context manifest at the requested detail level."""
    percentages = percentages or SavingsPercentages()
    full = detail_level == "full"
    return CalculatorContext(
        name="Tire Savings Calculator",
        version="1.0",
        description="Monthly savings estimate for fleet tire management: fuel, CPK, carcass and tracking.",
        business_model=_BUSINESS_MODEL.strip() if full else "",
        default_percentages=percentages.model_dump(),
        key_formulas=KEY_FORMULAS if full else [],
        input_sections=build_input_sections(),
        key_outputs=_KEY_OUTPUTS,
        endpoints=_ENDPOINTS,
        interpretation_guide=_INTERPRETATION_GUIDE.strip() if full else "",
    )


def get_input_schema() -> dict[str, Any]:
    """JSON schema of CalculationInput, using the camelCase field names."""
    return CalculationInput.model_json_schema(by_alias=True)
