"""Shared test fixtures — the reference fleets used across the suite."""

from __future__ import annotations

import pytest

from tire_savings.config import AdditionalGain, CalculationInput, Submission


BASE_FLEET = dict(
    fleet_size=50,
    total_tires=300,
    fuel_consumption=2.5,
    fuel_price=5.79,
    monthly_mileage=10_000,
    tire_lifespan=80_000,
    tire_price=2_800,
    retread_price=600,
)


@pytest.fixture
def no_retread() -> CalculationInput:
    """Scenario A — no retreading, default percentages."""
    return CalculationInput(**BASE_FLEET, retreading_cycles="0")


@pytest.fixture
def one_retread() -> CalculationInput:
    """Scenario B — one retread lasting 60,000 km."""
    return CalculationInput(**BASE_FLEET, retreading_cycles="1", r1_tire_lifespan=60_000)


@pytest.fixture
def two_retreads() -> CalculationInput:
    """Scenario C — two retreads, carcass savings at 15%."""
    return CalculationInput(
        **BASE_FLEET,
        retreading_cycles="2",
        r1_tire_lifespan=60_000,
        r2_tire_lifespan=55_000,
        carcass_savings_percentage=15,
    )


@pytest.fixture
def tracked() -> CalculationInput:
    """Scenario A with 20 tracked vehicles at 89.90 per month."""
    return CalculationInput(
        **BASE_FLEET,
        retreading_cycles="0",
        vehicles_with_tracking=20,
        tracking_cost_per_vehicle=89.90,
    )


@pytest.fixture
def submission(one_retread: CalculationInput) -> Submission:
    return Submission(
        company_name="Transportes Alfa",
        tire_pressure_check="Weekly",
        fuel_savings_source="Fleet telemetry 2024",
        additional_gains=[
            AdditionalGain(name="Less downtime", value=1_500),
            AdditionalGain(name="Roadside assistance", value=500),
            AdditionalGain(name="", value=999),
            AdditionalGain(name="Unpriced", value=0),
        ],
        calculation=one_retread,
    )


@pytest.fixture
def base_fleet() -> dict:
    """Keyword arguments shared by every scenario, without retreading fields."""
    return dict(BASE_FLEET)
