"""Tire Savings Calculator — Streamlit preview.

Layout: sidebar form → main area with two tabs (Savings | Sensitivity).
Uses the same ``compute_savings`` as the API, so the preview and the
authoritative result can never drift apart.

Run with:
    streamlit run src/tire_savings/dashboard/app.py
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from pydantic import ValidationError

from tire_savings.api.narrative import generate_narrative
from tire_savings.config import AdditionalGain, CalculationInput, Submission
from tire_savings.finance.sensitivity import DEFAULT_SWEEPS, run_sensitivity, sweep_curve
from tire_savings.finance.summary import build_report
from tire_savings.reports.export import export_csv
from tire_savings.settings import get_settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults: sidebar values come from settings
# ---------------------------------------------------------------------------
_SETTINGS = get_settings()
_PCT = _SETTINGS.percentages()
_CURRENCY = "R$"

st.set_page_config(page_title="Tire Savings Calculator", page_icon="🛞", layout="wide")

_CHART_LAYOUT = dict(
    height=320,
    margin=dict(l=20, r=20, t=30, b=20),
    showlegend=False,
    plot_bgcolor="rgba(0,0,0,0)",
    paper_bgcolor="rgba(0,0,0,0)",
    font=dict(size=11),
)


def _money(value: float) -> str:
    return f"{_CURRENCY} {value:,.2f}"


# ---------------------------------------------------------------------------
# SIDEBAR: inputs
# ---------------------------------------------------------------------------
st.sidebar.header("Calculation Inputs")

with st.sidebar.expander("Company", expanded=True):
    company_name = st.text_input("Company name", "Demo Transportes")
    c1, c2 = st.columns(2)
    fleet_size = c1.number_input("Fleet size", 1, 100_000, 50)
    total_tires = c2.number_input("Total tires", 1, 1_000_000, 300)

with st.sidebar.expander("Fuel", expanded=True):
    c1, c2 = st.columns(2)
    fuel_consumption = c1.number_input("Km per litre", 0.1, 50.0, 2.5, 0.1, format="%.2f")
    fuel_price = c2.number_input(f"Fuel price {_CURRENCY}", 0.1, 100.0, 5.79, 0.01, format="%.2f")

with st.sidebar.expander("Operation & tires", expanded=True):
    c1, c2 = st.columns(2)
    monthly_mileage = c1.number_input("Km per month", 1, 100_000, 10_000, 500)
    tire_lifespan = c2.number_input("New tire km", 1, 1_000_000, 80_000, 5_000)
    c1, c2 = st.columns(2)
    tire_price = c1.number_input(f"Tire price {_CURRENCY}", 1.0, 100_000.0, 2_800.0, 50.0)
    retread_price = c2.number_input(f"Retread price {_CURRENCY}", 1.0, 100_000.0, 600.0, 50.0)
    tire_pressure_check = st.text_input("Pressure check frequency", "Weekly")

with st.sidebar.expander("Retreading", expanded=True):
    retreading_cycles = st.selectbox("Retreads per carcass", ["0", "1", "2"], index=0)
    r1_tire_lifespan = None
    r2_tire_lifespan = None
    if retreading_cycles in ("1", "2"):
        r1_tire_lifespan = st.number_input("R1 km", 1, 1_000_000, 60_000, 5_000)
    if retreading_cycles == "2":
        r2_tire_lifespan = st.number_input("R2 km", 1, 1_000_000, 55_000, 5_000)

with st.sidebar.expander("Tracking"):
    c1, c2 = st.columns(2)
    vehicles_with_tracking = c1.number_input("Tracked vehicles", 0, 100_000, 0)
    tracking_cost = c2.number_input(f"{_CURRENCY}/vehicle/month", 0.0, 10_000.0, 0.0, 10.0)

with st.sidebar.expander("Percentages"):
    fuel_pct = st.number_input("Fuel savings %", 0.0, 100.0, _PCT.fuel_savings_pct, 0.5)
    cpk_pct = st.number_input("CPK improvement %", 0.0, 100.0, _PCT.cpk_improvement_pct, 0.5)
    carcass_pct = st.number_input("Carcass savings %", 0.0, 100.0, _PCT.carcass_savings_pct, 0.5)

with st.sidebar.expander("Additional gains"):
    gains_df = st.data_editor(
        pd.DataFrame({"name": [""], "value": [0.0]}),
        num_rows="dynamic",
        key="additional_gains",
    )

# ---------------------------------------------------------------------------
# Build + validate input
# ---------------------------------------------------------------------------
try:
    calc = CalculationInput(
        fleet_size=fleet_size,
        total_tires=total_tires,
        fuel_consumption=fuel_consumption,
        fuel_price=fuel_price,
        monthly_mileage=monthly_mileage,
        tire_lifespan=tire_lifespan,
        tire_price=tire_price,
        retread_price=retread_price,
        retreading_cycles=retreading_cycles,
        r1_tire_lifespan=r1_tire_lifespan,
        r2_tire_lifespan=r2_tire_lifespan,
        vehicles_with_tracking=vehicles_with_tracking,
        tracking_cost_per_vehicle=tracking_cost,
        fuel_savings_percentage=fuel_pct,
        cpk_improvement_percentage=cpk_pct,
        carcass_savings_percentage=carcass_pct,
    )
    gains = [
        AdditionalGain(name=str(row["name"] or ""), value=float(row["value"] or 0.0))
        for _, row in gains_df.iterrows()
    ]
    submission = Submission(
        company_name=company_name,
        tire_pressure_check=tire_pressure_check or None,
        additional_gains=gains,
        calculation=calc,
    )
except ValidationError as exc:
    logger.warning("Dashboard input rejected: %d error(s)", exc.error_count())
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"])
        st.error(f"**{field}**: {err['msg']}")
    st.stop()

report = build_report(submission, _PCT)
result = report.result
savings = result.itemized_savings

# ---------------------------------------------------------------------------
# Header metrics
# ---------------------------------------------------------------------------
st.title("Tire Savings Calculator")
st.caption(f"{report.company_name} · {calc.fleet_size} vehicles · {calc.total_tires} tires")

c1, c2, c3, c4 = st.columns(4)
c1.metric("Monthly savings", _money(savings.total))
c2.metric("Annual savings", _money(report.annual_savings))
c3.metric("Per tire per month", _money(result.savings_per_tire_per_month))
c4.metric("Tire cycle", f"{result.tire_cycle.total:.1f} months")

tab_savings, tab_sensitivity = st.tabs(["Savings", "Sensitivity"])

# ---------------------------------------------------------------------------
# Savings tab
# ---------------------------------------------------------------------------
with tab_savings:
    col_left, col_right = st.columns(2)

    with col_left:
        st.subheader("Monthly savings by term")
        terms = ["Fuel", "CPK", "Carcass", "Tracking"]
        values = [
            savings.fuel_savings,
            savings.cpk_improvement,
            savings.carcass_savings,
            result.tracking.tracking_total_cost,
        ]
        fig_terms = go.Figure(go.Bar(
            x=terms,
            y=values,
            text=[_money(v) for v in values],
            textposition="outside",
            marker_color=["#f59e0b", "#0984e3", "#00b894", "#6c5ce7"],
        ))
        fig_terms.update_layout(yaxis_title=f"{_CURRENCY}/month", **_CHART_LAYOUT)
        st.plotly_chart(fig_terms, use_container_width=True)

    with col_right:
        st.subheader("Tire lifecycle (months)")
        cycle = result.tire_cycle
        fig_cycle = go.Figure(go.Bar(
            x=["New", "R1", "R2"],
            y=[cycle.new, cycle.r1, cycle.r2],
            text=[f"{m:.1f}" for m in (cycle.new, cycle.r1, cycle.r2)],
            textposition="outside",
            marker_color="#f59e0b",
        ))
        fig_cycle.update_layout(yaxis_title="Months", **_CHART_LAYOUT)
        st.plotly_chart(fig_cycle, use_container_width=True)

    with st.expander("Summary text"):
        st.text(generate_narrative(report, _CURRENCY))

    st.download_button(
        "Download CSV",
        data=export_csv([submission], [report]),
        file_name="calculation.csv",
        mime="text/csv",
    )

# ---------------------------------------------------------------------------
# Sensitivity tab
# ---------------------------------------------------------------------------
with tab_sensitivity:
    sensitivity = run_sensitivity(calc, _PCT)
    bars = list(reversed(sensitivity.bars))

    st.subheader("Which assumption moves the total most")
    fig_tornado = go.Figure()
    fig_tornado.add_trace(go.Bar(
        y=[b.param_name for b in bars],
        x=[b.total_at_low - sensitivity.base_total for b in bars],
        orientation="h",
        name="Low",
        marker_color="#d63031",
    ))
    fig_tornado.add_trace(go.Bar(
        y=[b.param_name for b in bars],
        x=[b.total_at_high - sensitivity.base_total for b in bars],
        orientation="h",
        name="High",
        marker_color="#00b894",
    ))
    fig_tornado.update_layout(barmode="overlay", xaxis_title=f"Δ total {_CURRENCY}/month", **_CHART_LAYOUT)
    st.plotly_chart(fig_tornado, use_container_width=True)

    sweep_names = {name: (field, low, high) for name, field, low, high in DEFAULT_SWEEPS}
    chosen = st.selectbox("Sweep one input", list(sweep_names))
    field_name, low_pct, high_pct = sweep_names[chosen]
    xs, totals = sweep_curve(calc, field_name, low_pct, high_pct, points=21, percentages=_PCT)

    fig_sweep = go.Figure(go.Scatter(x=xs, y=totals, mode="lines+markers", line=dict(color="#0984e3", width=2)))
    fig_sweep.update_layout(xaxis_title=chosen, yaxis_title=f"Total {_CURRENCY}/month", **_CHART_LAYOUT)
    st.plotly_chart(fig_sweep, use_container_width=True)
    st.caption(
        f"Range {_money(float(np.min(totals)))} – {_money(float(np.max(totals)))} per month "
        f"across the sweep."
    )
