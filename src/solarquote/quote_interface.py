import attrs
from typing import Optional, Union

from .load_aggregator import LoadSummary

Number = Union[int, float, str]


@attrs.define(frozen=True)
class QuoteAssumptions:
    """
    Business constants behind a quote. Compose variants with attrs.evolve(BASE_QUOTE_ASSUMPTIONS, ...).

    Pricing and savings:
    - installation_rate: installation surcharge as a portion of system cost
    - monthly_savings_rate: estimated monthly bill savings as a portion of system cost
    - savings_25_years_multiple: 25-year savings as a multiple of system cost, when not supplied

    Environmental:
    - co2_tons_per_kw_year: annual CO2 reduction per kW installed
    - trees_per_kw: equivalent trees planted per kW installed
    - co2_tons_per_kw_25_years: CO2 reduction over 25 years per kW installed

    Placeholders used when the caller has no figure of its own. These are marketing
    figures rather than results of a tariff/generation model:
    - fallback_payback_period: display label for the payback period, in years
    - fallback_roi_percentage
    """
    sun_hours: float = 5.0  # full-load-equivalent hours per day
    panel_watts: int = 550

    installation_rate: float = 0.15
    monthly_savings_rate: float = 0.02
    savings_25_years_multiple: float = 6.0

    co2_tons_per_kw_year: float = 1.2
    trees_per_kw: float = 30.0
    co2_tons_per_kw_25_years: float = 30.0

    fallback_payback_period: str = '~4-5'
    fallback_roi_percentage: float = 520.0


BASE_QUOTE_ASSUMPTIONS = QuoteAssumptions()


@attrs.define(frozen=True)
class QuoteInput:
    """
    Everything a quote is built from. Either `load_summary` or `system_size_kw` describes the
    site; the remaining optional fields, when supplied, take precedence over what the estimator
    would otherwise compute or default to.
    """
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    city: Optional[str] = None

    load_summary: Optional[LoadSummary] = None
    system_size_kw: Optional[Number] = None

    # Overrides
    daily_energy_kwh: Optional[Number] = None
    recommended_capacity_kw: Optional[Number] = None
    panel_quantity: Optional[Number] = None
    panels_required: Optional[Number] = None
    inverter_size_kw: Optional[Number] = None
    battery_capacity_kwh: Optional[Number] = None
    total_cost: Optional[Number] = None
    estimated_cost: Optional[Number] = None
    payback_period: Optional[Union[str, int, float]] = None
    savings_25_years: Optional[Number] = None
    roi_percentage: Optional[Number] = None


@attrs.define(frozen=True)
class QuoteResult:
    """A fully populated quote; no field is ever None."""
    # Load
    total_load_watts: int
    total_load_kw: float
    daily_energy_kwh: float

    # System
    system_size_kw: float
    panel_quantity: int
    panel_watts: int
    total_panel_capacity_kw: float
    inverter_size_kw: float
    battery_capacity_kwh: float

    # Cost
    system_cost: float
    installation_charge: int
    total_investment: int

    # Environmental
    annual_co2_reduction_tons: float
    trees_equivalent: int
    co2_reduction_25_years: float

    # ROI
    monthly_savings: int
    annual_savings: int
    payback_period_years: str
    total_savings_25_years: float
    roi_percentage: float

    def to_dict(self) -> dict:
        return attrs.asdict(self)
