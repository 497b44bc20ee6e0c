"""
System sizing from a connected load.

Rules of thumb used by the load calculator page to turn a connected load into a recommended
system, before a technician visits the site:
- Daily consumption: connected load running for `daily_usage_hours`
- Capacity: enough panel kW to produce the daily consumption in `sun_hours`, after system losses
- Panels: capacity divided into `panel_watts` modules
- Batteries: enough `battery_unit_kwh` units to store one day of consumption
- Inverter: connected load plus `inverter_overhead` headroom
- Cost: flat price per kW of capacity
"""
import math

import attrs

from .load_aggregator import LoadSummary
from .quote_interface import QuoteInput
from .quote_utils import round_half_up


@attrs.define(frozen=True)
class SizingAssumptions:
    daily_usage_hours: float = 8.0
    sun_hours: float = 5.0
    system_efficiency: float = 0.85
    panel_watts: int = 550
    battery_unit_kwh: float = 2.4
    inverter_overhead: float = 1.25
    cost_per_kw: float = 100_000.0  # PKR


BASE_SIZING_ASSUMPTIONS = SizingAssumptions()


@attrs.define(frozen=True)
class SystemRecommendation:
    total_load_kw: float
    daily_consumption_kwh: float
    recommended_capacity_kw: int
    panels: int
    batteries: int
    battery_unit_kwh: float
    inverter_size_kw: int
    estimated_cost: float

    @property
    def battery_capacity_kwh(self) -> float:
        return self.batteries * self.battery_unit_kwh

    def to_quote_input(self, load_summary: LoadSummary | None = None, **customer) -> QuoteInput:
        """
        A QuoteInput carrying this recommendation as overrides.
        `customer` takes the QuoteInput customer fields (customer_name, city, ...).
        """
        if load_summary is None:
            load_summary = LoadSummary(total_watts=round_half_up(self.total_load_kw * 1000))
        return QuoteInput(
            load_summary=load_summary,
            system_size_kw=self.recommended_capacity_kw,
            daily_energy_kwh=self.daily_consumption_kwh,
            panel_quantity=self.panels,
            inverter_size_kw=self.inverter_size_kw,
            battery_capacity_kwh=self.battery_capacity_kwh,
            estimated_cost=self.estimated_cost,
            **customer,
        )


def _ceil(value: float) -> int:
    # Guard against float noise such as 2.0000000000000004 rounding up to 3
    return math.ceil(round(value, 9))


def recommend_system(load: LoadSummary,
                     assumptions: SizingAssumptions = BASE_SIZING_ASSUMPTIONS) -> SystemRecommendation:
    total_kw = load.total_kw
    daily_consumption = total_kw * assumptions.daily_usage_hours
    capacity = _ceil(daily_consumption / assumptions.sun_hours / assumptions.system_efficiency)
    panels = _ceil(capacity * 1000 / assumptions.panel_watts)
    batteries = _ceil(daily_consumption / assumptions.battery_unit_kwh)
    inverter_size = _ceil(total_kw * assumptions.inverter_overhead)

    return SystemRecommendation(
        total_load_kw=total_kw,
        daily_consumption_kwh=daily_consumption,
        recommended_capacity_kw=capacity,
        panels=panels,
        batteries=batteries,
        battery_unit_kwh=assumptions.battery_unit_kwh,
        inverter_size_kw=inverter_size,
        estimated_cost=capacity * assumptions.cost_per_kw,
    )
