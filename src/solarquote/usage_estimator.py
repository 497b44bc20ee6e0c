import math

import attrs

from .quote_utils import coerce_number, coerce_quantity

# appliance: (unit watts, hours of use per day)
USAGE_RATINGS = {
    'lights': (5, 8),
    'fans': (75, 8),
    'acs': (1500, 6),
    'computers': (300, 8),
}

# Kitchen and miscellaneous loads are entered as a daily usage level in Wh
KITCHEN_LEVELS = {'none': 0, 'basic': 500, 'moderate': 1000, 'full': 2000}
MISC_LEVELS = {'none': 0, 'low': 200, 'medium': 350, 'high': 500}

CAPACITY_BUFFER = 1.2
PEAK_SUN_HOURS = 4.5
COST_PER_KW = 50_000  # PKR


def _level_wh(value, levels: dict) -> float:
    if isinstance(value, str) and value.strip().lower() in levels:
        return float(levels[value.strip().lower()])
    return coerce_number(value, field='usage level')


@attrs.define(frozen=True)
class UsageProfile:
    """Appliance counts and usage levels from the quick solar calculator."""
    lights: int = attrs.field(default=0, converter=coerce_quantity)
    fans: int = attrs.field(default=0, converter=coerce_quantity)
    acs: int = attrs.field(default=0, converter=coerce_quantity)
    computers: int = attrs.field(default=0, converter=coerce_quantity)
    kitchen_wh: float = attrs.field(default=0.0, converter=lambda v: _level_wh(v, KITCHEN_LEVELS))
    misc_wh: float = attrs.field(default=0.0, converter=lambda v: _level_wh(v, MISC_LEVELS))


@attrs.define(frozen=True)
class UsageEstimate:
    daily_consumption_kwh: float
    recommended_capacity_kw: int
    estimated_cost: float


def estimate_from_usage(profile: UsageProfile) -> UsageEstimate:
    """
    Quick estimate from appliance counts: daily kWh from rated watts and typical hours of use,
    capacity with a 20% buffer over 4.5 peak sun hours, and a flat price per kW.
    """
    daily_wh = sum(getattr(profile, name) * watts * hours for name, (watts, hours) in USAGE_RATINGS.items())
    daily_wh += profile.kitchen_wh + profile.misc_wh
    daily_kwh = daily_wh / 1000

    capacity = math.ceil(round(daily_kwh * CAPACITY_BUFFER / PEAK_SUN_HOURS, 9))
    return UsageEstimate(
        daily_consumption_kwh=daily_kwh,
        recommended_capacity_kw=capacity,
        estimated_cost=capacity * COST_PER_KW,
    )
