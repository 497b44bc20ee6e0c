import logging

from .quote_interface import QuoteInput, QuoteResult, QuoteAssumptions, BASE_QUOTE_ASSUMPTIONS
from .quote_utils import coerce_number, coerce_quantity, first_positive, first_present, scale_half_up, scaled

logger = logging.getLogger(__name__)


def estimate_quote(quote_input: QuoteInput,
                   assumptions: QuoteAssumptions = BASE_QUOTE_ASSUMPTIONS) -> QuoteResult:
    """
    Build a QuoteResult from a QuoteInput.

    The estimator does not size the system itself: capacity, panel count, inverter and battery
    are taken from the input (see sizing.recommend_system for a recommendation). What it derives
    is the daily energy, the panel capacity, the cost breakdown, the environmental impact and the
    savings. Missing or malformed numbers count as 0, so every field of the result is populated.
    """
    # Load
    load = quote_input.load_summary
    total_load_watts = load.total_watts if load is not None else 0
    total_load_kw = load.total_kw if load is not None else 0.0
    daily_energy_kwh = (first_positive(quote_input.daily_energy_kwh)
                        or scaled(total_load_kw, assumptions.sun_hours, field='daily_energy_kwh'))

    # System
    system_size_kw = first_positive(quote_input.recommended_capacity_kw, quote_input.system_size_kw)
    panel_quantity = coerce_quantity(first_positive(quote_input.panel_quantity, quote_input.panels_required),
                                     field='panel_quantity')
    total_panel_capacity_kw = scaled(panel_quantity, assumptions.panel_watts, 1000, field='total_panel_capacity_kw')
    inverter_size_kw = coerce_number(quote_input.inverter_size_kw, field='inverter_size_kw')
    battery_capacity_kwh = coerce_number(quote_input.battery_capacity_kwh, field='battery_capacity_kwh')

    # Cost
    system_cost = first_positive(quote_input.total_cost, quote_input.estimated_cost)
    installation_charge = scale_half_up(system_cost, assumptions.installation_rate)
    total_investment = scale_half_up(system_cost, 1 + assumptions.installation_rate)

    # Environmental
    annual_co2_reduction_tons = scaled(system_size_kw, assumptions.co2_tons_per_kw_year)
    trees_equivalent = scale_half_up(system_size_kw, assumptions.trees_per_kw)
    co2_reduction_25_years = scaled(system_size_kw, assumptions.co2_tons_per_kw_25_years)

    # ROI
    monthly_savings = scale_half_up(system_cost, assumptions.monthly_savings_rate)
    annual_savings = scale_half_up(12 * system_cost, assumptions.monthly_savings_rate)
    payback_period = first_present(quote_input.payback_period)
    payback_period_years = str(payback_period) if payback_period is not None else assumptions.fallback_payback_period
    total_savings_25_years = (first_positive(quote_input.savings_25_years)
                              or scale_half_up(system_cost, assumptions.savings_25_years_multiple))
    roi_percentage = first_positive(quote_input.roi_percentage) or assumptions.fallback_roi_percentage

    if system_size_kw == 0 and total_load_watts > 0:
        logger.debug("Quote has a %s W load but no system size; environmental figures will be 0", total_load_watts)

    return QuoteResult(
        total_load_watts=total_load_watts,
        total_load_kw=total_load_kw,
        daily_energy_kwh=daily_energy_kwh,
        system_size_kw=system_size_kw,
        panel_quantity=panel_quantity,
        panel_watts=assumptions.panel_watts,
        total_panel_capacity_kw=total_panel_capacity_kw,
        inverter_size_kw=inverter_size_kw,
        battery_capacity_kwh=battery_capacity_kwh,
        system_cost=system_cost,
        installation_charge=installation_charge,
        total_investment=total_investment,
        annual_co2_reduction_tons=annual_co2_reduction_tons,
        trees_equivalent=trees_equivalent,
        co2_reduction_25_years=co2_reduction_25_years,
        monthly_savings=monthly_savings,
        annual_savings=annual_savings,
        payback_period_years=payback_period_years,
        total_savings_25_years=total_savings_25_years,
        roi_percentage=roi_percentage,
    )
