"""
Tabular layout of a quote, in the section order of the printed quotation.

The report is a DataFrame with one row per printed line (section, label, value), so any
renderer (screen, CSV, PDF) can draw it without knowing how the figures were computed.
"""
import datetime
import os
import pathlib

import pandas as pd
from dateutil.relativedelta import relativedelta

from ..currency.currency_utils import CurrencyCode, convert_amount, format_currency
from ..quote_interface import QuoteInput, QuoteResult
from ..quote_utils import scale_half_up

REPORT_COLUMNS = ['section', 'label', 'value']
QUOTE_VALIDITY = relativedelta(days=30)

SECTION_CUSTOMER = 'Customer'
SECTION_LOAD = 'Load Requirements'
SECTION_SYSTEM = 'Recommended System Specifications'
SECTION_COST = 'Cost Breakdown'
SECTION_ENVIRONMENT = 'Environmental Impact'
SECTION_ROI = 'Return on Investment'
SECTION_PACKAGE = 'Package Includes'
SECTION_TERMS = 'Terms & Conditions'

REPORT_SECTIONS = [SECTION_CUSTOMER, SECTION_LOAD, SECTION_SYSTEM, SECTION_COST,
                   SECTION_ENVIRONMENT, SECTION_ROI, SECTION_PACKAGE, SECTION_TERMS]

PACKAGE_INCLUDES = [
    'Tier-1 Solar Panels (550W each) with 25-year warranty',
    'MPPT Solar Inverter with 5-year warranty',
    'Lithium/Tubular Batteries with warranty',
    'Complete mounting structure and DC/AC cables',
    'Professional installation and commissioning',
    'Net metering application assistance',
    'Annual maintenance for 5 years',
    '24/7 customer support',
]

TERMS = [
    'This quotation is valid for 30 days from the date of issue.',
    'Prices are subject to change based on market conditions.',
    'Installation timeline: 7-10 working days after confirmation.',
    'Payment terms: 50% advance, 50% on completion.',
]


def _num(value, decimals: int) -> str:
    """Fixed-point display; exact halves round up."""
    units = scale_half_up(value, 10 ** decimals)
    if decimals == 0:
        return str(units)
    whole, fraction = divmod(units, 10 ** decimals)
    return f"{whole}.{fraction:0{decimals}d}"


def _short(value) -> str:
    """Render 10.0 as "10" and 10.5 as "10.5", as sizes are typed by users."""
    return f"{value:.3f}".rstrip("0").rstrip(".")


def _customer_rows(quote_input: QuoteInput, issued_on: datetime.date) -> list[tuple[str, str]]:
    rows = [('Date', issued_on.isoformat()),
            ('Valid Until', (issued_on + QUOTE_VALIDITY).isoformat())]
    if quote_input.customer_name:
        rows.append(('Customer', quote_input.customer_name))
    if quote_input.customer_email:
        rows.append(('Email', quote_input.customer_email))
    if quote_input.customer_phone:
        rows.append(('Phone', quote_input.customer_phone))
    if quote_input.customer_address:
        rows.append(('Address', f"{quote_input.customer_address}, {quote_input.city or ''}"))
    elif quote_input.city:
        rows.append(('City', quote_input.city))
    return rows


def build_quote_report(quote_input: QuoteInput,
                       result: QuoteResult,
                       currency: CurrencyCode = CurrencyCode.PKR,
                       issued_on: datetime.date | None = None) -> pd.DataFrame:
    """
    Lay out a quote into labelled rows. Amounts in `result` are taken to be PKR and are
    converted for display when another currency is requested.
    """
    issued_on = issued_on if issued_on is not None else datetime.date.today()

    def money(amount) -> str:
        return format_currency(convert_amount(amount, currency), currency)

    sections = {
        SECTION_CUSTOMER: _customer_rows(quote_input, issued_on),
        SECTION_LOAD: [
            ('Total Connected Load', f"{_num(result.total_load_kw, 2)} kW ({result.total_load_watts} Watts)"),
            ('Daily Energy Consumption', f"{_num(result.daily_energy_kwh, 1)} kWh"),
        ],
        SECTION_SYSTEM: [
            ('System Capacity', f"{_short(result.system_size_kw)} kW"),
            (f'Solar Panels ({result.panel_watts}W each)', f"{result.panel_quantity} panels"),
            ('Total Panel Capacity', f"{_num(result.total_panel_capacity_kw, 2)} kW"),
            ('Inverter Size', f"{_short(result.inverter_size_kw)} kW"),
            ('Battery Capacity', f"{_short(result.battery_capacity_kwh)} kWh"),
        ],
        SECTION_COST: [
            ('System Cost', money(result.system_cost)),
            ('Installation Charges (15%)', money(result.installation_charge)),
            ('Total Investment', money(result.total_investment)),
        ],
        SECTION_ENVIRONMENT: [
            ('Annual CO2 Reduction', f"{_num(result.annual_co2_reduction_tons, 1)} tons"),
            ('Equivalent Trees Planted', f"{result.trees_equivalent} trees"),
            ('25-Year CO2 Savings', f"{_num(result.co2_reduction_25_years, 0)} tons"),
        ],
        SECTION_ROI: [
            ('Estimated Monthly Savings', money(result.monthly_savings)),
            ('Estimated Annual Savings', money(result.annual_savings)),
            ('Payback Period', f"{result.payback_period_years} Years"),
            ('25-Year Total Savings', money(result.total_savings_25_years)),
            ('ROI Percentage', f"{_short(result.roi_percentage)}%"),
        ],
        SECTION_PACKAGE: [('', item) for item in PACKAGE_INCLUDES],
        SECTION_TERMS: [(str(i), term) for i, term in enumerate(TERMS, start=1)],
    }

    records = [(section, label, value) for section in REPORT_SECTIONS for label, value in sections[section]]
    return pd.DataFrame(records, columns=REPORT_COLUMNS)


def quote_filename(issued_on: datetime.date | None = None, extension: str = 'csv') -> str:
    issued_on = issued_on if issued_on is not None else datetime.date.today()
    return f"SolarQuote_{issued_on.isoformat()}.{extension}"


def export_quote_report(report: pd.DataFrame, directory: os.PathLike,
                        issued_on: datetime.date | None = None) -> pathlib.Path:
    """Write the report as CSV into `directory` and return the file path."""
    directory = pathlib.Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / quote_filename(issued_on)
    report.to_csv(path, index=False)
    return path
