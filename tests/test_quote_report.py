import datetime

import pandas as pd

from solarquote.currency.currency_utils import CurrencyCode
from solarquote.load_aggregator import LoadSummary
from solarquote.quote_estimator import estimate_quote
from solarquote.quote_interface import QuoteInput
from solarquote.report.quote_report import (
    build_quote_report, export_quote_report, quote_filename, REPORT_COLUMNS, REPORT_SECTIONS,
    PACKAGE_INCLUDES, TERMS
)

ISSUED_ON = datetime.date(2026, 10, 19)


def report_values(report: pd.DataFrame, section: str) -> dict:
    rows = report[report['section'] == section]
    return dict(zip(rows['label'], rows['value']))


class TestBuildQuoteReport:
    quote_input = QuoteInput(customer_name='Ayesha Khan', customer_email='ayesha@example.com',
                             customer_phone='+92-300-0000000', customer_address='12 Canal Road', city='Lahore',
                             load_summary=LoadSummary(total_watts=1500), system_size_kw=10,
                             panel_quantity=20, inverter_size_kw=10, battery_capacity_kwh=10.24,
                             total_cost=1_000_000)
    result = estimate_quote(quote_input)

    def test_layout(self):
        report = build_quote_report(self.quote_input, self.result, issued_on=ISSUED_ON)
        assert list(report.columns) == REPORT_COLUMNS
        assert list(report['section'].unique()) == REPORT_SECTIONS
        assert report['value'].notnull().all()

    def test_customer_section(self):
        report = build_quote_report(self.quote_input, self.result, issued_on=ISSUED_ON)
        customer = report_values(report, 'Customer')
        assert customer == {
            'Date': '2026-10-19',
            'Valid Until': '2026-11-18',
            'Customer': 'Ayesha Khan',
            'Email': 'ayesha@example.com',
            'Phone': '+92-300-0000000',
            'Address': '12 Canal Road, Lahore',
        }

    def test_customer_rows_only_when_supplied(self):
        quote_input = QuoteInput(city='Multan')
        report = build_quote_report(quote_input, estimate_quote(quote_input), issued_on=ISSUED_ON)
        assert list(report_values(report, 'Customer')) == ['Date', 'Valid Until', 'City']

    def test_figures(self):
        report = build_quote_report(self.quote_input, self.result, issued_on=ISSUED_ON)

        load = report_values(report, 'Load Requirements')
        assert load['Total Connected Load'] == '1.50 kW (1500 Watts)'
        assert load['Daily Energy Consumption'] == '7.5 kWh'

        system = report_values(report, 'Recommended System Specifications')
        assert system['System Capacity'] == '10 kW'
        assert system['Solar Panels (550W each)'] == '20 panels'
        assert system['Total Panel Capacity'] == '11.00 kW'
        assert system['Battery Capacity'] == '10.24 kWh'

        cost = report_values(report, 'Cost Breakdown')
        assert cost == {
            'System Cost': 'Rs. 1,000,000',
            'Installation Charges (15%)': 'Rs. 150,000',
            'Total Investment': 'Rs. 1,150,000',
        }

        environment = report_values(report, 'Environmental Impact')
        assert environment == {
            'Annual CO2 Reduction': '12.0 tons',
            'Equivalent Trees Planted': '300 trees',
            '25-Year CO2 Savings': '300 tons',
        }

        roi = report_values(report, 'Return on Investment')
        assert roi == {
            'Estimated Monthly Savings': 'Rs. 20,000',
            'Estimated Annual Savings': 'Rs. 240,000',
            'Payback Period': '~4-5 Years',
            '25-Year Total Savings': 'Rs. 6,000,000',
            'ROI Percentage': '520%',
        }

    def test_fixed_sections(self):
        report = build_quote_report(self.quote_input, self.result, issued_on=ISSUED_ON)
        assert report[report['section'] == 'Package Includes']['value'].tolist() == PACKAGE_INCLUDES
        assert report[report['section'] == 'Terms & Conditions']['value'].tolist() == TERMS

    def test_dollar_report(self):
        report = build_quote_report(self.quote_input, self.result, currency=CurrencyCode.USD, issued_on=ISSUED_ON)
        cost = report_values(report, 'Cost Breakdown')
        assert cost['Total Investment'] == '$4,107'
        assert cost['System Cost'] == '$3,571'

    def test_empty_quote(self):
        quote_input = QuoteInput()
        report = build_quote_report(quote_input, estimate_quote(quote_input), issued_on=ISSUED_ON)
        assert report['value'].notnull().all()
        assert report_values(report, 'Cost Breakdown')['Total Investment'] == 'Rs. 0'

    def test_whole_numbers_round_half_up(self):
        quote_input = QuoteInput(system_size_kw=0.75)
        report = build_quote_report(quote_input, estimate_quote(quote_input), issued_on=ISSUED_ON)
        environment = report_values(report, 'Environmental Impact')
        assert environment['25-Year CO2 Savings'] == '23 tons'
        assert environment['Equivalent Trees Planted'] == '23 trees'

    def test_result_untouched(self):
        before = self.result.to_dict()
        build_quote_report(self.quote_input, self.result, currency=CurrencyCode.USD, issued_on=ISSUED_ON)
        assert self.result.to_dict() == before


class TestExportQuoteReport:

    def test_filename(self):
        assert quote_filename(ISSUED_ON) == 'SolarQuote_2026-10-19.csv'

    def test_export(self, tmp_path):
        quote_input = QuoteInput(customer_name='Ayesha Khan', system_size_kw=5, total_cost=500_000)
        report = build_quote_report(quote_input, estimate_quote(quote_input), issued_on=ISSUED_ON)
        path = export_quote_report(report, tmp_path / 'quotes', issued_on=ISSUED_ON)
        assert path == tmp_path / 'quotes' / 'SolarQuote_2026-10-19.csv'
        written = pd.read_csv(path, keep_default_na=False, dtype=str)
        pd.testing.assert_frame_equal(written, report.astype(str))
