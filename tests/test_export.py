"""Tests for the cashflow DataFrame and Excel export."""

import io
from dataclasses import replace

import pytest
from openpyxl import load_workbook

from src.calculations.proforma import compute_pro_forma
from src.export.cashflow_report import (
    CashflowReportConfig,
    generate_cashflow_excel,
    monthly_dataframe,
    phase_summary,
    summary_lines,
)
from src.models.assumptions import Meta, Monetization, ProFormaAssumptions
from tests.fixtures.test_inputs import EXPECTED_NET_REVENUE, with_phases


@pytest.fixture
def reference_outputs(reference_assumptions):
    return compute_pro_forma(reference_assumptions)


class TestMonthlyDataFrame:
    """Tests for the monthly DataFrame view."""

    def test_shape_and_index(self, reference_outputs):
        df = monthly_dataframe(reference_outputs)

        assert len(df) == 30
        assert df.index.name == "month_index"
        assert list(df.index) == list(range(1, 31))
        assert "month_index" not in df.columns

    def test_phase_as_string(self, reference_outputs):
        df = monthly_dataframe(reference_outputs)

        assert df.loc[1, "phase"] == "ENTITLEMENT"
        assert df.loc[7, "phase"] == "CONSTRUCTION"
        assert df.loc[30, "phase"] == "SALES_LEASE"

    def test_values_match_rows(self, reference_outputs):
        df = monthly_dataframe(reference_outputs)

        assert df["sales_revenue"].sum() == pytest.approx(EXPECTED_NET_REVENUE)
        assert df.loc[1, "land"] == pytest.approx(1_020_000)
        assert df["equity"].tolist() == reference_outputs.monthly.equity_cashflows()

    def test_empty_schedule(self):
        df = monthly_dataframe(compute_pro_forma(ProFormaAssumptions()))

        assert df.empty
        assert "equity" in df.columns


class TestPhaseSummary:
    """Tests for per-phase totals."""

    def test_phases_in_schedule_order(self, reference_outputs):
        summary = phase_summary(reference_outputs)
        assert list(summary.index) == ["ENTITLEMENT", "CONSTRUCTION", "SALES_LEASE"]

    def test_phase_totals(self, reference_outputs):
        summary = phase_summary(reference_outputs)

        assert summary.loc["CONSTRUCTION", "hard"] == pytest.approx(3_000_000)
        assert summary.loc["ENTITLEMENT", "soft"] == pytest.approx(360_000)
        assert summary.loc["SALES_LEASE", "sales_revenue"] == pytest.approx(EXPECTED_NET_REVENUE)

    def test_empty_schedule(self):
        summary = phase_summary(compute_pro_forma(ProFormaAssumptions()))
        assert summary.empty


class TestSummaryLines:
    """Tests for headline metric formatting."""

    def test_formats_money_and_percent(self, reference_outputs):
        lines = dict(summary_lines(reference_outputs))

        assert lines["Net Revenue"] == "$7,600,000"
        assert lines["Profit Margin"].endswith("%")
        assert lines["Total"] == "30 months"

    def test_missing_values_show_dash(self):
        lines = dict(summary_lines(compute_pro_forma(ProFormaAssumptions())))

        assert lines["Net Revenue"] == "-"
        assert lines["Equity IRR"] == "-"

    def test_unsupported_monetization(self, reference_assumptions):
        outputs = compute_pro_forma(
            replace(reference_assumptions, meta=Meta(monetization=Monetization.FOR_RENT))
        )
        assert summary_lines(outputs) == [("Status", "Monetization mode not supported")]


class TestGenerateCashflowExcel:
    """Tests for the Excel workbook."""

    def test_workbook_sheets(self, reference_outputs):
        data = generate_cashflow_excel(reference_outputs)
        wb = load_workbook(io.BytesIO(data))

        assert wb.sheetnames == ["Summary", "Monthly Cashflow"]

    def test_monthly_sheet(self, reference_outputs):
        wb = load_workbook(io.BytesIO(generate_cashflow_excel(reference_outputs)))
        ws = wb["Monthly Cashflow"]

        assert ws.max_row == 31
        assert ws.cell(row=1, column=1).value == "Month"
        assert ws.cell(row=2, column=1).value == 1
        assert ws.cell(row=2, column=2).value == "ENTITLEMENT"

    def test_summary_sheet(self, reference_outputs):
        config = CashflowReportConfig(project_name="Maple Row", scenario_name="Downside")
        wb = load_workbook(io.BytesIO(generate_cashflow_excel(reference_outputs, config)))
        ws = wb["Summary"]

        assert ws["A1"].value == "Pro Forma: Maple Row"
        assert ws["A2"].value == "Scenario: Downside"

    def test_summary_only(self, reference_outputs):
        config = CashflowReportConfig(include_monthly=False)
        wb = load_workbook(io.BytesIO(generate_cashflow_excel(reference_outputs, config)))

        assert wb.sheetnames == ["Summary"]

    def test_unallocated_warning_row(self, reference_assumptions):
        with pytest.warns(UserWarning):
            outputs = compute_pro_forma(with_phases(reference_assumptions, 6, 0, 6))

        wb = load_workbook(io.BytesIO(generate_cashflow_excel(outputs)))
        values = [cell.value for row in wb["Summary"].iter_rows() for cell in row]

        assert any(isinstance(v, str) and v.startswith("Warning:") for v in values)
