"""Cashflow report export: monthly schedule as a DataFrame and an Excel workbook."""

import io
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from src.models.outputs import ProFormaOutputs

MONTHLY_COLUMNS = [
    ("month_index", "Month"),
    ("phase", "Phase"),
    ("land", "Land"),
    ("soft", "Soft"),
    ("hard", "Hard"),
    ("contingency", "Contingency"),
    ("dev_fee", "Dev Fee"),
    ("lender_fee", "Lender Fee"),
    ("interest", "Interest"),
    ("sales_revenue", "Sales Revenue"),
    ("loan_draw", "Loan Draw"),
    ("equity", "Equity"),
    ("debt_outstanding", "Debt Outstanding"),
]


@dataclass
class CashflowReportConfig:
    """Configuration for cashflow report generation."""
    include_summary: bool = True
    include_monthly: bool = True
    project_name: str = "Development Pro Forma"
    scenario_name: str = "Base Case"


def monthly_dataframe(outputs: ProFormaOutputs) -> pd.DataFrame:
    """Monthly rows as a DataFrame indexed by month.

    Phase is stored as its string value. An empty schedule gives an
    empty frame with the same columns.
    """
    records = [
        {
            name: (getattr(row, name).value if name == "phase" else getattr(row, name))
            for name, _ in MONTHLY_COLUMNS
        }
        for row in outputs.monthly.rows
    ]
    df = pd.DataFrame(records, columns=[name for name, _ in MONTHLY_COLUMNS])
    return df.set_index("month_index")


def phase_summary(outputs: ProFormaOutputs) -> pd.DataFrame:
    """Uses, sources and equity summed by phase, in schedule order."""
    df = monthly_dataframe(outputs)
    if df.empty:
        return df.drop(columns=["phase"])
    return df.groupby("phase", sort=False).sum(numeric_only=True)


def _fmt_money(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"${value:,.0f}"


def _fmt_pct(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:.2f}%"


def _fmt_multiple(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:.2f}x"


def summary_lines(outputs: ProFormaOutputs) -> List[Tuple[str, str]]:
    """Label/value pairs for the headline metrics."""
    if not outputs.flags.monetization_supported:
        return [("Status", "Monetization mode not supported")]

    eff = outputs.eff
    totals = outputs.totals
    return [
        ("Gross Revenue", _fmt_money(outputs.revenue.gross_revenue)),
        ("Sales Commission", _fmt_money(outputs.revenue.sales_commission)),
        ("Net Revenue", _fmt_money(outputs.revenue.net_revenue)),
        ("", ""),
        ("Land (incl. closing)", _fmt_money(outputs.costs.land_total)),
        ("Hard Costs", _fmt_money(outputs.costs.hard)),
        ("Soft Costs", _fmt_money(outputs.costs.soft)),
        ("Contingency", _fmt_money(outputs.costs.contingency)),
        ("Developer Fee", _fmt_money(outputs.costs.dev_fee)),
        ("Subtotal Before Financing", _fmt_money(outputs.costs.subtotal_before_financing)),
        ("", ""),
        ("Max Loan Amount", _fmt_money(outputs.financing.max_loan_amount)),
        ("Lender Fee", _fmt_money(outputs.financing.lender_fee)),
        ("Total Interest", _fmt_money(outputs.financing.total_interest)),
        ("Total Financing", _fmt_money(outputs.financing.total_financing)),
        ("", ""),
        ("Total Cost", _fmt_money(totals.total_cost)),
        ("Profit", _fmt_money(totals.profit)),
        ("Profit Margin", _fmt_pct(totals.profit_margin_pct)),
        ("Peak Equity", _fmt_money(totals.equity_needed_peak)),
        ("Equity Invested", _fmt_money(totals.equity_invested_total)),
        ("Equity Multiple", _fmt_multiple(totals.equity_multiple)),
        ("Equity IRR", _fmt_pct(totals.equity_irr_pct)),
        ("ROI", _fmt_pct(totals.roi_pct)),
        ("", ""),
        ("Entitlement", f"{eff.entitlement_months} months" if eff.entitlement_months is not None else "-"),
        ("Construction", f"{eff.construction_months} months" if eff.construction_months is not None else "-"),
        ("Sales", f"{eff.sales_lease_months} months" if eff.sales_lease_months is not None else "-"),
        ("Total", f"{eff.total_months} months" if eff.total_months is not None else "-"),
    ]


def _add_header_style(ws, row: int, cols: int) -> None:
    """Apply header styling to a row."""
    header_fill = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True)

    for col in range(1, cols + 1):
        cell = ws.cell(row=row, column=col)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center")


def _create_summary_sheet(ws, outputs: ProFormaOutputs, config: CashflowReportConfig) -> None:
    row = 1
    ws.cell(row=row, column=1, value=f"Pro Forma: {config.project_name}")
    ws.cell(row=row, column=1).font = Font(bold=True, size=16)
    row += 1

    ws.cell(row=row, column=1, value=f"Scenario: {config.scenario_name}")
    row += 1

    ws.cell(row=row, column=1, value=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    row += 2

    for label, value in summary_lines(outputs):
        if label:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            if label in ("Profit", "Total Cost"):
                ws.cell(row=row, column=1).font = Font(bold=True)
                ws.cell(row=row, column=2).font = Font(bold=True)
        row += 1

    if outputs.flags.unallocated_costs is not None:
        row += 1
        ws.cell(
            row=row,
            column=1,
            value=f"Warning: {_fmt_money(outputs.flags.unallocated_costs)} of costs are not scheduled",
        )
        ws.cell(row=row, column=1).font = Font(bold=True, color="C00000")

    ws.column_dimensions["A"].width = 30
    ws.column_dimensions["B"].width = 20


def _create_monthly_sheet(ws, outputs: ProFormaOutputs) -> None:
    df = monthly_dataframe(outputs).reset_index()

    for col, (_, header) in enumerate(MONTHLY_COLUMNS, 1):
        ws.cell(row=1, column=col, value=header)
    _add_header_style(ws, 1, len(MONTHLY_COLUMNS))

    for row_num, record in enumerate(df.itertuples(index=False), 2):
        for col, value in enumerate(record, 1):
            cell = ws.cell(row=row_num, column=col, value=value)
            if col > 2:
                cell.number_format = "#,##0"

    for col in range(1, len(MONTHLY_COLUMNS) + 1):
        ws.column_dimensions[get_column_letter(col)].width = 16


def generate_cashflow_excel(
    outputs: ProFormaOutputs,
    config: Optional[CashflowReportConfig] = None,
) -> bytes:
    """Generate an Excel workbook with the summary and monthly schedule.

    Args:
        outputs: Result of compute_pro_forma().
        config: Optional configuration for the report.

    Returns:
        Excel file as bytes.
    """
    if config is None:
        config = CashflowReportConfig()

    wb = Workbook()
    wb.remove(wb.active)

    if config.include_summary:
        ws = wb.create_sheet("Summary")
        _create_summary_sheet(ws, outputs, config)

    if config.include_monthly:
        ws = wb.create_sheet("Monthly Cashflow")
        _create_monthly_sheet(ws, outputs)

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output.getvalue()
