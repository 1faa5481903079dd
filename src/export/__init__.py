"""Export module for pro forma reports."""

from .cashflow_report import (
    CashflowReportConfig,
    generate_cashflow_excel,
    monthly_dataframe,
    phase_summary,
)

__all__ = [
    "CashflowReportConfig",
    "generate_cashflow_excel",
    "monthly_dataframe",
    "phase_summary",
]
