#!/usr/bin/env python3
"""Example script to run the pro forma on a 20-unit townhome project."""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from src.models.assumptions import (
    Absorption,
    Acquisition,
    Costs,
    Financing,
    ProFormaAssumptions,
    Program,
    RevenueSale,
    ScenarioDeltas,
    Timeline,
    TimelinePhases,
)
from src.calculations.proforma import compare_scenario, compute_pro_forma
from src.export.cashflow_report import (
    CashflowReportConfig,
    generate_cashflow_excel,
    phase_summary,
    summary_lines,
)
from src.validation import validate_assumptions


def get_example_assumptions() -> ProFormaAssumptions:
    """Get the example project assumptions."""
    return ProFormaAssumptions(
        program=Program(units=20, saleable_area_sqft=20_000),
        acquisition=Acquisition(land_price=1_000_000, closing_costs_pct=2),
        revenue_sale=RevenueSale(
            sale_price_per_sqft=400,
            other_revenue=50_000,
            sales_commission_pct=5,
        ),
        costs=Costs(
            hard_cost_per_sqft=150,
            soft_cost_pct_of_hard=20,
            contingency_pct_of_hard=5,
            contingency_pct_of_soft=10,
            dev_fee_pct_of_cost=4,
        ),
        financing=Financing(loan_to_cost_pct=65, interest_rate_pct=8, lender_fee_pct=1),
        timeline=Timeline(
            phases=TimelinePhases(
                entitlement_months=6,
                construction_months=18,
                sales_lease_months=6,
            ),
            total_months=30,
            auto_calc_sales_months=True,
        ),
        absorption=Absorption(units_per_month=4),
        # Downside: softer prices, costlier build, higher rate, 3-month delay
        scenario=ScenarioDeltas(
            delta_sale_price_per_sqft_pct=-5,
            delta_hard_cost_per_sqft_pct=5,
            delta_interest_rate_pct=1,
            delta_total_months=3,
        ),
    )


def run_base_case(assumptions: ProFormaAssumptions):
    """Run and print the base case."""
    print("\n" + "=" * 60)
    print("DEVELOPMENT PRO FORMA")
    print("Base Case")
    print("=" * 60 + "\n")

    outputs = compute_pro_forma(assumptions)

    for label, value in summary_lines(outputs):
        if label:
            print(f"{label:<28} {value:>18}")
        else:
            print()

    print("\nBy phase:")
    summary = phase_summary(outputs)
    print(summary[["land", "soft", "hard", "interest", "sales_revenue", "loan_draw", "equity"]]
          .round(0).to_string())

    return outputs


def run_scenario(assumptions: ProFormaAssumptions):
    """Run the stored scenario against the base case."""
    print("\n" + "=" * 60)
    print("SCENARIO vs BASE")
    print("=" * 60 + "\n")

    outputs = compare_scenario(assumptions)
    deltas = outputs.deltas

    print(f"{'Profit':<28} ${outputs.totals.profit:>17,.0f}")
    print(f"{'Profit change':<28} ${deltas.profit_delta:>+17,.0f}")
    print(f"{'Margin change':<28} {deltas.profit_margin_delta_pct:>+17.2f}pts")
    print(f"{'Peak equity change':<28} ${deltas.equity_needed_delta:>+17,.0f}")

    return outputs


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Development pro forma")
    parser.add_argument(
        "--excel",
        type=Path,
        help="Write the base case cashflow workbook to this path",
    )
    args = parser.parse_args()

    assumptions = validate_assumptions(get_example_assumptions())

    base = run_base_case(assumptions)
    run_scenario(assumptions)

    if args.excel:
        config = CashflowReportConfig(project_name="Example Townhomes")
        args.excel.write_bytes(generate_cashflow_excel(base, config))
        print(f"\nWrote {args.excel}")

    print("\nDone.")


if __name__ == "__main__":
    main()
