#!/usr/bin/env python3
"""Scenario sweep: profit across sale price and hard cost deltas.

Runs compare_scenario() over the slider ranges for price and hard cost
and prints a profit-change grid and a margin grid.

Usage:
    python examples/scenario_sweep.py
"""

import sys
from dataclasses import replace
from pathlib import Path

import numpy as np
import pandas as pd

sys.path.insert(0, str(Path(__file__).parent.parent))

from run_example import get_example_assumptions
from src.calculations.proforma import compare_scenario
from src.models.assumptions import ScenarioDeltas
from src.models.defaults import SCENARIO_RANGES


def slider_values(name: str) -> np.ndarray:
    """Every step of a scenario slider, inclusive."""
    r = SCENARIO_RANGES[name]
    count = int(round((r.max - r.min) / r.step)) + 1
    return np.linspace(r.min, r.max, count)


def main():
    print("=" * 70)
    print("SCENARIO SWEEP: Sale Price x Hard Cost")
    print("=" * 70)
    print()

    base = get_example_assumptions()

    records = []
    for price_delta in slider_values("delta_sale_price_per_sqft_pct")[::2]:
        for cost_delta in slider_values("delta_hard_cost_per_sqft_pct")[::2]:
            assumptions = replace(
                base,
                scenario=ScenarioDeltas(
                    delta_sale_price_per_sqft_pct=float(price_delta),
                    delta_hard_cost_per_sqft_pct=float(cost_delta),
                ),
            )
            outputs = compare_scenario(assumptions)
            records.append({
                "price_delta_pct": price_delta,
                "cost_delta_pct": cost_delta,
                "profit_delta": outputs.deltas.profit_delta,
                "margin_pct": outputs.totals.profit_margin_pct,
                "irr_pct": outputs.totals.equity_irr_pct,
            })

    df = pd.DataFrame(records)

    print("Profit change vs base ($000s), rows = price delta %, cols = hard cost delta %:")
    grid = df.pivot(index="price_delta_pct", columns="cost_delta_pct", values="profit_delta")
    print((grid / 1_000).round(0).to_string())
    print()

    print("Profit margin (%):")
    grid = df.pivot(index="price_delta_pct", columns="cost_delta_pct", values="margin_pct")
    print(grid.round(1).to_string())
    print()

    breakeven = df[df["margin_pct"] <= 0]
    if breakeven.empty:
        print("Every combination in the sweep stays profitable.")
    else:
        print(f"{len(breakeven)} combinations lose money:")
        print(breakeven[["price_delta_pct", "cost_delta_pct", "margin_pct"]].to_string(index=False))


if __name__ == "__main__":
    main()
