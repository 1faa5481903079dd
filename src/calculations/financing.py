"""Construction loan sizing."""

from ..models.assumptions import ProFormaAssumptions
from ..models.outputs import CostResult, FinancingResult
from .costs import pct_of


def calculate_financing(
    assumptions: ProFormaAssumptions,
    costs: CostResult,
) -> FinancingResult:
    """Size the construction loan and its one-time lender fee.

    Loan = subtotal before financing x LTC. Total interest is not known
    here: it falls out of the monthly draw simulation and is filled in
    by the totals step.

    Args:
        assumptions: Base assumptions (financing inputs).
        costs: Pre-financing cost result.

    Returns:
        FinancingResult with loan amount and lender fee set.
    """
    max_loan_amount = pct_of(costs.subtotal_before_financing, assumptions.financing.loan_to_cost_pct)
    lender_fee = pct_of(max_loan_amount, assumptions.financing.lender_fee_pct)

    return FinancingResult(
        max_loan_amount=max_loan_amount,
        lender_fee=lender_fee,
    )
