from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .classifier import HEALTH_MAJORS, MEDICAL_DOCTORATE_CAREERS, VARIABLE_EARNINGS_MAJORS
from .costs import CostEstimate
from .engine import Timeline
from .inputs import CareerProfile, LifePathAssumptions, round_currency
from .loans import monthly_payment, total_interest

COMPETITIVENESS_WARNING = "Pre-med track is very competitive. Only ~40% of applicants get into med school."
EARNINGS_VARIANCE_WARNING = "Earnings in this field vary widely. Consider internships and networking early."
DEBT_RATIO_LIMIT = 1.5


@dataclass(frozen=True)
class CostBreakdown:
    undergrad_with_room_board: int
    undergrad_tuition_only: int
    grad_school_cost: int
    aid_adjusted_undergrad: Optional[int]


@dataclass(frozen=True)
class LifePathSummary:
    total_cost: int
    cost_breakdown: CostBreakdown
    total_debt: int
    peak_debt: int
    break_even_age: Optional[int]
    net_worth_at_horizon: int
    monthly_payment: int  # standard plan on peak debt
    total_interest: int
    loan_rate: float
    warning: Optional[str] = None


def format_money(value: float) -> str:
    return f"${round_currency(value):,}"


def implies_medical_doctorate(career: CareerProfile, career_category: str) -> bool:
    title = (career.title or "").lower()
    if career_category in MEDICAL_DOCTORATE_CAREERS:
        return True
    return any(word in title for word in ("surgeon", "physician", "doctor"))


def select_warning(
    career: CareerProfile, career_category: str, major_category: str, total_debt: float
) -> Optional[str]:
    """Highest-priority risk note for the path, if any."""
    if implies_medical_doctorate(career, career_category) and major_category not in HEALTH_MAJORS:
        return COMPETITIVENESS_WARNING
    if total_debt > career.median_salary * DEBT_RATIO_LIMIT:
        return (
            f"High debt-to-earnings ratio. Your debt ({format_money(total_debt)}) is more than "
            f"{DEBT_RATIO_LIMIT}x your expected first-year salary."
        )
    if major_category in VARIABLE_EARNINGS_MAJORS:
        return EARNINGS_VARIANCE_WARNING
    return career.notes or None


def summarize(
    timeline: Timeline,
    costs: CostEstimate,
    career: CareerProfile,
    career_category: str,
    major_category: str,
    assumptions: Optional[LifePathAssumptions] = None,
) -> LifePathSummary:
    assumptions = assumptions or LifePathAssumptions()
    aid_adjusted = costs.aid_adjusted_undergrad
    peak_debt = timeline.peak_debt
    final_net_worth = timeline.final_net_worth
    if final_net_worth is None:
        final_net_worth = -round_currency(costs.total_debt)

    return LifePathSummary(
        total_cost=round_currency(costs.total_cost),
        cost_breakdown=CostBreakdown(
            undergrad_with_room_board=round_currency(costs.undergrad_cost_with_room_board),
            undergrad_tuition_only=round_currency(costs.undergrad_cost_tuition_only),
            grad_school_cost=round_currency(costs.grad_school_cost),
            aid_adjusted_undergrad=round_currency(aid_adjusted) if aid_adjusted is not None else None,
        ),
        total_debt=round_currency(costs.total_debt),
        peak_debt=peak_debt,
        break_even_age=timeline.break_even_age,
        net_worth_at_horizon=final_net_worth,
        monthly_payment=round_currency(
            monthly_payment(peak_debt, assumptions.display_loan_rate, assumptions.display_loan_term_years)
        ),
        total_interest=round_currency(
            total_interest(peak_debt, assumptions.display_loan_rate, assumptions.display_loan_term_years)
        ),
        loan_rate=assumptions.display_loan_rate,
        warning=select_warning(career, career_category, major_category, costs.total_debt),
    )
