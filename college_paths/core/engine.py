from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .inputs import CareerProfile, LifePathAssumptions, round_currency
from .loans import standard_plan_annual_payment
from .phases import LifePhase, Phase, grad_school_kind

# Years of experience at which the salary curve reaches each anchor.
SALARY_CURVE_YEARS = (0, 2, 5, 10, 20)


@dataclass(frozen=True)
class YearSnapshot:
    year: int
    age: int
    phase: Phase
    description: str
    earnings: Optional[int]
    debt: int
    savings: int
    net_worth: int
    milestone: Optional[str] = None


@dataclass(frozen=True)
class Timeline:
    snapshots: Tuple[YearSnapshot, ...]
    break_even_age: Optional[int]

    @property
    def peak_debt(self) -> int:
        return max((snap.debt for snap in self.snapshots), default=0)

    @property
    def final_net_worth(self) -> Optional[int]:
        return self.snapshots[-1].net_worth if self.snapshots else None


def salary_curve_anchors(career: CareerProfile) -> Tuple[float, ...]:
    """Salaries at SALARY_CURVE_YEARS: entry, early career, median, senior, late-career plateau."""
    entry = career.salary_low * 0.9
    early = entry + (career.median_salary - entry) * 0.5
    senior = career.median_salary + (career.salary_high - career.median_salary) * 0.6
    plateau = senior + (career.salary_high - senior) * 0.5
    return entry, early, career.median_salary, senior, plateau


def salary_for_experience(career: CareerProfile, years_experience: float) -> int:
    """Piecewise-linear salary between the anchors, flat outside them."""
    salary = np.interp(years_experience, SALARY_CURVE_YEARS, salary_curve_anchors(career))
    return round_currency(float(salary))


def _describe(phase: LifePhase, phase_year: int, career: CareerProfile) -> str:
    if phase.phase is Phase.UNDERGRAD:
        if phase_year == 1:
            return "Starting undergrad"
        if phase_year == phase.duration:
            return "Senior year, preparing to graduate"
        return f"Year {phase_year} of undergrad"
    if phase.phase is Phase.GRAD_SCHOOL:
        kind = grad_school_kind(career.title)
        if kind == "PhD":
            return f"PhD year {phase_year} (stipend)"
        return f"{kind} year {phase_year}"
    if phase.phase is Phase.RESIDENCY:
        return f"Residency year {phase_year}"
    return "First job" if phase_year == 1 else f"Career year {phase_year}"


_PHASE_MILESTONES = {
    Phase.UNDERGRAD: ("Start college", "Graduate undergrad"),
    Phase.GRAD_SCHOOL: ("Start grad school", "Complete grad school"),
    Phase.RESIDENCY: ("Start residency", "Complete residency"),
    Phase.CAREER: ("Start full career", None),
}


def _phase_milestones(phase: LifePhase, phase_year: int) -> List[str]:
    start, end = _PHASE_MILESTONES[phase.phase]
    milestones = []
    if phase_year == 1 and start:
        milestones.append(start)
    if phase_year == phase.duration and end:
        milestones.append(end)
    return milestones


def simulate_timeline(
    phases: Sequence[LifePhase],
    career: CareerProfile,
    total_debt: float,
    start_age: int,
    assumptions: Optional[LifePathAssumptions] = None,
) -> Timeline:
    """Step through each scheduled year carrying debt and savings across phase boundaries."""
    assumptions = assumptions or LifePathAssumptions()
    growth = 1 + assumptions.interest_rate
    annual_payment = standard_plan_annual_payment(
        total_debt, assumptions.standard_term_years, assumptions.payment_acceleration
    )

    debt = 0.0
    savings = 0.0
    break_even_age: Optional[int] = None
    debt_free_marked = False
    snapshots: List[YearSnapshot] = []

    for phase in phases:
        for offset in range(phase.duration):
            phase_year = offset + 1
            year = phase.start_year + offset
            age = start_age + year - 1
            earnings: Optional[int] = None

            if phase.phase is Phase.UNDERGRAD:
                debt += phase.cost_per_year * assumptions.financed_fraction
            elif phase.phase is Phase.GRAD_SCHOOL:
                debt += phase.cost_per_year
                if phase.income_per_year:
                    earnings = round_currency(phase.income_per_year)
            elif phase.phase is Phase.RESIDENCY:
                earnings = round_currency(phase.income_per_year or 0.0)
                debt = max(0.0, debt * growth - assumptions.residency_payment)
            else:
                earnings = salary_for_experience(career, phase_year - 1)
                payment = min(annual_payment, debt)
                debt = max(0.0, debt * growth - payment)
                annual_savings = max(0.0, earnings * assumptions.savings_rate - payment)
                # Prior balance compounds before this year's contribution lands.
                savings = savings * (1 + assumptions.investment_return) + annual_savings

            debt_balance = round_currency(debt)
            savings_balance = round_currency(savings)
            net_worth = savings_balance - debt_balance

            milestones = _phase_milestones(phase, phase_year)
            if phase.phase is Phase.CAREER and debt_balance == 0 and total_debt > 0 and not debt_free_marked:
                debt_free_marked = True
                milestones.append("Debt free")
            if break_even_age is None and net_worth > 0:
                break_even_age = age
                milestones.append("Break-even")

            snapshots.append(
                YearSnapshot(
                    year=year,
                    age=age,
                    phase=phase.phase,
                    description=_describe(phase, phase_year, career),
                    earnings=earnings,
                    debt=debt_balance,
                    savings=savings_balance,
                    net_worth=net_worth,
                    milestone="; ".join(milestones) or None,
                )
            )

    return Timeline(snapshots=tuple(snapshots), break_even_age=break_even_age)
