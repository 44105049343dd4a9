from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .inputs import HORIZON_YEARS, UNDERGRAD_YEARS, CareerProfile


class Phase(str, Enum):
    UNDERGRAD = "College"
    GRAD_SCHOOL = "Grad School"
    RESIDENCY = "Residency"
    CAREER = "Career"


@dataclass(frozen=True)
class LifePhase:
    phase: Phase
    start_year: int  # 1-based timeline year of the phase's first year
    duration: int
    cost_per_year: float = 0.0
    income_per_year: Optional[float] = None

    @property
    def end_year(self) -> int:
        return self.start_year + self.duration - 1


def grad_school_kind(title: str) -> str:
    """Flavour of graduate program implied by a career title."""
    lower = (title or "").lower()
    if any(word in lower for word in ("surgeon", "physician", "doctor")):
        return "Med school"
    if any(word in lower for word in ("lawyer", "attorney")):
        return "Law school"
    if any(word in lower for word in ("professor", "phd", "researcher")):
        return "PhD"
    return "Grad school"


def horizon_age(start_age: int) -> int:
    return start_age + HORIZON_YEARS


def schedule_phases(career: CareerProfile, sticker_price_per_year: float, start_age: int) -> List[LifePhase]:
    """Undergrad, then optional grad school and residency, then career up to the horizon age."""
    phases = [LifePhase(Phase.UNDERGRAD, 1, UNDERGRAD_YEARS, cost_per_year=sticker_price_per_year)]
    next_year = UNDERGRAD_YEARS + 1

    if career.grad_school_years > 0:
        stipend = career.grad_stipend if career.grad_stipend > 0 else None
        phases.append(
            LifePhase(
                Phase.GRAD_SCHOOL,
                next_year,
                career.grad_school_years,
                cost_per_year=career.grad_cost_per_year,
                income_per_year=stipend,
            )
        )
        next_year += career.grad_school_years

    if career.residency_years > 0 and career.training_salary > 0:
        phases.append(
            LifePhase(Phase.RESIDENCY, next_year, career.residency_years, income_per_year=career.training_salary)
        )
        next_year += career.residency_years

    career_start_age = start_age + next_year - 1
    career_years = max(0, horizon_age(start_age) - career_start_age + 1)
    phases.append(LifePhase(Phase.CAREER, next_year, career_years))
    return phases
