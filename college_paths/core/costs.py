from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .inputs import UNDERGRAD_YEARS, CareerProfile, CollegeRecord, LifePathAssumptions, StudentProfile, round_currency

logger = logging.getLogger(__name__)

IN_STATE_TUITION_FALLBACK = 15_000
OUT_OF_STATE_TUITION_FALLBACK = 30_000
ROOM_BOARD_FALLBACK = 15_000


@dataclass(frozen=True)
class CostEstimate:
    in_state: bool
    sticker_price_per_year: float  # tuition + room & board
    tuition_per_year: float
    aid_adjusted_per_year: Optional[float]
    undergrad_cost_with_room_board: float
    undergrad_cost_tuition_only: float
    adjusted_undergrad_cost: float  # after scholarships, floored at 0
    undergrad_debt: float
    grad_school_cost: float
    data_gaps: Tuple[str, ...] = ()

    @property
    def aid_adjusted_undergrad(self) -> Optional[float]:
        if self.aid_adjusted_per_year is None:
            return None
        return self.aid_adjusted_per_year * UNDERGRAD_YEARS

    @property
    def total_debt(self) -> float:
        return self.undergrad_debt + self.grad_school_cost

    @property
    def total_cost(self) -> float:
        return self.adjusted_undergrad_cost + self.grad_school_cost


def is_in_state(profile: StudentProfile, college: CollegeRecord) -> bool:
    return (profile.home_state or "").strip().upper() == (college.state or "").strip().upper()


def tuition_per_year(college: CollegeRecord, in_state: bool) -> float:
    """Published tuition, falling back to the other residency rate, then to a flat default."""
    if in_state:
        primary, secondary, fallback = college.tuition_in_state, college.tuition_out_of_state, IN_STATE_TUITION_FALLBACK
    else:
        primary, secondary, fallback = college.tuition_out_of_state, college.tuition_in_state, OUT_OF_STATE_TUITION_FALLBACK
    if primary is not None:
        return primary
    if secondary is not None:
        return secondary
    return fallback


def sticker_price(college: CollegeRecord, in_state: bool, include_room_board: bool = True) -> float:
    room_board = 0.0
    if include_room_board:
        room_board = college.room_board if college.room_board is not None else ROOM_BOARD_FALLBACK
    return tuition_per_year(college, in_state) + room_board


def aid_adjusted_price(college: CollegeRecord, income_bracket: str) -> Optional[float]:
    """Average net price paid by the bracket; None when no aid estimate exists."""
    by_income = (college.net_price_by_income or {}).get(income_bracket)
    if by_income is not None:
        return by_income
    return college.avg_net_price


def _data_gaps(college: CollegeRecord, in_state: bool) -> Tuple[str, ...]:
    gaps = []
    tuition_field = "tuition_in_state" if in_state else "tuition_out_of_state"
    if getattr(college, tuition_field) is None:
        gaps.append(tuition_field)
    if college.room_board is None:
        gaps.append("room_board")
    if college.median_debt is None:
        gaps.append("median_debt")
    if college.avg_net_price is None and all(v is None for v in (college.net_price_by_income or {}).values()):
        gaps.append("net_price")
    return tuple(gaps)


def estimate_costs(
    college: CollegeRecord,
    profile: StudentProfile,
    career: CareerProfile,
    assumptions: Optional[LifePathAssumptions] = None,
) -> CostEstimate:
    assumptions = assumptions or LifePathAssumptions()
    in_state = is_in_state(profile, college)

    with_room_board = sticker_price(college, in_state, include_room_board=True)
    tuition_only = sticker_price(college, in_state, include_room_board=False)
    undergrad_with_rb = with_room_board * UNDERGRAD_YEARS
    adjusted = max(0.0, undergrad_with_rb - profile.scholarship_offset)

    if college.median_debt is not None:
        undergrad_debt = college.median_debt
    else:
        undergrad_debt = round_currency(adjusted * assumptions.financed_fraction)

    gaps = _data_gaps(college, in_state)
    if gaps:
        logger.debug("%s: using fallback values for %s", college.name, ", ".join(gaps))

    return CostEstimate(
        in_state=in_state,
        sticker_price_per_year=with_room_board,
        tuition_per_year=tuition_only,
        aid_adjusted_per_year=aid_adjusted_price(college, profile.income_bracket),
        undergrad_cost_with_room_board=undergrad_with_rb,
        undergrad_cost_tuition_only=tuition_only * UNDERGRAD_YEARS,
        adjusted_undergrad_cost=adjusted,
        undergrad_debt=undergrad_debt,
        grad_school_cost=career.grad_school_cost,
        data_gaps=gaps,
    )
