from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import pandas as pd

from .costs import aid_adjusted_price, is_in_state, sticker_price
from .inputs import UNDERGRAD_YEARS, CollegeRecord, StudentProfile, round_currency

logger = logging.getLogger(__name__)

COMMUNITY_COLLEGE_PRICE_LIMIT = 15_000
MAX_TRANSFER_OPTIONS = 3
LOWER_DIVISION_YEARS = UNDERGRAD_YEARS // 2


@dataclass(frozen=True)
class YearsBreakdown:
    school: str
    cost_per_year: float
    total: float


@dataclass(frozen=True)
class PathAlternative:
    kind: str  # "direct" or "2+2"
    description: str
    target_school: str
    years1_2: YearsBreakdown
    years3_4: YearsBreakdown
    total_cost: float
    savings: float = 0.0
    savings_percent: int = 0
    community_college: Optional[CollegeRecord] = None


def transfer_candidates(target: CollegeRecord, colleges: Iterable[CollegeRecord]) -> List[CollegeRecord]:
    """Cheap public colleges in the target's state, cheapest first."""
    state = (target.state or "").strip().upper()
    candidates = [
        college
        for college in colleges
        if college.id != target.id
        and (college.state or "").strip().upper() == state
        and college.ownership == "public"
        and college.avg_net_price is not None
        and college.avg_net_price < COMMUNITY_COLLEGE_PRICE_LIMIT
    ]
    return sorted(candidates, key=lambda college: college.avg_net_price)


def target_net_price(target: CollegeRecord, profile: StudentProfile) -> float:
    price = aid_adjusted_price(target, profile.income_bracket)
    if price is None:
        price = sticker_price(target, is_in_state(profile, target))
    return price


def _split(school: str, cost_per_year: float) -> YearsBreakdown:
    return YearsBreakdown(school, cost_per_year, cost_per_year * LOWER_DIVISION_YEARS)


def transfer_alternatives(
    target: CollegeRecord,
    profile: StudentProfile,
    colleges: Iterable[CollegeRecord],
) -> List[PathAlternative]:
    """Four years at the target, followed by up to three 2+2 community college routes into it."""
    net_price = target_net_price(target, profile)
    direct_total = net_price * UNDERGRAD_YEARS
    alternatives = [
        PathAlternative(
            kind="direct",
            description="Attend 4 years at target school",
            target_school=target.name,
            years1_2=_split(target.name, net_price),
            years3_4=_split(target.name, net_price),
            total_cost=direct_total,
        )
    ]

    for n, college in enumerate(transfer_candidates(target, colleges)[:MAX_TRANSFER_OPTIONS]):
        lower = _split(college.name, college.avg_net_price)
        upper = _split(target.name, net_price)
        transfer_total = lower.total + upper.total
        savings = direct_total - transfer_total
        description = f"2 years at {college.name}, then transfer"
        if n == 0:
            description += f" to {target.name}"
        alternatives.append(
            PathAlternative(
                kind="2+2",
                description=description,
                target_school=target.name,
                years1_2=lower,
                years3_4=upper,
                total_cost=transfer_total,
                savings=savings,
                savings_percent=round_currency(savings / direct_total * 100) if direct_total else 0,
                community_college=college,
            )
        )

    logger.debug("%s: %d transfer routes", target.name, len(alternatives) - 1)
    return alternatives


def alternatives_frame(alternatives: List[PathAlternative]) -> pd.DataFrame:
    rows = [
        {
            "path": alt.description,
            "years_1_2": alt.years1_2.total,
            "years_3_4": alt.years3_4.total,
            "total_cost": alt.total_cost,
            "savings": alt.savings,
            "savings_percent": alt.savings_percent,
        }
        for alt in alternatives
    ]
    return pd.DataFrame(rows, columns=["path", "years_1_2", "years_3_4", "total_cost", "savings", "savings_percent"])
