from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from college_paths.validation.checks import validate_request

from .careers import CareerProfileProvider, default_provider
from .classifier import classify_career, classify_major, major_label
from .costs import estimate_costs
from .engine import YearSnapshot, simulate_timeline
from .inputs import (
    CareerProfile,
    CollegeRecord,
    LifePathAssumptions,
    SimulationRequest,
    StudentProfile,
    round_currency,
)
from .phases import schedule_phases
from .summary import LifePathSummary, summarize

logger = logging.getLogger(__name__)

DEFAULT_CAREER_TEXT = "general career"


@dataclass(frozen=True)
class OccupationSummary:
    title: str
    median_salary: int
    salary_low: int
    salary_high: int
    growth_rate: float  # percent, e.g. 5 means 5%
    is_location_adjusted: bool
    location: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class LifePathResult:
    college: CollegeRecord
    major_category: str
    major_label: str
    career_category: str
    occupation: OccupationSummary
    timeline: Tuple[YearSnapshot, ...]
    summary: LifePathSummary
    earnings_6yr: Optional[int] = None
    earnings_10yr: Optional[int] = None
    data_gaps: Tuple[str, ...] = ()


def _occupation(career: CareerProfile, college: CollegeRecord) -> OccupationSummary:
    return OccupationSummary(
        title=career.title,
        median_salary=round_currency(career.median_salary),
        salary_low=round_currency(career.salary_low),
        salary_high=round_currency(career.salary_high),
        growth_rate=career.growth_rate,
        is_location_adjusted=career.is_location_adjusted,
        location=college.location,
        notes=career.notes,
    )


def _optional_money(value: Optional[float]) -> Optional[int]:
    return round_currency(value) if value is not None else None


def generate_life_path(
    college: CollegeRecord,
    profile: StudentProfile,
    career: CareerProfile,
    assumptions: Optional[LifePathAssumptions] = None,
) -> LifePathResult:
    """Full pipeline for one college once the career profile is known. Pure and deterministic."""
    assumptions = assumptions or LifePathAssumptions()
    major_category = classify_major(profile.intended_major)
    career_category = classify_career(profile.career_goal)

    costs = estimate_costs(college, profile, career, assumptions)
    phases = schedule_phases(career, costs.sticker_price_per_year, profile.current_age)
    timeline = simulate_timeline(phases, career, costs.total_debt, profile.current_age, assumptions)
    summary = summarize(timeline, costs, career, career_category, major_category, assumptions)

    return LifePathResult(
        college=college,
        major_category=major_category,
        major_label=major_label(major_category),
        career_category=career_category,
        occupation=_occupation(career, college),
        timeline=timeline.snapshots,
        summary=summary,
        earnings_6yr=_optional_money(college.earnings_6yr),
        earnings_10yr=_optional_money(college.earnings_10yr),
        data_gaps=costs.data_gaps,
    )


def _run_one(
    college: CollegeRecord,
    profile: StudentProfile,
    provider: CareerProfileProvider,
    assumptions: LifePathAssumptions,
) -> LifePathResult:
    career = provider.resolve(profile.career_goal or DEFAULT_CAREER_TEXT, college.state, college.city)
    result = generate_life_path(college, profile, career, assumptions)
    logger.info(
        "Simulated %s: peak debt %s, break-even age %s",
        college.name,
        result.summary.peak_debt,
        result.summary.break_even_age,
    )
    return result


def simulate(
    request: SimulationRequest,
    provider: Optional[CareerProfileProvider] = None,
    max_workers: Optional[int] = None,
) -> List[LifePathResult]:
    """One result per college, in input order. Colleges share only the provider's cache."""
    request = validate_request(request)
    provider = provider or default_provider()

    def run(college: CollegeRecord) -> LifePathResult:
        return _run_one(college, request.profile, provider, request.assumptions)

    if max_workers and max_workers > 1 and len(request.colleges) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(run, request.colleges))
    return [run(college) for college in request.colleges]


def simulate_life_paths(
    colleges: Sequence[CollegeRecord],
    profile: StudentProfile,
    provider: Optional[CareerProfileProvider] = None,
    assumptions: Optional[LifePathAssumptions] = None,
    max_workers: Optional[int] = None,
) -> List[LifePathResult]:
    request = SimulationRequest(
        colleges=list(colleges), profile=profile, assumptions=assumptions or LifePathAssumptions()
    )
    return simulate(request, provider=provider, max_workers=max_workers)


def timeline_frame(result: LifePathResult) -> pd.DataFrame:
    records = []
    for snap in result.timeline:
        record = asdict(snap)
        record["phase"] = snap.phase.value
        records.append(record)
    columns = ["year", "age", "phase", "description", "earnings", "debt", "savings", "net_worth", "milestone"]
    return pd.DataFrame.from_records(records, columns=columns).set_index("year")


def comparison_frame(results: Sequence[LifePathResult]) -> pd.DataFrame:
    rows = []
    for result in results:
        summary = result.summary
        rows.append(
            {
                "college": result.college.name,
                "location": result.college.location,
                "total_cost": summary.total_cost,
                "aid_adjusted_undergrad": summary.cost_breakdown.aid_adjusted_undergrad,
                "total_debt": summary.total_debt,
                "peak_debt": summary.peak_debt,
                "monthly_payment": summary.monthly_payment,
                "break_even_age": summary.break_even_age,
                "net_worth_at_horizon": summary.net_worth_at_horizon,
                "warning": summary.warning,
            }
        )
    columns = [
        "college", "location", "total_cost", "aid_adjusted_undergrad", "total_debt", "peak_debt",
        "monthly_payment", "break_even_age", "net_worth_at_horizon", "warning",
    ]
    return pd.DataFrame(rows, columns=columns).set_index("college")
