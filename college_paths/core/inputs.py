from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

INCOME_BRACKETS = (
    "0-30000",
    "30001-48000",
    "48001-75000",
    "75001-110000",
    "110001-plus",
)

INCOME_LABELS = {
    "0-30000": "under $30k",
    "30001-48000": "$30k-$48k",
    "48001-75000": "$48k-$75k",
    "75001-110000": "$75k-$110k",
    "110001-plus": "over $110k",
}

OWNERSHIP_CLASSES = ("public", "private_nonprofit", "private_forprofit")

DEFAULT_START_AGE = 18
MIN_AGE = 14
MAX_AGE = 99
MAX_COLLEGES = 4
UNDERGRAD_YEARS = 4
HORIZON_YEARS = 17  # years past the starting age covered by a timeline


def round_currency(amount: float) -> int:
    """Round half away from zero to whole currency units."""
    if amount < 0:
        return -int(-amount + 0.5)
    return int(amount + 0.5)


@dataclass(frozen=True)
class StudentProfile:
    income_bracket: str
    home_state: str
    intended_major: str = ""
    career_goal: str = ""
    has_scholarships: bool = False
    scholarship_amount: float = 0.0  # total across all undergrad years
    current_age: int = DEFAULT_START_AGE

    @property
    def scholarship_offset(self) -> float:
        return self.scholarship_amount if self.has_scholarships else 0.0


@dataclass(frozen=True)
class CollegeRecord:
    id: int
    name: str
    city: str
    state: str
    ownership: str = "public"
    tuition_in_state: Optional[float] = None
    tuition_out_of_state: Optional[float] = None
    room_board: Optional[float] = None
    avg_net_price: Optional[float] = None
    net_price_by_income: Mapping[str, Optional[float]] = field(default_factory=dict)
    median_debt: Optional[float] = None
    earnings_6yr: Optional[float] = None
    earnings_10yr: Optional[float] = None

    @property
    def location(self) -> str:
        return f"{self.city}, {self.state}"

    @classmethod
    def from_scorecard_row(cls, row: Mapping[str, Any]) -> "CollegeRecord":
        """Build a record from a flat scorecard row; net-price columns depend on ownership."""
        ownership = row.get("ownership") or "public"
        prefix = "net_price_public" if ownership == "public" else "net_price_private"
        net_price_by_income = {
            bracket: row.get(f"{prefix}_{bracket.replace('-', '_')}") for bracket in INCOME_BRACKETS
        }
        return cls(
            id=row["id"],
            name=row["name"],
            city=row.get("city") or "",
            state=row.get("state") or "",
            ownership=ownership,
            tuition_in_state=row.get("tuition_in_state"),
            tuition_out_of_state=row.get("tuition_out_of_state"),
            room_board=row.get("room_board_on_campus"),
            avg_net_price=row.get("avg_net_price"),
            net_price_by_income=net_price_by_income,
            median_debt=row.get("median_debt"),
            earnings_6yr=row.get("earnings_6yr"),
            earnings_10yr=row.get("earnings_10yr"),
        )


@dataclass(frozen=True)
class CareerProfile:
    title: str
    median_salary: float
    salary_low: float
    salary_high: float
    growth_rate: float = 4.0  # 10-year job growth, percent (5 means 5%)
    grad_school_years: int = 0
    grad_cost_per_year: float = 0.0
    grad_stipend: float = 0.0
    residency_years: int = 0
    training_salary: float = 0.0
    notes: Optional[str] = None
    is_location_adjusted: bool = False

    @property
    def grad_school_cost(self) -> float:
        return self.grad_cost_per_year * self.grad_school_years


FALLBACK_NOTE = "Using estimated data - career lookup failed"


def fallback_career_profile(career_text: str) -> CareerProfile:
    """Documented stand-in when no career data can be resolved."""
    return CareerProfile(
        title=career_text or "General career",
        median_salary=55_000,
        salary_low=40_000,
        salary_high=75_000,
        growth_rate=4.0,
        notes=FALLBACK_NOTE,
    )


@dataclass
class LifePathAssumptions:
    """Modelling constants; overridable, not derived from data."""

    financed_fraction: float = 0.6  # share of sticker price borrowed each undergrad year
    interest_rate: float = 0.05
    savings_rate: float = 0.15
    investment_return: float = 0.07
    payment_acceleration: float = 1.5  # multiple of the standard-plan annual payment
    standard_term_years: int = 10
    residency_payment: float = 5_000
    display_loan_rate: float = 0.075
    display_loan_term_years: int = 10


@dataclass
class SimulationRequest:
    colleges: list
    profile: StudentProfile
    assumptions: LifePathAssumptions = field(default_factory=LifePathAssumptions)
