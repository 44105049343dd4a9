from __future__ import annotations

import math
from dataclasses import replace
from typing import Any, Sequence

from college_paths.core.errors import InvalidInputError
from college_paths.core.inputs import (
    DEFAULT_START_AGE,
    INCOME_BRACKETS,
    MAX_AGE,
    MAX_COLLEGES,
    MIN_AGE,
    OWNERSHIP_CLASSES,
    CollegeRecord,
    LifePathAssumptions,
    SimulationRequest,
    StudentProfile,
)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidInputError(message)


def coerce_age(value: Any) -> int:
    """Whole-number age clamped to the supported range; missing means the default start age."""
    if value is None or value == "":
        return DEFAULT_START_AGE
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInputError(f"Age must be a number, got {value!r}.") from None
    _require(math.isfinite(number), f"Age must be a finite number, got {value!r}.")
    return max(MIN_AGE, min(MAX_AGE, int(number)))


def validate_profile(profile: StudentProfile) -> StudentProfile:
    _require(
        profile.income_bracket in INCOME_BRACKETS,
        f"Income bracket must be one of {', '.join(INCOME_BRACKETS)}; got {profile.income_bracket!r}.",
    )
    _require(
        profile.scholarship_amount is not None and profile.scholarship_amount >= 0,
        "Scholarship amount cannot be negative.",
    )
    return replace(profile, current_age=coerce_age(profile.current_age))


def validate_college(college: CollegeRecord) -> None:
    _require(bool(college.name), "College name is required.")
    _require(college.ownership in OWNERSHIP_CLASSES, f"Unknown ownership class {college.ownership!r}.")
    for label, value in (
        ("In-state tuition", college.tuition_in_state),
        ("Out-of-state tuition", college.tuition_out_of_state),
        ("Room and board", college.room_board),
        ("Average net price", college.avg_net_price),
        ("Median debt", college.median_debt),
    ):
        _require(value is None or value >= 0, f"{label} cannot be negative.")


def validate_colleges(colleges: Sequence[CollegeRecord]) -> None:
    _require(bool(colleges), "At least one college is required.")
    _require(len(colleges) <= MAX_COLLEGES, f"At most {MAX_COLLEGES} colleges can be compared.")
    for college in colleges:
        validate_college(college)


def validate_assumptions(assumptions: LifePathAssumptions) -> None:
    _require(0 <= assumptions.financed_fraction <= 1, "Financed fraction must be between 0 and 1.")
    _require(0 <= assumptions.savings_rate <= 1, "Savings rate must be between 0 and 1.")
    _require(assumptions.interest_rate >= 0, "Interest rate cannot be negative.")
    _require(assumptions.investment_return > -1, "Investment return must be above -100%.")
    _require(assumptions.payment_acceleration > 0, "Payment acceleration must be positive.")
    _require(assumptions.standard_term_years > 0, "Repayment term must be positive.")
    _require(assumptions.residency_payment >= 0, "Residency payment cannot be negative.")
    _require(assumptions.display_loan_rate >= 0, "Loan rate cannot be negative.")
    _require(assumptions.display_loan_term_years > 0, "Loan term must be positive.")


def validate_request(request: SimulationRequest) -> SimulationRequest:
    validate_colleges(request.colleges)
    validate_assumptions(request.assumptions)
    return replace(request, profile=validate_profile(request.profile))
