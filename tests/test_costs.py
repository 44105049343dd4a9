from dataclasses import replace

import pytest

from college_paths.core.costs import (
    aid_adjusted_price,
    estimate_costs,
    is_in_state,
    sticker_price,
    tuition_per_year,
)
from college_paths.core.inputs import CareerProfile, CollegeRecord, LifePathAssumptions


@pytest.fixture
def law_career():
    return CareerProfile(
        title="Lawyer", median_salary=135_000, salary_low=85_000, salary_high=200_000,
        grad_school_years=3, grad_cost_per_year=48_000,
    )


def test_in_state_is_case_insensitive(cheap_college, low_income_profile):
    assert is_in_state(replace(low_income_profile, home_state="oh"), cheap_college)
    assert not is_in_state(replace(low_income_profile, home_state="MI"), cheap_college)


def test_sticker_price_by_residency(cheap_college):
    assert sticker_price(cheap_college, in_state=True) == 8_000
    assert sticker_price(cheap_college, in_state=False) == 12_000
    assert sticker_price(cheap_college, in_state=True, include_room_board=False) == 3_000


def test_missing_fields_use_fallbacks(sparse_college):
    assert sticker_price(sparse_college, in_state=True) == 30_000
    assert sticker_price(sparse_college, in_state=False) == 45_000


def test_missing_tuition_borrows_other_residency_rate(cheap_college):
    college = replace(cheap_college, tuition_in_state=None)
    assert tuition_per_year(college, in_state=True) == 7_000


def test_aid_adjusted_price_prefers_bracket(cheap_college):
    college = replace(cheap_college, net_price_by_income={"0-30000": 4_500, "30001-48000": None}, avg_net_price=9_000)
    assert aid_adjusted_price(college, "0-30000") == 4_500
    assert aid_adjusted_price(college, "30001-48000") == 9_000
    assert aid_adjusted_price(replace(college, avg_net_price=None), "30001-48000") is None


def test_low_debt_estimate(cheap_college, low_income_profile, technician_career):
    costs = estimate_costs(cheap_college, low_income_profile, technician_career)
    assert costs.in_state
    assert costs.undergrad_cost_with_room_board == 32_000
    assert costs.undergrad_cost_tuition_only == 12_000
    assert costs.undergrad_debt == 19_200
    assert costs.aid_adjusted_undergrad == 32_000
    assert costs.total_debt == 19_200
    assert costs.total_cost == 32_000


def test_no_aid_data_stays_none(sparse_college, low_income_profile, technician_career):
    costs = estimate_costs(sparse_college, low_income_profile, technician_career)
    assert costs.aid_adjusted_per_year is None
    assert costs.aid_adjusted_undergrad is None


def test_scholarship_reduces_cost_and_floors_at_zero(cheap_college, low_income_profile, technician_career):
    profile = replace(low_income_profile, has_scholarships=True, scholarship_amount=2_000)
    assert estimate_costs(cheap_college, profile, technician_career).adjusted_undergrad_cost == 30_000

    generous = replace(profile, scholarship_amount=1_000_000)
    costs = estimate_costs(cheap_college, generous, technician_career)
    assert costs.adjusted_undergrad_cost == 0
    assert costs.undergrad_debt == 0


def test_scholarship_ignored_without_flag(cheap_college, low_income_profile, technician_career):
    profile = replace(low_income_profile, has_scholarships=False, scholarship_amount=5_000)
    assert estimate_costs(cheap_college, profile, technician_career).adjusted_undergrad_cost == 32_000


def test_scholarship_is_a_four_year_total(cheap_college, low_income_profile, technician_career):
    profile = replace(low_income_profile, has_scholarships=True, scholarship_amount=8_000)
    costs = estimate_costs(cheap_college, profile, technician_career)
    assert costs.undergrad_cost_with_room_board == 32_000
    # subtracted once, not once per year
    assert costs.adjusted_undergrad_cost == 24_000


def test_reported_median_debt_wins(cheap_college, low_income_profile, technician_career):
    college = replace(cheap_college, median_debt=12_345)
    assert estimate_costs(college, low_income_profile, technician_career).undergrad_debt == 12_345


def test_financed_fraction_is_configurable(cheap_college, low_income_profile, technician_career):
    costs = estimate_costs(
        cheap_college, low_income_profile, technician_career, LifePathAssumptions(financed_fraction=0.5)
    )
    assert costs.undergrad_debt == 16_000


def test_grad_school_adds_to_cost_and_debt(cheap_college, low_income_profile, law_career):
    costs = estimate_costs(cheap_college, low_income_profile, law_career)
    assert costs.grad_school_cost == 144_000
    assert costs.total_debt == 19_200 + 144_000
    assert costs.total_cost == 32_000 + 144_000


def test_data_gaps_are_reported(sparse_college, low_income_profile, technician_career):
    costs = estimate_costs(sparse_college, low_income_profile, technician_career)
    assert costs.data_gaps == ("tuition_out_of_state", "room_board", "median_debt", "net_price")


def test_complete_record_has_no_gaps(cheap_college, low_income_profile, technician_career):
    college = replace(cheap_college, median_debt=10_000)
    assert estimate_costs(college, low_income_profile, technician_career).data_gaps == ()
