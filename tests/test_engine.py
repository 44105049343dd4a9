import pytest

from college_paths.core.engine import (
    Timeline,
    YearSnapshot,
    salary_curve_anchors,
    salary_for_experience,
    simulate_timeline,
)
from college_paths.core.inputs import CareerProfile
from college_paths.core.phases import LifePhase, Phase, schedule_phases


@pytest.fixture
def surgeon():
    return CareerProfile(
        title="Surgeon", median_salary=350_000, salary_low=260_000, salary_high=450_000,
        grad_school_years=4, grad_cost_per_year=50_000, residency_years=6, training_salary=65_000,
    )


def _run(career, sticker=8_000, start_age=18, total_debt=19_200):
    phases = schedule_phases(career, sticker, start_age)
    return simulate_timeline(phases, career, total_debt, start_age)


def test_salary_curve_anchors(technician_career):
    assert salary_curve_anchors(technician_career) == pytest.approx((31_500, 38_250, 45_000, 54_000, 57_000))


def test_salary_curve_interpolates_and_flattens(technician_career):
    assert salary_for_experience(technician_career, 0) == 31_500
    assert salary_for_experience(technician_career, 1) == 34_875
    assert salary_for_experience(technician_career, 3) == 40_500
    assert salary_for_experience(technician_career, 5) == 45_000
    assert salary_for_experience(technician_career, 15) == 55_500
    assert salary_for_experience(technician_career, 40) == 57_000


def test_low_debt_path_numbers(technician_career):
    timeline = _run(technician_career)
    debts = [snap.debt for snap in timeline.snapshots[:4]]
    assert debts == [4_800, 9_600, 14_400, 19_200]

    first_job = timeline.snapshots[4]
    assert first_job.phase is Phase.CAREER
    assert first_job.age == 22
    assert first_job.earnings == 31_500
    assert first_job.debt == 17_280
    assert first_job.savings == 1_845

    assert timeline.break_even_age == 25
    break_even = timeline.snapshots[7]
    assert (break_even.debt, break_even.savings, break_even.net_worth) == (10_925, 11_205, 280)
    assert "Break-even" in break_even.milestone


def test_years_and_ages_are_contiguous(surgeon):
    timeline = _run(surgeon, start_age=20)
    years = [snap.year for snap in timeline.snapshots]
    assert years == list(range(1, len(years) + 1))
    assert all(snap.age == 20 + snap.year - 1 for snap in timeline.snapshots)
    assert timeline.snapshots[-1].age == 37


def test_net_worth_identity_and_non_negative_debt(surgeon, technician_career):
    for career in (surgeon, technician_career):
        for snap in _run(career, total_debt=250_000).snapshots:
            assert snap.net_worth == snap.savings - snap.debt
            assert snap.debt >= 0


def test_undergrad_debt_is_non_decreasing(surgeon):
    undergrad = [snap.debt for snap in _run(surgeon, sticker=60_000).snapshots if snap.phase is Phase.UNDERGRAD]
    assert len(undergrad) == 4
    assert undergrad == sorted(undergrad)
    assert all(snap.earnings is None for snap in _run(surgeon).snapshots[:4])


def test_peak_debt_matches_timeline(surgeon):
    timeline = _run(surgeon, total_debt=219_200)
    assert timeline.peak_debt == max(snap.debt for snap in timeline.snapshots)
    assert timeline.peak_debt > 200_000


def test_residency_earnings_and_debt_relief(surgeon):
    timeline = _run(surgeon)
    residency = [snap for snap in timeline.snapshots if snap.phase is Phase.RESIDENCY]
    assert len(residency) == 6
    assert all(snap.earnings == 65_000 for snap in residency)
    assert all(snap.savings == 0 for snap in residency)
    assert residency[0].description == "Residency year 1"


def test_grad_school_labels(surgeon):
    grad = [snap for snap in _run(surgeon).snapshots if snap.phase is Phase.GRAD_SCHOOL]
    assert [snap.description for snap in grad] == [f"Med school year {n}" for n in range(1, 5)]
    assert grad[0].milestone == "Start grad school"
    assert grad[-1].milestone == "Complete grad school"


def test_stipend_is_reported_as_earnings():
    career = CareerProfile(
        title="Professor", median_salary=84_000, salary_low=60_000, salary_high=120_000,
        grad_school_years=5, grad_stipend=30_000,
    )
    grad = [snap for snap in _run(career).snapshots if snap.phase is Phase.GRAD_SCHOOL]
    assert [snap.earnings for snap in grad] == [30_000] * 5
    assert grad[0].description == "PhD year 1 (stipend)"


def test_break_even_is_first_crossing_only(technician_career):
    timeline = _run(technician_career)
    positives = [snap.age for snap in timeline.snapshots if snap.net_worth > 0]
    assert timeline.break_even_age == positives[0]
    marked = [snap for snap in timeline.snapshots if snap.milestone and "Break-even" in snap.milestone]
    assert len(marked) == 1


def test_break_even_survives_later_dip_below_zero(technician_career):
    career_only = [LifePhase(Phase.CAREER, 1, 3)]
    with_dip = career_only + [LifePhase(Phase.GRAD_SCHOOL, 4, 1, cost_per_year=1_000_000)]

    baseline = simulate_timeline(career_only, technician_career, 0, 18)
    timeline = simulate_timeline(with_dip, technician_career, 0, 18)

    assert timeline.snapshots[0].net_worth > 0
    assert timeline.snapshots[-1].net_worth < 0
    assert timeline.break_even_age == 18
    assert timeline.break_even_age == baseline.break_even_age


def test_break_even_none_when_training_fills_horizon():
    career = CareerProfile(
        title="Physician", median_salary=230_000, salary_low=180_000, salary_high=300_000,
        grad_school_years=8, grad_cost_per_year=50_000, residency_years=6, training_salary=60_000,
    )
    timeline = _run(career, sticker=40_000, total_debt=496_000)
    assert timeline.snapshots[-1].phase is Phase.RESIDENCY
    assert timeline.break_even_age is None
    assert timeline.final_net_worth < 0


def test_debt_free_marked_once(technician_career):
    timeline = _run(technician_career)
    marked = [snap for snap in timeline.snapshots if snap.milestone and "Debt free" in snap.milestone]
    assert len(marked) == 1
    assert marked[0].debt == 0


def test_undergrad_labels(technician_career):
    snaps = _run(technician_career).snapshots
    assert snaps[0].description == "Starting undergrad"
    assert snaps[0].milestone == "Start college"
    assert snaps[1].description == "Year 2 of undergrad"
    assert snaps[3].description == "Senior year, preparing to graduate"
    assert snaps[3].milestone == "Graduate undergrad"
    assert snaps[4].description == "First job"
    assert snaps[4].milestone == "Start full career"


def test_deterministic(surgeon):
    assert _run(surgeon) == _run(surgeon)


def test_empty_timeline_properties():
    timeline = Timeline(snapshots=(), break_even_age=None)
    assert timeline.peak_debt == 0
    assert timeline.final_net_worth is None


def test_snapshot_phase_values_are_display_names():
    snap = YearSnapshot(1, 18, Phase.UNDERGRAD, "Starting undergrad", None, 0, 0, 0)
    assert snap.phase.value == "College"
