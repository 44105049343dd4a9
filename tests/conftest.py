import pytest

from college_paths.core.inputs import CareerProfile, CollegeRecord, StudentProfile


class StubProvider:
    """Returns a fixed profile and records every lookup."""

    def __init__(self, profile: CareerProfile):
        self.profile = profile
        self.calls = []

    def resolve(self, career_text, state=None, city=None):
        self.calls.append((career_text, state, city))
        return self.profile


class FailingSource:
    def __init__(self):
        self.calls = 0

    def resolve(self, career_text, state=None, city=None):
        self.calls += 1
        raise RuntimeError("lookup backend down")


@pytest.fixture
def technician_career():
    return CareerProfile(title="Technician", median_salary=45_000, salary_low=35_000, salary_high=60_000)


@pytest.fixture
def cheap_college():
    return CollegeRecord(
        id=10,
        name="Lakeside Community College",
        city="Toledo",
        state="OH",
        tuition_in_state=3_000,
        tuition_out_of_state=7_000,
        room_board=5_000,
        avg_net_price=8_000,
        net_price_by_income={"0-30000": 8_000},
    )


@pytest.fixture
def sparse_college():
    return CollegeRecord(id=11, name="Unlisted College", city="Nowhere", state="NV")


@pytest.fixture
def low_income_profile():
    return StudentProfile(
        income_bracket="0-30000",
        home_state="OH",
        intended_major="Mathematics",
        career_goal="community college technician",
        current_age=18,
    )
