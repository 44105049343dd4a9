import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from college_paths.core.careers import (
    CachedCareerProfileProvider,
    CareerProfileCache,
    CompletionCareerProfileSource,
    StaticCareerProfileSource,
    cache_key,
    default_provider,
    location_context,
    parse_career_payload,
    strip_code_fence,
)
from college_paths.core.errors import ProviderUnavailableError
from college_paths.core.inputs import FALLBACK_NOTE, CareerProfile
from conftest import FailingSource


class CountingSource:
    def __init__(self):
        self.calls = 0

    def resolve(self, career_text, state=None, city=None):
        self.calls += 1
        return CareerProfile(title=career_text.title(), median_salary=70_000, salary_low=50_000, salary_high=90_000)


def test_cache_key_normalizes_text_only():
    assert cache_key("  Software Engineer ", "OH", None) == ("software engineer", "OH", "")
    assert cache_key("nurse") == ("nurse", "", "")


def test_cached_provider_counts_hits_and_misses():
    source = CountingSource()
    provider = CachedCareerProfileProvider(source)

    first = provider.resolve("Data Analyst", "OH", "Columbus")
    second = provider.resolve("  data analyst ", "OH", "Columbus")

    assert first is second
    assert source.calls == 1
    assert provider.cache.misses == 1
    assert provider.cache.hits == 1
    assert ("data analyst", "OH", "Columbus") in provider.cache


def test_location_is_part_of_the_key():
    source = CountingSource()
    provider = CachedCareerProfileProvider(source)
    provider.resolve("teacher", "OH", "Columbus")
    provider.resolve("teacher", "MI", "Ann Arbor")
    assert source.calls == 2
    assert len(provider.cache) == 2


def test_failure_returns_fallback_and_is_not_cached():
    source = FailingSource()
    provider = CachedCareerProfileProvider(source)

    profile = provider.resolve("astronaut", "TX", "Houston")

    assert profile.median_salary == 55_000
    assert profile.salary_low == 40_000
    assert profile.salary_high == 75_000
    assert profile.growth_rate == 4.0
    assert profile.grad_school_years == 0
    assert profile.notes == FALLBACK_NOTE
    assert len(provider.cache) == 0

    provider.resolve("astronaut", "TX", "Houston")
    assert source.calls == 2


def test_shared_cache_under_concurrent_lookups():
    provider = CachedCareerProfileProvider(CountingSource(), cache=CareerProfileCache())
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: provider.resolve("pharmacist", "OH", "Columbus"), range(32)))
    assert len(provider.cache) == 1
    assert all(result is results[0] for result in results)
    assert provider.cache.hits + provider.cache.misses == 32


def test_static_source_neurosurgeon():
    profile = StaticCareerProfileSource().resolve("brain surgeon")
    assert profile.title == "Neurosurgeon"
    assert profile.grad_school_years == 4
    assert profile.grad_school_cost == 200_000
    assert profile.residency_years == 7
    assert profile.training_salary == 70_000
    assert not profile.is_location_adjusted


def test_static_source_unknown_text_uses_general_row():
    profile = StaticCareerProfileSource().resolve("professional kite flyer")
    assert profile.title == "General Career"
    assert profile.median_salary == 55_000


def test_static_source_with_empty_table_raises():
    with pytest.raises(ProviderUnavailableError):
        StaticCareerProfileSource(table={}).resolve("nurse")


def test_default_provider_wraps_static_table():
    provider = default_provider()
    assert provider.resolve("registered nurse").title == "Registered Nurse"
    assert provider.resolve("Registered Nurse").title == "Registered Nurse"
    assert provider.cache.hits == 1


def test_strip_code_fence():
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('```\n{"a": 1}```') == '{"a": 1}'
    assert strip_code_fence('  {"a": 1} ') == '{"a": 1}'


def test_location_context():
    assert location_context("OH", "Columbus") == "in Columbus, OH"
    assert location_context("OH", None) == "in OH"
    assert location_context(None, None) == "in the United States"


def test_completion_source_parses_fenced_reply():
    prompts = []
    payload = {
        "title": "Registered Nurse",
        "medianSalary": 81_000,
        "salaryLow": 68_000,
        "salaryHigh": 97_000,
        "growthRate": 6,
        "requiresGradSchool": False,
        "gradSchoolYears": 0,
        "notes": None,
    }

    def complete(prompt):
        prompts.append(prompt)
        return "```json\n" + json.dumps(payload) + "\n```"

    profile = CompletionCareerProfileSource(complete).resolve("nurse", "OH", "Columbus")

    assert "in Columbus, OH" in prompts[0]
    assert '"nurse"' in prompts[0]
    assert profile.title == "Registered Nurse"
    assert profile.median_salary == 81_000
    assert profile.growth_rate == 6
    assert profile.notes is None
    assert profile.is_location_adjusted


def test_payload_defaults():
    profile = parse_career_payload('{"title": "Widget Maker"}', "widget maker")
    assert profile.median_salary == 50_000
    assert profile.salary_low == pytest.approx(35_000)
    assert profile.salary_high == pytest.approx(70_000)
    assert profile.growth_rate == 4.0
    assert profile.grad_school_years == 0


def test_payload_without_grad_school_ignores_years():
    text = json.dumps({"title": "Chef", "medianSalary": 60_000, "requiresGradSchool": False, "gradSchoolYears": 3})
    assert parse_career_payload(text, "chef").grad_school_years == 0


def test_payload_zero_growth_is_kept():
    text = json.dumps({"title": "Farmer", "medianSalary": 60_000, "growthRate": 0})
    assert parse_career_payload(text, "farmer").growth_rate == 0


@pytest.mark.parametrize("reply", ["not json at all", "[1, 2, 3]"])
def test_bad_payload_raises(reply):
    with pytest.raises(ProviderUnavailableError):
        parse_career_payload(reply, "chef")


def test_completion_failure_is_wrapped_and_absorbed():
    def complete(prompt):
        raise TimeoutError("model timed out")

    source = CompletionCareerProfileSource(complete)
    with pytest.raises(ProviderUnavailableError):
        source.resolve("chef")

    profile = CachedCareerProfileProvider(source).resolve("chef")
    assert profile.notes == FALLBACK_NOTE
    assert profile.title == "chef"
