from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Tuple

from .classifier import UNSURE_CAREER, classify_career
from .errors import ProviderUnavailableError
from .inputs import CareerProfile, fallback_career_profile

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str, str]


class CareerProfileProvider(Protocol):
    def resolve(self, career_text: str, state: Optional[str] = None, city: Optional[str] = None) -> CareerProfile:
        ...


def cache_key(career_text: str, state: Optional[str] = None, city: Optional[str] = None) -> CacheKey:
    return ((career_text or "").strip().lower(), state or "", city or "")


class CareerProfileCache:
    """Process-lifetime store; entries are never evicted."""

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, CareerProfile] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: CacheKey) -> Optional[CareerProfile]:
        with self._lock:
            profile = self._entries.get(key)
            if profile is None:
                self.misses += 1
            else:
                self.hits += 1
            return profile

    def put(self, key: CacheKey, profile: CareerProfile) -> CareerProfile:
        with self._lock:
            return self._entries.setdefault(key, profile)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


# title, median, low, high, growth %, grad years, grad cost/yr, stipend, residency years, training salary, note
CAREER_TABLE: Mapping[str, Tuple[Any, ...]] = {
    "tech_engineer": ("Software Engineer", 132_000, 98_000, 168_000, 17, 0, 0, 0, 0, 0, None),
    "tech_pm": ("Product Manager", 140_000, 105_000, 185_000, 10, 0, 0, 0, 0, 0, None),
    "data_analyst": ("Data Analyst", 83_000, 62_000, 110_000, 23, 0, 0, 0, 0, 0, None),
    "finance": ("Financial Analyst", 99_000, 75_000, 135_000, 9, 0, 0, 0, 0, 0, "May pursue an MBA later"),
    "accounting": ("Accountant", 79_000, 62_000, 100_000, 4, 0, 0, 0, 0, 0, None),
    "consulting": ("Management Consultant", 100_000, 76_000, 140_000, 11, 0, 0, 0, 0, 0, None),
    "neurosurgery": (
        "Neurosurgeon", 650_000, 450_000, 800_000, 3, 4, 50_000, 0, 7, 70_000,
        "4 years med school + 7 years neurosurgery residency",
    ),
    "surgery": (
        "Surgeon", 350_000, 260_000, 450_000, 3, 4, 50_000, 0, 6, 65_000,
        "4 years med school + 5-7 years surgical residency",
    ),
    "medicine": (
        "Physician", 230_000, 180_000, 300_000, 3, 4, 50_000, 0, 4, 60_000,
        "4 years med school + 4 years residency",
    ),
    "dentistry": ("Dentist", 170_000, 120_000, 220_000, 4, 4, 70_000, 0, 0, 0, "4 years dental school"),
    "pharmacy": ("Pharmacist", 132_000, 115_000, 150_000, 3, 4, 40_000, 0, 0, 0, "4 years pharmacy school"),
    "veterinary": ("Veterinarian", 110_000, 80_000, 140_000, 19, 4, 45_000, 0, 0, 0, "4 years vet school"),
    "optometry": ("Optometrist", 125_000, 95_000, 155_000, 9, 4, 45_000, 0, 0, 0, "4 years optometry school"),
    "therapy": ("Physical Therapist", 97_000, 80_000, 115_000, 14, 3, 27_000, 0, 0, 0, "Doctorate in PT/OT/SLP"),
    "healthcare": ("Health Technologist", 60_000, 45_000, 78_000, 7, 0, 0, 0, 0, 0, None),
    "healthcare_tech": ("Health Technician", 48_000, 38_000, 60_000, 7, 0, 0, 0, 0, 0, "Certificate or associate degree"),
    "nursing": ("Registered Nurse", 86_000, 70_000, 105_000, 6, 0, 0, 0, 0, 0, None),
    "law": ("Lawyer", 135_000, 85_000, 200_000, 8, 3, 48_000, 0, 0, 0, "3 years law school"),
    "academia": (
        "Postsecondary Teacher", 84_000, 60_000, 120_000, 8, 5, 0, 30_000, 0, 0,
        "5+ years PhD (usually funded)",
    ),
    "teaching": ("Teacher", 62_000, 50_000, 78_000, 1, 0, 0, 0, 0, 0, None),
    "social_work": ("Social Worker", 55_000, 44_000, 68_000, 7, 0, 0, 0, 0, 0, "BSW or MSW path"),
    "creative": ("Artist", 50_000, 32_000, 75_000, 4, 0, 0, 0, 0, 0, "Freelance or entry-level creative work"),
    "media": ("Media Professional", 57_000, 40_000, 85_000, 4, 0, 0, 0, 0, 0, None),
    "entrepreneur": (
        "Entrepreneur", 70_000, 30_000, 150_000, 5, 0, 0, 0, 0, 0,
        "Variable - could be $0 or millions",
    ),
    "government": ("Government Analyst", 70_000, 55_000, 95_000, 3, 0, 0, 0, 0, 0, None),
    "trades": ("Skilled Tradesperson", 60_000, 45_000, 80_000, 6, 0, 0, 0, 0, 0, "Apprenticeship or trade school path"),
    "first_responder": ("First Responder", 70_000, 52_000, 90_000, 3, 0, 0, 0, 0, 0, None),
    "military": ("Military Service Member", 55_000, 40_000, 75_000, 1, 0, 0, 0, 0, 0, None),
    "aviation": ("Airline Pilot", 120_000, 75_000, 200_000, 6, 1, 50_000, 0, 0, 0, "Pilot training and aviation"),
    "logistics": ("Logistics Coordinator", 55_000, 42_000, 70_000, 5, 0, 0, 0, 0, 0, None),
    "real_estate": ("Real Estate Agent", 60_000, 35_000, 100_000, 3, 0, 0, 0, 0, 0, None),
    "sales": ("Sales Representative", 70_000, 48_000, 100_000, 3, 0, 0, 0, 0, 0, None),
    "corporate": ("Operations Specialist", 65_000, 50_000, 85_000, 6, 0, 0, 0, 0, 0, None),
    "marketing": ("Marketing Specialist", 70_000, 52_000, 95_000, 8, 0, 0, 0, 0, 0, None),
    "architecture": (
        "Architect", 90_000, 70_000, 115_000, 5, 2, 30_000, 0, 0, 0,
        "Architecture degree + internship",
    ),
    "hospitality": ("Hospitality Manager", 50_000, 36_000, 65_000, 6, 0, 0, 0, 0, 0, None),
    "fitness": ("Fitness Trainer", 46_000, 32_000, 60_000, 14, 0, 0, 0, 0, 0, None),
    "beauty": ("Cosmetologist", 36_000, 28_000, 48_000, 8, 1, 10_000, 0, 0, 0, "Cosmetology license"),
    "agriculture": ("Agricultural Manager", 55_000, 40_000, 72_000, 1, 0, 0, 0, 0, 0, None),
    "nonprofit": ("Nonprofit Program Manager", 58_000, 44_000, 75_000, 5, 0, 0, 0, 0, 0, None),
    UNSURE_CAREER: ("General Career", 55_000, 40_000, 75_000, 4, 0, 0, 0, 0, 0, "Using general earnings data"),
}


def _profile_from_row(row: Tuple[Any, ...]) -> CareerProfile:
    title, median, low, high, growth, grad_years, grad_cost, stipend, residency_years, training_salary, notes = row
    return CareerProfile(
        title=title,
        median_salary=median,
        salary_low=low,
        salary_high=high,
        growth_rate=growth,
        grad_school_years=grad_years,
        grad_cost_per_year=grad_cost,
        grad_stipend=stipend,
        residency_years=residency_years,
        training_salary=training_salary,
        notes=notes,
    )


class StaticCareerProfileSource:
    """National figures from a built-in table; location is ignored."""

    def __init__(self, table: Optional[Mapping[str, Tuple[Any, ...]]] = None):
        self.table = table if table is not None else CAREER_TABLE

    def resolve(self, career_text: str, state: Optional[str] = None, city: Optional[str] = None) -> CareerProfile:
        tag = classify_career(career_text)
        row = self.table.get(tag) or self.table.get(UNSURE_CAREER)
        if row is None:
            raise ProviderUnavailableError(f"No career data for '{career_text}'")
        return _profile_from_row(row)


CAREER_PROMPT = """You are a career salary data expert with knowledge of BLS occupational data.

Given the career: "{career}" {location}

Return ONLY a JSON object with salary and career path data, adjusted for location:

{{
  "title": "standardized job title",
  "medianSalary": annual median salary as number,
  "salaryLow": 25th percentile salary as number,
  "salaryHigh": 75th percentile salary as number,
  "growthRate": 10-year job growth rate as number (e.g., 5 for 5%),
  "requiresGradSchool": true/false,
  "gradSchoolYears": years of grad school if required (0 if not),
  "gradCostPerYear": annual grad school cost if required (0 if not),
  "gradStipend": annual stipend during grad school (0 if none),
  "residencyYears": medical/clinical residency years (0 for non-medical),
  "residencySalary": annual residency salary if applicable (0 if not),
  "notes": "brief note about career path or null"
}}"""


def location_context(state: Optional[str], city: Optional[str]) -> str:
    if city and state:
        return f"in {city}, {state}"
    if state:
        return f"in {state}"
    return "in the United States"


def strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_career_payload(text: str, career_text: str) -> CareerProfile:
    """Parse a model reply into a profile, defaulting any missing field."""
    try:
        data = json.loads(strip_code_fence(text))
    except ValueError as exc:
        raise ProviderUnavailableError(f"Unparseable career data for '{career_text}'") from exc
    if not isinstance(data, dict):
        raise ProviderUnavailableError(f"Career data for '{career_text}' is not an object")

    median = data.get("medianSalary") or 50_000
    grad_years = int(data.get("gradSchoolYears") or 0)
    if data.get("requiresGradSchool") is False:
        grad_years = 0
    return CareerProfile(
        title=data.get("title") or career_text,
        median_salary=median,
        salary_low=data.get("salaryLow") or median * 0.7,
        salary_high=data.get("salaryHigh") or median * 1.4,
        growth_rate=data["growthRate"] if data.get("growthRate") is not None else 4.0,
        grad_school_years=grad_years,
        grad_cost_per_year=data.get("gradCostPerYear") or 0,
        grad_stipend=data.get("gradStipend") or 0,
        residency_years=int(data.get("residencyYears") or 0),
        training_salary=data.get("residencySalary") or 0,
        notes=data.get("notes") or None,
        is_location_adjusted=True,
    )


class CompletionCareerProfileSource:
    """Asks a text-completion backend (e.g. an LLM client) for career data."""

    def __init__(self, complete: Callable[[str], str]):
        self.complete = complete

    def resolve(self, career_text: str, state: Optional[str] = None, city: Optional[str] = None) -> CareerProfile:
        prompt = CAREER_PROMPT.format(career=career_text, location=location_context(state, city))
        try:
            reply = self.complete(prompt)
        except Exception as exc:
            raise ProviderUnavailableError(f"Career lookup failed for '{career_text}': {exc}") from exc
        return parse_career_payload(reply, career_text)


class CachedCareerProfileProvider:
    """Caches resolved profiles by (text, state, city) and absorbs source failures."""

    def __init__(self, source: CareerProfileProvider, cache: Optional[CareerProfileCache] = None):
        self.source = source
        self.cache = cache if cache is not None else CareerProfileCache()

    def resolve(self, career_text: str, state: Optional[str] = None, city: Optional[str] = None) -> CareerProfile:
        key = cache_key(career_text, state, city)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Career cache hit for %s", key)
            return cached

        logger.debug("Career cache miss for %s", key)
        try:
            profile = self.source.resolve(career_text, state, city)
        except Exception as exc:  # any source failure degrades to the fallback profile
            logger.warning("Career lookup failed for %r, using fallback profile: %s", career_text, exc)
            return fallback_career_profile(career_text)
        return self.cache.put(key, profile)


def default_provider() -> CachedCareerProfileProvider:
    return CachedCareerProfileProvider(StaticCareerProfileSource())
