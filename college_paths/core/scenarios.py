from __future__ import annotations

from typing import List

from .inputs import CollegeRecord, LifePathAssumptions, StudentProfile


def default_assumptions() -> LifePathAssumptions:
    return LifePathAssumptions()


def base_profile() -> StudentProfile:
    """Provide a reasonable starting point for the UI."""
    return StudentProfile(
        income_bracket="48001-75000",
        home_state="OH",
        intended_major="Computer Science",
        career_goal="software engineer",
        has_scholarships=False,
        scholarship_amount=0,
        current_age=18,
    )


def sample_colleges() -> List[CollegeRecord]:
    return [
        CollegeRecord(
            id=1,
            name="Ohio State University",
            city="Columbus",
            state="OH",
            ownership="public",
            tuition_in_state=12_859,
            tuition_out_of_state=38_365,
            room_board=14_214,
            avg_net_price=20_103,
            net_price_by_income={
                "0-30000": 9_320,
                "30001-48000": 12_041,
                "48001-75000": 17_502,
                "75001-110000": 23_865,
                "110001-plus": 28_211,
            },
            median_debt=20_500,
            earnings_6yr=52_000,
            earnings_10yr=64_000,
        ),
        CollegeRecord(
            id=2,
            name="Kenyon College",
            city="Gambier",
            state="OH",
            ownership="private_nonprofit",
            tuition_in_state=66_930,
            tuition_out_of_state=66_930,
            room_board=15_330,
            avg_net_price=34_188,
            net_price_by_income={
                "0-30000": 12_650,
                "30001-48000": 14_912,
                "48001-75000": 20_873,
                "75001-110000": 31_544,
                "110001-plus": 52_906,
            },
            median_debt=19_000,
            earnings_6yr=47_000,
            earnings_10yr=66_000,
        ),
        CollegeRecord(
            id=3,
            name="University of Michigan",
            city="Ann Arbor",
            state="MI",
            ownership="public",
            tuition_in_state=17_228,
            tuition_out_of_state=58_072,
            room_board=13_194,
            avg_net_price=17_249,
            net_price_by_income={
                "0-30000": 3_513,
                "30001-48000": 5_234,
                "48001-75000": 9_946,
                "75001-110000": 19_215,
                "110001-plus": 30_010,
            },
            median_debt=18_000,
            earnings_6yr=66_000,
            earnings_10yr=80_000,
        ),
        CollegeRecord(
            id=4,
            name="Columbus State Community College",
            city="Columbus",
            state="OH",
            ownership="public",
            tuition_in_state=4_800,
            tuition_out_of_state=10_488,
            room_board=None,
            avg_net_price=6_101,
            net_price_by_income={
                "0-30000": 4_010,
                "30001-48000": 5_212,
                "48001-75000": 7_923,
                "75001-110000": None,
                "110001-plus": None,
            },
            median_debt=None,
            earnings_6yr=33_000,
            earnings_10yr=39_000,
        ),
    ]
