"""Socio-economic classification - modified Kuppuswamy scale"""

from typing import Any, Dict, List, Tuple
from history_gateway.domain.models import SocioEconomicAssessment, SocioEconomicTier
from history_gateway.utils.text_utils import parse_non_negative_int

EDUCATION_SCORES: Dict[str, int] = {
    "Professional/Post-graduate": 7,
    "Graduate": 6,
    "Diploma/Intermediate": 4,
    "High School": 3,
    "Middle School": 2,
    "Primary School": 1,
    "Illiterate": 0,
}

# Unemployed is an explicit choice and scores 1; unset falls through to 0
OCCUPATION_SCORES: Dict[str, int] = {
    "Professional": 10,
    "Semi-professional": 6,
    "Clerical/Shop-owner/Farmer": 5,
    "Skilled Worker": 4,
    "Semi-skilled Worker": 3,
    "Unskilled Worker": 2,
    "Unemployed": 1,
}

# (minimum monthly family income, score), ascending; CPI-adjusted 2023/2024 values
INCOME_BREAKPOINTS: List[Tuple[int, int]] = [
    (0, 0),
    (1, 1),
    (3723, 2),
    (9343, 3),
    (18422, 4),
    (27633, 6),
    (36844, 10),
    (73688, 12),
]

# (minimum total score, tier), evaluated highest-first
TIER_THRESHOLDS: List[Tuple[int, SocioEconomicTier]] = [
    (26, "Upper"),
    (16, "Upper-Middle"),
    (11, "Lower-Middle"),
    (5, "Upper-Lower"),
]

LOWEST_TIER: SocioEconomicTier = "Lower"


def education_score(education: str) -> int:
    return EDUCATION_SCORES.get(education, 0)


def occupation_score(occupation: str) -> int:
    return OCCUPATION_SCORES.get(occupation, 0)


def income_score(monthly_income: Any) -> int:
    """Largest score whose breakpoint is at or below the income"""
    income = parse_non_negative_int(monthly_income)
    score = 0
    for minimum, points in INCOME_BREAKPOINTS:
        if income >= minimum:
            score = points
    return score


def tier_for_total(total_score: int) -> SocioEconomicTier:
    """
    Map total score to tier.

    Score bands (lower bound inclusive):
    - 26+:   Upper
    - 16-25: Upper-Middle
    - 11-15: Lower-Middle
    - 5-10:  Upper-Lower
    - 0-4:   Lower
    """
    for threshold, tier in TIER_THRESHOLDS:
        if total_score >= threshold:
            return tier
    return LOWEST_TIER


def assess(education: str, occupation: str, monthly_income: Any) -> SocioEconomicAssessment:
    """
    Score education, occupation and income and derive the tier.

    Never raises: unrecognized categories and unparsable income score 0.
    """
    edu = education_score(education)
    occ = occupation_score(occupation)
    inc = income_score(monthly_income)
    total = edu + occ + inc

    return SocioEconomicAssessment(
        education_score=edu,
        occupation_score=occ,
        income_score=inc,
        total_score=total,
        tier=tier_for_total(total),
    )


def classify(education: str, occupation: str, monthly_income: Any) -> SocioEconomicTier:
    """Main entry point: socio-economic tier for the given triple"""
    return assess(education, occupation, monthly_income).tier
