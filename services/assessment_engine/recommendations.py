import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .models import RecommendationRule

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_RECOMMENDATION = "General Career Guidance Recommended"

# Base career suggestions per assessment type, best fit first.
CAREER_SUGGESTIONS: Dict[str, List[str]] = {
    "career-aptitude": ["Software Engineer", "Data Analyst", "Project Manager", "Business Analyst"],
    "interest-profiler": ["Healthcare Professional", "Environmental Scientist", "Creative Director", "Social Worker"],
    "personality-assessment": ["Research Scientist", "Counselor", "Marketing Manager", "Financial Advisor"],
}

LEADERSHIP_THRESHOLD = 80
ESTABLISHED_THRESHOLD = 60


class RecommendationMapper:
    """
    Maps a normalized score onto the first configured tier whose inclusive range
    contains it. Gaps, an empty rule list, or rules without a score range fall
    back to ``fallback``.
    """

    def __init__(self, rules: Sequence[RecommendationRule], fallback: str = DEFAULT_FALLBACK_RECOMMENDATION):
        self.rules = tuple(rules)
        self.fallback = fallback

    def recommend(self, normalized_score: int) -> str:
        for rule in self.rules:
            if rule.contains(normalized_score):
                return rule.recommendation
        logger.debug(f"No recommendation tier covers score {normalized_score}; using fallback.")
        return self.fallback


def recommend(rules: Sequence[RecommendationRule], fallback: str, normalized_score: int) -> str:
    return RecommendationMapper(rules, fallback).recommend(normalized_score)


def career_suggestions(assessment_type: Optional[str], score: int) -> List[str]:
    """Score-tiered career suggestions for an assessment type."""
    base = CAREER_SUGGESTIONS.get(assessment_type or "", [DEFAULT_FALLBACK_RECOMMENDATION])

    if score >= LEADERSHIP_THRESHOLD:
        return [f"Leadership roles in {base[0]}", *base]
    if score >= ESTABLISHED_THRESHOLD:
        return list(base)
    return [f"Entry-level positions in {base[0]}", "Training programs recommended"]


def combine_recommendations(*groups: Iterable[str]) -> List[str]:
    """Concatenates recommendation lists, dropping repeats but keeping first-seen order."""
    combined: List[str] = []
    for group in groups:
        for item in group:
            if item not in combined:
                combined.append(item)
    return combined
