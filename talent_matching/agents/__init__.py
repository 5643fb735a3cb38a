# agents package
"""Scoring components: category classifier and matching agent."""

from talent_matching.agents.category_classifier import (
    CategoryClassifier,
    can_match,
    classify,
    compatible_categories,
)
from talent_matching.agents.matching_agent import MatchingAgent, score_match, skills_match

__all__ = [
    "CategoryClassifier",
    "can_match",
    "classify",
    "compatible_categories",
    "MatchingAgent",
    "score_match",
    "skills_match",
]
