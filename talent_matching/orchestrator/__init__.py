# orchestrator package
"""Batch orchestration of the matching core."""

from talent_matching.orchestrator.matching_orchestrator import (
    NOTIFY_MIN_SCORE,
    MatchingError,
    MatchingOrchestrator,
    OfferNotFoundError,
    TalentNotFoundError,
    get_best_matches_for_offer,
    match_talents_for_offer,
    update_matches_for_talent,
)

__all__ = [
    "NOTIFY_MIN_SCORE",
    "MatchingError",
    "MatchingOrchestrator",
    "OfferNotFoundError",
    "TalentNotFoundError",
    "get_best_matches_for_offer",
    "match_talents_for_offer",
    "update_matches_for_talent",
]
