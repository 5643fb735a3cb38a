# models package
"""Data models for the talent/offer matching core."""

from talent_matching.models.enums import (
    Availability,
    Category,
    CATEGORY_LABELS,
    Mobility,
    OfferStatus,
    TalentStatus,
)
from talent_matching.models.talent import Talent, TalentSnapshot
from talent_matching.models.offer import Offer, OfferSnapshot
from talent_matching.models.match_result import (
    ApplyRecommendation,
    MatchBlockers,
    MatchFeedback,
    MatchResult,
    ScoreBreakdown,
    recommend,
)
from talent_matching.models.match_record import MatchRecord, MatchSummary, TalentSummary

__all__ = [
    "Availability",
    "Category",
    "CATEGORY_LABELS",
    "Mobility",
    "OfferStatus",
    "TalentStatus",
    "Talent",
    "TalentSnapshot",
    "Offer",
    "OfferSnapshot",
    "ApplyRecommendation",
    "MatchBlockers",
    "MatchFeedback",
    "MatchResult",
    "ScoreBreakdown",
    "recommend",
    "MatchRecord",
    "MatchSummary",
    "TalentSummary",
]
