import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from talent_matching.models.enums import Availability
from talent_matching.models.match_result import MatchResult, ScoreBreakdown
from talent_matching.models.talent import Talent


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MatchRecord(BaseModel):
    """
    Riga persistita per la coppia (offerta, talent).

    `score_details` resta un record a campi fissi; la serializzazione JSON
    avviene solo al confine con lo storage (`to_row`).
    """
    offer_id: int
    talent_id: int
    score: int
    score_details: ScoreBreakdown
    matched_skills: List[str] = []
    missing_skills: List[str] = []
    notes: str = ""

    # Bookkeeping notifica
    notification_sent: bool = False
    notification_sent_at: Optional[datetime] = None
    rate_too_high: bool = False
    insufficient_experience: bool = False
    feedback_rate: Optional[str] = None
    feedback_experience: Optional[str] = None

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @property
    def key(self) -> tuple:
        return (self.offer_id, self.talent_id)

    @classmethod
    def from_result(cls, offer_id: int, result: MatchResult) -> "MatchRecord":
        # Le skill desiderate matchate finiscono anch'esse tra le "matchees"
        matched = list(result.matched_skills) + [
            s for s in result.matched_desired_skills if s not in result.matched_skills
        ]
        return cls(
            offer_id=offer_id,
            talent_id=result.talent_id,
            score=result.score,
            score_details=result.score_details,
            matched_skills=matched,
            missing_skills=list(result.missing_skills),
            notes=result.analysis,
        )

    def to_row(self) -> Dict[str, Any]:
        """Appiattisce il record per export CSV."""
        return {
            "offer_id": self.offer_id,
            "talent_id": self.talent_id,
            "score": self.score,
            "score_details_json": json.dumps(self.score_details.model_dump(), separators=(",", ":")),
            "matched_skills_json": json.dumps(self.matched_skills, ensure_ascii=False),
            "missing_skills_json": json.dumps(self.missing_skills, ensure_ascii=False),
            "notes": self.notes,
            "notification_sent": self.notification_sent,
            "notification_sent_at": self.notification_sent_at.isoformat() if self.notification_sent_at else "",
            "rate_too_high": self.rate_too_high,
            "insufficient_experience": self.insufficient_experience,
            "feedback_rate": self.feedback_rate or "",
            "feedback_experience": self.feedback_experience or "",
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class TalentSummary(BaseModel):
    id: int
    uid: str = ""
    first_name: str = ""
    last_name: str = ""
    job_title: Optional[str] = None
    skills: List[str] = []
    experience_years: int = 0
    rate: Optional[float] = None
    availability: Availability = Availability.IMMEDIATE
    photo_url: Optional[str] = None

    @classmethod
    def from_talent(cls, talent: Talent) -> "TalentSummary":
        profile = talent.profile
        return cls(
            id=talent.id,
            uid=talent.uid,
            first_name=talent.first_name,
            last_name=talent.last_name,
            job_title=talent.job_title,
            skills=list(profile.skills),
            experience_years=profile.experience_years,
            rate=profile.rate,
            availability=profile.availability,
            photo_url=talent.photo_url,
        )


class MatchSummary(BaseModel):
    """Vista leggera per la shortlist di un'offerta."""
    talent: TalentSummary
    score: int
    matched_skills: List[str] = []
    missing_skills: List[str] = []
