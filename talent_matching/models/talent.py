from datetime import date
from typing import List, Optional

from pydantic import BaseModel, field_validator, model_validator

from talent_matching.models.enums import (
    Availability,
    Category,
    Mobility,
    TalentStatus,
    parse_enum,
)


class TalentSnapshot(BaseModel):
    """Profilo del talent così come lo vede il matching (sola lettura)."""
    id: int
    skills: List[str] = []
    experience_years: int = 0
    rate: Optional[float] = None            # TJM souhaité
    rate_min: Optional[float] = None
    rate_max: Optional[float] = None
    mobility: Mobility = Mobility.FLEXIBLE
    zones: List[str] = []                   # Zone geografiche accettate
    availability: Availability = Availability.IMMEDIATE
    available_from: Optional[date] = None
    nationality: Optional[str] = None
    driving_license: bool = False
    accepts_foreign_travel: bool = False
    certifications: List[str] = []
    languages: List[str] = []
    category: Optional[Category] = None

    @field_validator("skills", "zones", "certifications", "languages", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []

    @field_validator("experience_years", mode="before")
    @classmethod
    def _non_negative(cls, value):
        try:
            return max(0, int(value or 0))
        except (TypeError, ValueError):
            return 0

    @field_validator("mobility", mode="before")
    @classmethod
    def _parse_mobility(cls, value):
        return parse_enum(Mobility, value, Mobility.FLEXIBLE)

    @field_validator("availability", mode="before")
    @classmethod
    def _parse_availability(cls, value):
        return parse_enum(Availability, value, Availability.IMMEDIATE)

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value):
        return parse_enum(Category, value)


class Talent(BaseModel):
    """Record talent del marketplace: contatti + profilo di matching."""
    id: int
    uid: str = ""
    user_id: Optional[int] = None
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    job_title: Optional[str] = None
    photo_url: Optional[str] = None
    status: TalentStatus = TalentStatus.ACTIF
    is_active: bool = True                  # Account utente attivo
    is_verified: bool = True                # Email/account verificati
    profile: TalentSnapshot

    @model_validator(mode="before")
    @classmethod
    def _profile_id_from_talent(cls, data):
        # I match sono indicizzati per talent.id: il profilo deve avere lo stesso id
        if isinstance(data, dict) and "id" in data:
            profile = data.get("profile")
            if isinstance(profile, dict):
                data = {**data, "profile": {**profile, "id": data["id"]}}
            elif isinstance(profile, TalentSnapshot) and profile.id != data["id"]:
                data = {**data, "profile": profile.model_copy(update={"id": data["id"]})}
        return data

    @property
    def is_eligible(self) -> bool:
        """Talent candidabile al matching batch."""
        return (
            self.status == TalentStatus.ACTIF
            and self.is_active
            and self.is_verified
            and bool(self.profile.skills)
        )
