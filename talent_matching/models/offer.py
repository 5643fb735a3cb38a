from datetime import date
from typing import List, Optional

from pydantic import BaseModel, field_validator, model_validator

from talent_matching.models.enums import Category, Mobility, OfferStatus, parse_enum


class OfferSnapshot(BaseModel):
    """Requisiti di una mission (sola lettura)."""
    id: int
    required_skills: List[str] = []
    desired_skills: List[str] = []
    experience_min: Optional[int] = None
    rate_min: Optional[float] = None        # TJM affiché
    rate_max: Optional[float] = None
    mobility: Mobility = Mobility.FLEXIBLE
    location: Optional[str] = None
    foreign_travel_required: bool = False
    clearance_required: bool = False        # Habilitation
    clearance_type: Optional[str] = None
    start_date: Optional[date] = None
    category: Optional[Category] = None

    @field_validator("required_skills", "desired_skills", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []

    @field_validator("mobility", mode="before")
    @classmethod
    def _parse_mobility(cls, value):
        return parse_enum(Mobility, value, Mobility.FLEXIBLE)

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value):
        return parse_enum(Category, value)


class Offer(BaseModel):
    """Record offerta: metadati di pubblicazione + requisiti."""
    id: int
    uid: str = ""
    slug: str = ""
    title: str = ""
    status: OfferStatus = OfferStatus.PUBLIEE
    client_name: Optional[str] = None
    requirements: OfferSnapshot

    @model_validator(mode="before")
    @classmethod
    def _requirements_id_from_offer(cls, data):
        if isinstance(data, dict) and "id" in data:
            requirements = data.get("requirements")
            if isinstance(requirements, dict):
                data = {**data, "requirements": {**requirements, "id": data["id"]}}
            elif isinstance(requirements, OfferSnapshot) and requirements.id != data["id"]:
                data = {**data, "requirements": requirements.model_copy(update={"id": data["id"]})}
        return data
