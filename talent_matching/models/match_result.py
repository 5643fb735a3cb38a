from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class ScoreBreakdown(BaseModel):
    """I sei sotto-score (0-100) che compongono lo score finale."""
    model_config = ConfigDict(frozen=True)

    skills_required: int = 0
    skills_desired: int = 0
    experience: int = 0
    mobility: int = 0
    availability: int = 0
    rate: int = 0


class MatchFeedback(BaseModel):
    """Feedback mostrato al talent (email di notifica)."""
    model_config = ConfigDict(frozen=True)

    rate_too_high: bool = False
    rate_range: Optional[str] = None        # es. "400-500€/jour"
    missing_skills: Tuple[str, ...] = ()    # Gap di esperienza
    reason: Optional[str] = None


class MatchBlockers(BaseModel):
    model_config = ConfigDict(frozen=True)

    insufficient_skills: bool = False
    incompatible_rate: bool = False
    insufficient_experience: bool = False
    unavailable: bool = False


class MatchResult(BaseModel):
    """Esito del matching per una coppia (offerta, talent). Immutabile."""
    model_config = ConfigDict(frozen=True)

    talent_id: int
    offer_id: Optional[int] = None
    score: int                              # 0-100
    score_details: ScoreBreakdown
    matched_skills: Tuple[str, ...] = ()    # Skill richieste presenti
    missing_skills: Tuple[str, ...] = ()    # Skill richieste mancanti
    matched_desired_skills: Tuple[str, ...] = ()
    analysis: str = ""
    feedback: MatchFeedback = MatchFeedback()
    blockers: MatchBlockers = MatchBlockers()
    category_bonus: int = 0


class ApplyRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str                              # EXCELLENT, BON, MOYEN, FAIBLE, NON_RECOMMANDE
    can_apply: bool
    message: str


def recommend(result: MatchResult) -> ApplyRecommendation:
    """Consiglio 'candidarsi o no' mostrato al talent sulla pagina offerta."""
    score = result.score
    can_apply = True

    if score >= 80:
        level = "EXCELLENT"
        message = "Votre profil correspond parfaitement à cette mission. Nous vous recommandons fortement de postuler !"
    elif score >= 65:
        level = "BON"
        message = "Votre profil correspond bien à cette mission. Vous avez de bonnes chances d'être retenu."
    elif score >= 50:
        level = "MOYEN"
        message = "Votre profil correspond partiellement. Certains points pourraient être améliorés."
    elif score >= 35:
        level = "FAIBLE"
        message = "Correspondance faible. Vous pouvez postuler mais vos chances sont limitées."
    else:
        level = "NON_RECOMMANDE"
        message = "Ce poste ne correspond pas à votre profil actuel. Nous ne recommandons pas de postuler."
        # Almeno il 30% delle skill richieste
        can_apply = result.score_details.skills_required >= 30

    if result.blockers.unavailable:
        can_apply = False
        message = "Vous ne pouvez pas postuler car vous n'êtes pas disponible actuellement."

    return ApplyRecommendation(level=level, can_apply=can_apply, message=message)
