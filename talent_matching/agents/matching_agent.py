"""
Matching Agent
Calcola il match deterministico tra un talent e un'offerta di mission.

Responsabilità:
- Confronta skill richieste/desiderate con normalizzazione e sinonimi
- Calcola i sei sotto-score (skill, esperienza, TJM, disponibilità, mobilità)
- Applica i tetti di squalifica (skill insufficienti, TJM, esperienza, indisponibile)
- Produce feedback strutturato per la notifica al talent
"""

import math
from typing import List, Optional, Sequence, Tuple

from talent_matching.agents.category_classifier import CategoryClassifier
from talent_matching.models.enums import Availability, Mobility
from talent_matching.models.match_result import (
    MatchBlockers,
    MatchFeedback,
    MatchResult,
    ScoreBreakdown,
)
from talent_matching.models.offer import OfferSnapshot
from talent_matching.models.talent import TalentSnapshot
from talent_matching.services.logging_utils import log_section, print_with_prefix
from talent_matching.services.skill_dictionary import SkillDictionary, get_skill_dictionary

UNAVAILABLE_REASON = "candidate currently unavailable"


def round_half_up(value: float) -> int:
    """Arrotondamento commerciale (12.5 -> 13), non quello bancario di round()."""
    return int(math.floor(value + 0.5))


def _has_rate(value: Optional[float]) -> bool:
    return value is not None and value > 0


def _format_rate(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


class MatchingAgent:
    """
    Agente che calcola il match tra un talent e i requisiti di un'offerta.

    LOGICA DI MATCHING:
    1. Skill richieste (equivalenza: uguaglianza, sottostringa, sinonimi)
    2. Skill desiderate
    3. Esperienza, TJM, disponibilità, mobilità
    4. Compatibilità di categoria (tetto mobilità / bonus sovra-qualifica)
    5. Somma pesata + tetti di squalifica
    6. Analisi testuale e feedback

    Il calcolo è puro: stessi input, stesso MatchResult.
    """

    def __init__(
        self,
        dictionary: Optional[SkillDictionary] = None,
        classifier: Optional[CategoryClassifier] = None,
        weight_skills_required: float = 0.50,
        weight_skills_desired: float = 0.10,
        weight_experience: float = 0.15,
        weight_rate: float = 0.10,
        weight_availability: float = 0.08,
        weight_mobility: float = 0.07,
        over_qualification_bonus: int = 3,
        verbose: bool = False
    ):
        self.weight_skills_required = weight_skills_required
        self.weight_skills_desired = weight_skills_desired
        self.weight_experience = weight_experience
        self.weight_rate = weight_rate
        self.weight_availability = weight_availability
        self.weight_mobility = weight_mobility
        self.over_qualification_bonus = over_qualification_bonus
        self.verbose = verbose

        self._dictionary = dictionary
        self._classifier = classifier

    @property
    def dictionary(self) -> SkillDictionary:
        if self._dictionary is None:
            self._dictionary = get_skill_dictionary()
        return self._dictionary

    @property
    def classifier(self) -> CategoryClassifier:
        if self._classifier is None:
            self._classifier = CategoryClassifier(dictionary=self.dictionary)
        return self._classifier

    # ═══════════════════════════════════════════════════════════════
    # Equivalenza skill
    # ═══════════════════════════════════════════════════════════════

    def skills_match(self, a: Optional[str], b: Optional[str]) -> bool:
        """
        Due skill sono equivalenti se, normalizzate, sono uguali, una contiene
        l'altra, oppure stanno nello stesso gruppo di sinonimi.

        Simmetrica ma non transitiva: "React" ~ "React Native" ~ "Native",
        mentre "React" !~ "Native". Le skill corte agganciano per sottostringa
        ("R" ~ "React"): limite noto, mantenuto.
        """
        na = self.dictionary.normalize_skill(a)
        nb = self.dictionary.normalize_skill(b)
        if not na or not nb:
            return False
        if na == nb or na in nb or nb in na:
            return True
        return self.dictionary.share_synonym_group(na, nb)

    def _match_skills(
        self,
        talent_skills: Sequence[str],
        offer_skills: Sequence[str]
    ) -> Tuple[List[str], List[str]]:
        """Divide le skill dell'offerta in (presenti, mancanti) nel profilo."""
        matched = []
        missing = []
        for offer_skill in offer_skills:
            if any(self.skills_match(talent_skill, offer_skill) for talent_skill in talent_skills):
                matched.append(offer_skill)
                self._log(f"   MATCH {offer_skill}")
            else:
                missing.append(offer_skill)
                self._log(f"   GAP {offer_skill}")
        return matched, missing

    # ═══════════════════════════════════════════════════════════════
    # Score
    # ═══════════════════════════════════════════════════════════════

    def score(self, talent: TalentSnapshot, offer: OfferSnapshot) -> MatchResult:
        """Calcola il match tra talent e offerta."""
        self._log(f"Matching: talent #{talent.id} vs offerta #{offer.id}")

        required = [s for s in offer.required_skills if s and s.strip()]
        desired = [s for s in offer.desired_skills if s and s.strip()]

        # ═══════════════════════════════════════════════════════════════
        # STEP 1-2: Skill richieste e desiderate
        # ═══════════════════════════════════════════════════════════════
        log_section(self._log, "Step 1: Skill RICHIESTE", width=60, char="-")
        matched_required, missing_required = self._match_skills(talent.skills, required)
        ratio_required = len(matched_required) / len(required) if required else 1.0
        score_required = round_half_up(ratio_required * 100)

        log_section(self._log, "Step 2: Skill DESIDERATE", width=60, char="-")
        matched_desired, _ = self._match_skills(talent.skills, desired)
        ratio_desired = len(matched_desired) / len(desired) if desired else 1.0
        score_desired = round_half_up(ratio_desired * 100)

        # ═══════════════════════════════════════════════════════════════
        # STEP 3-6: Esperienza, TJM, disponibilità, mobilità
        # ═══════════════════════════════════════════════════════════════
        score_experience = self._experience_score(talent.experience_years, offer.experience_min)
        score_rate, rate_too_high, rate_range = self._rate_score(talent, offer)
        score_availability = self._availability_score(talent.availability)
        score_mobility = self._mobility_score(talent.mobility, offer.mobility)

        # ═══════════════════════════════════════════════════════════════
        # STEP 7: Categoria
        # ═══════════════════════════════════════════════════════════════
        category_bonus = 0
        if talent.category is not None and offer.category is not None:
            if not self.classifier.can_match(talent.category, offer.category):
                # La penalità di categoria passa dal sotto-score di mobilità
                score_mobility = min(score_mobility, 50)
                self._log(f"Categoria incompatibile: {talent.category.value} -> {offer.category.value}")
            elif (
                talent.category != offer.category
                and offer.category in self.classifier.compatible_categories(talent.category)
            ):
                category_bonus = self.over_qualification_bonus
                self._log(f"Bonus sovra-qualifica +{category_bonus}")

        self._log(
            f"   -> skill {score_required}/{score_desired}, esperienza {score_experience}, "
            f"TJM {score_rate}, disponibilità {score_availability}, mobilità {score_mobility}"
        )

        # ═══════════════════════════════════════════════════════════════
        # STEP 8: Somma pesata
        # ═══════════════════════════════════════════════════════════════
        base = round_half_up(
            score_required * self.weight_skills_required
            + score_desired * self.weight_skills_desired
            + score_experience * self.weight_experience
            + score_rate * self.weight_rate
            + score_availability * self.weight_availability
            + score_mobility * self.weight_mobility
        )

        # ═══════════════════════════════════════════════════════════════
        # STEP 9: Tetti di squalifica
        # ═══════════════════════════════════════════════════════════════
        n_matched = len(matched_required)
        n_required = len(required)
        reason: Optional[str] = None
        insufficient_skills = False
        incompatible_rate = False
        insufficient_experience = False
        unavailable = False

        if ratio_required < 0.50:
            base = min(base, 40)
            insufficient_skills = True
            reason = f"only {n_matched}/{n_required} required skills ({round_half_up(ratio_required * 100)}%)"
        elif ratio_required < 0.70:
            base = min(base, 60)
            reason = f"{n_matched}/{n_required} required skills — partial profile"
        elif ratio_required < 0.85:
            base = min(base, 75)
            reason = f"missing: {', '.join(missing_required)}"

        if score_rate <= 30:
            base = min(base, 50)
            incompatible_rate = True
            reason = reason or "rate significantly above budget"

        if score_experience <= 30:
            base = min(base, 55)
            insufficient_experience = True
            reason = reason or (
                f"insufficient experience ({talent.experience_years} years vs {offer.experience_min} required)"
            )

        if score_availability == 0:
            base = min(base, 20)
            unavailable = True
            # Prevale sempre sulle ragioni precedenti
            reason = UNAVAILABLE_REASON

        # ═══════════════════════════════════════════════════════════════
        # STEP 10-11: Score finale e analisi
        # ═══════════════════════════════════════════════════════════════
        final_score = max(0, min(100, base + category_bonus))
        self._log(f"SCORE FINALE: {final_score}/100" + (f" ({reason})" if reason else ""))

        analysis = self._build_analysis(final_score, reason, category_bonus, talent, offer)

        return MatchResult(
            talent_id=talent.id,
            offer_id=offer.id,
            score=final_score,
            score_details=ScoreBreakdown(
                skills_required=score_required,
                skills_desired=score_desired,
                experience=score_experience,
                mobility=score_mobility,
                availability=score_availability,
                rate=score_rate,
            ),
            matched_skills=tuple(matched_required),
            missing_skills=tuple(missing_required),
            matched_desired_skills=tuple(matched_desired),
            analysis=analysis,
            feedback=MatchFeedback(
                rate_too_high=rate_too_high,
                rate_range=rate_range,
                missing_skills=tuple(missing_required),
                reason=reason,
            ),
            blockers=MatchBlockers(
                insufficient_skills=insufficient_skills,
                incompatible_rate=incompatible_rate,
                insufficient_experience=insufficient_experience,
                unavailable=unavailable,
            ),
            category_bonus=category_bonus,
        )

    # ═══════════════════════════════════════════════════════════════
    # Sotto-score
    # ═══════════════════════════════════════════════════════════════

    def _experience_score(self, talent_years: int, required_years: Optional[int]) -> int:
        if not required_years or required_years <= 0:
            return 100
        if talent_years >= required_years:
            return 100
        if talent_years >= required_years * 0.7:
            return 70
        if talent_years >= required_years * 0.5:
            return 50
        return 30

    def _rate_score(
        self,
        talent: TalentSnapshot,
        offer: OfferSnapshot
    ) -> Tuple[int, bool, Optional[str]]:
        """
        Confronta il TJM del talent (minimo se presente, altrimenti desiderato)
        con il massimo dell'offerta. Dati mancanti = nessuna penalità.
        """
        talent_rate = talent.rate_min if _has_rate(talent.rate_min) else talent.rate
        offer_max = offer.rate_max
        if not _has_rate(talent_rate) or not _has_rate(offer_max):
            return 100, False, None

        if talent_rate <= offer_max:
            return 100, False, None
        if talent_rate <= offer_max * 1.10:
            return 80, False, None

        offer_min = _format_rate(offer.rate_min) if _has_rate(offer.rate_min) else "N/A"
        rate_range = f"{offer_min}-{_format_rate(offer_max)}€/jour"
        if talent_rate <= offer_max * 1.20:
            return 60, True, rate_range
        return 30, True, rate_range

    def _availability_score(self, availability: Availability) -> int:
        if availability == Availability.NON_DISPONIBLE:
            return 0
        if availability == Availability.SOUS_3_MOIS:
            return 70
        if availability == Availability.SOUS_2_MOIS:
            return 80
        return 100

    def _mobility_score(self, talent_mobility: Mobility, offer_mobility: Mobility) -> int:
        if talent_mobility == offer_mobility or talent_mobility == Mobility.FLEXIBLE:
            return 100
        if offer_mobility == Mobility.SUR_SITE and talent_mobility == Mobility.FULL_REMOTE:
            return 30
        if offer_mobility == Mobility.FULL_REMOTE and talent_mobility == Mobility.SUR_SITE:
            return 50
        return 70

    def _build_analysis(
        self,
        score: int,
        reason: Optional[str],
        category_bonus: int,
        talent: TalentSnapshot,
        offer: OfferSnapshot
    ) -> str:
        if score >= 80:
            text = f"Excellent match ({score}/100)."
        elif score >= 60:
            text = f"Good profile ({score}/100)."
        elif score >= 40:
            text = f"Partial profile ({score}/100)" + (f": {reason}." if reason else ".")
        else:
            text = f"Poorly suited ({score}/100)" + (f": {reason}." if reason else ".")

        if category_bonus:
            text += (
                f" Over-qualified profile ({talent.category.label} for a "
                f"{offer.category.label} mission, +{category_bonus})."
            )
        return text

    def _log(self, message: str) -> None:
        print_with_prefix("[MatchingAgent]", message, enabled=self.verbose)


# ═══════════════════════════════════════════════════════════════════════════
# SIMPLE API
# ═══════════════════════════════════════════════════════════════════════════

_default_agent: Optional[MatchingAgent] = None


def _agent() -> MatchingAgent:
    global _default_agent
    if _default_agent is None:
        _default_agent = MatchingAgent()
    return _default_agent


def skills_match(a: Optional[str], b: Optional[str]) -> bool:
    return _agent().skills_match(a, b)


def score_match(talent: TalentSnapshot, offer: OfferSnapshot) -> MatchResult:
    return _agent().score(talent, offer)
