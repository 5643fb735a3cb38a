"""
Matching Orchestrator
Coordina il MatchingAgent con i collaboratori di persistenza e notifica.

Responsabilità:
- Nuova offerta: valuta tutti i talent idonei, salva i match sopra soglia, notifica
- Profilo talent aggiornato: ricalcola e aggiorna i match su tutte le offerte pubblicate
- Shortlist: migliori match di un'offerta

Ordine garantito: il match viene salvato PRIMA della notifica; un errore di
notifica o di una singola coppia non interrompe il batch.
"""

from typing import List, Optional, Set

from talent_matching.agents.category_classifier import CategoryClassifier
from talent_matching.agents.matching_agent import MatchingAgent
from talent_matching.models.match_record import MatchRecord, MatchSummary, TalentSummary
from talent_matching.models.match_result import MatchResult
from talent_matching.models.offer import Offer
from talent_matching.models.talent import Talent
from talent_matching.services.logging_utils import log_error, log_section, print_with_prefix
from talent_matching.services.notifications import (
    ConsoleNotifier,
    Notifier,
    compose_in_app_notification,
)
from talent_matching.services.repository import DuplicateMatchError, MatchRepository
from talent_matching.services.settings import MatchingSettings
from talent_matching.services.skill_dictionary import SkillDictionary, get_skill_dictionary

# Soglia fissa di notifica, non configurabile
NOTIFY_MIN_SCORE = 60


class MatchingError(Exception):
    """Errore base del matching."""
    pass


class OfferNotFoundError(MatchingError):
    def __init__(self, offer_id: int):
        super().__init__(f"Offerta non trovata: {offer_id}")
        self.offer_id = offer_id


class TalentNotFoundError(MatchingError):
    def __init__(self, talent_id: int):
        super().__init__(f"Talent non trovato: {talent_id}")
        self.talent_id = talent_id


class MatchingOrchestrator:
    """
    Driver batch del matching.

    FLUSSO (nuova offerta):
    1. Carica l'offerta (errore se assente)
    2. Carica i talent idonei (ACTIF, account attivo e verificato, con skill)
    3. Per ogni talent senza match esistente: calcola, salva se >= min_score
    4. Se score >= soglia di notifica: email con feedback + notifica in-app
    """

    def __init__(
        self,
        repository: MatchRepository,
        notifier: Optional[Notifier] = None,
        settings: Optional[MatchingSettings] = None,
        matching_agent: Optional[MatchingAgent] = None,
        verbose: Optional[bool] = None
    ):
        self.repository = repository
        self.settings = settings or MatchingSettings()
        self.verbose = self.settings.verbose if verbose is None else verbose

        self._notifier = notifier
        self._matching_agent = matching_agent
        self._dictionary: Optional[SkillDictionary] = None

    @property
    def dictionary(self) -> SkillDictionary:
        if self._dictionary is None:
            self._dictionary = get_skill_dictionary(self.settings.data_dir)
        return self._dictionary

    @property
    def notifier(self) -> Notifier:
        if self._notifier is None:
            self._notifier = ConsoleNotifier(app_url=self.settings.app_url, verbose=self.verbose)
        return self._notifier

    @property
    def matching_agent(self) -> MatchingAgent:
        if self._matching_agent is None:
            self._matching_agent = MatchingAgent(
                dictionary=self.dictionary,
                classifier=CategoryClassifier(dictionary=self.dictionary),
                verbose=self.verbose
            )
        return self._matching_agent

    # ═══════════════════════════════════════════════════════════════
    # Nuova offerta
    # ═══════════════════════════════════════════════════════════════

    def match_talents_for_offer(
        self,
        offer_id: int,
        min_score: Optional[int] = None,
        notify: bool = True
    ) -> List[MatchResult]:
        """
        Crea i match per un'offerta e notifica i talent compatibili.

        Le coppie già valutate vengono saltate. La notifica parte solo se
        lo score raggiunge NOTIFY_MIN_SCORE, qualunque sia `min_score`.
        """
        min_score = self.settings.min_score if min_score is None else min_score

        offer = self.repository.get_offer(offer_id)
        if offer is None:
            raise OfferNotFoundError(offer_id)

        log_section(self._log, f"MATCHING OFFERTA #{offer.id}: {offer.title}", width=70, char="=")
        talents = self.repository.list_eligible_talents()
        self._log(f"   -> {len(talents)} talent idonei, soglia {min_score}")

        results: List[MatchResult] = []
        notified: Set[int] = set()
        skipped = 0

        for talent in talents:
            if self.repository.get_match(offer.id, talent.id) is not None:
                skipped += 1
                continue

            result = self._score_pair(talent, offer)
            if result is None or result.score < min_score:
                continue

            # Persistenza prima della notifica
            try:
                self.repository.create_match(MatchRecord.from_result(offer.id, result))
            except DuplicateMatchError:
                skipped += 1
                continue
            results.append(result)
            self._log(f"   MATCH talent #{talent.id}: {result.score}/100")

            if notify and result.score >= NOTIFY_MIN_SCORE and talent.id not in notified:
                notified.add(talent.id)
                self._notify(talent, offer, result)

        self._log(f"   -> {len(results)} match creati, {skipped} già esistenti, {len(notified)} notifiche")
        return results

    # ═══════════════════════════════════════════════════════════════
    # Profilo talent aggiornato
    # ═══════════════════════════════════════════════════════════════

    def update_matches_for_talent(self, talent_id: int) -> List[MatchResult]:
        """
        Ricalcola il match del talent con ogni offerta pubblicata e fa upsert,
        senza soglia minima e senza notifiche.
        """
        talent = self.repository.get_talent(talent_id)
        if talent is None:
            raise TalentNotFoundError(talent_id)

        offers = self.repository.list_published_offers()
        log_section(self._log, f"AGGIORNAMENTO TALENT #{talent.id}: {len(offers)} offerte", width=70, char="=")

        results: List[MatchResult] = []
        for offer in offers:
            result = self._score_pair(talent, offer)
            if result is None:
                continue
            self.repository.upsert_match(MatchRecord.from_result(offer.id, result))
            results.append(result)
            self._log(f"   offerta #{offer.id}: {result.score}/100")

        return results

    # ═══════════════════════════════════════════════════════════════
    # Shortlist
    # ═══════════════════════════════════════════════════════════════

    def get_best_matches_for_offer(self, offer_id: int, limit: Optional[int] = None) -> List[MatchSummary]:
        limit = self.settings.best_matches_limit if limit is None else limit
        summaries: List[MatchSummary] = []
        # Il limite si applica dopo aver scartato i talent assenti
        for record in self.repository.list_matches_for_offer(offer_id):
            if len(summaries) >= max(0, limit):
                break
            talent = self.repository.get_talent(record.talent_id)
            if talent is None:
                self._log(f"Talent #{record.talent_id} assente, match ignorato")
                continue
            summaries.append(MatchSummary(
                talent=TalentSummary.from_talent(talent),
                score=record.score,
                matched_skills=list(record.matched_skills),
                missing_skills=list(record.missing_skills),
            ))
        return summaries

    # ═══════════════════════════════════════════════════════════════
    # Helper
    # ═══════════════════════════════════════════════════════════════

    def _score_pair(self, talent: Talent, offer: Offer) -> Optional[MatchResult]:
        """Una coppia malformata viene registrata e saltata."""
        try:
            return self.matching_agent.score(talent.profile, offer.requirements)
        except Exception as e:
            log_error("[Orchestrator]", f"Matching fallito offerta #{offer.id} / talent #{talent.id}", e)
            return None

    def _notify(self, talent: Talent, offer: Offer, result: MatchResult) -> None:
        """Email + notifica in-app. Gli errori dei collaboratori non fermano il batch."""
        try:
            self.notifier.send_matching_with_feedback(
                talent.email,
                talent.first_name,
                offer.title,
                offer.slug,
                result.score,
                list(result.matched_skills),
                result.feedback,
            )
        except Exception as e:
            log_error("[Orchestrator]", f"Invio email fallito per talent #{talent.id}", e)

        try:
            self.repository.mark_notified(offer.id, talent.id, result)
        except Exception as e:
            log_error("[Orchestrator]", f"Aggiornamento match notificato fallito per talent #{talent.id}", e)

        notification = compose_in_app_notification(
            talent.user_id, offer.id, offer.title, offer.slug, result.score, result.feedback
        )
        try:
            self.notifier.create_notification(
                notification.user_id,
                notification.type,
                notification.title,
                notification.message,
                notification.link,
                notification.data,
            )
        except Exception as e:
            log_error("[Orchestrator]", f"Notifica in-app fallita per talent #{talent.id}", e)

    def _log(self, message: str) -> None:
        """Conditional logging."""
        print_with_prefix("[Orchestrator]", message, enabled=self.verbose)


# ═══════════════════════════════════════════════════════════════════════════
# SIMPLE API
# ═══════════════════════════════════════════════════════════════════════════

def match_talents_for_offer(
    repository: MatchRepository,
    notifier: Notifier,
    offer_id: int,
    min_score: int = 60,
    notify: bool = True,
    verbose: bool = False
) -> List[MatchResult]:
    orchestrator = MatchingOrchestrator(repository, notifier, verbose=verbose)
    return orchestrator.match_talents_for_offer(offer_id, min_score=min_score, notify=notify)


def update_matches_for_talent(
    repository: MatchRepository,
    talent_id: int,
    verbose: bool = False
) -> List[MatchResult]:
    orchestrator = MatchingOrchestrator(repository, verbose=verbose)
    return orchestrator.update_matches_for_talent(talent_id)


def get_best_matches_for_offer(
    repository: MatchRepository,
    offer_id: int,
    limit: int = 20
) -> List[MatchSummary]:
    orchestrator = MatchingOrchestrator(repository)
    return orchestrator.get_best_matches_for_offer(offer_id, limit=limit)
