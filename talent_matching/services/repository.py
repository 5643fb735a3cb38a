"""
Repository
Collaboratore di persistenza del matching: interfaccia + implementazione in memoria.

Il core non possiede lo storage: legge talent/offerte e scrive i record di match
tramite questa interfaccia. Un'implementazione su database deve garantire
l'unicità della chiave (offer_id, talent_id).
"""

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from talent_matching.models.enums import OfferStatus
from talent_matching.models.match_record import MatchRecord
from talent_matching.models.match_result import MatchResult
from talent_matching.models.offer import Offer
from talent_matching.models.talent import Talent


class DuplicateMatchError(Exception):
    """Esiste già un match per la coppia (offerta, talent)."""
    pass


class MatchRepository(Protocol):
    def get_offer(self, offer_id: int) -> Optional[Offer]: ...

    def get_talent(self, talent_id: int) -> Optional[Talent]: ...

    def list_eligible_talents(self) -> List[Talent]: ...

    def list_published_offers(self) -> List[Offer]: ...

    def get_match(self, offer_id: int, talent_id: int) -> Optional[MatchRecord]: ...

    def create_match(self, record: MatchRecord) -> MatchRecord: ...

    def upsert_match(self, record: MatchRecord) -> MatchRecord: ...

    def list_matches_for_offer(self, offer_id: int, limit: Optional[int] = None) -> List[MatchRecord]: ...

    def mark_notified(
        self,
        offer_id: int,
        talent_id: int,
        result: MatchResult,
        when: Optional[datetime] = None,
    ) -> Optional[MatchRecord]: ...


class InMemoryRepository:
    """
    Storage in memoria (test, CLI, demo).

    Le scritture sui match sono serializzate da un lock: due upsert concorrenti
    sulla stessa coppia non creano righe duplicate.
    """

    def __init__(
        self,
        talents: Iterable[Talent] = (),
        offers: Iterable[Offer] = (),
        matches: Iterable[MatchRecord] = (),
    ):
        self._lock = threading.RLock()
        self._talents: Dict[int, Talent] = {t.id: t for t in talents}
        self._offers: Dict[int, Offer] = {o.id: o for o in offers}
        self._matches: Dict[Tuple[int, int], MatchRecord] = {m.key: m for m in matches}

    # ─── Talent / offerte ───

    def add_talent(self, talent: Talent) -> None:
        with self._lock:
            self._talents[talent.id] = talent

    def add_offer(self, offer: Offer) -> None:
        with self._lock:
            self._offers[offer.id] = offer

    def get_offer(self, offer_id: int) -> Optional[Offer]:
        return self._offers.get(offer_id)

    def get_talent(self, talent_id: int) -> Optional[Talent]:
        return self._talents.get(talent_id)

    def list_eligible_talents(self) -> List[Talent]:
        """Talent ACTIF, account attivo e verificato, almeno una skill."""
        return [t for _, t in sorted(self._talents.items()) if t.is_eligible]

    def list_published_offers(self) -> List[Offer]:
        return [o for _, o in sorted(self._offers.items()) if o.status == OfferStatus.PUBLIEE]

    # ─── Match ───

    def get_match(self, offer_id: int, talent_id: int) -> Optional[MatchRecord]:
        return self._matches.get((offer_id, talent_id))

    def create_match(self, record: MatchRecord) -> MatchRecord:
        with self._lock:
            if record.key in self._matches:
                raise DuplicateMatchError(f"Match già presente per offerta={record.offer_id} talent={record.talent_id}")
            self._matches[record.key] = record
            return record

    def upsert_match(self, record: MatchRecord) -> MatchRecord:
        with self._lock:
            existing = self._matches.get(record.key)
            if existing is None:
                self._matches[record.key] = record
                return record

            updated = existing.model_copy(update={
                "score": record.score,
                "score_details": record.score_details,
                "matched_skills": list(record.matched_skills),
                "missing_skills": list(record.missing_skills),
                "notes": record.notes,
                "updated_at": datetime.now(timezone.utc),
            })
            self._matches[record.key] = updated
            return updated

    def mark_notified(
        self,
        offer_id: int,
        talent_id: int,
        result: MatchResult,
        when: Optional[datetime] = None,
    ) -> Optional[MatchRecord]:
        """Registra invio notifica e feedback TJM/esperienza sul match."""
        with self._lock:
            existing = self._matches.get((offer_id, talent_id))
            if existing is None:
                return None

            feedback = result.feedback
            missing = list(feedback.missing_skills)
            updated = existing.model_copy(update={
                "notification_sent": True,
                "notification_sent_at": when or datetime.now(timezone.utc),
                "rate_too_high": feedback.rate_too_high,
                "insufficient_experience": len(missing) > 0,
                "feedback_rate": (
                    f"Votre TJM est supérieur au budget. Fourchette: {feedback.rate_range}"
                    if feedback.rate_too_high else None
                ),
                "feedback_experience": (
                    f"Compétences manquantes: {', '.join(missing)}" if missing else None
                ),
            })
            self._matches[updated.key] = updated
            return updated

    def list_matches_for_offer(self, offer_id: int, limit: Optional[int] = None) -> List[MatchRecord]:
        rows = [m for m in self._matches.values() if m.offer_id == offer_id]
        rows.sort(key=lambda m: (-m.score, m.talent_id))
        if limit is not None:
            rows = rows[:max(0, limit)]
        return rows

    def all_matches(self) -> List[MatchRecord]:
        return [m for _, m in sorted(self._matches.items())]

    # ─── Caricamento dataset ───

    @classmethod
    def from_json(cls, path: str) -> "InMemoryRepository":
        """
        Carica un dataset {"talents": [...], "offers": [...], "matches": [...]}.

        Per talent e offerte il profilo/requisiti possono essere annidati
        ("profile"/"requirements") o piatti nello stesso oggetto.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))

        talents = []
        for raw in data.get("talents", []):
            profile = dict(raw.get("profile") or raw)
            talents.append(Talent(**{**raw, "profile": profile}))

        offers = []
        for raw in data.get("offers", []):
            requirements = dict(raw.get("requirements") or raw)
            offers.append(Offer(**{**raw, "requirements": requirements}))

        matches = [MatchRecord(**raw) for raw in data.get("matches", [])]
        return cls(talents=talents, offers=offers, matches=matches)
