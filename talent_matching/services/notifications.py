"""
Notifications
Collaboratore di notifica: email "mission compatible" con feedback e
notifica in-app.

Il trasporto reale (provider email, token di accesso, retry) è fuori dal core:
qui ci sono l'interfaccia, la composizione dei messaggi e due implementazioni
(console e in memoria).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from talent_matching.models.match_result import MatchFeedback
from talent_matching.services.logging_utils import print_with_prefix

MATCH_NOTIFICATION_TYPE = "NOUVELLE_OFFRE_MATCH"


class Notifier(Protocol):
    def send_matching_with_feedback(
        self,
        email: str,
        first_name: str,
        offer_title: str,
        offer_slug: str,
        score: int,
        matched_skills: Sequence[str],
        feedback: MatchFeedback,
    ) -> bool: ...

    def create_notification(
        self,
        user_id: Optional[int],
        type: str,
        title: str,
        message: str,
        link: str,
        data: Dict[str, Any],
    ) -> None: ...


@dataclass
class MatchEmail:
    to: str
    subject: str
    body: str


@dataclass
class InAppNotification:
    user_id: Optional[int]
    type: str
    title: str
    message: str
    link: str
    data: Dict[str, Any] = field(default_factory=dict)


def offer_link(offer_slug: str, app_url: str = "") -> str:
    return f"{app_url.rstrip('/')}/offres/{offer_slug}"


def compose_match_email(
    email: str,
    first_name: str,
    offer_title: str,
    offer_slug: str,
    score: int,
    matched_skills: Sequence[str],
    feedback: MatchFeedback,
    app_url: str = "https://talentero.fr",
) -> MatchEmail:
    """Versione testuale dell'email di matching con feedback TJM/competenze."""
    lines = [
        f"Bonjour {first_name}," if first_name else "Bonjour,",
        "",
        f"Une nouvelle mission correspond à votre profil à {score}% :",
        offer_title,
        "",
    ]
    if matched_skills:
        lines.append(f"Compétences en commun : {', '.join(matched_skills)}")
        lines.append("")

    if feedback.rate_too_high and feedback.rate_range:
        lines.append(
            f"TJM : Votre TJM est supérieur au budget. Fourchette pour cette mission : {feedback.rate_range}"
        )
        lines.append("")
    if feedback.missing_skills:
        lines.append(f"Compétences manquantes : {', '.join(feedback.missing_skills)}")
        lines.append(
            "Si vous avez ces compétences mais qu'elles ne figurent pas sur votre CV, "
            "mettez à jour votre profil !"
        )
        lines.append("")

    lines.append(f"Voir la mission : {offer_link(offer_slug, app_url)}")

    return MatchEmail(
        to=email,
        subject=f"Mission {score}% compatible : {offer_title}",
        body="\n".join(lines),
    )


def compose_in_app_notification(
    user_id: Optional[int],
    offer_id: int,
    offer_title: str,
    offer_slug: str,
    score: int,
    feedback: MatchFeedback,
) -> InAppNotification:
    return InAppNotification(
        user_id=user_id,
        type=MATCH_NOTIFICATION_TYPE,
        title=f"Nouvelle mission {score}% compatible",
        message=f'La mission "{offer_title}" correspond à votre profil !',
        link=offer_link(offer_slug),
        data={
            "offer_id": offer_id,
            "score": score,
            "feedback": feedback.model_dump(mode="json"),
        },
    )


class ConsoleNotifier:
    """Stampa le notifiche invece di inviarle (sviluppo / CLI)."""

    def __init__(self, app_url: str = "https://talentero.fr", verbose: bool = True):
        self.app_url = app_url
        self.verbose = verbose

    def send_matching_with_feedback(
        self,
        email: str,
        first_name: str,
        offer_title: str,
        offer_slug: str,
        score: int,
        matched_skills: Sequence[str],
        feedback: MatchFeedback,
    ) -> bool:
        mail = compose_match_email(
            email, first_name, offer_title, offer_slug, score, matched_skills, feedback, self.app_url
        )
        self._log(f"To: {mail.to}")
        self._log(f"Subject: {mail.subject}")
        self._log(mail.body)
        return True

    def create_notification(
        self,
        user_id: Optional[int],
        type: str,
        title: str,
        message: str,
        link: str,
        data: Dict[str, Any],
    ) -> None:
        self._log(f"[{type}] user={user_id} {title} -> {link}")

    def _log(self, message: str) -> None:
        print_with_prefix("[Notifier]", message, enabled=self.verbose)


class RecordingNotifier:
    """Conserva in memoria email e notifiche (test)."""

    def __init__(self, app_url: str = "https://talentero.fr"):
        self.app_url = app_url
        self.emails: List[MatchEmail] = []
        self.notifications: List[InAppNotification] = []

    def send_matching_with_feedback(
        self,
        email: str,
        first_name: str,
        offer_title: str,
        offer_slug: str,
        score: int,
        matched_skills: Sequence[str],
        feedback: MatchFeedback,
    ) -> bool:
        self.emails.append(compose_match_email(
            email, first_name, offer_title, offer_slug, score, matched_skills, feedback, self.app_url
        ))
        return True

    def create_notification(
        self,
        user_id: Optional[int],
        type: str,
        title: str,
        message: str,
        link: str,
        data: Dict[str, Any],
    ) -> None:
        self.notifications.append(InAppNotification(user_id, type, title, message, link, dict(data)))
