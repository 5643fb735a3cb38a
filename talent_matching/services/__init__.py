# services package
"""Services for the matching core (tables, config, collaborators)."""

from talent_matching.services.skill_dictionary import (
    SkillDictionary,
    get_skill_dictionary,
    normalize_text,
)
from talent_matching.services.settings import MatchingSettings
from talent_matching.services.repository import (
    DuplicateMatchError,
    InMemoryRepository,
    MatchRepository,
)
from talent_matching.services.notifications import (
    ConsoleNotifier,
    Notifier,
    RecordingNotifier,
    compose_match_email,
)

__all__ = [
    "SkillDictionary",
    "get_skill_dictionary",
    "normalize_text",
    "MatchingSettings",
    "DuplicateMatchError",
    "InMemoryRepository",
    "MatchRepository",
    "ConsoleNotifier",
    "Notifier",
    "RecordingNotifier",
    "compose_match_email",
]
