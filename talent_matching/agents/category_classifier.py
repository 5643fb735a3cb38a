"""
Category Classifier
Assegna una categoria professionnelle a partire da titolo e skill.

Responsabilità:
- Punteggio per parole chiave (titolo x3, skill x1)
- Scelta della categoria migliore, AUTRE se il segnale è troppo debole
- Compatibilità tra categorie secondo la gerarchia (es. ARCHITECTE copre INGENIEUR_CLOUD)

Non solleva mai eccezioni: input mancanti degradano ad AUTRE / compatibile.
"""

from typing import Dict, Iterable, List, Optional

from talent_matching.models.enums import Category, parse_enum
from talent_matching.services.logging_utils import print_with_prefix
from talent_matching.services.skill_dictionary import (
    SkillDictionary,
    get_skill_dictionary,
    normalize_text,
)

TITLE_WEIGHT = 3
SKILLS_WEIGHT = 1
MIN_CATEGORY_SCORE = 5


def keyword_score(normalized_text: str, keywords: Iterable[str]) -> int:
    """Somma delle lunghezze delle parole chiave contenute nel testo (sottostringa)."""
    if not normalized_text:
        return 0
    return sum(len(k) for k in keywords if k and k in normalized_text)


class CategoryClassifier:
    """
    Classificatore a parole chiave pesate.

    Le parole chiave più lunghe pesano di più: "chef de projet" (14) batte un
    aggancio casuale su "po" (2).
    """

    def __init__(
        self,
        dictionary: Optional[SkillDictionary] = None,
        min_score: int = MIN_CATEGORY_SCORE,
        verbose: bool = False,
    ):
        self.min_score = min_score
        self.verbose = verbose
        self._dictionary = dictionary

    @property
    def dictionary(self) -> SkillDictionary:
        if self._dictionary is None:
            self._dictionary = get_skill_dictionary()
        return self._dictionary

    def scores(self, title: Optional[str], skills: Optional[Iterable[str]]) -> Dict[Category, int]:
        """Punteggio grezzo per ogni categoria (AUTRE inclusa, sempre 0)."""
        title_text = normalize_text(title)
        skills_text = normalize_text(" ".join(s for s in (skills or []) if s))

        result: Dict[Category, int] = {}
        for category in Category:
            keywords = self.dictionary.category_keywords.get(category, [])
            representative = self.dictionary.category_skills.get(category, [])
            result[category] = (
                keyword_score(title_text, keywords) * TITLE_WEIGHT
                + keyword_score(skills_text, representative) * SKILLS_WEIGHT
                # Parole chiave di categoria scritte come skill (es. "DevOps")
                + keyword_score(skills_text, keywords) * SKILLS_WEIGHT
            )
        return result

    def classify(self, title: Optional[str], skills: Optional[Iterable[str]] = None) -> Category:
        scores = self.scores(title, skills)

        best_category = Category.AUTRE
        best_score = 0
        # Iterazione nell'ordine dell'enum: a parità vince la prima categoria
        for category in Category:
            if category == Category.AUTRE:
                continue
            if scores[category] > best_score:
                best_score = scores[category]
                best_category = category

        if best_score < self.min_score:
            self._log(f"'{title or ''}' -> AUTRE (score {best_score} < {self.min_score})")
            return Category.AUTRE

        self._log(f"'{title or ''}' -> {best_category.value} (score {best_score})")
        return best_category

    def can_match(self, talent_category, offer_category) -> bool:
        """
        True se la categoria del talent soddisfa quella dell'offerta:
        stessa categoria, una delle due categorie assente, o gerarchia dichiarata.
        """
        offer_cat = parse_enum(Category, offer_category)
        if offer_cat is None:
            return True
        talent_cat = parse_enum(Category, talent_category)
        if talent_cat is None or talent_cat == offer_cat:
            return True
        return offer_cat in self.dictionary.hierarchy.get(talent_cat, [])

    def compatible_categories(self, talent_category) -> List[Category]:
        talent_cat = parse_enum(Category, talent_category, Category.AUTRE)
        return [talent_cat] + list(self.dictionary.hierarchy.get(talent_cat, []))

    def _log(self, message: str) -> None:
        print_with_prefix("[CategoryClassifier]", message, enabled=self.verbose)


# ═══════════════════════════════════════════════════════════════════════════
# SIMPLE API
# ═══════════════════════════════════════════════════════════════════════════

_default_classifier: Optional[CategoryClassifier] = None


def _classifier() -> CategoryClassifier:
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = CategoryClassifier()
    return _default_classifier


def classify(title: Optional[str], skills: Optional[Iterable[str]] = None) -> Category:
    return _classifier().classify(title, skills)


def can_match(talent_category, offer_category) -> bool:
    return _classifier().can_match(talent_category, offer_category)


def compatible_categories(talent_category) -> List[Category]:
    return _classifier().compatible_categories(talent_category)
