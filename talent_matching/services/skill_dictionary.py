"""
Skill Dictionary
Tabelle statiche usate da classificatore e matching, caricate da CSV:

- category_keywords.csv   -> parole chiave del titolo per categoria
- category_skills.csv     -> skill rappresentative per categoria
- category_hierarchy.csv  -> categorie che un profilo può coprire in più
- skill_synonyms.csv      -> gruppi di sinonimi (javascript, js, es6, ...)
- skill_abbreviations.csv -> abbreviazioni canonicalizzate (js -> javascript)

Le tabelle sono dati, non codice: si estendono modificando i CSV.
"""

import re
import unicodedata
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Set

import pandas as pd

from talent_matching.models.enums import Category, parse_enum
from talent_matching.services.logging_utils import print_with_prefix

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_SKILL_PUNCT = re.compile(r"[._\-]")
_SPACES = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """Minuscole, senza accenti, solo [a-z0-9] e spazi singoli."""
    if not text:
        return ""
    text = unicodedata.normalize("NFD", str(text).lower())
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = _NON_ALNUM.sub(" ", text)
    return _SPACES.sub(" ", text).strip()


class SkillDictionary:
    """
    Lookup in memoria costruiti dai CSV.

    Strategia di caricamento come per il dizionario tech custom: una riga per
    termine, indicizzata per chiave normalizzata.
    """

    def __init__(self, data_dir: Optional[str] = None, verbose: bool = False):
        self.verbose = verbose
        self.data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR

        self.abbreviations: Dict[str, str] = {}
        self.synonym_groups: Dict[str, Set[str]] = {}
        self.hierarchy: Dict[Category, List[Category]] = {}

        # Le abbreviazioni servono a normalize_skill, vanno caricate per prime
        self._load_abbreviations()
        self._load_synonyms()
        self.category_keywords = self._load_category_terms("category_keywords.csv", "keyword")
        self.category_skills = self._load_category_terms("category_skills.csv", "skill")
        self._load_hierarchy()

        self._log(
            f"Tabelle caricate da {self.data_dir}: "
            f"{len(self.synonym_groups)} sinonimi, {len(self.abbreviations)} abbreviazioni, "
            f"{sum(len(v) for v in self.hierarchy.values())} relazioni di gerarchia"
        )

    # ═══════════════════════════════════════════════════════════════
    # Normalizzazione skill
    # ═══════════════════════════════════════════════════════════════

    def normalize_skill(self, skill: Optional[str]) -> str:
        """
        Minuscole, trim, rimozione di . - _, spazi singoli, poi abbreviazioni
        comuni sull'intera stringa (es. "JS" -> "javascript", "C#" -> "csharp").
        """
        if not skill:
            return ""
        value = _SKILL_PUNCT.sub("", str(skill).lower().strip())
        value = _SPACES.sub(" ", value).strip()
        return self.abbreviations.get(value, value)

    def share_synonym_group(self, a: str, b: str) -> bool:
        """True se due skill (già normalizzate) compaiono nello stesso gruppo."""
        groups_a = self.synonym_groups.get(a)
        if not groups_a:
            return False
        return bool(groups_a & self.synonym_groups.get(b, set()))

    # ═══════════════════════════════════════════════════════════════
    # Caricamento CSV
    # ═══════════════════════════════════════════════════════════════

    def _read_csv(self, name: str) -> pd.DataFrame:
        # keep_default_na=False: termini come "na" o "n1" restano stringhe
        return pd.read_csv(self.data_dir / name, dtype=str, keep_default_na=False)

    def _load_abbreviations(self) -> None:
        df = self._read_csv("skill_abbreviations.csv")
        for _, row in df.iterrows():
            alias = _SPACES.sub(" ", _SKILL_PUNCT.sub("", row["alias"].lower().strip())).strip()
            canonical = row["canonical"].lower().strip()
            if alias and canonical:
                self.abbreviations[alias] = canonical

    def _load_synonyms(self) -> None:
        df = self._read_csv("skill_synonyms.csv")
        for _, row in df.iterrows():
            group = row["group"].strip().lower()
            term = self.normalize_skill(row["skill"])
            if group and term:
                self.synonym_groups.setdefault(term, set()).add(group)

    def _load_category_terms(self, name: str, column: str) -> Dict[Category, List[str]]:
        terms: Dict[Category, List[str]] = {c: [] for c in Category}
        df = self._read_csv(name)
        for _, row in df.iterrows():
            category = parse_enum(Category, row["category"])
            term = normalize_text(row[column])
            if category is None:
                self._log(f"Categoria sconosciuta in {name}: {row['category']!r}")
                continue
            if term:
                terms[category].append(term)
        return terms

    def _load_hierarchy(self) -> None:
        df = self._read_csv("category_hierarchy.csv")
        for _, row in df.iterrows():
            category = parse_enum(Category, row["category"])
            compatible = parse_enum(Category, row["compatible"])
            if category is None or compatible is None:
                self._log(f"Riga di gerarchia ignorata: {row['category']!r} -> {row['compatible']!r}")
                continue
            targets = self.hierarchy.setdefault(category, [])
            if compatible not in targets:
                targets.append(compatible)

    def _log(self, message: str) -> None:
        print_with_prefix("[SkillDictionary]", message, enabled=self.verbose)


@lru_cache(maxsize=None)
def get_skill_dictionary(data_dir: Optional[str] = None) -> SkillDictionary:
    """Istanza condivisa (le tabelle sono di sola lettura)."""
    return SkillDictionary(data_dir=data_dir)
