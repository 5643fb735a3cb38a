"""
Test CategoryClassifier + SkillDictionary
"""

import shutil

import pytest

from talent_matching.agents import CategoryClassifier
from talent_matching.models import Category
from talent_matching.services import SkillDictionary, normalize_text
from talent_matching.services.skill_dictionary import DEFAULT_DATA_DIR

CLASSIFIER = CategoryClassifier()


# ═══════════════════════════════════════════════════════════════════════════
# CLASSIFY
# ═══════════════════════════════════════════════════════════════════════════

def test_tie_goes_to_earlier_category():
    scores = CLASSIFIER.scores("Chef de Projet Infrastructure", [])
    assert scores[Category.CHEF_DE_PROJET] == 42
    assert scores[Category.DEVOPS_SRE] == 42
    assert CLASSIFIER.classify("Chef de Projet Infrastructure", []) == Category.CHEF_DE_PROJET


def test_title_keywords_dominate():
    assert CLASSIFIER.classify("Développeur Full-Stack", ["React"]) == Category.DEVELOPPEUR
    assert CLASSIFIER.classify("Ingénieur Système", []) == Category.INGENIEUR_SYSTEME_RESEAU
    assert CLASSIFIER.classify("Scrum Master", ["Jira"]) == Category.SCRUM_MASTER


def test_skills_alone_can_classify():
    skills = ["Terraform", "Ansible", "Docker", "Kubernetes"]
    scores = CLASSIFIER.scores(None, skills)
    assert scores[Category.INGENIEUR_CLOUD] > scores[Category.DEVOPS_SRE]
    assert CLASSIFIER.classify(None, skills) == Category.INGENIEUR_CLOUD


def test_weak_signal_falls_back_to_autre():
    assert CLASSIFIER.classify(None, ["R"]) == Category.AUTRE
    assert CLASSIFIER.classify("", []) == Category.AUTRE
    assert CLASSIFIER.classify(None, None) == Category.AUTRE
    assert CLASSIFIER.classify("Boulanger", ["Pain"]) == Category.AUTRE


def test_autre_never_scores():
    scores = CLASSIFIER.scores("Autre métier", ["divers"])
    assert scores[Category.AUTRE] == 0


def test_classify_is_deterministic():
    title, skills = "Lead Dev Java / DevOps", ["Java", "Docker", "Jenkins"]
    assert CLASSIFIER.classify(title, skills) == CLASSIFIER.classify(title, skills)


def test_normalize_text_strips_accents_and_punctuation():
    assert normalize_text("  Ingénieur Système / Réseau ") == "ingenieur systeme reseau"
    assert normalize_text("CI/CD") == "ci cd"
    assert normalize_text(None) == ""


# ═══════════════════════════════════════════════════════════════════════════
# CAN MATCH
# ═══════════════════════════════════════════════════════════════════════════

def test_can_match_hierarchy():
    assert CLASSIFIER.can_match(Category.ARCHITECTE, Category.INGENIEUR_CLOUD) is True
    assert CLASSIFIER.can_match(Category.INGENIEUR_CLOUD, Category.ARCHITECTE) is False
    assert CLASSIFIER.can_match(Category.SUPPORT_TECHNICIEN, Category.ARCHITECTE) is False
    assert CLASSIFIER.can_match(Category.DEVELOPPEUR, Category.DEVELOPPEUR) is True


def test_can_match_is_permissive_on_missing_categories():
    assert CLASSIFIER.can_match(Category.SUPPORT_TECHNICIEN, None) is True
    assert CLASSIFIER.can_match(None, Category.ARCHITECTE) is True
    assert CLASSIFIER.can_match("DEVELOPPEUR", "NON_EXISTENTE") is True


def test_can_match_accepts_raw_strings():
    assert CLASSIFIER.can_match("architecte", "devops_sre") is True
    assert CLASSIFIER.can_match("SCRUM_MASTER", "CHEF_DE_PROJET") is False


def test_compatible_categories():
    assert CLASSIFIER.compatible_categories(Category.ARCHITECTE) == [
        Category.ARCHITECTE,
        Category.INGENIEUR_SYSTEME_RESEAU,
        Category.INGENIEUR_CLOUD,
        Category.DEVELOPPEUR,
        Category.DEVOPS_SRE,
    ]
    assert CLASSIFIER.compatible_categories(Category.SCRUM_MASTER) == [Category.SCRUM_MASTER]
    assert CLASSIFIER.compatible_categories("???") == [Category.AUTRE]


def test_category_labels():
    assert Category.INGENIEUR_CLOUD.label == "Ingénieur Cloud"
    assert Category.AUTRE.label == "Autre"


# ═══════════════════════════════════════════════════════════════════════════
# TABELLE CSV
# ═══════════════════════════════════════════════════════════════════════════

def test_dictionary_abbreviations_and_synonyms():
    dictionary = SkillDictionary()
    assert dictionary.normalize_skill(" Node.JS ") == "nodejs"
    assert dictionary.normalize_skill("JS") == "javascript"
    assert dictionary.normalize_skill("k8s") == "kubernetes"
    assert dictionary.normalize_skill("") == ""
    assert dictionary.share_synonym_group("javascript", "es6")
    assert not dictionary.share_synonym_group("javascript", "python")


def test_tables_are_data(tmp_path):
    for csv_file in DEFAULT_DATA_DIR.glob("*.csv"):
        shutil.copy(csv_file, tmp_path / csv_file.name)
    (tmp_path / "category_hierarchy.csv").write_text(
        "category,compatible\nSUPPORT_TECHNICIEN,ARCHITECTE\n", encoding="utf-8"
    )

    classifier = CategoryClassifier(dictionary=SkillDictionary(data_dir=str(tmp_path)))

    assert classifier.can_match(Category.SUPPORT_TECHNICIEN, Category.ARCHITECTE) is True
    assert classifier.can_match(Category.ARCHITECTE, Category.INGENIEUR_CLOUD) is False


def test_unknown_category_rows_are_skipped(tmp_path):
    for csv_file in DEFAULT_DATA_DIR.glob("*.csv"):
        shutil.copy(csv_file, tmp_path / csv_file.name)
    (tmp_path / "category_hierarchy.csv").write_text(
        "category,compatible\nASTRONAUTE,ARCHITECTE\nARCHITECTE,INGENIEUR_CLOUD\n", encoding="utf-8"
    )

    dictionary = SkillDictionary(data_dir=str(tmp_path))
    assert dictionary.hierarchy == {Category.ARCHITECTE: [Category.INGENIEUR_CLOUD]}


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
