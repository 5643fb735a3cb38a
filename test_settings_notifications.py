"""
Test MatchingSettings, notifiche e record di match
"""

import json

import pytest

from talent_matching.agents import score_match
from talent_matching.models import MatchFeedback, MatchRecord, OfferSnapshot, TalentSnapshot
from talent_matching.services import ConsoleNotifier, MatchingSettings, compose_match_email
from talent_matching.services.logging_utils import log_error, print_with_prefix

ENV_VARS = [
    "MATCHING_MIN_SCORE",
    "MATCHING_BEST_LIMIT",
    "MATCHING_VERBOSE",
    "MATCHING_DATA_DIR",
    "APP_URL",
    "NEXT_PUBLIC_APP_URL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv + delenv: la variabile viene rimossa anche se load_dotenv la scrive durante il test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # .env vuoto: nessun valore esterno al test
    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text("", encoding="utf-8")
    return monkeypatch, str(dotenv_file)


# ═══════════════════════════════════════════════════════════════════════════
# SETTINGS
# ═══════════════════════════════════════════════════════════════════════════

def test_settings_defaults(clean_env):
    _, dotenv_path = clean_env
    settings = MatchingSettings.from_env(dotenv_path)

    assert settings.min_score == 60
    assert settings.best_matches_limit == 20
    assert settings.verbose is False
    assert settings.app_url == "https://talentero.fr"
    assert settings.data_dir is None


def test_settings_from_environment(clean_env):
    monkeypatch, dotenv_path = clean_env
    monkeypatch.setenv("MATCHING_MIN_SCORE", "45")
    monkeypatch.setenv("MATCHING_BEST_LIMIT", "abc")
    monkeypatch.setenv("MATCHING_VERBOSE", "true")
    monkeypatch.setenv("NEXT_PUBLIC_APP_URL", "https://staging.talentero.fr")

    settings = MatchingSettings.from_env(dotenv_path)

    assert settings.min_score == 45
    assert settings.best_matches_limit == 20
    assert settings.verbose is True
    assert settings.app_url == "https://staging.talentero.fr"


def test_settings_read_dotenv_file(clean_env, tmp_path):
    dotenv_file = tmp_path / "matching.env"
    dotenv_file.write_text("MATCHING_BEST_LIMIT=5\nAPP_URL=https://example.org\n", encoding="utf-8")

    settings = MatchingSettings.from_env(str(dotenv_file))

    assert settings.best_matches_limit == 5
    assert settings.app_url == "https://example.org"


# ═══════════════════════════════════════════════════════════════════════════
# NOTIFICHE
# ═══════════════════════════════════════════════════════════════════════════

def test_compose_match_email_with_feedback():
    feedback = MatchFeedback(
        rate_too_high=True,
        rate_range="400-500€/jour",
        missing_skills=("Kubernetes", "Terraform"),
    )
    mail = compose_match_email(
        "camille@example.com", "Camille", "Ingénieur DevOps", "ingenieur-devops",
        72, ["Docker", "AWS"], feedback, app_url="https://talentero.fr/",
    )

    assert mail.to == "camille@example.com"
    assert mail.subject == "Mission 72% compatible : Ingénieur DevOps"
    assert mail.body.startswith("Bonjour Camille,")
    assert "Compétences en commun : Docker, AWS" in mail.body
    assert "Fourchette pour cette mission : 400-500€/jour" in mail.body
    assert "Compétences manquantes : Kubernetes, Terraform" in mail.body
    assert mail.body.endswith("Voir la mission : https://talentero.fr/offres/ingenieur-devops")


def test_compose_match_email_without_feedback():
    mail = compose_match_email("x@example.com", "", "Dev", "dev", 90, [], MatchFeedback())

    assert mail.body.startswith("Bonjour,")
    assert "TJM" not in mail.body
    assert "manquantes" not in mail.body


def test_console_notifier_prints(capsys):
    notifier = ConsoleNotifier(app_url="https://talentero.fr")
    assert notifier.send_matching_with_feedback(
        "a@example.com", "Ana", "Dev", "dev", 80, ["React"], MatchFeedback()
    ) is True
    notifier.create_notification(7, "NOUVELLE_OFFRE_MATCH", "Nouvelle mission 80% compatible", "msg", "/offres/dev", {})

    out = capsys.readouterr().out
    assert "[Notifier] Subject: Mission 80% compatible : Dev" in out
    assert "[Notifier] [NOUVELLE_OFFRE_MATCH] user=7" in out


def test_silent_console_notifier(capsys):
    ConsoleNotifier(verbose=False).send_matching_with_feedback(
        "a@example.com", "Ana", "Dev", "dev", 80, [], MatchFeedback()
    )
    assert capsys.readouterr().out == ""


# ═══════════════════════════════════════════════════════════════════════════
# LOGGING + RECORD
# ═══════════════════════════════════════════════════════════════════════════

def test_logging_helpers(capsys):
    print_with_prefix("[Test]", "riga 1\nriga 2")
    print_with_prefix("[Test]", "nascosto", enabled=False)
    log_error("[Test]", "operazione fallita", ValueError("boom"))

    captured = capsys.readouterr()
    assert captured.out == "[Test] riga 1\n[Test] riga 2\n"
    assert captured.err == "[Test] ERRORE operazione fallita: ValueError: boom\n"


def test_match_record_from_result_and_row():
    result = score_match(
        TalentSnapshot(id=1, skills=["React", "Node.js", "Docker"]),
        OfferSnapshot(id=10, required_skills=["react", "node"], desired_skills=["docker"]),
    )
    record = MatchRecord.from_result(10, result)

    assert record.key == (10, 1)
    assert record.matched_skills == ["react", "node", "docker"]
    assert record.notes == result.analysis

    row = record.to_row()
    assert json.loads(row["score_details_json"])["skills_required"] == 100
    assert json.loads(row["matched_skills_json"]) == ["react", "node", "docker"]
    assert row["notification_sent_at"] == ""


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
