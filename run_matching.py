import argparse
import csv
import json
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

load_dotenv()

from talent_matching.agents import CategoryClassifier
from talent_matching.orchestrator import MatchingError, MatchingOrchestrator
from talent_matching.services import ConsoleNotifier, InMemoryRepository, MatchingSettings


def _json_dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _split_skills(raw: str) -> List[str]:
    return [s.strip() for s in (raw or "").split(",") if s.strip()]


def _export_matches(repository: InMemoryRepository, out_path: Path) -> int:
    rows = [m.to_row() for m in repository.all_matches()]
    if not rows:
        return 0
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    return len(rows)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Esegue il matching talent/offerte su un dataset JSON "
            "(talents, offers, matches) e, se richiesto, esporta i match in CSV."
        )
    )
    parser.add_argument("--dataset", default="data/sample_dataset.json", help="Dataset JSON di input.")
    parser.add_argument("--out", default="", help="Se valorizzato, esporta i match in questo CSV.")
    parser.add_argument("--verbose", action="store_true", help="Abilita log verbose.")

    sub = parser.add_subparsers(dest="command", required=True)

    p_offer = sub.add_parser("offer", help="Matching di tutti i talent idonei per un'offerta.")
    p_offer.add_argument("offer_id", type=int)
    p_offer.add_argument("--min-score", type=int, default=None, help="Soglia di salvataggio (default: settings).")
    p_offer.add_argument("--notify", action=argparse.BooleanOptionalAction, default=True, help="Invia notifiche (default: attivo).")

    p_talent = sub.add_parser("talent", help="Ricalcola i match di un talent su tutte le offerte pubblicate.")
    p_talent.add_argument("talent_id", type=int)

    p_best = sub.add_parser("best", help="Shortlist dei migliori match di un'offerta.")
    p_best.add_argument("offer_id", type=int)
    p_best.add_argument("--limit", type=int, default=None)

    p_classify = sub.add_parser("classify", help="Classifica un titolo + skill in una categoria.")
    p_classify.add_argument("--title", default="")
    p_classify.add_argument("--skills", default="", help="Skill separate da virgola.")

    args = parser.parse_args(argv)

    settings = MatchingSettings.from_env()
    verbose = args.verbose or settings.verbose

    if args.command == "classify":
        category = CategoryClassifier(verbose=verbose).classify(args.title, _split_skills(args.skills))
        print(f"{category.value} ({category.label})")
        return 0

    project_root = Path(__file__).resolve().parent
    dataset_path = (project_root / args.dataset).resolve()
    if not dataset_path.exists():
        raise SystemExit(f"Dataset non trovato: {dataset_path}")

    repository = InMemoryRepository.from_json(str(dataset_path))
    orchestrator = MatchingOrchestrator(
        repository,
        notifier=ConsoleNotifier(app_url=settings.app_url, verbose=True),
        settings=settings,
        verbose=verbose,
    )

    try:
        if args.command == "offer":
            results = orchestrator.match_talents_for_offer(
                args.offer_id, min_score=args.min_score, notify=args.notify
            )
            for r in results:
                print(f"  talent #{r.talent_id} -> score={r.score} | {r.analysis}")
            print(f"{len(results)} match creati")
        elif args.command == "talent":
            results = orchestrator.update_matches_for_talent(args.talent_id)
            for r in results:
                print(f"  offerta #{r.offer_id} -> score={r.score} | {r.analysis}")
        elif args.command == "best":
            for summary in orchestrator.get_best_matches_for_offer(args.offer_id, limit=args.limit):
                t = summary.talent
                print(
                    f"  {summary.score:>3} {t.first_name} {t.last_name} "
                    f"matched={_json_dumps(summary.matched_skills)} missing={_json_dumps(summary.missing_skills)}"
                )
    except MatchingError as e:
        raise SystemExit(f"ERRORE: {e}")

    if args.out:
        n = _export_matches(repository, (project_root / args.out).resolve())
        print(f"{n} match esportati in {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
