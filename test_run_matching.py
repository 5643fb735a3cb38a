"""
Test CLI run_matching
"""

from pathlib import Path

import pandas as pd
import pytest

import run_matching

SAMPLE_DATASET = Path(__file__).resolve().parent / "data" / "sample_dataset.json"


def test_classify_command(capsys):
    assert run_matching.main(["classify", "--title", "Chef de Projet Infrastructure"]) == 0
    assert capsys.readouterr().out.startswith("CHEF_DE_PROJET (")


def test_offer_command_exports_csv(tmp_path, capsys):
    out_csv = tmp_path / "matches.csv"

    code = run_matching.main([
        "--dataset", str(SAMPLE_DATASET),
        "--out", str(out_csv),
        "offer", "10", "--no-notify",
    ])

    assert code == 0
    assert "1 match creati" in capsys.readouterr().out

    df = pd.read_csv(out_csv)
    assert df["talent_id"].tolist() == [1]
    assert df["score"].tolist() == [95]


def test_unknown_offer_exits():
    with pytest.raises(SystemExit) as exc_info:
        run_matching.main(["--dataset", str(SAMPLE_DATASET), "offer", "999"])
    assert "999" in str(exc_info.value)


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
