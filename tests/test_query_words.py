"""Tests for scripts/query_words.py."""
from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from scripts.query_words import build_parser, main

ROOT = Path(__file__).resolve().parents[1]
SCRIPT = ROOT / "scripts" / "query_words.py"

TEXT = "الر (1) كتاب أنزلناه إليك\nقال وقال قال كتاب\n"


@pytest.fixture()
def corpus(tmp_path: Path) -> Path:
    path = tmp_path / "surah.txt"
    path.write_text(TEXT, encoding="utf-8")
    return path


class TestBuildParser:
    def test_required_arguments(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_defaults(self) -> None:
        args = build_parser().parse_args(["--input", "a", "--output", "b", "--query", "q"])
        assert args.json is None
        assert args.html is None
        assert args.show is False
        assert args.absolute is False


class TestMain:
    def test_writes_gap_report(self, corpus: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.txt"
        rc = main(["--input", str(corpus), "--output", str(out), "--query", "قال كتاب"])
        assert rc == 0
        assert out.read_text(encoding="utf-8").splitlines() == [
            "قال   5  0  0  ",
            "كتاب  2  5  ",
        ]

    def test_absolute_positions(self, corpus: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.txt"
        main(["--input", str(corpus), "--output", str(out), "--query", "كتاب", "--absolute"])
        assert out.read_text(encoding="utf-8") == "كتاب  2  8  \n"

    def test_json_and_html(self, corpus: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.txt"
        js = tmp_path / "index.json"
        html = tmp_path / "pages" / "surah.html"
        rc = main([
            "--input", str(corpus), "--output", str(out), "--query", "كتاب",
            "--json", str(js), "--html", str(html),
        ])
        assert rc == 0
        data = json.loads(js.read_text(encoding="utf-8"))
        assert set(data) == {"queries", "token_count", "positions", "gaps", "spans"}
        assert data["gaps"] == {"كتاب": [2, 5]}
        assert data["positions"] == {"كتاب": [2, 8]}
        page = html.read_text(encoding="utf-8")
        assert page.count('class="hit"') == 2
        assert "<title>surah.txt</title>" in page

    def test_show_prints_stats(
        self, corpus: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        out = tmp_path / "report.txt"
        main(["--input", str(corpus), "--output", str(out), "--query", "كتاب", "--show"])
        captured = capsys.readouterr().out
        assert "\x1b[" in captured
        assert captured.endswith("كتاب  2  5  \n")

    def test_undecodable_query_byte(self, corpus: Path, tmp_path: Path) -> None:
        # On POSIX a non-UTF-8 argv byte arrives as a lone surrogate.
        out = tmp_path / "report.txt"
        rc = main(["--input", str(corpus), "--output", str(out), "--query", "\udcff كتاب"])
        assert rc == 0
        assert out.read_text(encoding="utf-8") == "كتاب  2  5  \n"

    def test_undecodable_query_byte_with_json(self, corpus: Path, tmp_path: Path) -> None:
        out = tmp_path / "report.txt"
        js = tmp_path / "index.json"
        rc = main([
            "--input", str(corpus), "--output", str(out), "--query", "\udcff كتاب",
            "--json", str(js),
        ])
        assert rc == 0
        data = json.loads(js.read_text(encoding="utf-8"))
        assert data["queries"] == ["\ufffd", "كتاب"]
        assert data["gaps"] == {"كتاب": [2, 5]}

    def test_missing_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out = tmp_path / "report.txt"
        rc = main(["--input", str(tmp_path / "nope.txt"), "--output", str(out), "--query", "a"])
        assert rc == 1
        assert "Error:" in capsys.readouterr().err
        assert not out.exists()


def test_script_runs_as_subprocess(corpus: Path, tmp_path: Path) -> None:
    out = tmp_path / "report.txt"
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT / "src"), env.get("PYTHONPATH")]))
    proc = subprocess.run(
        [sys.executable, str(SCRIPT), "--input", str(corpus), "--output", str(out), "--query", "قال"],
        cwd=str(ROOT),
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )
    assert proc.returncode == 0, proc.stderr
    assert out.read_text(encoding="utf-8") == "قال  5  0  0  \n"
