from __future__ import annotations

import json
from pathlib import Path

import pytest

from scent_rules.rule_harvester import store
from scent_rules.scripts import harvest_rules


@pytest.fixture()
def workspace(tmp_path: Path, sample_pages: list[str]) -> tuple[Path, Path]:
    root = tmp_path / "repo"
    root.mkdir()
    source = tmp_path / "rulebook.txt"
    source.write_text("\f".join(sample_pages), encoding="utf-8")
    return root, source


def _parse(root: Path, source: Path, *extra: str) -> harvest_rules.HarvesterPaths:
    harvest_rules.main(["--root", str(root), "parse", "--source", str(source), *extra])
    return harvest_rules.HarvesterPaths(root.resolve())


def test_parse_writes_rules_json(workspace: tuple[Path, Path]) -> None:
    root, source = workspace
    paths = _parse(root, source)
    assert paths.rules_path == root.resolve() / "scent_rules" / "_index" / "parsed-rules.json"
    rules = store.load_rules(paths.rules_path)
    assert len(rules) == 8
    assert all(rule.measurements_source == "parsed" for rule in rules)
    assert paths.rules_path.read_text(encoding="utf-8").endswith("]\n")


def test_parse_picks_up_default_overrides(workspace: tuple[Path, Path]) -> None:
    root, source = workspace
    paths = harvest_rules.HarvesterPaths(root.resolve())
    paths.index_dir.mkdir(parents=True)
    paths.overrides_path.write_text(
        json.dumps({"Container": {"Novice": {"min_area_sq_ft": 100}}}), encoding="utf-8"
    )
    _parse(root, source)
    by_title = {rule.title: rule for rule in store.load_rules(paths.rules_path)}
    novice = by_title["Container Novice Requirements"]
    assert novice.measurements_source == "authoritative"
    assert novice.measurements["min_area_sq_ft"] == 100
    assert novice.measurements["num_containers"] == 15


def test_parse_respects_output_flag(workspace: tuple[Path, Path], tmp_path: Path) -> None:
    root, source = workspace
    output = tmp_path / "elsewhere" / "rules.json"
    _parse(root, source, "--output", str(output))
    assert len(store.load_rules(output)) == 8


def test_parse_missing_source_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Rulebook source not found"):
        harvest_rules.main(
            ["--root", str(tmp_path), "parse", "--source", str(tmp_path / "absent.pdf")]
        )


def test_parse_directory_source_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Rulebook source not found"):
        harvest_rules.main(["--root", str(tmp_path), "parse", "--source", str(tmp_path)])


def test_parse_without_chapters_exits(tmp_path: Path) -> None:
    source = tmp_path / "cover.txt"
    source.write_text("A cover page and nothing else.", encoding="utf-8")
    with pytest.raises(SystemExit, match="No rules extracted"):
        harvest_rules.main(["--root", str(tmp_path), "parse", "--source", str(source)])


def test_render_writes_summary(workspace: tuple[Path, Path]) -> None:
    root, source = workspace
    paths = _parse(root, source)
    harvest_rules.main(["--root", str(root), "render"])
    summary = paths.summary_path.read_text(encoding="utf-8")
    assert summary.startswith("# Scent Work Rules")
    assert "**Total rules:** 8 (0 with authoritative measurements)" in summary
    assert "| Container | Novice | 1 (known) |  | 2 | parsed |" in summary
    assert "| Interior | Master | 1-4 (unknown) |  |  | parsed |" in summary
    assert "- **Chapter 8, Section 1** Ribbons (Judging)" in summary


def test_render_requires_rules(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Run 'parse' first"):
        harvest_rules.main(["--root", str(tmp_path), "render"])


def test_check_passes_matching_cases(
    workspace: tuple[Path, Path], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root, source = workspace
    _parse(root, source)
    cases = tmp_path / "cases.json"
    cases.write_text(
        json.dumps(
            [
                {
                    "id": "container-novice",
                    "element": "Container",
                    "level": "Novice",
                    "expected": {"min_hides": 1, "max_hides": 1, "num_containers": 15},
                },
                {
                    "id": "interior-master",
                    "element": "Interior",
                    "level": "Master",
                    "expected": {"min_hides": 1, "max_hides": 4, "hides_known": False},
                },
            ]
        ),
        encoding="utf-8",
    )
    harvest_rules.main(["--root", str(root), "check", "--cases", str(cases)])
    assert "Passed: 2/2" in capsys.readouterr().out


def test_check_reports_failures(
    workspace: tuple[Path, Path], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    root, source = workspace
    _parse(root, source)
    cases = tmp_path / "cases.json"
    cases.write_text(
        json.dumps(
            [
                {"element": "Container", "level": "Novice", "expected": {"time_limit_minutes": 3}},
                {"element": "Buried", "level": "Master", "expected": {"min_hides": 1}},
            ]
        ),
        encoding="utf-8",
    )
    with pytest.raises(SystemExit, match="2 of 2 cases failed"):
        harvest_rules.main(["--root", str(root), "check", "--cases", str(cases)])
    out = capsys.readouterr().out
    assert "time_limit_minutes mismatch: expected 3, got 2" in out
    assert "No rule parsed for Buried Master" in out
    assert "Container-Novice" in out
