## flagspec — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
from pathlib import Path

import pytest

from flagspec.errors import SpecNotFound
from flagspec.loader import iter_spec_candidates, load_spec


def test_explicit_path_is_loaded(tmp_path: Path) -> None:
    spec = tmp_path / "tool.flags"
    spec.write_text('-a "x";', encoding="utf-8")
    source, filename = load_spec(str(spec))
    assert source == '-a "x";'
    assert filename == str(spec)


def test_search_path_entries_come_before_working_directory(tmp_path: Path, monkeypatch) -> None:
    first, second = tmp_path / "one", tmp_path / "two"
    first.mkdir(); second.mkdir()
    (second / "tool.flags").write_text('-b "from second";', encoding="utf-8")
    monkeypatch.setenv("FLAGSPEC_PATH", os.pathsep.join([str(first), str(second)]))
    monkeypatch.chdir(tmp_path)

    candidates = list(iter_spec_candidates("tool"))
    assert candidates[1:] == [first / "tool.flags", second / "tool.flags", Path.cwd() / "tool.flags"]
    source, filename = load_spec("tool")
    assert filename == str(second / "tool.flags")


def test_suffix_is_not_doubled(monkeypatch) -> None:
    monkeypatch.setenv("FLAGSPEC_PATH", "")
    assert list(iter_spec_candidates("tool.flags"))[-1].name == "tool.flags"


def test_missing_spec_reports_candidates(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("FLAGSPEC_PATH", str(tmp_path))
    with pytest.raises(SpecNotFound) as exc:
        load_spec("absent")
    assert tmp_path / "absent.flags" in exc.value.candidates
