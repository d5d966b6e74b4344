"""Tests for project path resolution."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from medprice.runtime import get_paths, reset_paths


@pytest.fixture(autouse=True)
def _fresh_paths() -> Iterator[None]:
    reset_paths()
    yield
    reset_paths()


def test_root_comes_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MEDPRICE_HOME", str(tmp_path))

    paths = get_paths()

    assert paths.root == tmp_path.resolve()
    assert paths.extraction_rules == tmp_path.resolve() / "config" / "extraction.toml"
    assert paths.medication_store == tmp_path.resolve() / "data" / "medications.json"
    assert paths.default_price_list == tmp_path.resolve() / "price_list.pdf"


def test_root_defaults_to_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("MEDPRICE_HOME", raising=False)
    monkeypatch.chdir(tmp_path)

    assert get_paths().root == tmp_path.resolve()


def test_reset_rereads_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    monkeypatch.setenv("MEDPRICE_HOME", str(first))
    assert get_paths().root == first.resolve()

    monkeypatch.setenv("MEDPRICE_HOME", str(second))
    assert get_paths().root == first.resolve()

    reset_paths()
    assert get_paths().root == second.resolve()
