from __future__ import annotations

from pathlib import Path

import pytest

from anydate.config import ParserPolicy

ENV_VARS = ("ANYDATE_PREFER_MONTH_FIRST", "ANYDATE_SWAP_ON_MISMATCH", "ANYDATE_MAX_RESTARTS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_env() -> None:
    assert ParserPolicy.from_env() == ParserPolicy()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANYDATE_PREFER_MONTH_FIRST", "false")
    monkeypatch.setenv("ANYDATE_SWAP_ON_MISMATCH", "0")
    monkeypatch.setenv("ANYDATE_MAX_RESTARTS", "3")

    policy = ParserPolicy.from_env()
    assert policy.prefer_month_first is False
    assert policy.swap_on_mismatch is False
    assert policy.max_restarts == 3


@pytest.mark.parametrize(
    "name, value",
    [
        ("ANYDATE_PREFER_MONTH_FIRST", "maybe"),
        ("ANYDATE_MAX_RESTARTS", "lots"),
        ("ANYDATE_MAX_RESTARTS", "-1"),
    ],
)
def test_malformed_env_raises(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        ParserPolicy.from_env()
