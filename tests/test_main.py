"""Tests for the command-line entry point."""

import json
import sys

import pytest

import main


def test_headless_run_exports_stats(monkeypatch, tmp_path):
    target = tmp_path / "run.json"
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "main.py",
            "--headless",
            "--max-ticks",
            "20",
            "--stats-interval",
            "0",
            "--seed",
            "5",
            "--export-stats",
            str(target),
            "--log-level",
            "warning",
        ],
    )

    assert main.main() == 0

    payload = json.loads(target.read_text())
    assert payload["stats"]["tick"] == 20


def test_negative_ticks_rejected(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["main.py", "--headless", "--max-ticks", "-1"])
    with pytest.raises(SystemExit):
        main.main()
