"""Shared fixtures: keep PRUNE_* settings from the shell out of the tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_prune_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("PRUNE_"):
            monkeypatch.delenv(key, raising=False)
    yield
