import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No DAPR_* variables and no stray .env file in the working directory."""
    for key in list(os.environ):
        if key.upper().startswith("DAPR_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
