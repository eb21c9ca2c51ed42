import json
import os
import subprocess
import sys
from pathlib import Path

import pytest


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """Изолированный текущий каталог: сюда пишется prompts.txt и ищется pgen.yaml."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PGEN_DEBUG", raising=False)
    return tmp_path


def write(p: Path, text: str) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def run_cli(root: Path, *args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    return subprocess.run(
        [sys.executable, "-m", "pgen.cli", *args],
        cwd=root, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
    )


def jload(s: str):
    return json.loads(s)
