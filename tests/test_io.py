"""
Tests for prompt source resolution, output writing and logging setup.
"""

import logging
from pathlib import Path

import pytest

from pgen.errors import PGUserError
from pgen.io import read_template_source, write_prompts
from pgen.logs import DEBUG_ENV, setup_logging


def test_prompt_argument_is_returned_verbatim():
    assert read_template_source("a {b|c}\n", None) == "a {b|c}\n"


def test_prompt_file_strips_trailing_newline(tmp_path: Path):
    path = tmp_path / "p.txt"
    path.write_text("{x|y}\r\n", encoding="utf-8")
    assert read_template_source(None, str(path)) == "{x|y}"


@pytest.mark.parametrize("prompt, file", [("x", "p.txt"), (None, None)])
def test_prompt_source_must_be_unique(prompt, file):
    with pytest.raises(PGUserError):
        read_template_source(prompt, file)


def test_write_prompts_one_per_line(tmp_path: Path):
    path = tmp_path / "out.txt"
    assert write_prompts(path, ["a", "b c"]) == 2
    assert path.read_text(encoding="utf-8") == "a\nb c\n"


def test_logging_level_follows_env(monkeypatch):
    monkeypatch.setenv(DEBUG_ENV, "1")
    assert setup_logging().level == logging.DEBUG
    monkeypatch.delenv(DEBUG_ENV)
    log = setup_logging()
    assert log.level == logging.WARNING
    assert len(log.handlers) == 1
