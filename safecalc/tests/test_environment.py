"""Tests for environment-driven settings."""

from pathlib import Path

from safecalc.environment import default_user, history_root


def test_history_root_from_env(tmp_path):
    assert history_root({"SAFECALC_HOME": str(tmp_path)}) == tmp_path


def test_history_root_default():
    assert history_root({}) == Path.home() / ".safecalc"


def test_default_user_precedence():
    assert default_user({"SAFECALC_USER": "ada", "USER": "root"}) == "ada"
    assert default_user({"USER": "root"}) == "root"
    assert default_user({}) == "guest"
