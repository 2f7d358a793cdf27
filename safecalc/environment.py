"""Environment-driven settings for safecalc.

    SAFECALC_HOME   directory holding the per-user history files (~/.safecalc)
    SAFECALC_USER   default history owner (falls back to USER, then 'guest')
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def history_root(env: Optional[dict[str, str]] = None) -> Path:
    """Directory for history files, created lazily by the store."""
    env = os.environ if env is None else env
    home = env.get("SAFECALC_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".safecalc"


def default_user(env: Optional[dict[str, str]] = None) -> str:
    """History owner used when a command is not given --user."""
    env = os.environ if env is None else env
    return env.get("SAFECALC_USER") or env.get("USER") or "guest"
