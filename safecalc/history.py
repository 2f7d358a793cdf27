"""Per-user calculation history: storage, search and Rich rendering.

Each user's history is a JSON array in <root>/<user>_history.json, one
object per calculation:

    {"equation": "2+3*4", "result": "14", "category": "standard",
     "timestamp": "2026-10-19T12:00:00+00:00"}

Entries are appended in calculation order and listed newest first.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

# History labels for the three kinds of calculation
CATEGORIES = ("standard", "scientific", "conversion")

_CATEGORY_STYLES = {
    "standard": "green",
    "scientific": "cyan",
    "conversion": "yellow",
}


@dataclass
class HistoryEntry:
    """One recorded calculation."""

    equation: str
    result: str
    category: str = "standard"
    timestamp: str = ""

    def to_dict(self) -> dict:
        return {
            "equation": self.equation,
            "result": self.result,
            "category": self.category,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: dict) -> HistoryEntry:
        return cls(
            equation=str(d.get("equation", "")),
            result=str(d.get("result", "")),
            category=str(d.get("category", "standard")),
            timestamp=str(d.get("timestamp", "")),
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on equation or result."""
        needle = term.lower()
        return needle in self.equation.lower() or needle in self.result.lower()


def _user_slug(user: str) -> str:
    """Normalize a user name for use in a file name.

    'ada lovelace' → 'ada_lovelace', '../x' → '.._x'
    """
    slug = re.sub(r"[^\w.-]", "_", user.strip())
    return slug or "guest"


class HistoryStore:
    """History of one user, backed by a JSON file."""

    def __init__(self, root: Path, user: str) -> None:
        self.root = Path(root)
        self.user = user

    @property
    def path(self) -> Path:
        return self.root / f"{_user_slug(self.user)}_history.json"

    def _load(self) -> list[HistoryEntry]:
        """Read the stored entries in calculation order.

        A missing or unreadable file reads as an empty history.
        """
        p = self.path
        if not p.exists():
            return []
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return []
        if not isinstance(raw, list):
            return []
        return [HistoryEntry.from_dict(d) for d in raw if isinstance(d, dict)]

    def _save(self, entries: list[HistoryEntry]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([e.to_dict() for e in entries], indent=2), encoding="utf-8"
        )

    def record(self, equation: str, result: str, category: str = "standard") -> HistoryEntry:
        """Append a calculation and return the stored entry."""
        entry = HistoryEntry(
            equation=equation,
            result=result,
            category=category,
            timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        )
        entries = self._load()
        entries.append(entry)
        self._save(entries)
        return entry

    def entries(self) -> list[HistoryEntry]:
        """All entries, newest first."""
        return list(reversed(self._load()))

    def search(self, term: str = "", category: Optional[str] = None) -> list[HistoryEntry]:
        """Filter entries by search term and category, newest first.

        Args:
            term: Substring matched case-insensitively against equation and result.
            category: One of CATEGORIES; None or 'all' matches every entry.
        """
        return [
            e for e in self.entries()
            if e.matches(term) and (category in (None, "all") or e.category == category)
        ]

    def clear(self) -> None:
        """Drop every entry for this user."""
        self._save([])


def _fmt_timestamp(ts: str) -> str:
    """Render an ISO timestamp as 'YYYY-MM-DD HH:MM'."""
    try:
        return datetime.fromisoformat(ts).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return ts or "--"


def render_history(entries: list[HistoryEntry], console: Console, title: str = "History") -> None:
    """Render a Rich table of history entries."""
    if not entries:
        console.print("[yellow]No calculations recorded.[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("When", style="dim", min_width=16)
    table.add_column("Category", min_width=10)
    table.add_column("Equation", min_width=20)
    table.add_column("Result", justify="right", min_width=10)

    for e in entries:
        style = _CATEGORY_STYLES.get(e.category, "white")
        table.add_row(
            _fmt_timestamp(e.timestamp),
            f"[{style}]{e.category}[/{style}]",
            e.equation,
            e.result,
        )

    console.print()
    console.print(table)
    console.print()
