"""Headless calculator session, the state behind one calculator screen.

A Calculator holds the equation being typed, what the display shows, the
live preview and a memory register. Every arithmetic result comes from
``evaluate``; successful submissions are forwarded to an optional
HistoryStore.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from safecalc.conversion import ConversionCategory, convert
from safecalc.display import format_number
from safecalc.evaluator import evaluate
from safecalc.history import HistoryStore
from safecalc.models import EvalResult
from safecalc.scientific import ScientificFunction, apply_function

ERROR_DISPLAY = "Error"


@dataclass
class MemoryRegister:
    """The M+ / M- / MR / MC register."""

    value: float = 0.0

    def add(self, amount: float) -> None:
        self.value += amount

    def subtract(self, amount: float) -> None:
        self.value -= amount

    def recall(self) -> float:
        return self.value

    def clear(self) -> None:
        self.value = 0.0


@dataclass
class Calculator:
    """Calculator state driven by explicit calls instead of UI events."""

    history: Optional[HistoryStore] = None
    display: str = "0"
    equation: str = ""
    preview: str = ""
    is_new_calculation: bool = True
    memory: MemoryRegister = field(default_factory=MemoryRegister)

    def _record(self, equation: str, result: str, category: str) -> None:
        if self.history is not None:
            self.history.record(equation, result, category)

    def _display_value(self) -> float:
        """Numeric value of the display; anything unparsable counts as 0."""
        try:
            value = float(self.display)
        except ValueError:
            return 0.0
        return value if math.isfinite(value) else 0.0

    def _update_preview(self) -> None:
        result = evaluate(self.equation)
        self.preview = format_number(result.value) if result.ok else ""

    def press(self, chars: str) -> None:
        """Append typed characters and refresh the live preview.

        Starting a new calculation replaces both equation and display.
        """
        if self.is_new_calculation:
            self.display = chars
            self.equation = chars
            self.is_new_calculation = False
        else:
            self.display = chars if self.display == "0" else self.display + chars
            self.equation += chars
        self._update_preview()

    def submit(self) -> EvalResult:
        """Evaluate the equation ('=').

        On success the formatted result is displayed and recorded as a
        'standard' calculation; on failure the display shows 'Error'.
        """
        result = evaluate(self.equation)
        if result.ok:
            formatted = format_number(result.value)
            self.display = formatted
            self._record(self.equation, formatted, "standard")
        else:
            self.display = ERROR_DISPLAY
        self.is_new_calculation = True
        self.preview = ""
        return result

    def clear(self) -> None:
        """Reset display, equation and preview ('C')."""
        self.display = "0"
        self.equation = ""
        self.preview = ""
        self.is_new_calculation = True

    # -----------------------------------------------------------------------
    # Memory
    # -----------------------------------------------------------------------

    def memory_add(self) -> None:
        self.memory.add(self._display_value())

    def memory_subtract(self) -> None:
        self.memory.subtract(self._display_value())

    def memory_recall(self) -> None:
        value = format_number(self.memory.recall())
        self.display = value
        self.equation = value
        self.is_new_calculation = False
        self._update_preview()

    def memory_clear(self) -> None:
        self.memory.clear()

    # -----------------------------------------------------------------------
    # Scientific functions and conversions
    # -----------------------------------------------------------------------

    def scientific(self, func: ScientificFunction | str) -> EvalResult:
        """Apply a scientific function to the displayed value.

        Raises:
            ValueError: if ``func`` is not a known function name.
        """
        fn = ScientificFunction(func)
        value = self._display_value()
        result = apply_function(fn, value)
        if result.ok:
            formatted = format_number(result.value)
            self.display = formatted
            self.equation = formatted
            self._record(f"{fn.value}({format_number(value)})", formatted, "scientific")
        else:
            self.display = ERROR_DISPLAY
        self.is_new_calculation = True
        self.preview = ""
        return result

    def convert(
        self,
        value: float,
        category: ConversionCategory | str,
        from_unit: str,
        to_unit: str,
    ) -> float:
        """Convert a quantity, show it and record it as a 'conversion'.

        Raises:
            ValueError: on an unknown category or unit.
        """
        converted = convert(value, category, from_unit, to_unit)
        formatted = format_number(converted)
        self.display = formatted
        self.equation = formatted
        self.is_new_calculation = True
        self._record(
            f"{format_number(value)} {from_unit} to {to_unit}", formatted, "conversion"
        )
        return converted
