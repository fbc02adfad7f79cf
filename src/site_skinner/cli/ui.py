"""Stage progress rendering for the skin CLI."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from rich.tree import Tree

logger = logging.getLogger(__name__)

_SYMBOLS = {
    "pending": "[green dim]○[/green dim]",
    "running": "[cyan]○[/cyan]",
    "done": "[green]●[/green]",
    "error": "[red]●[/red]",
    "skipped": "[yellow]○[/yellow]",
}


@dataclass
class _Step:
    key: str
    label: str
    status: str = "pending"
    detail: str = ""


class StepTracker:
    """Track workflow stages and render them as a Rich tree."""

    def __init__(self, title: str):
        self.title = title
        self.steps: list[_Step] = []
        self._refresh_cb: Callable[[], None] | None = None

    def attach_refresh(self, cb: Callable[[], None]) -> None:
        """Call ``cb`` after every status change, e.g. to update a rich ``Live``."""
        self._refresh_cb = cb

    def _maybe_refresh(self) -> None:
        if self._refresh_cb is None:
            return
        try:
            self._refresh_cb()
        except Exception:
            logger.debug("Step tracker refresh failed", exc_info=True)

    def _find(self, key: str) -> _Step | None:
        for step in self.steps:
            if step.key == key:
                return step
        return None

    def add(self, key: str, label: str) -> None:
        if self._find(key) is None:
            self.steps.append(_Step(key, label))
            self._maybe_refresh()

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, "running", detail)

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, "done", detail)

    def error(self, key: str, detail: str = "") -> None:
        self._update(key, "error", detail)

    def skip(self, key: str, detail: str = "") -> None:
        self._update(key, "skipped", detail)

    def status(self, key: str) -> str | None:
        step = self._find(key)
        return step.status if step is not None else None

    def _update(self, key: str, status: str, detail: str) -> None:
        step = self._find(key)
        if step is None:
            step = _Step(key, key)
            self.steps.append(step)
        step.status = status
        if detail:
            step.detail = detail
        self._maybe_refresh()

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step.status, " ")
            detail = step.detail.strip()
            if step.status == "pending":
                suffix = f" ({detail})" if detail else ""
                tree.add(f"{symbol} [bright_black]{step.label}{suffix}[/bright_black]")
            elif detail:
                tree.add(f"{symbol} [white]{step.label}[/white] [bright_black]({detail})[/bright_black]")
            else:
                tree.add(f"{symbol} [white]{step.label}[/white]")
        return tree
