# src/valuescope_api/domain/entities/selection.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Analytical focus (selection) entities.

Purpose:
    Model which entity the dashboard is analysing: the whole company
    (aggregate) or one share class (focused). The focus is an explicit value
    derived from navigation context; transitions return new values.

Layer:
    domain
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class SelectionSource(str, Enum):
    """Where a selection came from."""

    URL = "url"
    CLICK = "click"


@dataclass(frozen=True)
class Aggregate:
    """Company-wide view over all share classes."""


@dataclass(frozen=True)
class Focused:
    """Single share class view."""

    security_id: str


SelectionMode: TypeAlias = Aggregate | Focused


@dataclass(frozen=True)
class SelectionState:
    """Current analytical focus.

    Attributes:
        mode: :class:`Aggregate` or :class:`Focused`.
        source: Whether the state was resolved from the URL or a click.
    """

    mode: SelectionMode
    source: SelectionSource = SelectionSource.URL

    @property
    def is_aggregate(self) -> bool:
        return isinstance(self.mode, Aggregate)

    @property
    def focused_id(self) -> str | None:
        """Return the focused security id, or None in aggregate mode."""
        match self.mode:
            case Focused(security_id=security_id):
                return security_id
            case _:
                return None


@dataclass(frozen=True)
class NavigationIntent:
    """Navigation the client should perform after a transition.

    Attributes:
        path: Route path, e.g. ``"/security/KRX.005930/marketcap"``.
        focus: Whether the focus-stock query signal must be carried.
    """

    path: str
    focus: bool = False

    @property
    def target(self) -> str:
        """Return the full navigation target including the focus query."""
        return f"{self.path}?focus=stock" if self.focus else self.path


@dataclass(frozen=True)
class SelectionTransition:
    """Result of a selection transition: the new state and where to navigate."""

    state: SelectionState
    intent: NavigationIntent | None


__all__ = [
    "Aggregate",
    "Focused",
    "NavigationIntent",
    "SelectionMode",
    "SelectionSource",
    "SelectionState",
    "SelectionTransition",
]
