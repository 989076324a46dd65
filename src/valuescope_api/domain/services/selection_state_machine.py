# src/valuescope_api/domain/services/selection_state_machine.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Selection state machine.

Purpose:
    Resolve and transition the analytical focus between the company-wide
    aggregate view and a single share class. The URL is the only source of
    truth: each transition returns the new state together with the
    navigation intent that encodes it, so reloading the target reproduces
    the same state.

Layer:
    domain

Notes:
    - This module is pure domain logic:
        * No logging.
        * No HTTP or transport concerns.
    - States:
        * ``Aggregate``: the merged company view.
        * ``Focused(security_id)``: one share class.
    - A security id outside the company's share-class set always resolves
      to ``Aggregate``; it is never an error.
    - There is no terminal state and no queue. Each call is independent, so
      the latest transition simply supersedes earlier ones.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from valuescope_api.domain.entities.selection import (
    Aggregate,
    Focused,
    NavigationIntent,
    SelectionSource,
    SelectionState,
    SelectionTransition,
)
from valuescope_api.domain.entities.share_class import ShareClass
from valuescope_api.domain.entities.valuation_series import AGGREGATE_ENTITY_ID
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.services.share_classes import (
    find_share_class,
    representative_share_class,
)

_FOCUS_SIGNALS = frozenset({"stock", "1", "true", "yes", "on"})


def parse_focus_signal(raw: Any) -> bool:
    """Interpret the URL focus parameter.

    ``"stock"`` is the canonical value; common truthy spellings are also
    accepted. Anything else, including ``None``, means "no focus".
    """
    if raw is None:
        return False
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _FOCUS_SIGNALS


def navigation_path(share_class: ShareClass, *, base_path: str, metric: ValuationMetric | str) -> str:
    """Return ``/{base}/{exchange}.{ticker}/{metric}`` for a share class."""
    metric_segment = metric.value if isinstance(metric, ValuationMetric) else str(metric)
    base = base_path.strip("/")
    return f"/{base}/{share_class.sec_code}/{metric_segment}"


def resolve_initial(
    share_classes: Sequence[ShareClass],
    security_id: str,
    focus: bool,
) -> SelectionState:
    """Derive the state on page load from the navigation target.

    Rules:
        - Unknown security: ``Aggregate``.
        - Common class without the focus signal: ``Aggregate``.
        - Common class with the focus signal: ``Focused``.
        - Any non-common class: ``Focused`` (it is focused by nature).
    """
    share_class = find_share_class(share_classes, security_id)
    if share_class is None:
        return SelectionState(mode=Aggregate(), source=SelectionSource.URL)
    if share_class.is_common and not focus:
        return SelectionState(mode=Aggregate(), source=SelectionSource.URL)
    return SelectionState(mode=Focused(share_class.security_id), source=SelectionSource.URL)


def select_share_class(
    share_classes: Sequence[ShareClass],
    clicked_id: str,
    *,
    base_path: str,
    metric: ValuationMetric | str,
) -> SelectionTransition:
    """Transition after the user picks a share-class card.

    The intent navigates to the clicked class's own page and carries the
    focus signal only for the common class. An unknown id falls back to the
    aggregate transition.
    """
    share_class = find_share_class(share_classes, clicked_id)
    if share_class is None:
        return select_aggregate(share_classes, base_path=base_path, metric=metric)

    intent = NavigationIntent(
        path=navigation_path(share_class, base_path=base_path, metric=metric),
        focus=share_class.is_common,
    )
    return SelectionTransition(
        state=SelectionState(mode=Focused(share_class.security_id), source=SelectionSource.CLICK),
        intent=intent,
    )


def select_aggregate(
    share_classes: Sequence[ShareClass],
    *,
    base_path: str,
    metric: ValuationMetric | str,
) -> SelectionTransition:
    """Transition after the user picks the company summary control.

    Navigates to the representative common class without the focus signal.
    A company with no share classes yields no navigation intent.
    """
    representative = representative_share_class(share_classes)
    intent = (
        NavigationIntent(
            path=navigation_path(representative, base_path=base_path, metric=metric),
            focus=False,
        )
        if representative is not None
        else None
    )
    return SelectionTransition(
        state=SelectionState(mode=Aggregate(), source=SelectionSource.CLICK),
        intent=intent,
    )


def transition(
    share_classes: Sequence[ShareClass],
    target: str,
    *,
    base_path: str,
    metric: ValuationMetric | str,
) -> SelectionTransition:
    """Dispatch a user selection: the aggregate marker or a security id."""
    if target == AGGREGATE_ENTITY_ID:
        return select_aggregate(share_classes, base_path=base_path, metric=metric)
    return select_share_class(share_classes, target, base_path=base_path, metric=metric)


def highlighted_entity_id(state: SelectionState) -> str:
    """Return the entity id analytics should highlight for ``state``."""
    match state.mode:
        case Focused(security_id=security_id):
            return security_id
        case Aggregate():
            return AGGREGATE_ENTITY_ID


def analysed_entity_id(
    state: SelectionState,
    metric: ValuationMetric | str,
    security_id: str,
) -> str:
    """Return the entity whose series analytics should read.

    Only additive metrics have a meaningful company total. For the rest
    (ratios and per-share figures) the aggregate view reads the page's own
    security, so a common-share PER page shows the common PER rather than a
    sum across share classes.
    """
    entity_id = highlighted_entity_id(state)
    if entity_id == AGGREGATE_ENTITY_ID and not ValuationMetric(metric).is_additive:
        return security_id
    return entity_id


__all__ = [
    "analysed_entity_id",
    "highlighted_entity_id",
    "navigation_path",
    "parse_focus_signal",
    "resolve_initial",
    "select_aggregate",
    "select_share_class",
    "transition",
]
