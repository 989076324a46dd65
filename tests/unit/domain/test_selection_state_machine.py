from __future__ import annotations

import pytest

from valuescope_api.domain.entities.selection import (
    Aggregate,
    Focused,
    SelectionSource,
    SelectionState,
)
from valuescope_api.domain.entities.share_class import ShareClass
from valuescope_api.domain.entities.valuation_series import AGGREGATE_ENTITY_ID
from valuescope_api.domain.enums.share_class_type import ShareClassType
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.services.selection_state_machine import (
    analysed_entity_id,
    highlighted_entity_id,
    parse_focus_signal,
    resolve_initial,
    select_aggregate,
    transition,
)

COMMON = ShareClass(
    security_id="S1",
    company_id="C1",
    type=ShareClassType.COMMON,
    ticker="005930",
    exchange="KRX",
)
PREFERRED = ShareClass(
    security_id="S2",
    company_id="C1",
    type=ShareClassType.PREFERRED,
    ticker="005935",
    exchange="KRX",
    type_label="1우선주",
)
CLASSES = [PREFERRED, COMMON]


def test_common_class_without_focus_resolves_to_aggregate() -> None:
    state = resolve_initial(CLASSES, "S1", focus=False)
    assert state == SelectionState(mode=Aggregate(), source=SelectionSource.URL)
    assert highlighted_entity_id(state) == AGGREGATE_ENTITY_ID


def test_common_class_with_focus_resolves_to_focused() -> None:
    state = resolve_initial(CLASSES, "S1", focus=True)
    assert state.mode == Focused("S1")
    assert highlighted_entity_id(state) == "S1"


@pytest.mark.parametrize(
    ("metric", "expected"),
    [(ValuationMetric.MARKETCAP, AGGREGATE_ENTITY_ID), (ValuationMetric.PER, "S1"), ("div", "S1")],
)
def test_only_additive_metrics_analyse_the_company_total(metric, expected: str) -> None:
    state = resolve_initial(CLASSES, "S1", focus=False)
    assert analysed_entity_id(state, metric, "S1") == expected


def test_focused_state_analyses_the_focused_class_for_every_metric() -> None:
    state = resolve_initial(CLASSES, "S2", focus=False)
    assert analysed_entity_id(state, ValuationMetric.MARKETCAP, "S2") == "S2"
    assert analysed_entity_id(state, ValuationMetric.PBR, "S2") == "S2"


def test_preferred_class_is_focused_by_nature() -> None:
    assert resolve_initial(CLASSES, "S2", focus=False).mode == Focused("S2")


@pytest.mark.parametrize("focus", [True, False])
def test_unknown_security_falls_back_to_aggregate(focus: bool) -> None:
    state = resolve_initial(CLASSES, "S999", focus=focus)
    assert state.is_aggregate
    assert state.focused_id is None


def test_clicking_the_common_class_navigates_with_focus_signal() -> None:
    result = transition(CLASSES, "S1", base_path="security", metric=ValuationMetric.PER)

    assert result.state == SelectionState(mode=Focused("S1"), source=SelectionSource.CLICK)
    assert result.intent is not None
    assert result.intent.target == "/security/KRX.005930/per?focus=stock"


def test_clicking_a_preferred_class_navigates_without_focus_signal() -> None:
    result = transition(CLASSES, "S2", base_path="/security/", metric=ValuationMetric.MARKETCAP)

    assert result.state.focused_id == "S2"
    assert result.intent is not None
    assert result.intent.focus is False
    assert result.intent.target == "/security/KRX.005935/marketcap"


def test_selecting_aggregate_navigates_to_the_common_class() -> None:
    result = transition(CLASSES, AGGREGATE_ENTITY_ID, base_path="security", metric="div")

    assert result.state.is_aggregate
    assert result.state.source is SelectionSource.CLICK
    assert result.intent is not None
    assert result.intent.target == "/security/KRX.005930/div"


def test_clicking_an_unknown_id_behaves_like_aggregate() -> None:
    result = transition(CLASSES, "S999", base_path="security", metric="div")
    assert result.state.is_aggregate
    assert result.intent.path == "/security/KRX.005930/div"


def test_aggregate_without_share_classes_has_no_navigation() -> None:
    result = select_aggregate([], base_path="security", metric="div")
    assert result.state.is_aggregate
    assert result.intent is None


def test_latest_transition_wins() -> None:
    first = transition(CLASSES, "S2", base_path="security", metric="div")
    second = transition(CLASSES, AGGREGATE_ENTITY_ID, base_path="security", metric="div")

    assert first.state.focused_id == "S2"
    assert second.state.is_aggregate


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, False), ("stock", True), ("STOCK", True), ("true", True), ("", False), ("x", False), (True, True)],
)
def test_parse_focus_signal(raw: object, expected: bool) -> None:
    assert parse_focus_signal(raw) is expected

