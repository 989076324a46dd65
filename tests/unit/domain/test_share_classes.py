from __future__ import annotations

import pytest

from valuescope_api.domain.entities.share_class import ShareClass
from valuescope_api.domain.enums.share_class_type import ShareClassType
from valuescope_api.domain.exceptions.analytics import InvalidSecurityCodeError
from valuescope_api.domain.services.share_classes import (
    find_share_class,
    order_share_classes,
    representative_share_class,
    split_sec_code,
)


def _sc(security_id: str, ticker: str, label: str | None) -> ShareClass:
    return ShareClass(
        security_id=security_id,
        company_id="C1",
        type=ShareClassType.from_label(label),
        ticker=ticker,
        exchange="KRX",
        type_label=label,
    )


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("보통주", ShareClassType.COMMON),
        (" Common ", ShareClassType.COMMON),
        ("우선주", ShareClassType.PREFERRED),
        ("2우선주(신형)", ShareClassType.PREFERRED),
        ("전환우선주", ShareClassType.PREFERRED),
        ("신주인수권", ShareClassType.OTHER),
        (None, ShareClassType.OTHER),
    ],
)
def test_type_from_label(label: str | None, expected: ShareClassType) -> None:
    assert ShareClassType.from_label(label) is expected


def test_common_first_then_preferred_by_label() -> None:
    classes = [
        _sc("S3", "005937", "2우선주(신형)"),
        _sc("S9", "000009", "신주인수권"),
        _sc("S2", "005935", "1우선주"),
        _sc("S1", "005930", "보통주"),
    ]

    ordered = order_share_classes(classes)

    assert [sc.security_id for sc in ordered] == ["S1", "S2", "S3", "S9"]
    assert representative_share_class(classes).security_id == "S1"


def test_representative_without_common_class() -> None:
    classes = [_sc("S3", "005937", "2우선주"), _sc("S2", "005935", "1우선주")]

    assert representative_share_class(classes).security_id == "S2"
    assert representative_share_class([]) is None


def test_find_share_class_is_membership_only() -> None:
    classes = [_sc("S1", "005930", "보통주")]

    assert find_share_class(classes, "S1") is classes[0]
    assert find_share_class(classes, "S2") is None


def test_split_sec_code() -> None:
    assert split_sec_code(" krx.005930 ") == ("KRX", "005930")
    assert _sc("S1", "005930", "보통주").sec_code == "KRX.005930"


@pytest.mark.parametrize("raw", ["", "005930", "KRX.", ".005930"])
def test_split_sec_code_rejects_malformed(raw: str) -> None:
    with pytest.raises(InvalidSecurityCodeError):
        split_sec_code(raw)


def test_share_class_requires_identifiers() -> None:
    with pytest.raises(ValueError):
        _sc(" ", "005930", "보통주")


def test_share_class_rejects_the_aggregate_id() -> None:
    with pytest.raises(ValueError):
        _sc("aggregate", "005930", "보통주")
