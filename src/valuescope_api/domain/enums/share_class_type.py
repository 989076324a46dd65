# src/valuescope_api/domain/enums/share_class_type.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Share class type enumeration.

Purpose:
    Classify a listed security of a company as common, preferred, or other.
    Upstream reference data labels share classes in Korean ("보통주",
    "우선주", "2우선주(신형)", ...); translation into this enum happens once,
    at the repository boundary, via :meth:`ShareClassType.from_label`.

Layer:
    domain
"""

from __future__ import annotations

from enum import Enum

_COMMON_LABELS = frozenset({"보통주", "common", "common stock", "ordinary"})
_PREFERRED_MARKERS = ("우선주", "preferred", "pref")


class ShareClassType(str, Enum):
    """Share class of a listed security."""

    COMMON = "common"
    PREFERRED = "preferred"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str | None) -> ShareClassType:
        """Translate a raw reference-data label into a share class type.

        Args:
            label: Raw type label, e.g. ``"보통주"`` or ``"1우선주"``.

        Returns:
            The matching :class:`ShareClassType`; ``OTHER`` for unknown or
            missing labels.
        """
        if label is None:
            return cls.OTHER
        normalized = label.strip().lower()
        if normalized in _COMMON_LABELS:
            return cls.COMMON
        if any(marker in normalized for marker in _PREFERRED_MARKERS):
            return cls.PREFERRED
        return cls.OTHER


__all__ = ["ShareClassType"]
