# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Base Controller.

Summary:
    Canonical base for adapter controllers. Controllers are thin coordinators
    that translate adapter inputs into use-case requests and use-case results
    into application DTOs.

Layer:
    adapters/controllers
"""
from __future__ import annotations


class BaseController:
    """Marker base for adapter controllers."""

    __slots__ = ()
