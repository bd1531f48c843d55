#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Mon Sep 15 11:02:45 2025

Utility functions shared by the allocation engine.
"""

from typing import Any, Optional
from datetime import datetime, timezone

import numpy as np


class DotDict(dict):
    """Dictionary with dot.notation access to its keys"""

    def __getattr__(self, key: str) -> Any:
        try:
            return self[key]
        except KeyError as e:
            raise AttributeError(key) from e

    def __setattr__(self, key: str, value: Any) -> None:
        self[key] = value

    def __delattr__(self, key: str) -> None:
        try:
            del self[key]
        except KeyError as e:
            raise AttributeError(key) from e


def round_to_decimals(x: float, p: int = 2) -> float:
    """Round half away from zero to p decimals."""
    factor = 10 ** p
    return float(np.sign(x) * np.floor(abs(x) * factor + 0.5) / factor)


def to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert timezone-aware datetimes to naive UTC datetimes"""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)
