#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Tue Sep 16 09:14:37 2025

Cold ischemia time tracking for donated organs.
"""

from typing import Optional
from datetime import datetime, timedelta

import allocator.magic_values.allocation_settings as es
from allocator.code.entities import Donor
from allocator.code.utils import round_to_decimals, to_naive_utc


def format_viability_window(hours: float) -> str:
    """Format remaining viability for display"""
    if hours <= 0:
        return 'expired'
    return f'{round_to_decimals(hours, 1)}h'


class ViabilityTracker:
    """Class which tracks remaining viability of donor organs
    ...

    Attributes   #noqa
    ----------
    now: datetime
        time at which viability is assessed. Sampled once, so that
        all organs in a match run are assessed at the same time.

    Methods
    -------
    limit_hours(donor, organ):
        viability window in hours
    ischemia_start(donor):
        start of the ischemia clock
    elapsed_hours(donor):
        hours elapsed since start of ischemia clock
    remaining_hours(donor, organ):
        remaining viability in hours
    is_viable_now(donor, organ):
        whether organ can still be offered
    """

    def __init__(self, now: datetime) -> None:
        if not isinstance(now, datetime):
            raise TypeError(f'now must be datetime, not a {type(now)}')
        self.now = to_naive_utc(now)

    @staticmethod
    def limit_hours(donor: Donor, organ: str) -> float:
        """Explicit window if set, otherwise the organ default."""
        if donor.has_explicit_window:
            return donor.cold_ischemia_time_hours
        return es.ORGAN_VIABILITY_HOURS[organ]

    @staticmethod
    def ischemia_start(donor: Donor) -> Optional[datetime]:
        """Retrieve the start of the ischemia clock.

        Falls back on the last update only if the donor has an
        explicit window; otherwise on the creation time.
        """
        if donor.ischemia_start is not None:
            return donor.ischemia_start
        if donor.has_explicit_window and donor.updated_at is not None:
            return donor.updated_at
        return donor.created_at

    def elapsed_hours(self, donor: Donor) -> Optional[float]:
        """Hours since start of the ischemia clock. None if unknown."""
        start = self.ischemia_start(donor)
        if start is None:
            return None
        return max((self.now - start) / timedelta(hours=1), 0.0)

    def remaining_hours(self, donor: Donor, organ: str) -> float:
        """Remaining viability (hours), rounded to one decimal.

        Without an explicit window there is no countdown, and the
        organ default is returned.
        """
        limit = self.limit_hours(donor, organ)
        if not donor.has_explicit_window:
            return float(limit)

        elapsed = self.elapsed_hours(donor)
        if elapsed is None:
            return float(limit)
        return round_to_decimals(max(0.0, limit - elapsed), 1)

    def is_viable_now(self, donor: Donor, organ: str) -> bool:
        return self.remaining_hours(donor, organ) > 0

    def __str__(self) -> str:
        return f'Viability tracker at {self.now}'

    def __repr__(self) -> str:
        return self.__str__()
