#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Thu Sep 18 10:05:27 2025

Match records and match lists for a donor organ.
"""

from datetime import datetime, timezone
from typing import (
    List, Any, Dict, Optional, Tuple, Iterable, Callable
)
import pandas as pd

import allocator.magic_values.column_names as cn
import allocator.magic_values.allocation_settings as es
from allocator.code.entities import Donor, Recipient
from allocator.code.eligibility import (
    check_donor_eligibility, check_recipient_for_donor
)
from allocator.code.RiskClassifier import calc_risk, determine_urgency_level
from allocator.code.ScoringFunction import CompatibilityScore
from allocator.code.ViabilityTracker import (
    ViabilityTracker, format_viability_window
)
from allocator.code.utils import DotDict, round_to_decimals, to_naive_utc
from allocator.magic_values.rules import DEFAULT_POLICY

TraceHook = Callable[[str, Dict[str, Any]], None]


class DonorIneligibleError(Exception):
    """Donor cannot donate the organ. Allocation must not proceed."""

    def __init__(self, organ: str, reason: str, party: str = cn.DONOR):
        self.organ = organ
        self.reason = reason
        self.party = party
        super().__init__(
            f'{party.capitalize()} is not eligible for {organ} donation. '
            f'Reason: {reason}'
        )


class MatchRecord:
    """Class which implements a match between a donor organ
    and a recipient
    ...

    Attributes   #noqa
    ----------
    recipient: Recipient
        recipient which is matched
    donor: Donor
        donor info
    organ: str
        organ which is matched
    date_match: datetime
        time at which the match is evaluated
    match_score: float
        compatibility score (0-100)
    compatibility_factors: Dict[str, Any]
        breakdown of the compatibility score
    risk_percentage: float
        risk (0-80)
    risk_level: str
        low, medium or high
    risk_contributions: Dict[str, float]
        contributions to the risk, before capping
    urgency_level: str
        routine, urgent or critical
    viability_window_hours: float
        remaining viability at time of match

    Methods
    -------
    return_match_info(cols):
        Return match information as a dictionary
    to_allocation_record(...):
        Return the record to persist if the match is allocated
    """

    def __init__(
            self,
            recipient: Recipient,
            donor: Donor,
            organ: str,
            tracker: ViabilityTracker,
            scorer: CompatibilityScore,
            policy: DotDict = DEFAULT_POLICY
    ) -> None:

        self.recipient = recipient
        self.donor = donor
        self.organ = organ
        self.__dict__[cn.MATCH_DATE] = tracker.now

        self.match_score, self.compatibility_factors = scorer.calc_score(
            donor, recipient
        )

        risk = calc_risk(
            donor=donor,
            recipient=recipient,
            organ=organ,
            match_score=self.match_score,
            hla_score=self.compatibility_factors[cn.HLA_COMPATIBILITY],
            tracker=tracker,
            policy=policy
        )
        self.risk_percentage = risk.risk_percentage
        self.risk_level = risk.risk_level
        self.risk_contributions = risk.contributions

        self.urgency_level = determine_urgency_level(recipient, organ)
        self.viability_window_hours = tracker.remaining_hours(donor, organ)

        days_on_list = recipient.days_on_list(tracker.now)
        self.__dict__[cn.DAYS_ON_LIST] = (
            round_to_decimals(days_on_list, 1)
            if days_on_list is not None else None
        )

    @property
    def match_tuple(self) -> Tuple[int, float]:
        return (es.URGENCY_ORDER[self.urgency_level], self.match_score)

    def return_match_info(
        self, cols: Optional[Tuple[str, ...]] = None
    ) -> Dict[str, Any]:
        """Return relevant match information"""
        if cols is None:
            cols = es.MATCH_INFO_COLS
        result_dict = {}

        for key in cols:
            if key in self.__dict__:
                result_dict[key] = self.__dict__[key]
            elif key in self.compatibility_factors:
                result_dict[key] = self.compatibility_factors[key]
            elif key in self.recipient.__dict__:
                result_dict[key] = self.recipient.__dict__[key]
            elif key in self.donor.__dict__:
                result_dict[key] = self.donor.__dict__[key]

        return result_dict

    def to_allocation_record(
            self,
            allocated_at: datetime,
            transplant_scheduled: Optional[datetime] = None,
            notes: Optional[str] = None,
            allocated_by: Optional[str] = None,
            status: str = cn.PENDING
    ) -> Dict[str, Any]:
        """Return the allocation record for the data store"""
        assert status in es.ALLOWED_ALLOCATION_STATUSES, \
            f'allocation status should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_ALLOCATION_STATUSES)}'
        return {
            cn.DONOR_ID: self.donor.id_donor,
            cn.RECIPIENT_ID: self.recipient.id_recipient,
            cn.ORGAN_TYPE: self.organ,
            cn.MATCH_SCORE: self.match_score,
            cn.RISK_LEVEL: self.risk_level,
            cn.RISK_PERCENTAGE: self.risk_percentage,
            cn.URGENCY_LEVEL: self.urgency_level,
            cn.COMPATIBILITY_FACTORS: dict(self.compatibility_factors),
            cn.ALLOCATED_AT: allocated_at,
            cn.TRANSPLANT_SCHEDULED: transplant_scheduled,
            cn.ALLOCATION_STATUS: status,
            cn.NOTES: notes or None,
            cn.ALLOCATED_BY: allocated_by
        }

    def __repr__(self):
        return (
            f'{self.organ} offer to {self.recipient.id_recipient} '
            f'from donor {self.donor.id_donor}: '
            f'{self.match_score} ({self.urgency_level}, '
            f'{self.risk_level} risk, '
            f'{format_viability_window(self.viability_window_hours)} left)'
        )

    def __str__(self):
        return self.__repr__()

    def __lt__(self, other):
        """Order by match tuple (urgency tier, then score)."""
        return self.match_tuple > other.match_tuple


class MatchList:
    """Class which implements a MatchList for a donor organ
    ...

    Attributes   #noqa
    ----------
    donor: Donor
        Donor that is on offer
    date_match: datetime
        Time at which the match list is generated.
    organ: Optional[str]
        Organ on offer (first available organ)
    viability_window_hours: Optional[float]
        Remaining viability of the organ
    match_list: List[MatchRecord]
        Match list, consisting of match records above threshold
    filtered: Dict[Any, str]
        Reasons for which recipients were filtered out
    failed_records: Dict[Any, Exception]
        Recipients for which scoring failed

    Methods
    -------
    is_empty()
    return_match_list()
    return_match_info()
    return_match_df()
    print_match_list()
    """

    def __init__(
            self,
            donor: Donor,
            recipients: Iterable[Recipient],
            match_date: datetime,
            policy: DotDict = DEFAULT_POLICY,
            verbose: int = 0,
            trace: Optional[TraceHook] = None
    ) -> None:

        if not isinstance(match_date, datetime):
            raise TypeError(
                f'match_date must be datetime, '
                f'not a {type(match_date)}'
                )

        self.donor = donor
        self.policy = policy
        self.verbose = verbose
        self.trace = trace
        self.tracker = ViabilityTracker(now=match_date)
        self.__dict__[cn.MATCH_DATE] = self.tracker.now

        self.organ = donor.primary_organ()
        self.viability_window_hours = None
        self.match_list: List[MatchRecord] = []
        self.filtered: Dict[Any, str] = {}
        self.failed_records: Dict[Any, Exception] = {}

        if self.organ is None:
            self._emit(cn.EV_NO_ORGAN, donor=donor.id_donor)
            return

        self.viability_window_hours = self.tracker.remaining_hours(
            donor, self.organ
        )
        if not self.tracker.is_viable_now(donor, self.organ):
            self._emit(
                cn.EV_NOT_VIABLE, donor=donor.id_donor, organ=self.organ
            )
            return

        donor_eligibility = check_donor_eligibility(
            donor, self.organ, policy=policy
        )
        if not donor_eligibility.eligible:
            raise DonorIneligibleError(
                organ=self.organ, reason=donor_eligibility.reason
            )

        scorer = CompatibilityScore(organ=self.organ, verbose=verbose)
        for recipient in recipients:
            self._add_recipient(recipient, scorer)

        self.match_list.sort()

    def _emit(self, event: str, **payload) -> None:
        """Pass an event to the trace hook, and print if verbose."""
        if self.verbose:
            print(f'[{event}] {payload}')
        if self.trace is not None:
            self.trace(event, payload)

    def _add_recipient(
            self, recipient: Recipient, scorer: CompatibilityScore
    ) -> None:
        # A malformed recipient must not abort the match list.
        id_recipient = None
        try:
            id_recipient = recipient.id_recipient
            gate = check_recipient_for_donor(
                self.donor, recipient, self.organ, policy=self.policy
            )
            record = None
            if gate.eligible:
                record = MatchRecord(
                    recipient=recipient,
                    donor=self.donor,
                    organ=self.organ,
                    tracker=self.tracker,
                    scorer=scorer,
                    policy=self.policy
                )
        except Exception as e:
            self.failed_records[id_recipient] = e
            self._emit(cn.EV_SCORING_FAILED, recipient=id_recipient, error=e)
            return

        if record is None:
            self.filtered[id_recipient] = gate.reason
            self._emit(
                cn.EV_FILTERED, recipient=id_recipient, reason=gate.reason
            )
        elif record.match_score > es.MIN_MATCH_SCORE:
            self.match_list.append(record)
            self._emit(
                cn.EV_SCORED, recipient=id_recipient,
                match_score=record.match_score,
                urgency_level=record.urgency_level
            )
        else:
            self._emit(
                cn.EV_BELOW_THRESHOLD, recipient=id_recipient,
                match_score=record.match_score
            )

    def is_empty(self) -> bool:
        """Check if match list is empty"""
        return len(self.match_list) == 0

    def return_match_list(self) -> List[MatchRecord]:
        return [m for m in self.match_list]

    def return_match_info(self) -> List[Dict[str, Any]]:
        """Return match information per record"""
        return [
            matchr.return_match_info() for matchr in self.match_list
            ]

    def return_match_df(self) -> pd.DataFrame:
        """Return match list as DataFrame"""
        return pd.DataFrame.from_records(
            self.return_match_info(),
            columns=es.MATCH_INFO_COLS
        )

    def print_match_list(self) -> None:
        """Print match list as DataFrame"""
        print(self.return_match_df())

    def __str__(self) -> str:
        string = ''
        for matchr in self.match_list:
            string += str(matchr) + '\n'
        return string

    def __repr__(self):
        return (
            f'Match list for donor {self.donor.id_donor} '
            f'({self.organ}) with {len(self.match_list)} matches'
        )

    def __len__(self):
        return len(self.match_list)


def find_matches(
        donor: Donor,
        recipients: Iterable[Recipient],
        now: Optional[datetime] = None,
        policy: DotDict = DEFAULT_POLICY,
        verbose: int = 0,
        trace: Optional[TraceHook] = None
) -> List[MatchRecord]:
    """Rank recipients for the first organ the donor has available.

    Returns an empty list if no organ is on offer, the organ is no
    longer viable, or no recipient qualifies. Raises
    DonorIneligibleError if the donor cannot donate the organ.
    Naive timestamps are taken to be UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    match_list = MatchList(
        donor=donor,
        recipients=recipients,
        match_date=to_naive_utc(now),
        policy=policy,
        verbose=verbose,
        trace=trace
    )
    return match_list.return_match_list()
