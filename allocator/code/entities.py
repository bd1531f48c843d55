#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Mon Sep 15 12:05:19 2025

Donors and recipients as supplied by the data layer.
"""

from typing import List, Dict, Optional, Iterable, Tuple
from datetime import datetime, timedelta

import allocator.magic_values.column_names as cn
import allocator.magic_values.allocation_settings as es
from allocator.code.utils import to_naive_utc


def _clean_hla_typing(
        hla_typing: Optional[Dict[str, Iterable[str]]]
) -> Dict[str, Tuple[str, ...]]:
    """Strip empty entries and force locus names to HLA-x."""
    if not hla_typing:
        return {}
    cleaned = {}
    for locus, alleles in hla_typing.items():
        locus = str(locus).strip().upper()
        if not locus.startswith('HLA-'):
            locus = f'HLA-{locus}'
        if alleles is None:
            continue
        if isinstance(alleles, str):
            alleles = [alleles]
        cleaned[locus] = tuple(
            str(a).strip() for a in alleles
            if a is not None and str(a).strip()
        )
    return cleaned


def _check_size(value: Optional[float], name: str) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    assert value > 0, f'{name} should be positive, not {value}'
    return value


class Donor:
    """Class which implements a donor

    ...

    Attributes   #noqa
    ----------
    id_donor: str
        donor identifier
    d_name: Optional[str]
        donor name
    donor_age: int
        donor age (years)
    d_gender: str
        donor gender
    d_bloodgroup: str
        donor blood group, with rhesus factor
    organs_available: List[str]
        organs available, in order of offering
    hla_typing: Dict[str, Tuple[str, ...]]
        alleles per HLA locus
    d_height: Optional[float]
        height (cm)
    d_weight: Optional[float]
        weight (kg)
    medical_history: str
        medical history (free text)
    cause_of_death: str
        cause of death (free text)
    cold_ischemia_time_hours: Optional[float]
        explicit viability window. If absent, organ defaults apply.
    ischemia_start: Optional[datetime]
        explicit start of the ischemia clock
    created_at: Optional[datetime]
        time at which the donor was recorded
    updated_at: Optional[datetime]
        time at which the donor was last updated
    d_status: str
        donor status

    Methods
    -------
    primary_organ():
        organ which is matched first
    history_text():
        lower-case medical history and cause of death
    """

    def __init__(
            self, id_donor: str, age: int, gender: str, bloodgroup: str,
            organs_available: List[str],
            hla_typing: Optional[Dict[str, Iterable[str]]] = None,
            name: Optional[str] = None,
            height: Optional[float] = None,
            weight: Optional[float] = None,
            medical_history: Optional[str] = '',
            cause_of_death: Optional[str] = '',
            cold_ischemia_time_hours: Optional[float] = None,
            ischemia_start: Optional[datetime] = None,
            created_at: Optional[datetime] = None,
            updated_at: Optional[datetime] = None,
            status: str = cn.AVAILABLE
            ) -> None:

        self.id_donor = id_donor
        self.d_name = name
        self.donor_age = int(age)

        assert gender in es.ALLOWED_GENDERS, \
            f'gender should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_GENDERS)}'
        self.d_gender = str(gender)

        assert bloodgroup in es.ALLOWED_BLOODGROUPS, \
            f'blood group should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_BLOODGROUPS)}'
        self.d_bloodgroup = str(bloodgroup)

        organs_available = list(organs_available or [])
        for organ in organs_available:
            assert organ in es.ALLOWED_ORGANS, \
                f'organs should be one of:\n\t' \
                f'{", ".join(es.ALLOWED_ORGANS)}'
        self.organs_available = organs_available

        self.hla_typing = _clean_hla_typing(hla_typing)
        self.d_height = _check_size(height, 'height')
        self.d_weight = _check_size(weight, 'weight')
        self.medical_history = medical_history or ''
        self.cause_of_death = cause_of_death or ''

        if cold_ischemia_time_hours is not None:
            cold_ischemia_time_hours = float(cold_ischemia_time_hours)
            assert cold_ischemia_time_hours >= 0, \
                'cold ischemia time cannot be negative'
        self.cold_ischemia_time_hours = cold_ischemia_time_hours

        for dt in (ischemia_start, created_at, updated_at):
            if dt is not None and not isinstance(dt, datetime):
                raise TypeError(
                    f'donor timestamps must be datetime, not {type(dt)}'
                )
        self.ischemia_start = to_naive_utc(ischemia_start)
        self.created_at = to_naive_utc(created_at)
        self.updated_at = to_naive_utc(updated_at)

        assert status in es.ALLOWED_DONOR_STATUSES, \
            f'donor status should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_DONOR_STATUSES)}'
        self.d_status = status

    @property
    def has_explicit_window(self) -> bool:
        return self.cold_ischemia_time_hours is not None

    def primary_organ(self) -> Optional[str]:
        """Return the organ which is matched, if any"""
        if not self.organs_available:
            return None
        return self.organs_available[0]

    def history_text(self) -> str:
        """Combined lower-case text used for keyword screening"""
        return (
            f'{self.medical_history} {self.cause_of_death}'
        ).lower()

    def __str__(self):
        return(
            f'Donor {self.id_donor} ({self.d_bloodgroup}, '
            f'age {self.donor_age}), organs: '
            f'{", ".join(self.organs_available) or "none"}'
            )

    def __repr__(self):
        return self.__str__()


class Recipient:
    """Class which implements a waiting list recipient
    ...

    Attributes   #noqa
    ----------
    id_recipient: str
        recipient identifier
    r_name: Optional[str]
        recipient name
    recipient_age: int
        recipient age (years)
    r_gender: str
        recipient gender
    r_bloodgroup: str
        recipient blood group, with rhesus factor
    organ_needed: str
        organ the recipient is listed for
    urgency_score: int
        clinical urgency (1-10)
    meld_score: Optional[int]
        MELD score (liver only, 6-40)
    unos_status: Optional[str]
        UNOS status code (heart / liver)
    hla_typing: Dict[str, Tuple[str, ...]]
        alleles per HLA locus
    unacceptable_antigens: Tuple[str, ...]
        antigens declared unacceptable for virtual crossmatch
    r_height: Optional[float]
        height (cm)
    r_weight: Optional[float]
        weight (kg)
    medical_history: str
        medical history (free text)
    r_status: str
        listing status, only active recipients are matched
    time_on_list: Optional[datetime]
        listing date
    created_at: Optional[datetime]
        time at which the recipient was recorded

    Methods
    -------
    is_active():
        whether recipient is actively listed
    days_on_list(now):
        number of days on the waiting list at time now
    """

    def __init__(
            self, id_recipient: str, age: int, gender: str, bloodgroup: str,
            organ_needed: str, urgency_score: int,
            hla_typing: Optional[Dict[str, Iterable[str]]] = None,
            name: Optional[str] = None,
            height: Optional[float] = None,
            weight: Optional[float] = None,
            medical_history: Optional[str] = '',
            meld_score: Optional[int] = None,
            unos_status: Optional[str] = None,
            unacceptable_antigens: Optional[Iterable[str]] = None,
            status: str = cn.ACTIVE,
            time_on_list: Optional[datetime] = None,
            created_at: Optional[datetime] = None,
            updated_at: Optional[datetime] = None
            ) -> None:

        self.id_recipient = id_recipient
        self.r_name = name
        self.recipient_age = int(age)

        assert gender in es.ALLOWED_GENDERS, \
            f'gender should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_GENDERS)}'
        self.r_gender = str(gender)

        assert bloodgroup in es.ALLOWED_BLOODGROUPS, \
            f'blood group should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_BLOODGROUPS)}'
        self.r_bloodgroup = str(bloodgroup)

        assert organ_needed in es.ALLOWED_ORGANS, \
            f'organ needed should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_ORGANS)}'
        self.organ_needed = str(organ_needed)

        lo, hi = es.URGENCY_SCORE_LIMITS
        assert lo <= urgency_score <= hi, \
            f'urgency score should be within {lo}-{hi}, not {urgency_score}'
        self.urgency_score = urgency_score

        if meld_score is not None:
            lo, hi = es.MELD_SCORE_LIMITS
            assert lo <= meld_score <= hi, \
                f'MELD score should be within {lo}-{hi}, not {meld_score}'
        self.meld_score = meld_score

        if unos_status is not None:
            unos_status = str(unos_status)
            assert unos_status in es.ALLOWED_UNOS_STATUSES, \
                f'UNOS status should be one of:\n\t' \
                f'{", ".join(es.ALLOWED_UNOS_STATUSES)}'
        self.unos_status = unos_status

        self.hla_typing = _clean_hla_typing(hla_typing)
        self.unacceptable_antigens = tuple(
            str(ag).strip() for ag in (unacceptable_antigens or [])
            if ag is not None and str(ag).strip()
        )
        self.r_height = _check_size(height, 'height')
        self.r_weight = _check_size(weight, 'weight')
        self.medical_history = medical_history or ''

        assert status in es.ALLOWED_RECIPIENT_STATUSES, \
            f'recipient status should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_RECIPIENT_STATUSES)}'
        self.r_status = status

        for dt in (time_on_list, created_at, updated_at):
            if dt is not None and not isinstance(dt, datetime):
                raise TypeError(
                    f'recipient timestamps must be datetime, not {type(dt)}'
                )
        self.time_on_list = to_naive_utc(time_on_list)
        self.created_at = to_naive_utc(created_at)
        self.updated_at = to_naive_utc(updated_at)

    def is_active(self) -> bool:
        return self.r_status == cn.ACTIVE

    def history_text(self) -> str:
        return self.medical_history.lower()

    def days_on_list(self, now: datetime) -> Optional[float]:
        """Days since listing. None if listing date is unknown."""
        listed = self.time_on_list or self.created_at
        if listed is None:
            return None
        return max((now - listed) / timedelta(days=1), 0)

    def __str__(self):
        return(
            f'Recipient {self.id_recipient} ({self.r_bloodgroup}, '
            f'age {self.recipient_age}) listed for {self.organ_needed}'
            )

    def __repr__(self):
        return self.__str__()
