#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Thu Sep 18 15:44:09 2025

Convert donor and recipient exports to entities.
"""

from typing import List, Dict, Any, Hashable, Optional, Tuple
from datetime import datetime

import pandas as pd

import allocator.code.read_input_files as rdr
import allocator.magic_values.inputfile_settings as dtypes
import allocator.magic_values.column_names as cn
from allocator.code.entities import Donor, Recipient


def _value(rcrd: Dict[Hashable, Any], key: str, default: Any = None) -> Any:
    """Retrieve value from record, with missing values as default"""
    value = rcrd.get(key, default)
    if value is None or (not isinstance(value, (list, tuple)) and
                         pd.isna(value)):
        return default
    return value


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [
        item.strip() for item in str(value).split(dtypes.LIST_SEPARATOR)
        if item.strip()
    ]


def _hla_from_record(rcrd: Dict[Hashable, Any]) -> Dict[str, List[str]]:
    """Combine the per-locus HLA columns to an HLA typing"""
    return {
        locus: _split_list(_value(rcrd, col))
        for col, locus in dtypes.HLA_COLUMNS.items()
        if _value(rcrd, col) is not None
    }


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _optional_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def _rcrd_to_donor(rcrd: Dict[Hashable, Any]) -> Donor:
    """Convert a record to a Donor object"""
    return Donor(
        id_donor=rcrd['id'],
        name=_value(rcrd, 'name'),
        age=int(rcrd['age']),
        gender=_value(rcrd, 'gender'),
        bloodgroup=_value(rcrd, 'blood_type'),
        organs_available=[
            organ.lower()
            for organ in _split_list(_value(rcrd, 'organs_available'))
        ],
        hla_typing=_hla_from_record(rcrd),
        height=_optional_float(_value(rcrd, 'height_cm')),
        weight=_optional_float(_value(rcrd, 'weight_kg')),
        medical_history=_value(rcrd, 'medical_history', ''),
        cause_of_death=_value(rcrd, 'cause_of_death', ''),
        cold_ischemia_time_hours=_optional_float(
            _value(rcrd, 'cold_ischemia_time_hours')
        ),
        ischemia_start=_optional_datetime(_value(rcrd, 'ischemia_start')),
        created_at=_optional_datetime(_value(rcrd, 'created_at')),
        updated_at=_optional_datetime(_value(rcrd, 'updated_at')),
        status=_value(rcrd, 'status', cn.AVAILABLE)
    )


def _rcrd_to_recipient(rcrd: Dict[Hashable, Any]) -> Recipient:
    """Convert a record to a Recipient object"""
    return Recipient(
        id_recipient=rcrd['id'],
        name=_value(rcrd, 'name'),
        age=int(rcrd['age']),
        gender=_value(rcrd, 'gender'),
        bloodgroup=_value(rcrd, 'blood_type'),
        organ_needed=str(_value(rcrd, 'organ_needed', '')).lower(),
        urgency_score=int(rcrd['urgency_score']),
        hla_typing=_hla_from_record(rcrd),
        height=_optional_float(_value(rcrd, 'height_cm')),
        weight=_optional_float(_value(rcrd, 'weight_kg')),
        medical_history=_value(rcrd, 'medical_history', ''),
        meld_score=_optional_int(_value(rcrd, 'meld_score')),
        unos_status=_value(rcrd, 'unos_status'),
        unacceptable_antigens=_split_list(
            _value(rcrd, 'unacceptable_antigens')
        ),
        status=_value(rcrd, 'status', cn.ACTIVE),
        time_on_list=_optional_datetime(_value(rcrd, 'time_on_list')),
        created_at=_optional_datetime(_value(rcrd, 'created_at')),
        updated_at=_optional_datetime(_value(rcrd, 'updated_at'))
    )


def load_donors(d_donors: pd.DataFrame) -> Dict[Any, Donor]:
    """Load donors from a DataFrame, keyed by donor ID"""
    return {
        rcrd['id']: _rcrd_to_donor(rcrd)
        for rcrd in d_donors.to_dict(orient='records')
    }


def load_recipients(
        d_recipients: pd.DataFrame,
        organ: Optional[str] = None,
        active_only: bool = False
) -> Dict[Any, Recipient]:
    """Load recipients from a DataFrame, keyed by recipient ID.

    Optionally pre-filter on the organ needed and active status.
    """
    if organ is not None:
        d_recipients = d_recipients.loc[
            d_recipients['organ_needed'].str.lower() == organ, :
        ]
    if active_only:
        d_recipients = d_recipients.loc[
            d_recipients['status'].fillna(cn.ACTIVE) == cn.ACTIVE, :
        ]
    return {
        rcrd['id']: _rcrd_to_recipient(rcrd)
        for rcrd in d_recipients.to_dict(orient='records')
    }


def load_match_inputs(
        path_donors: str,
        path_recipients: str
) -> Tuple[Dict[Any, Donor], Dict[Any, Recipient]]:
    """Read in and load donors and recipients from exports"""
    donors = load_donors(rdr.read_donors(path_donors))
    recipients = load_recipients(rdr.read_recipients(path_recipients))
    return donors, recipients
