#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Mon Sep 15 11:31:50 2025

Scripts to read in input files.
"""

from typing import Optional, List, Dict, Any
from types import MappingProxyType
from numpy import array
import pandas as pd
import yaml

from allocator.code.utils import DotDict
import allocator.magic_values.inputfile_settings as dtypes
import allocator.magic_values.column_names as cn
import allocator.magic_values.allocation_settings as es


def _read_with_datetime_cols(
        input_path: str,
        dtps: Dict[str, Any],
        usecols: Optional[List[str]] = None,
        datecols: Optional[List[str]] = None,
        **kwargs
) -> pd.DataFrame:
    """Read in pd.DataFrame with datecols as datetime"""

    if usecols is None:
        usecols = list(dtps.keys())

    data_ = pd.read_csv(
        input_path,
        dtype=dtps,
        usecols=lambda x: x in usecols,
        **kwargs
    )
    if datecols:
        for col in datecols:
            if col not in data_.columns:
                continue
            # Exports carry timezone offsets; store as naive UTC.
            data_[col] = pd.to_datetime(
                data_[col],
                format=dtypes.DATETIME_FORMAT,
                utc=True
            ).dt.tz_convert(None)

    assert isinstance(data_, pd.DataFrame), \
        f'Expected DataFrame, not {type(data_)}'

    # Read in as standard datetime object, not pd.Timestamp
    if datecols:
        for date_col in datecols:
            if date_col not in data_.columns:
                continue
            data_[date_col] = pd.Series(
                array(data_[date_col].dt.to_pydatetime()),
                dtype='object',
                index=data_.index
            )

    return data_


def read_donors(input_path: str, **kwargs) -> pd.DataFrame:
    """Read in a donor export."""

    d_donors = _read_with_datetime_cols(
        input_path=input_path,
        dtps=dtypes.DTYPE_DONORLIST,
        datecols=dtypes.DATECOLS_DONORLIST,
        **kwargs
    )

    for col in ('id', 'age', 'blood_type', 'organs_available'):
        assert col in d_donors.columns, \
            f'{col} should be column for {input_path}'

    return d_donors


def read_recipients(input_path: str, **kwargs) -> pd.DataFrame:
    """Read in a recipient export."""

    d_recipients = _read_with_datetime_cols(
        input_path=input_path,
        dtps=dtypes.DTYPE_RECIPIENTLIST,
        datecols=dtypes.DATECOLS_RECIPIENTLIST,
        **kwargs
    )

    for col in ('id', 'age', 'blood_type', 'organ_needed', 'urgency_score'):
        assert col in d_recipients.columns, \
            f'{col} should be column for {input_path}'

    return d_recipients


def _freeze_keywords(keywords: List[str], name: str) -> tuple:
    """Lower-case and freeze a list of keywords"""
    if keywords is None:
        return tuple()
    if not isinstance(keywords, list):
        raise ValueError(f'Keywords for {name} should be a list.')
    return tuple(str(kw).strip().lower() for kw in keywords if kw)


def read_policy_settings(ps_path: str = es.PATH_DEFAULT_POLICY) -> DotDict:
    """Read in the free-text allocation policy"""
    with open(ps_path, "r", encoding='utf-8') as file:
        policy: Dict[str, Any] = yaml.load(file, Loader=yaml.FullLoader)

    if not isinstance(policy, dict):
        raise ValueError(f'{ps_path} does not contain a policy mapping.')

    # Exclusion keywords, per party, per organ.
    exclusions = policy.get(cn.EXCLUSION_KEYWORDS)
    if not isinstance(exclusions, dict):
        raise ValueError(
            f'{cn.EXCLUSION_KEYWORDS} missing from {ps_path}'
        )
    frozen_exclusions = {}
    for party in (cn.DONOR, cn.RECIPIENT):
        assert party in exclusions, \
            f'Exclusion keywords should be defined for {party}s'
        party_lists = exclusions[party]
        for group in (cn.GENERAL,) + es.ALLOWED_ORGANS:
            assert group in party_lists, \
                f'Exclusion keywords for {party} missing for {group}'
        frozen_exclusions[party] = MappingProxyType({
            group: _freeze_keywords(kws, f'{party}-{group}')
            for group, kws in party_lists.items()
        })
    policy[cn.EXCLUSION_KEYWORDS] = MappingProxyType(frozen_exclusions)

    # Comorbidity buckets, with points per bucket
    buckets = policy.get(cn.COMORBIDITY_BUCKETS) or {}
    frozen_buckets = {}
    for bucket, spec in buckets.items():
        try:
            points = float(spec[cn.POINTS])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(
                f'Comorbidity bucket {bucket} needs numeric points.'
            ) from e
        frozen_buckets[bucket] = MappingProxyType({
            cn.POINTS: points,
            cn.KEYWORDS: _freeze_keywords(spec.get(cn.KEYWORDS), bucket)
        })
    policy[cn.COMORBIDITY_BUCKETS] = MappingProxyType(frozen_buckets)
    policy[cn.COMORBIDITY_CAP] = float(policy.get(cn.COMORBIDITY_CAP, 15))

    return DotDict(policy)
