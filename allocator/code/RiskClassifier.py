#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Wed Sep 17 14:36:58 2025

Risk estimation and urgency classification of matches.
"""

from typing import Dict, NamedTuple, Optional

import allocator.magic_values.allocation_settings as es
import allocator.magic_values.column_names as cn
from allocator.code.entities import Donor, Recipient
from allocator.code.ScoringFunction import weight_ratio
from allocator.code.ViabilityTracker import ViabilityTracker
from allocator.code.utils import DotDict, round_to_decimals
from allocator.magic_values.rules import DEFAULT_POLICY


class RiskAssessment(NamedTuple):
    """Risk percentage (capped), risk level, and contributions"""
    risk_percentage: float
    risk_level: str
    contributions: Dict[str, float]


def classify_risk_level(risk_percentage: float) -> str:
    for upper, level in es.RISK_LEVEL_LIMITS:
        if risk_percentage < upper:
            return level
    return cn.RISK_HIGH


def age_risk(donor: Donor, recipient: Recipient) -> float:
    risk = 0.0
    if (
        donor.donor_age > es.RISK_OLD_DONOR_AGE or
        recipient.recipient_age > es.RISK_OLD_RECIPIENT_AGE
    ):
        risk += es.RISK_OLD_AGE
    if abs(donor.donor_age - recipient.recipient_age) > \
            es.RISK_AGE_DIFFERENCE:
        risk += es.RISK_AGE_DIFFERENCE_PENALTY
    return risk


def match_score_risk(match_score: float) -> float:
    for upper, risk in es.RISK_MATCH_SCORE_TIERS:
        if match_score < upper:
            return float(risk)
    return 0.0


def organ_risk(recipient: Recipient, organ: str) -> float:
    if organ == cn.HEART and recipient.unos_status == cn.UNOS_1A:
        return float(es.RISK_HEART_UNOS_1A)
    if (
        organ == cn.LIVER and recipient.meld_score and
        recipient.meld_score > es.RISK_LIVER_MELD_THRESHOLD
    ):
        return float(es.RISK_LIVER_HIGH_MELD)
    return 0.0


def hla_mismatch_risk(hla_score: float, organ: str) -> float:
    return (1 - hla_score) * es.RISK_HLA_MISMATCH_MAX[organ]


def size_mismatch_risk(
        donor: Donor, recipient: Recipient, organ: str
) -> float:
    """Penalty if the weight ratio is known and outside the band"""
    ratio = weight_ratio(donor, recipient)
    if ratio is None:
        return 0.0
    min_ratio, max_ratio = es.SIZE_RATIO_LIMITS[organ]
    if ratio < min_ratio or ratio > max_ratio:
        return float(es.RISK_SIZE_MISMATCH)
    return 0.0


def ischemia_risk(
        donor: Donor, organ: str, tracker: ViabilityTracker
) -> float:
    """Penalty for elapsed cold ischemia, only for explicit windows."""
    if not donor.has_explicit_window:
        return 0.0
    elapsed = tracker.elapsed_hours(donor)
    if elapsed is None:
        return 0.0
    limit = tracker.limit_hours(donor, organ)
    if elapsed > limit:
        return float(es.RISK_ISCHEMIA_EXPIRED)
    if limit <= 0:
        return 0.0
    return es.RISK_ISCHEMIA_MAX_PROPORTIONAL * elapsed / limit


def comorbidity_risk(
        donor: Donor, recipient: Recipient,
        policy: DotDict = DEFAULT_POLICY
) -> float:
    """Sum of comorbidity buckets in combined medical history, capped."""
    text = (
        f'{donor.medical_history} {recipient.medical_history}'
    ).lower()
    risk = 0.0
    for bucket in policy[cn.COMORBIDITY_BUCKETS].values():
        if any(kw in text for kw in bucket[cn.KEYWORDS]):
            risk += bucket[cn.POINTS]
    return min(risk, policy[cn.COMORBIDITY_CAP])


def calc_risk(
        donor: Donor,
        recipient: Recipient,
        organ: str,
        match_score: float,
        hla_score: float,
        tracker: ViabilityTracker,
        policy: DotDict = DEFAULT_POLICY
) -> RiskAssessment:
    """Calculate the risk of a match.

    Risk factors are summed without a cap, and the total is
    capped at RISK_CAP.
    """
    contributions = {
        'age': age_risk(donor, recipient),
        'match_score': match_score_risk(match_score),
        'organ': organ_risk(recipient, organ),
        'hla_mismatch': hla_mismatch_risk(hla_score, organ),
        'size_mismatch': size_mismatch_risk(donor, recipient, organ),
        'cold_ischemia': ischemia_risk(donor, organ, tracker),
        'comorbidity': comorbidity_risk(donor, recipient, policy=policy)
    }
    risk_percentage = round_to_decimals(
        min(sum(contributions.values()), es.RISK_CAP), 2
    )
    return RiskAssessment(
        risk_percentage=risk_percentage,
        risk_level=classify_risk_level(risk_percentage),
        contributions=contributions
    )


def determine_urgency_level(
        recipient: Recipient, organ: str
) -> str:
    """Classify urgency as routine, urgent or critical.

    Organ-specific rules (UNOS status, then MELD for livers)
    take precedence over the generic urgency score.
    """
    if organ in es.UNOS_ORGANS:
        level: Optional[str] = es.UNOS_URGENCY.get(recipient.unos_status)
        if level is not None:
            return level

    if organ == cn.LIVER and recipient.meld_score:
        for lower, level in es.MELD_URGENCY_LIMITS:
            if recipient.meld_score >= lower:
                return level

    for lower, level in es.URGENCY_SCORE_TIERS:
        if recipient.urgency_score >= lower:
            return level
    return cn.ROUTINE
