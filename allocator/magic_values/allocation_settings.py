#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Mon Sep 15 10:12:31 2025

Magic values for the allocation engine. Only magic values
which are clinical policy, and therefore immodifiable at
run time, are included.
"""

import os
from types import MappingProxyType

import allocator.magic_values.column_names as cn

# Directory with policy settings
DIR_POLICY_SETTINGS = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    'policy_yamls'
)
PATH_DEFAULT_POLICY = os.path.join(
    DIR_POLICY_SETTINGS, 'allocation_policy.yml'
)

# Allowed values for entities
ALLOWED_BLOODGROUPS = ('O-', 'O+', 'A-', 'A+', 'B-', 'B+', 'AB-', 'AB+')
ALLOWED_ORGANS = (cn.KIDNEY, cn.HEART, cn.LIVER)
ALLOWED_GENDERS = (cn.MALE, cn.FEMALE)
ALLOWED_RECIPIENT_STATUSES = (
    cn.ACTIVE, cn.TRANSPLANTED, cn.INACTIVE, cn.REMOVED, cn.DECEASED
)
ALLOWED_DONOR_STATUSES = (cn.AVAILABLE, cn.MATCHED, cn.UNAVAILABLE)
ALLOWED_UNOS_STATUSES = ('1A', '1B', '2', '3', '4', '7')
ALLOWED_ALLOCATION_STATUSES = (
    cn.PENDING, cn.CONFIRMED, cn.COMPLETED, cn.CANCELLED
)

URGENCY_SCORE_LIMITS = (1, 10)
MELD_SCORE_LIMITS = (6, 40)

# Cold ischemia time (hours) if donor has no explicit window.
ORGAN_VIABILITY_HOURS = MappingProxyType({
    cn.KIDNEY: 24,
    cn.HEART: 6,
    cn.LIVER: 12
})

# Matches scoring at or below this threshold are discarded.
MIN_MATCH_SCORE = 30

# Points for the factors shared by all organs
BLOOD_COMPATIBILITY_POINTS = 30
MAX_URGENCY_BONUS = 15
GENDER_COMPATIBILITY_POINTS = 5
TIME_ON_LIST_BONUS = 0.0

# Points for the liver MELD bonus
MAX_MELD_BONUS = 20
MELD_BONUS_DENOMINATOR = 40

# Points awarded for full HLA compatibility
HLA_POINTS = MappingProxyType({
    cn.KIDNEY: 35,
    cn.HEART: 25,
    cn.LIVER: 10
})

# Maximum number of antigens per locus compared
MAX_ANTIGENS_PER_LOCUS = 2

# Weight ratio (donor / recipient) bands, and points if within band.
SIZE_RATIO_LIMITS = MappingProxyType({
    cn.HEART: (0.7, 1.3),
    cn.LIVER: (0.6, 1.5),
    cn.KIDNEY: (0.5, 2.0)
})
SIZE_COMPATIBILITY_POINTS = MappingProxyType({
    cn.HEART: 25,
    cn.LIVER: 20,
    cn.KIDNEY: 15
})

# Risk increments
RISK_CAP = 80
RISK_OLD_DONOR_AGE = 60
RISK_OLD_RECIPIENT_AGE = 65
RISK_OLD_AGE = 15
RISK_AGE_DIFFERENCE = 25
RISK_AGE_DIFFERENCE_PENALTY = 10
RISK_MATCH_SCORE_TIERS = ((50, 20), (70, 10))
RISK_HEART_UNOS_1A = 5
RISK_LIVER_MELD_THRESHOLD = 25
RISK_LIVER_HIGH_MELD = 10
RISK_HLA_MISMATCH_MAX = MappingProxyType({
    cn.KIDNEY: 20,
    cn.HEART: 15,
    cn.LIVER: 8
})
RISK_SIZE_MISMATCH = 10
RISK_ISCHEMIA_EXPIRED = 20
RISK_ISCHEMIA_MAX_PROPORTIONAL = 8

# Upper bounds (exclusive) for the risk levels
RISK_LEVEL_LIMITS = ((25, cn.RISK_LOW), (50, cn.RISK_MEDIUM))

# Urgency tiers. Lower bounds (inclusive) per tier.
MELD_URGENCY_LIMITS = ((30, cn.CRITICAL), (20, cn.URGENT))
URGENCY_SCORE_TIERS = ((8, cn.CRITICAL), (5, cn.URGENT))
UNOS_URGENCY = MappingProxyType({
    cn.UNOS_1A: cn.CRITICAL,
    cn.UNOS_1B: cn.URGENT
})
UNOS_ORGANS = frozenset((cn.HEART, cn.LIVER))
URGENCY_ORDER = MappingProxyType({
    cn.CRITICAL: 3,
    cn.URGENT: 2,
    cn.ROUTINE: 1
})

# Columns returned for match information
MATCH_INFO_COLS = (
    cn.ID_DONOR, cn.D_AGE, cn.D_BLOODGROUP, cn.ID_RECIPIENT, cn.R_NAME,
    cn.ORGAN, cn.MATCH_SCORE, cn.URGENCY_LEVEL, cn.RISK_LEVEL,
    cn.RISK_PERCENTAGE, cn.BLOOD_COMPATIBILITY, cn.HLA_COMPATIBILITY,
    cn.AGE_COMPATIBILITY, cn.SIZE_COMPATIBILITY, cn.GENDER_COMPATIBILITY,
    cn.URGENCY_BONUS, cn.TIME_ON_LIST_BONUS, cn.MELD_BONUS,
    cn.VIABILITY_WINDOW_HOURS,
    cn.R_AGE, cn.R_BLOODGROUP, cn.URGENCY_SCORE, cn.MELD_SCORE,
    cn.UNOS_STATUS, cn.DAYS_ON_LIST
)
