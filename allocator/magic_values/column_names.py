#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Mon Sep 15 10:12:31 2025

Field names used for donors, recipients, match records
and allocation records.
"""

# Organs
KIDNEY = 'kidney'
HEART = 'heart'
LIVER = 'liver'

# Genders
MALE = 'male'
FEMALE = 'female'

# Recipient statuses
ACTIVE = 'active'
TRANSPLANTED = 'transplanted'
INACTIVE = 'inactive'
REMOVED = 'removed'
DECEASED = 'deceased'

# Donor statuses
AVAILABLE = 'available'
MATCHED = 'matched'
UNAVAILABLE = 'unavailable'

# HLA loci
HLA_A = 'HLA-A'
HLA_B = 'HLA-B'
HLA_C = 'HLA-C'
HLA_DR = 'HLA-DR'
HLA_DQ = 'HLA-DQ'
HLA_DP = 'HLA-DP'

# Donor information
ID_DONOR = 'id_donor'
D_AGE = 'donor_age'
D_BLOODGROUP = 'd_bloodgroup'

# Recipient information
ID_RECIPIENT = 'id_recipient'
R_NAME = 'r_name'
R_AGE = 'recipient_age'
R_BLOODGROUP = 'r_bloodgroup'
URGENCY_SCORE = 'urgency_score'
MELD_SCORE = 'meld_score'
UNOS_STATUS = 'unos_status'
DAYS_ON_LIST = 'days_on_list'

# Compatibility factors
BLOOD_COMPATIBILITY = 'blood_compatibility'
HLA_COMPATIBILITY = 'hla_compatibility'
AGE_COMPATIBILITY = 'age_compatibility'
SIZE_COMPATIBILITY = 'size_compatibility'
GENDER_COMPATIBILITY = 'gender_compatibility'
URGENCY_BONUS = 'urgency_bonus'
TIME_ON_LIST_BONUS = 'time_on_list_bonus'
MELD_BONUS = 'meld_bonus'

# Match record information
ORGAN = 'organ'
MATCH_SCORE = 'match_score'
RISK_LEVEL = 'risk_level'
RISK_PERCENTAGE = 'risk_percentage'
URGENCY_LEVEL = 'urgency_level'
COMPATIBILITY_FACTORS = 'compatibility_factors'
VIABILITY_WINDOW_HOURS = 'viability_window_hours'
MATCH_DATE = 'date_match'

# Risk levels
RISK_LOW = 'low'
RISK_MEDIUM = 'medium'
RISK_HIGH = 'high'

# Urgency levels
ROUTINE = 'routine'
URGENT = 'urgent'
CRITICAL = 'critical'

# UNOS statuses
UNOS_1A = '1A'
UNOS_1B = '1B'

# Allocation records
DONOR_ID = 'donor_id'
RECIPIENT_ID = 'recipient_id'
ORGAN_TYPE = 'organ_type'
ALLOCATED_AT = 'allocated_at'
TRANSPLANT_SCHEDULED = 'transplant_scheduled'
ALLOCATION_STATUS = 'status'
NOTES = 'notes'
ALLOCATED_BY = 'allocated_by'
PENDING = 'pending'
CONFIRMED = 'confirmed'
COMPLETED = 'completed'
CANCELLED = 'cancelled'

# Policy file sections
DONOR = 'donor'
RECIPIENT = 'recipient'
GENERAL = 'general'
EXCLUSION_KEYWORDS = 'EXCLUSION_KEYWORDS'
COMORBIDITY_BUCKETS = 'COMORBIDITY_BUCKETS'
COMORBIDITY_CAP = 'COMORBIDITY_CAP'
KEYWORDS = 'keywords'
POINTS = 'points'

# Trace events
EV_NO_ORGAN = 'no_organ_available'
EV_NOT_VIABLE = 'donor_not_viable'
EV_FILTERED = 'recipient_filtered'
EV_SCORED = 'recipient_scored'
EV_BELOW_THRESHOLD = 'recipient_below_threshold'
EV_SCORING_FAILED = 'scoring_failed'
