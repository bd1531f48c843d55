#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Mon Sep 15 11:20:13 2025

Data types for the tabular exports of donors and recipients
"""

import allocator.magic_values.column_names as cn

# Dates, date-times and date-times with UTC offsets (e.g. +00)
DATETIME_FORMAT = 'ISO8601'

LIST_SEPARATOR = ';'

# HLA typing is exported with one column per locus.
HLA_COLUMNS = {
    'hla_a': cn.HLA_A,
    'hla_b': cn.HLA_B,
    'hla_c': cn.HLA_C,
    'hla_dr': cn.HLA_DR,
    'hla_dq': cn.HLA_DQ,
    'hla_dp': cn.HLA_DP
}

DTYPE_DONORLIST = {
    'id': 'object',
    'name': 'object',
    'age': 'Int64',
    'gender': 'object',
    'blood_type': 'object',
    'organs_available': 'object',
    'height_cm': 'float64',
    'weight_kg': 'float64',
    'medical_history': 'object',
    'cause_of_death': 'object',
    'cold_ischemia_time_hours': 'float64',
    'ischemia_start': 'object',
    'status': 'object',
    'created_at': 'object',
    'updated_at': 'object',
    **{col: 'object' for col in HLA_COLUMNS}
}
DATECOLS_DONORLIST = ['ischemia_start', 'created_at', 'updated_at']

DTYPE_RECIPIENTLIST = {
    'id': 'object',
    'name': 'object',
    'age': 'Int64',
    'gender': 'object',
    'blood_type': 'object',
    'organ_needed': 'object',
    'urgency_score': 'Int64',
    'meld_score': 'Int64',
    'unos_status': 'object',
    'height_cm': 'float64',
    'weight_kg': 'float64',
    'medical_history': 'object',
    'unacceptable_antigens': 'object',
    'status': 'object',
    'time_on_list': 'object',
    'created_at': 'object',
    'updated_at': 'object',
    **{col: 'object' for col in HLA_COLUMNS}
}
DATECOLS_RECIPIENTLIST = ['time_on_list', 'created_at', 'updated_at']
