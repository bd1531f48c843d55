#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Mon Sep 15 10:40:02 2025

Rules for allocation
"""

from types import MappingProxyType

import allocator.magic_values.column_names as cn
import allocator.magic_values.allocation_settings as es
from allocator.code.read_input_files import read_policy_settings


# Dictionary of blood group compatibility rules. For each rule,
# the key refers to the donor blood group, and the values
# are eligible recipients.
BLOOD_GROUP_COMPATIBILITY_DICT = MappingProxyType({
    'O-': frozenset(('O-', 'O+', 'A-', 'A+', 'B-', 'B+', 'AB-', 'AB+')),
    'O+': frozenset(('O+', 'A+', 'B+', 'AB+')),
    'A-': frozenset(('A-', 'A+', 'AB-', 'AB+')),
    'A+': frozenset(('A+', 'AB+')),
    'B-': frozenset(('B-', 'B+', 'AB-', 'AB+')),
    'B+': frozenset(('B+', 'AB+')),
    'AB-': frozenset(('AB-', 'AB+')),
    'AB+': frozenset(('AB+',))
})

# Age rules. Donor ages must lie within (min, max), where None
# means unbounded. The recipient has a maximum age only. MAX_DIFF
# is the maximum absolute age difference between donor and recipient.
MIN_AGE = 'min_age'
MAX_AGE = 'max_age'
MAX_DIFF = 'max_diff'
AGE_RULES = MappingProxyType({
    cn.KIDNEY: MappingProxyType({
        cn.DONOR: MappingProxyType({MIN_AGE: 18, MAX_AGE: 70}),
        cn.RECIPIENT: MappingProxyType({MAX_AGE: 75}),
        MAX_DIFF: 20
    }),
    cn.HEART: MappingProxyType({
        cn.DONOR: MappingProxyType({MIN_AGE: None, MAX_AGE: 65}),
        cn.RECIPIENT: MappingProxyType({MAX_AGE: 70}),
        MAX_DIFF: 10
    }),
    cn.LIVER: MappingProxyType({
        cn.DONOR: MappingProxyType({MIN_AGE: 18, MAX_AGE: 70}),
        cn.RECIPIENT: MappingProxyType({MAX_AGE: 75}),
        MAX_DIFF: 25
    })
})

# Weights of the HLA loci which are clinically important
# per organ. Loci which are absent do not count.
HLA_LOCUS_WEIGHTS = MappingProxyType({
    cn.KIDNEY: MappingProxyType(
        {cn.HLA_DR: 0.5, cn.HLA_B: 0.3, cn.HLA_A: 0.2}
    ),
    cn.HEART: MappingProxyType(
        {cn.HLA_DR: 0.4, cn.HLA_B: 0.35, cn.HLA_A: 0.25}
    ),
    cn.LIVER: MappingProxyType({cn.HLA_DR: 1.0})
})

# Antigen prefixes for the allele locus names (DRB1 -> DR, Cw -> C).
HLA_ANTIGEN_PREFIXES = MappingProxyType({
    'A': 'A',
    'B': 'B',
    'C': 'C',
    'CW': 'C',
    'DR': 'DR',
    'DRB1': 'DR',
    'DRB3': 'DR',
    'DRB4': 'DR',
    'DRB5': 'DR',
    'DQ': 'DQ',
    'DQA1': 'DQ',
    'DQB1': 'DQ',
    'DP': 'DP',
    'DPA1': 'DP',
    'DPB1': 'DP'
})

# Gender pairs (donor, recipient) which are compatible across genders,
# per organ. Same-gender pairs are always compatible.
CROSS_GENDER_COMPATIBLE = MappingProxyType({
    cn.HEART: frozenset(((cn.FEMALE, cn.MALE),)),
    cn.KIDNEY: frozenset(),
    cn.LIVER: frozenset()
})

# Free-text policy (exclusion keywords and comorbidity buckets),
# read in once from the default policy file.
DEFAULT_POLICY = read_policy_settings(es.PATH_DEFAULT_POLICY)
