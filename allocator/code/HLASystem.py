#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Tue Sep 16 10:02:11 2025

HLA typing: reduction of alleles to antigens, and
weighted antigen matching between donor and recipient.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

import allocator.magic_values.allocation_settings as es
from allocator.magic_values.rules import (
    HLA_ANTIGEN_PREFIXES, HLA_LOCUS_WEIGHTS
)

# Locus name, optional asterisk, and first numeric field
# (e.g. DRB1*15:01, A*02:01:01G, HLA-B*07, DR15, Cw7)
RE_ALLELE = re.compile(
    r'^(?:HLA-)?([A-Z]+[0-9]?)\*?\s*0*([0-9]+)',
    flags=re.IGNORECASE
)


def normalize_antigen(allele: Optional[str]) -> Optional[str]:
    """Reduce an allele to an antigen-level identifier.

    A*02:01 becomes A2, DRB1*15:01 becomes DR15. Returns None
    for empty or unparseable alleles.
    """
    if allele is None:
        return None
    allele = str(allele).strip()
    if not allele:
        return None
    m = RE_ALLELE.match(allele)
    if m is None:
        return None
    locus, group = m.group(1).upper(), int(m.group(2))
    prefix = HLA_ANTIGEN_PREFIXES.get(locus)
    if prefix is None:
        # Trailing digit belongs to the antigen (e.g. DR15, B57)
        base = locus[:-1]
        if locus[-1].isdigit() and base in HLA_ANTIGEN_PREFIXES:
            prefix = HLA_ANTIGEN_PREFIXES[base]
            group = int(locus[-1] + m.group(2))
        else:
            return None
    return f'{prefix}{group}'


def antigens_at_locus(
        hla_typing: Mapping[str, Iterable[str]],
        locus: str
) -> List[str]:
    """Unique antigens at a locus, in order of typing"""
    antigens = []
    for allele in hla_typing.get(locus, ()):
        antigen = normalize_antigen(allele)
        if antigen is not None and antigen not in antigens:
            antigens.append(antigen)
    return antigens


def all_antigens(
        hla_typing: Mapping[str, Iterable[str]],
        loci: Optional[Iterable[str]] = None
) -> List[str]:
    """All antigens at the selected loci (default: all loci)."""
    if loci is None:
        loci = hla_typing.keys()
    antigens = []
    for locus in loci:
        antigens += [
            ag for ag in antigens_at_locus(hla_typing, locus)
            if ag not in antigens
        ]
    return antigens


def locus_match_ratio(
        donor_antigens: List[str],
        recipient_antigens: List[str]
) -> Optional[float]:
    """Share of donor antigens shared with the recipient, capped at 1.

    None if either side has no antigens at the locus.
    """
    if not donor_antigens or not recipient_antigens:
        return None
    n_shared = sum(ag in recipient_antigens for ag in donor_antigens)
    denominator = min(es.MAX_ANTIGENS_PER_LOCUS, len(donor_antigens))
    return min(n_shared / denominator, 1.0)


def locus_match_ratios(
        donor_hla: Mapping[str, Iterable[str]],
        recipient_hla: Mapping[str, Iterable[str]],
        organ: str
) -> Dict[str, float]:
    """Match ratios for the loci which are typed on both sides"""
    ratios = {}
    for locus in HLA_LOCUS_WEIGHTS[organ]:
        ratio = locus_match_ratio(
            antigens_at_locus(donor_hla, locus),
            antigens_at_locus(recipient_hla, locus)
        )
        if ratio is not None:
            ratios[locus] = ratio
    return ratios


def hla_compatibility(
        donor_hla: Mapping[str, Iterable[str]],
        recipient_hla: Mapping[str, Iterable[str]],
        organ: str
) -> float:
    """Weighted HLA compatibility in [0, 1].

    Loci without data on both sides are left out, and weights
    are normalized over the loci used. Neutral (1.0) if no
    locus can be compared.
    """
    ratios = locus_match_ratios(donor_hla, recipient_hla, organ)
    if not ratios:
        return 1.0
    weights = HLA_LOCUS_WEIGHTS[organ]
    score = np.average(
        list(ratios.values()),
        weights=[weights[locus] for locus in ratios]
    )
    return float(min(max(score, 0.0), 1.0))


def important_loci(organ: str) -> Tuple[str, ...]:
    """Loci which are clinically important for organ"""
    return tuple(HLA_LOCUS_WEIGHTS[organ].keys())
