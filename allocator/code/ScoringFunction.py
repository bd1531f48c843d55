#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Wed Sep 17 09:21:44 2025

Compatibility scoring of a donor organ for a recipient.
"""

from typing import Tuple, Dict, Any, Optional

import allocator.magic_values.allocation_settings as es
import allocator.magic_values.column_names as cn
from allocator.code.entities import Donor, Recipient
from allocator.code.eligibility import is_blood_compatible
from allocator.code.HLASystem import hla_compatibility
from allocator.code.utils import round_to_decimals
from allocator.magic_values.rules import CROSS_GENDER_COMPATIBLE


def weight_ratio(donor: Donor, recipient: Recipient) -> Optional[float]:
    """Donor to recipient weight ratio. None if a weight is missing."""
    if not donor.d_weight or not recipient.r_weight:
        return None
    return donor.d_weight / recipient.r_weight


def is_size_compatible(
        donor: Donor, recipient: Recipient, organ: str
) -> bool:
    """Weight ratio within organ band. Compatible if unknown."""
    ratio = weight_ratio(donor, recipient)
    if ratio is None:
        return True
    min_ratio, max_ratio = es.SIZE_RATIO_LIMITS[organ]
    return min_ratio <= ratio <= max_ratio


def is_gender_compatible(
        d_gender: str, r_gender: str, organ: str
) -> bool:
    """Same gender is compatible. For hearts, female donors
    are also compatible with male recipients."""
    if d_gender == r_gender:
        return True
    return (d_gender, r_gender) in CROSS_GENDER_COMPATIBLE[organ]


def calc_urgency_bonus(urgency_score: int) -> float:
    return min(
        urgency_score / 10 * es.MAX_URGENCY_BONUS,
        es.MAX_URGENCY_BONUS
    )


def calc_meld_bonus(meld_score: Optional[int]) -> float:
    if not meld_score:
        return 0.0
    return min(
        meld_score / es.MELD_BONUS_DENOMINATOR * es.MAX_MELD_BONUS,
        es.MAX_MELD_BONUS
    )


class CompatibilityScore:
    """Class which implements the compatibility score for an organ
    ...

    Attributes   #noqa
    ----------
    organ: str
        organ which is scored
    hla_points: float
        points for full HLA compatibility
    size_points: float
        points for size compatibility
    meld_bonus: bool
        whether the MELD bonus is awarded (liver only)
    verbose: int
        whether to print score breakdowns

    Methods
    -------
    calc_score(donor, recipient) -> Tuple[float, Dict[str, Any]]
    """

    def __init__(self, organ: str, verbose: int = 0) -> None:
        assert organ in es.ALLOWED_ORGANS, \
            f'organ should be one of:\n\t' \
            f'{", ".join(es.ALLOWED_ORGANS)}'
        self.organ = organ
        self.hla_points = es.HLA_POINTS[organ]
        self.size_points = es.SIZE_COMPATIBILITY_POINTS[organ]
        self.meld_bonus = organ == cn.LIVER
        self.verbose = verbose

    def calc_organ_score(
            self,
            donor: Donor,
            recipient: Recipient,
            factors: Dict[str, Any]
    ) -> float:
        """Score HLA, size, gender (and MELD for livers)."""
        score = 0.0

        if self.meld_bonus:
            meld_bonus = calc_meld_bonus(recipient.meld_score)
            factors[cn.MELD_BONUS] = meld_bonus
            score += meld_bonus

        hla_score = hla_compatibility(
            donor.hla_typing, recipient.hla_typing, self.organ
        )
        factors[cn.HLA_COMPATIBILITY] = hla_score
        score += hla_score * self.hla_points

        # Age is a hard eligibility rule, and is not scored.
        factors[cn.AGE_COMPATIBILITY] = True

        size_compatible = is_size_compatible(donor, recipient, self.organ)
        factors[cn.SIZE_COMPATIBILITY] = size_compatible
        if size_compatible:
            score += self.size_points

        gender_compatible = is_gender_compatible(
            donor.d_gender, recipient.r_gender, self.organ
        )
        factors[cn.GENDER_COMPATIBILITY] = gender_compatible
        if gender_compatible:
            score += es.GENDER_COMPATIBILITY_POINTS

        return score

    def calc_score(
            self,
            donor: Donor,
            recipient: Recipient
    ) -> Tuple[float, Dict[str, Any]]:
        """Calculate the score, and the factor breakdown"""

        factors = {
            cn.BLOOD_COMPATIBILITY: is_blood_compatible(
                donor.d_bloodgroup, recipient.r_bloodgroup
            ),
            cn.HLA_COMPATIBILITY: 0.0,
            cn.AGE_COMPATIBILITY: False,
            cn.SIZE_COMPATIBILITY: False,
            cn.GENDER_COMPATIBILITY: False,
            cn.URGENCY_BONUS: 0.0,
            cn.TIME_ON_LIST_BONUS: es.TIME_ON_LIST_BONUS,
            cn.MELD_BONUS: 0.0
        }

        score = 0.0
        if factors[cn.BLOOD_COMPATIBILITY]:
            score += es.BLOOD_COMPATIBILITY_POINTS

        urgency_bonus = calc_urgency_bonus(recipient.urgency_score)
        factors[cn.URGENCY_BONUS] = urgency_bonus
        score += urgency_bonus

        organ_score = self.calc_organ_score(donor, recipient, factors)
        score += organ_score

        if self.verbose:
            print(
                f'Score for recipient {recipient.id_recipient}: '
                f'{round_to_decimals(score, 2)} '
                f'(organ-specific: {round_to_decimals(organ_score, 2)}), '
                f'factors: {factors}'
            )

        return round_to_decimals(score, 2), factors

    def __str__(self):
        terms = [
            f'{es.BLOOD_COMPATIBILITY_POINTS}*abo',
            f'{es.MAX_URGENCY_BONUS}*urgency/10',
            f'{self.hla_points}*hla',
            f'{self.size_points}*size',
            f'{es.GENDER_COMPATIBILITY_POINTS}*gender'
        ]
        if self.meld_bonus:
            terms.append(
                f'{es.MAX_MELD_BONUS}*meld/{es.MELD_BONUS_DENOMINATOR}'
            )
        return ' + '.join(terms)
