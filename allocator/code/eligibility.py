#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Created on Tue Sep 16 13:48:05 2025

Hard eligibility rules for donors, recipients and
donor / recipient pairs. These exclude, independent of scoring.
"""

from typing import NamedTuple, Optional, Mapping, Iterable

import allocator.magic_values.column_names as cn
from allocator.code.entities import Donor, Recipient
from allocator.code.HLASystem import (
    all_antigens, important_loci, normalize_antigen
)
from allocator.code.utils import DotDict
from allocator.magic_values.rules import (
    AGE_RULES, BLOOD_GROUP_COMPATIBILITY_DICT, DEFAULT_POLICY,
    MIN_AGE, MAX_AGE, MAX_DIFF
)


class EligibilityResult(NamedTuple):
    """Outcome of an eligibility check"""
    eligible: bool
    reason: Optional[str] = None


ELIGIBLE = EligibilityResult(True, None)


def is_blood_compatible(d_bloodgroup: str, r_bloodgroup: str) -> bool:
    """Check whether donor blood group can be given to recipient"""
    return r_bloodgroup in BLOOD_GROUP_COMPATIBILITY_DICT.get(
        d_bloodgroup, frozenset()
    )


def _exclusion_keywords(
        policy: DotDict, party: str, organ: str
) -> Iterable[str]:
    """General keywords followed by organ-specific keywords"""
    party_keywords = policy[cn.EXCLUSION_KEYWORDS][party]
    return tuple(party_keywords[cn.GENERAL]) + tuple(party_keywords[organ])


def find_exclusion_keyword(
        text: str, keywords: Iterable[str]
) -> Optional[str]:
    """Return first keyword contained in text, if any."""
    text = text.lower()
    for keyword in keywords:
        if keyword in text:
            return keyword
    return None


def check_donor_eligibility(
        donor: Donor, organ: str, policy: DotDict = DEFAULT_POLICY
) -> EligibilityResult:
    """Check donor on organ-specific age range and exclusion keywords."""
    age_rule = AGE_RULES[organ][cn.DONOR]
    min_age, max_age = age_rule[MIN_AGE], age_rule[MAX_AGE]
    if (
        (min_age is not None and donor.donor_age < min_age) or
        (max_age is not None and donor.donor_age > max_age)
    ):
        return EligibilityResult(
            False,
            f'Donor age ({donor.donor_age}) is outside the acceptable range '
            f'({min_age if min_age is not None else "-"}-{max_age}) '
            f'for {organ} donation.'
        )

    keyword = find_exclusion_keyword(
        donor.history_text(),
        _exclusion_keywords(policy, cn.DONOR, organ)
    )
    if keyword is not None:
        return EligibilityResult(
            False,
            f'Medical history/cause of death includes exclusion '
            f'criteria: "{keyword}".'
        )
    return ELIGIBLE


def check_recipient_eligibility(
        recipient: Recipient, organ: str, policy: DotDict = DEFAULT_POLICY
) -> EligibilityResult:
    """Check recipient on organ-specific maximum age and keywords."""
    max_age = AGE_RULES[organ][cn.RECIPIENT][MAX_AGE]
    if max_age is not None and recipient.recipient_age > max_age:
        return EligibilityResult(
            False,
            f'Recipient age ({recipient.recipient_age}) is outside the '
            f'acceptable range (max {max_age}) for {organ} '
            f'transplantation.'
        )

    keyword = find_exclusion_keyword(
        recipient.history_text(),
        _exclusion_keywords(policy, cn.RECIPIENT, organ)
    )
    if keyword is not None:
        return EligibilityResult(
            False,
            f'Medical history includes exclusion criteria: "{keyword}".'
        )
    return ELIGIBLE


def check_age_difference(
        donor: Donor, recipient: Recipient, organ: str
) -> EligibilityResult:
    """Check absolute age difference against the organ maximum"""
    age_diff = abs(donor.donor_age - recipient.recipient_age)
    max_diff = AGE_RULES[organ][MAX_DIFF]
    if age_diff > max_diff:
        return EligibilityResult(
            False,
            f'Age difference ({age_diff}) exceeds limit of {max_diff}.'
        )
    return ELIGIBLE


def check_virtual_crossmatch(
        donor_hla: Mapping[str, Iterable[str]],
        unacceptable_antigens: Iterable[str],
        organ: str
) -> EligibilityResult:
    """Check donor antigens at the important loci against the
    recipient's unacceptable antigens. Passes if either is unknown.
    """
    unacceptables = set(
        ag for ag in map(normalize_antigen, unacceptable_antigens)
        if ag is not None
    )
    if not unacceptables or not donor_hla:
        return ELIGIBLE
    conflicts = [
        ag for ag in all_antigens(donor_hla, important_loci(organ))
        if ag in unacceptables
    ]
    if conflicts:
        return EligibilityResult(
            False,
            f'Donor antigen(s) {", ".join(conflicts)} are unacceptable '
            f'for the recipient.'
        )
    return ELIGIBLE


def check_recipient_for_donor(
        donor: Donor, recipient: Recipient, organ: str,
        policy: DotDict = DEFAULT_POLICY
) -> EligibilityResult:
    """Apply all recipient gates, cheapest first.

    Organ, listing status and blood group are checked before
    recipient eligibility, the virtual crossmatch and age difference.
    """
    if recipient.organ_needed != organ:
        return EligibilityResult(
            False, f'Recipient is listed for {recipient.organ_needed}.'
        )
    if not recipient.is_active():
        return EligibilityResult(
            False, f'Inactive status ({recipient.r_status}).'
        )
    if not is_blood_compatible(donor.d_bloodgroup, recipient.r_bloodgroup):
        return EligibilityResult(
            False,
            f'Incompatible blood type ({donor.d_bloodgroup} to '
            f'{recipient.r_bloodgroup}).'
        )

    result = check_recipient_eligibility(recipient, organ, policy=policy)
    if not result.eligible:
        return EligibilityResult(False, f'Ineligible. {result.reason}')

    result = check_virtual_crossmatch(
        donor.hla_typing, recipient.unacceptable_antigens, organ
    )
    if not result.eligible:
        return result

    return check_age_difference(donor, recipient, organ)
