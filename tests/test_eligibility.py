import os
import sys
import tempfile
import unittest

sys.path.append('./')

if True:  # noqa: E402
    from tests.synthetic.SyntheticEntities import SyntheticEntities as SEG
    import allocator.magic_values.column_names as cn
    from allocator.code.eligibility import (
        check_donor_eligibility, check_recipient_eligibility,
        check_age_difference, check_virtual_crossmatch,
        check_recipient_for_donor, find_exclusion_keyword
    )
    from allocator.code.read_input_files import read_policy_settings
    from allocator.code.AllocationSystem import (
        DonorIneligibleError, find_matches
    )


TEST_POLICY = """
EXCLUSION_KEYWORDS:
  donor:
    general: [Tattoo]
    kidney: []
    heart: []
    liver: []
  recipient:
    general: []
    kidney: []
    heart: []
    liver: []
COMORBIDITY_BUCKETS: {}
"""


class TestDonorEligibility(unittest.TestCase):
    """Test the hard exclusion rules for donors"""

    def setUp(self):
        self.seg = SEG()

    def test_old_kidney_donor(self):
        """Donor aged 80 cannot donate a kidney (18-70)."""
        donor = self.seg.construct_dummy_donor(age=80)
        result = check_donor_eligibility(donor, cn.KIDNEY)
        self.assertFalse(result.eligible)
        self.assertIn('acceptable range', result.reason)
        self.assertIn('80', result.reason)

        recipient = self.seg.construct_dummy_recipient(age=70)
        with self.assertRaises(DonorIneligibleError) as ctx:
            find_matches(donor, [recipient], now=self.seg.now)
        self.assertEqual(ctx.exception.organ, cn.KIDNEY)
        self.assertEqual(ctx.exception.party, cn.DONOR)
        self.assertIn('acceptable range', ctx.exception.reason)
        self.assertIn('not eligible for kidney', str(ctx.exception))

    def test_age_ranges_per_organ(self):
        young = self.seg.construct_dummy_donor(age=17)
        self.assertFalse(check_donor_eligibility(young, cn.KIDNEY).eligible)
        self.assertFalse(check_donor_eligibility(young, cn.LIVER).eligible)
        self.assertTrue(check_donor_eligibility(young, cn.HEART).eligible)

        older = self.seg.construct_dummy_donor(age=66)
        self.assertFalse(check_donor_eligibility(older, cn.HEART).eligible)
        self.assertTrue(check_donor_eligibility(older, cn.KIDNEY).eligible)

        boundary = self.seg.construct_dummy_donor(age=70)
        self.assertTrue(
            check_donor_eligibility(boundary, cn.LIVER).eligible
        )

    def test_organ_specific_keywords(self):
        donor = self.seg.construct_dummy_donor(
            organ=cn.HEART, cause_of_death='Dilated Cardiomyopathy'
        )
        result = check_donor_eligibility(donor, cn.HEART)
        self.assertFalse(result.eligible)
        self.assertIn('"cardiomyopathy"', result.reason)

        # Cardiomyopathy does not exclude kidney donation
        self.assertTrue(check_donor_eligibility(donor, cn.KIDNEY).eligible)

        donor = self.seg.construct_dummy_donor(
            medical_history='Polycystic kidney disease'
        )
        self.assertFalse(check_donor_eligibility(donor, cn.KIDNEY).eligible)

        donor = self.seg.construct_dummy_donor(
            organ=cn.LIVER, medical_history='Alcohol-related cirrhosis'
        )
        self.assertFalse(check_donor_eligibility(donor, cn.LIVER).eligible)

    def test_general_keywords(self):
        donor = self.seg.construct_dummy_donor(
            medical_history='Active INFECTION of the lungs'
        )
        result = check_donor_eligibility(donor, cn.KIDNEY)
        self.assertFalse(result.eligible)
        self.assertIn('infection', result.reason)

    def test_clean_donor(self):
        donor = self.seg.construct_dummy_donor(
            medical_history='No relevant history',
            cause_of_death='Head trauma'
        )
        for organ in (cn.KIDNEY, cn.HEART, cn.LIVER):
            result = check_donor_eligibility(donor, organ)
            self.assertTrue(result.eligible)
            self.assertIsNone(result.reason)

    def test_policy_override(self):
        """Updated keyword policy applies without code changes."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'policy.yml')
            with open(path, 'w', encoding='utf-8') as f:
                f.write(TEST_POLICY)
            policy = read_policy_settings(path)

        donor = self.seg.construct_dummy_donor(
            medical_history='Recent tattoo; prior infection'
        )
        result = check_donor_eligibility(donor, cn.KIDNEY, policy=policy)
        self.assertFalse(result.eligible)
        self.assertIn('tattoo', result.reason)

    def test_find_exclusion_keyword(self):
        self.assertEqual(
            find_exclusion_keyword('Known Hepatitis C', ('hepatitis c',)),
            'hepatitis c'
        )
        self.assertIsNone(find_exclusion_keyword('', ('hiv',)))


class TestRecipientEligibility(unittest.TestCase):
    """Test the hard exclusion rules for recipients"""

    def setUp(self):
        self.seg = SEG()

    def test_recipient_keywords(self):
        recipient = self.seg.construct_dummy_recipient(
            medical_history='History of non-compliance with dialysis'
        )
        result = check_recipient_eligibility(recipient, cn.KIDNEY)
        self.assertFalse(result.eligible)
        self.assertIn('non-compliance with dialysis', result.reason)

        # Donor lists do not apply to recipients
        recipient = self.seg.construct_dummy_recipient(
            medical_history='Hypertension'
        )
        self.assertTrue(
            check_recipient_eligibility(recipient, cn.KIDNEY).eligible
        )

    def test_recipient_max_age(self):
        recipient = self.seg.construct_dummy_recipient(age=76)
        self.assertFalse(
            check_recipient_eligibility(recipient, cn.KIDNEY).eligible
        )
        recipient = self.seg.construct_dummy_recipient(
            organ=cn.HEART, age=71
        )
        self.assertFalse(
            check_recipient_eligibility(recipient, cn.HEART).eligible
        )
        recipient = self.seg.construct_dummy_recipient(
            organ=cn.LIVER, age=75
        )
        self.assertTrue(
            check_recipient_eligibility(recipient, cn.LIVER).eligible
        )

    def test_age_difference(self):
        donor = self.seg.construct_dummy_donor(age=30)
        far = self.seg.construct_dummy_recipient(age=51)
        near = self.seg.construct_dummy_recipient(age=50)
        result = check_age_difference(donor, far, cn.KIDNEY)
        self.assertFalse(result.eligible)
        self.assertIn('21', result.reason)
        self.assertTrue(check_age_difference(donor, near, cn.KIDNEY).eligible)
        self.assertTrue(check_age_difference(donor, far, cn.LIVER).eligible)
        self.assertFalse(check_age_difference(donor, far, cn.HEART).eligible)

    def test_virtual_crossmatch(self):
        donor_hla = {
            cn.HLA_A: ['A*02:01', 'A*24:02'],
            cn.HLA_DR: ['DRB1*15:01']
        }
        self.assertFalse(
            check_virtual_crossmatch(donor_hla, ['A2'], cn.KIDNEY).eligible
        )
        self.assertFalse(
            check_virtual_crossmatch(
                donor_hla, ['A*02:05'], cn.KIDNEY
            ).eligible
        )
        self.assertTrue(
            check_virtual_crossmatch(donor_hla, ['A1'], cn.KIDNEY).eligible
        )
        self.assertTrue(
            check_virtual_crossmatch(donor_hla, [], cn.KIDNEY).eligible
        )
        self.assertTrue(
            check_virtual_crossmatch({}, ['A2'], cn.KIDNEY).eligible
        )
        # Only DR is important for livers
        self.assertTrue(
            check_virtual_crossmatch(donor_hla, ['A2'], cn.LIVER).eligible
        )
        result = check_virtual_crossmatch(donor_hla, ['DR15'], cn.LIVER)
        self.assertFalse(result.eligible)
        self.assertIn('DR15', result.reason)

    def test_gates_in_order(self):
        donor = self.seg.construct_dummy_donor()

        inactive = self.seg.construct_dummy_recipient(status=cn.INACTIVE)
        result = check_recipient_for_donor(donor, inactive, cn.KIDNEY)
        self.assertIn('Inactive', result.reason)

        other_organ = self.seg.construct_dummy_recipient(organ=cn.LIVER)
        result = check_recipient_for_donor(donor, other_organ, cn.KIDNEY)
        self.assertIn('listed for liver', result.reason)

        sensitized = self.seg.construct_dummy_recipient(
            unacceptable_antigens=['B7']
        )
        result = check_recipient_for_donor(donor, sensitized, cn.KIDNEY)
        self.assertFalse(result.eligible)
        self.assertIn('B7', result.reason)

        fine = self.seg.construct_dummy_recipient()
        self.assertTrue(
            check_recipient_for_donor(donor, fine, cn.KIDNEY).eligible
        )


if __name__ == '__main__':
    unittest.main()
