import sys
import unittest

sys.path.append('./')

if True:  # noqa: E402
    from tests.synthetic.SyntheticEntities import SyntheticEntities as SEG
    import allocator.magic_values.column_names as cn
    from allocator.code.ScoringFunction import (
        CompatibilityScore, calc_urgency_bonus, calc_meld_bonus,
        is_gender_compatible, is_size_compatible, weight_ratio
    )


class TestCompatibilityScore(unittest.TestCase):
    """Test the organ-specific compatibility scores"""

    def setUp(self):
        self.seg = SEG()

    def test_kidney_score(self):
        """O- male donor to an A+ male with identical typing:
        30 + 7.5 + 35 + 15 + 5."""
        donor = self.seg.construct_dummy_donor()
        recipient = self.seg.construct_dummy_recipient()
        score, factors = CompatibilityScore(cn.KIDNEY).calc_score(
            donor, recipient
        )
        self.assertEqual(score, 92.5)
        self.assertTrue(factors[cn.BLOOD_COMPATIBILITY])
        self.assertEqual(factors[cn.HLA_COMPATIBILITY], 1.0)
        self.assertTrue(factors[cn.AGE_COMPATIBILITY])
        self.assertTrue(factors[cn.SIZE_COMPATIBILITY])
        self.assertTrue(factors[cn.GENDER_COMPATIBILITY])
        self.assertEqual(factors[cn.URGENCY_BONUS], 7.5)
        self.assertEqual(factors[cn.TIME_ON_LIST_BONUS], 0.0)
        self.assertEqual(factors[cn.MELD_BONUS], 0.0)

    def test_score_is_deterministic(self):
        donor = self.seg.construct_dummy_donor()
        recipient = self.seg.construct_dummy_recipient(urgency=7)
        scorer = CompatibilityScore(cn.KIDNEY)
        self.assertEqual(
            scorer.calc_score(donor, recipient),
            scorer.calc_score(donor, recipient)
        )

    def test_liver_meld_bonus(self):
        """30 + 7.5 + 15 (MELD) + 10 + 20 + 5"""
        donor = self.seg.construct_dummy_donor(organ=cn.LIVER)
        recipient = self.seg.construct_dummy_recipient(
            organ=cn.LIVER, meld_score=30
        )
        score, factors = CompatibilityScore(cn.LIVER).calc_score(
            donor, recipient
        )
        self.assertEqual(score, 87.5)
        self.assertEqual(factors[cn.MELD_BONUS], 15.0)

        # MELD bonus is awarded to livers only
        recipient = self.seg.construct_dummy_recipient(meld_score=30)
        _, factors = CompatibilityScore(cn.KIDNEY).calc_score(
            donor, recipient
        )
        self.assertEqual(factors[cn.MELD_BONUS], 0.0)

    def test_heart_size_mismatch(self):
        """Weight ratio 50 / 90 is below the heart band."""
        donor = self.seg.construct_dummy_donor(organ=cn.HEART, weight=50)
        recipient = self.seg.construct_dummy_recipient(
            organ=cn.HEART, weight=90
        )
        score, factors = CompatibilityScore(cn.HEART).calc_score(
            donor, recipient
        )
        self.assertFalse(factors[cn.SIZE_COMPATIBILITY])
        self.assertEqual(score, 67.5)

        # The same ratio is within the kidney band
        self.assertTrue(is_size_compatible(donor, recipient, cn.KIDNEY))

    def test_missing_weight(self):
        donor = self.seg.construct_dummy_donor(weight=None)
        recipient = self.seg.construct_dummy_recipient()
        self.assertIsNone(weight_ratio(donor, recipient))
        self.assertTrue(is_size_compatible(donor, recipient, cn.HEART))

    def test_incompatible_blood_scores_no_abo_points(self):
        donor = self.seg.construct_dummy_donor(bg='AB+')
        recipient = self.seg.construct_dummy_recipient()
        score, factors = CompatibilityScore(cn.KIDNEY).calc_score(
            donor, recipient
        )
        self.assertFalse(factors[cn.BLOOD_COMPATIBILITY])
        self.assertEqual(score, 62.5)

    def test_gender_compatibility(self):
        self.assertTrue(is_gender_compatible(cn.MALE, cn.MALE, cn.HEART))
        self.assertTrue(is_gender_compatible(cn.FEMALE, cn.MALE, cn.HEART))
        self.assertFalse(is_gender_compatible(cn.MALE, cn.FEMALE, cn.HEART))
        self.assertFalse(
            is_gender_compatible(cn.FEMALE, cn.MALE, cn.KIDNEY)
        )
        self.assertTrue(
            is_gender_compatible(cn.FEMALE, cn.FEMALE, cn.LIVER)
        )

    def test_bonuses(self):
        self.assertEqual(calc_urgency_bonus(10), 15)
        self.assertAlmostEqual(calc_urgency_bonus(3), 4.5)
        self.assertAlmostEqual(calc_urgency_bonus(1), 1.5)
        self.assertEqual(calc_meld_bonus(None), 0.0)
        self.assertEqual(calc_meld_bonus(40), 20)
        self.assertEqual(calc_meld_bonus(20), 10)

    def test_formula_string(self):
        self.assertIn('meld', str(CompatibilityScore(cn.LIVER)))
        self.assertNotIn('meld', str(CompatibilityScore(cn.HEART)))


if __name__ == '__main__':
    unittest.main()
