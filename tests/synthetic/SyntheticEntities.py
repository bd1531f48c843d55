import sys
from datetime import datetime, timedelta
from typing import Dict, List, Optional

sys.path.append('./')

if True:  # noqa: E402
    from allocator.code.entities import Donor, Recipient
    import allocator.magic_values.column_names as cn


IDENTICAL_HLA = {
    cn.HLA_A: ['A*02:01', 'A*24:02'],
    cn.HLA_B: ['B*07:02', 'B*44:02'],
    cn.HLA_DR: ['DRB1*15:01', 'DRB1*04:01']
}

MISMATCHED_HLA = {
    cn.HLA_A: ['A*01:01', 'A*03:01'],
    cn.HLA_B: ['B*08:01', 'B*35:01'],
    cn.HLA_DR: ['DRB1*03:01', 'DRB1*07:01']
}


class SyntheticEntities:
    """This class can be used to generate synthetic donors
    and recipients at a fixed time.
    """

    def __init__(self, now: Optional[datetime] = None):
        self.now = now if now is not None else datetime(
            year=2025, month=9, day=18, hour=12
        )

    def construct_dummy_donor(
            self, don_id: str = 'D1', organ: str = cn.KIDNEY,
            age: int = 40, bg: str = 'O-', gender: str = cn.MALE,
            weight: Optional[float] = 75,
            hla: Optional[Dict[str, List[str]]] = None,
            **kwargs
            ) -> Donor:
        """Construct a dummy donor."""
        kwargs.setdefault('created_at', self.now - timedelta(hours=1))
        return Donor(
            id_donor=don_id, age=age, gender=gender, bloodgroup=bg,
            organs_available=kwargs.pop('organs_available', [organ]),
            hla_typing=IDENTICAL_HLA if hla is None else hla,
            weight=weight, height=175,
            **kwargs
        )

    def construct_dummy_recipient(
            self, rec_id: str = 'R1', organ: str = cn.KIDNEY,
            age: int = 45, bg: str = 'A+', gender: str = cn.MALE,
            urgency: int = 5, weight: Optional[float] = 80,
            hla: Optional[Dict[str, List[str]]] = None,
            **kwargs
            ) -> Recipient:
        """Construct a dummy recipient."""
        kwargs.setdefault('time_on_list', self.now - timedelta(days=100))
        return Recipient(
            id_recipient=rec_id, age=age, gender=gender, bloodgroup=bg,
            organ_needed=organ, urgency_score=urgency,
            hla_typing=IDENTICAL_HLA if hla is None else hla,
            weight=weight, height=180,
            **kwargs
        )
