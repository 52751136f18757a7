import math

from salonhub.billing.constants import UNLIMITED
from salonhub.billing.limits import Capacity
from salonhub.billing.limits import first_defined


class TestFirstDefined:
    def test_returns_first_non_none(self):
        assert first_defined(None, 80, 100) == 80

    def test_zero_counts_as_defined(self):
        assert first_defined(None, 0, 5) == 0

    def test_all_none(self):
        assert first_defined(None, None) is None


class TestCapacity:
    def test_sentinel_and_none_are_unlimited(self):
        assert Capacity.from_raw(UNLIMITED).is_unlimited
        assert Capacity.from_raw(None).is_unlimited
        assert not Capacity.from_raw(0).is_unlimited

    def test_plus_raises_finite_limit(self):
        assert Capacity.from_raw(2).plus(3) == Capacity.limited(5)

    def test_plus_keeps_unlimited(self):
        assert Capacity.unlimited().plus(10).is_unlimited

    def test_overage(self):
        capacity = Capacity.limited(3)
        assert capacity.overage(5) == 2
        assert capacity.overage(2) == 0
        assert Capacity.unlimited().overage(1000) == 0

    def test_remaining(self):
        assert Capacity.limited(3).remaining(1) == 2
        assert Capacity.limited(3).remaining(7) == 0
        assert Capacity.unlimited().remaining(7) == UNLIMITED

    def test_utilization(self):
        assert Capacity.limited(4).utilization(3) == 0.75
        assert Capacity.limited(0).utilization(3) == 0.0
        assert Capacity.unlimited().utilization(3) == 0.0

    def test_is_exceeded_by(self):
        assert Capacity.limited(2).is_exceeded_by(3)
        assert not Capacity.limited(2).is_exceeded_by(2)
        assert not Capacity.unlimited().is_exceeded_by(10**6)

    def test_numeric_and_sentinel_forms(self):
        assert Capacity.unlimited().as_number() == math.inf
        assert Capacity.unlimited().as_sentinel() == UNLIMITED
        assert Capacity.limited(7).as_number() == 7
        assert Capacity.limited(7).as_sentinel() == 7
