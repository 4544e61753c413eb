from __future__ import annotations

import pickle

import numpy as np
import pytest

from accessopt.foundation.exceptions import MixedBoundsError, SpecificationError
from accessopt.optics import Attr, parse
from accessopt.problem import ArgSpec, Interval, OptArgs, OptCons, VectorType


def _mean(x, _p):
    return 0.0


class TestInterval:
    def test_coerce_and_midpoint(self):
        iv = Interval.coerce((0.3, 10))
        assert iv == Interval(0.3, 10)
        assert iv.mid == pytest.approx(5.15)
        assert str(Interval(0, 1)) == "[0, 1]"

    def test_contains_is_closed(self):
        iv = Interval(0.5, 4)
        assert iv.contains(0.5) and iv.contains(4) and iv.contains(2)
        assert not iv.contains(4.0001)

    @pytest.mark.parametrize(
        "bad",
        [(1, 0), (1,), "ab", 3.0, (0, 1, 2), (None, 10), ("a", "b"), (True, 2), (0, complex(1, 1))],
    )
    def test_coerce_rejects(self, bad):
        with pytest.raises(SpecificationError):
            Interval.coerce(bad)

    def test_non_numeric_bounds_rejected_when_declaring_args(self):
        with pytest.raises(SpecificationError, match="real numbers"):
            OptArgs(("scale", (None, 10)))

    def test_numpy_scalars_are_real(self):
        assert Interval.coerce((np.float32(0.5), np.int64(3))).hi == 3

    def test_coerce_accepts_arrays(self):
        assert Interval.coerce(np.array([0.0, 2.0])) == Interval(0.0, 2.0)


class TestOptArgs:
    def test_bounded_entries(self):
        vars = OptArgs(("comps[*].shift", (0, 10)), ("comps[*].scale", (0.3, 10)))
        assert vars.bounded
        assert len(vars) == 2
        assert vars.paths == (parse("comps[*].shift"), parse("comps[*].scale"))
        assert vars.intervals == (Interval(0, 10), Interval(0.3, 10))
        assert [str(p) for p in vars.optic.paths] == ["comps[*].shift", "comps[*].scale"]

    def test_unbounded_entries(self):
        vars = OptArgs("scale", Attr("shift"), ("comps", None))
        assert not vars.bounded
        assert vars.intervals == (None, None, None)

    def test_mixed_bounds_fail_fast(self):
        with pytest.raises(MixedBoundsError) as excinfo:
            OptArgs(("scale", (0, 1)), "shift")
        assert excinfo.value.details["unbounded"] == ["shift"]

    def test_empty_is_rejected(self):
        with pytest.raises(SpecificationError):
            OptArgs()

    def test_bad_entry_is_rejected(self):
        with pytest.raises(SpecificationError):
            OptArgs(42)

    def test_from_mapping_keeps_order(self):
        vars = OptArgs.from_mapping({"b": (0, 1), "a": (2, 3)})
        assert [str(p) for p in vars.paths] == ["b", "a"]

    def test_immutable_equal_and_picklable(self):
        vars = OptArgs(("scale", (0, 1)))
        with pytest.raises(AttributeError):
            vars.specs = ()
        assert vars == OptArgs(ArgSpec(parse("scale"), Interval(0, 1)))
        assert hash(vars) == hash(OptArgs(("scale", (0, 1))))
        assert pickle.loads(pickle.dumps(vars)) == vars
        assert "scale => [0, 1]" in repr(vars)


class TestOptCons:
    def test_entries_and_ctype(self):
        cons = OptCons((_mean, (0.5, 4)))
        assert len(cons) == 1
        assert cons.ctype is None
        typed = cons.with_ctype("array")
        assert typed.ctype == VectorType("array")
        assert cons.ctype is None

    def test_rejects_malformed(self):
        with pytest.raises(SpecificationError):
            OptCons()
        with pytest.raises(SpecificationError):
            OptCons(("not callable", (0, 1)))
        with pytest.raises(SpecificationError):
            OptCons((_mean, (4, 0.5)))

    def test_pickle_keeps_ctype(self):
        cons = pickle.loads(pickle.dumps(OptCons((_mean, (0, 1)), ctype="list")))
        assert cons.ctype == VectorType("list")
        assert cons.specs[0].func is _mean
