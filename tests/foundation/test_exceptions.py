"""Tests for the accessopt exception hierarchy."""

from __future__ import annotations

import pytest


class TestAccessOptError:
    """Test base AccessOptError class."""

    def test_basic_error(self):
        """AccessOptError should work with just a message."""
        from accessopt.foundation.exceptions import AccessOptError

        err = AccessOptError("Something went wrong")
        assert "Something went wrong" in str(err)
        assert err.message == "Something went wrong"
        assert err.suggestion is None

    def test_error_with_suggestion(self):
        """AccessOptError should include suggestion in message."""
        from accessopt.foundation.exceptions import AccessOptError

        err = AccessOptError("Something went wrong", suggestion="Try this instead")
        assert "Suggestion: Try this instead" in str(err)
        assert err.suggestion == "Try this instead"

    def test_error_with_details(self):
        """AccessOptError should store details."""
        from accessopt.foundation.exceptions import AccessOptError

        err = AccessOptError("Error", details={"key": "value"})
        assert err.details == {"key": "value"}


class TestSpecificationErrors:
    def test_specification_error_is_value_error(self):
        from accessopt.foundation.exceptions import AccessOptError, SpecificationError

        err = SpecificationError("bad spec")
        assert isinstance(err, ValueError)
        assert isinstance(err, AccessOptError)

    def test_mixed_bounds_lists_both_sides(self):
        from accessopt.foundation.exceptions import MixedBoundsError, SpecificationError

        err = MixedBoundsError(["a"], ["b", "c"])
        assert isinstance(err, SpecificationError)
        assert "a" in str(err) and "b, c" in str(err)
        assert err.details == {"bounded": ["a"], "unbounded": ["b", "c"]}

    def test_construction_arity_error(self):
        from accessopt.foundation.exceptions import ConstructionArityError, SpecificationError

        err = ConstructionArityError("comps[*].shift", "SumModel")
        assert isinstance(err, SpecificationError)
        assert "comps[*].shift" in str(err)
        assert "SumModel" in str(err)

    def test_vector_length_error(self):
        from accessopt.foundation.exceptions import VectorLengthError

        err = VectorLengthError(3, 2)
        assert "2 values" in str(err)
        assert "match 3" in str(err)
        assert err.details == {"expected": 3, "got": 2}


class TestOtherErrors:
    def test_path_resolution_error_is_lookup_error(self):
        from accessopt.foundation.exceptions import PathResolutionError

        err = PathResolutionError("a.b", ".b", 1.0, "It has no attribute 'b'.")
        assert isinstance(err, LookupError)
        assert "float" in str(err)
        assert err.details["step"] == ".b"

    def test_invalid_algorithm_lists_available(self):
        from accessopt.foundation.exceptions import ConfigurationError, InvalidAlgorithmError

        err = InvalidAlgorithmError("nope", ["powell", "slsqp"])
        assert isinstance(err, ConfigurationError)
        assert "nope" in str(err)
        assert "powell, slsqp" in str(err)

    def test_solver_capability_error(self):
        from accessopt.foundation.exceptions import SolverCapabilityError

        err = SolverCapabilityError("bfgs", "does not support box bounds", ["l-bfgs-b"])
        assert "bfgs" in str(err)
        assert "l-bfgs-b" in str(err)


def test_errors_catchable_as_base():
    from accessopt.foundation.exceptions import AccessOptError, PathSyntaxError

    with pytest.raises(AccessOptError):
        raise PathSyntaxError("a..b", 1)
