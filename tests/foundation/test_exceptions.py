"""Tests for the paretomerge exception hierarchy."""

from __future__ import annotations

import pytest


class TestParetoMergeError:
    """Test base ParetoMergeError class."""

    def test_basic_error(self):
        from paretomerge.foundation.exceptions import ParetoMergeError

        err = ParetoMergeError("Something went wrong")
        assert "Something went wrong" in str(err)
        assert err.message == "Something went wrong"
        assert err.suggestion is None

    def test_error_with_suggestion(self):
        from paretomerge.foundation.exceptions import ParetoMergeError

        err = ParetoMergeError("Something went wrong", suggestion="Try this instead")
        assert "Suggestion: Try this instead" in str(err)

    def test_error_with_details(self):
        from paretomerge.foundation.exceptions import ParetoMergeError

        err = ParetoMergeError("Error", details={"key": "value"})
        assert err.details == {"key": "value"}


class TestTaxonomy:
    @pytest.mark.parametrize(
        "name, stage",
        [
            ("ConfigurationError", "configuration"),
            ("InvalidEpsilonError", "configuration"),
            ("DimensionMismatchError", "ingestion"),
            ("SourceReadError", "reading"),
            ("SinkWriteError", "writing"),
        ],
    )
    def test_every_error_is_a_paretomerge_error(self, name, stage):
        from paretomerge.foundation import exceptions

        cls = getattr(exceptions, name)
        assert issubclass(cls, exceptions.ParetoMergeError)
        assert cls.stage == stage

    def test_invalid_epsilon_is_configuration_error(self):
        from paretomerge.foundation.exceptions import ConfigurationError, InvalidEpsilonError

        err = InvalidEpsilonError("bad epsilon", epsilon="a,b")
        assert isinstance(err, ConfigurationError)
        assert err.details["epsilon"] == "a,b"
        assert "--epsilon" in str(err)

    def test_dimension_mismatch_details(self):
        from paretomerge.foundation.exceptions import DimensionMismatchError

        err = DimensionMismatchError("3 vs 2", expected=2, actual=3, path="run.set")
        assert err.details == {"expected": 2, "actual": 3, "path": "run.set"}

    def test_source_read_error_records_line(self):
        from paretomerge.foundation.exceptions import SourceReadError

        err = SourceReadError("corrupt", path="run.set", line=7)
        assert err.details["line"] == 7
        assert "truncated" in str(err)
