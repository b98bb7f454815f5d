"""Tests for the Ok / Err outcome type."""

import pytest

from automation_standard.core.errors import SourceNotFoundError
from automation_standard.core.result import Err, Ok


class TestOk:
    def test_predicates(self):
        ok = Ok("5")
        assert ok.is_ok()
        assert not ok.is_err()

    def test_map_and_flat_map(self):
        assert Ok("5").map(int).unwrap() == 5
        assert Ok("5").flat_map(lambda v: Ok(v + "0")).unwrap() == "50"
        assert Ok("5").flat_map(lambda v: Err(ValueError(v))).is_err()


class TestErr:
    def test_predicates(self):
        err = Err(ValueError("no"))
        assert err.is_err()
        assert not err.is_ok()

    def test_map_and_flat_map_pass_error_through(self):
        error = SourceNotFoundError("missing")
        assert Err(error).map(int).error is error
        assert Err(error).flat_map(lambda v: Ok(v)).error is error

    def test_unwrap_raises(self):
        with pytest.raises(SourceNotFoundError, match="missing"):
            Err(SourceNotFoundError("missing")).unwrap()


class TestPatternMatching:
    def test_match_ok_and_err(self):
        def describe(result):
            match result:
                case Ok(value):
                    return f"ok:{value}"
                case Err(error):
                    return f"err:{error}"

        assert describe(Ok("a")) == "ok:a"
        assert describe(Err(ValueError("b"))) == "err:b"
