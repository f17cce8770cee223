"""Tests for the typed error taxonomy."""

import pytest

from onesig.errors import ErrorCode, OneSigCoreError, error_code_from_call


class TestOneSigCoreError:
    def test_message_carries_code(self) -> None:
        error = OneSigCoreError(ErrorCode.ONE_SIGNER_REQUIRED, "1+ signer must be provided")
        assert str(error) == "[ONE_SIGNER_REQUIRED] 1+ signer must be provided"
        assert error.code is ErrorCode.ONE_SIGNER_REQUIRED

    def test_accepts_code_name(self) -> None:
        error = OneSigCoreError("LEAF_SEEN_TWICE", "dup")
        assert error.code is ErrorCode.LEAF_SEEN_TWICE

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValueError):
            OneSigCoreError("NOT_A_CODE", "nope")

    def test_is_error(self) -> None:
        error = OneSigCoreError(ErrorCode.CANNOT_CONCAT_INPUT, "x")
        assert OneSigCoreError.is_error(error)
        assert OneSigCoreError.is_error(error, ErrorCode.CANNOT_CONCAT_INPUT)
        assert OneSigCoreError.is_error(error, "CANNOT_CONCAT_INPUT")
        assert not OneSigCoreError.is_error(error, ErrorCode.LEAF_SEEN_TWICE)
        assert not OneSigCoreError.is_error(ValueError("x"))


class TestErrorCodeFromCall:
    def test_success_returns_none(self) -> None:
        assert error_code_from_call(lambda: 42) is None

    def test_returns_code(self) -> None:
        def fail() -> None:
            raise OneSigCoreError(ErrorCode.INVALID_HEADER, "bad")

        assert error_code_from_call(fail) is ErrorCode.INVALID_HEADER

    def test_other_errors_propagate(self) -> None:
        def fail() -> None:
            raise KeyError("boom")

        with pytest.raises(KeyError):
            error_code_from_call(fail)
