"""
Unit tests for health check id validation.
"""

import pytest

from hcp.validation import ValidationError, is_valid_check_id, validate_check_id

VALID = "5f0c3a4e-7b1d-4c2a-9e8f-0123456789ab"


@pytest.mark.unit
class TestIsValidCheckId:
    """Test cases for the is_valid_check_id predicate."""

    @pytest.mark.parametrize(
        "token",
        [
            VALID,
            VALID.upper(),
            "00000000-0000-0000-0000-000000000000",
            "ABCDEF01-2345-6789-abcd-ef0123456789",
        ],
    )
    def test_canonical_ids_are_valid(self, token):
        assert is_valid_check_id(token) is True

    @pytest.mark.parametrize("length", [0, 1, 35, 37, 72])
    def test_wrong_length_is_invalid(self, length):
        token = (VALID * 3)[:length]
        assert is_valid_check_id(token) is False

    @pytest.mark.parametrize("position", [8, 13, 18, 23])
    def test_missing_hyphen_is_invalid(self, position):
        token = VALID[:position] + "a" + VALID[position + 1:]
        assert is_valid_check_id(token) is False

    @pytest.mark.parametrize("position", [0, 7, 9, 14, 19, 24, 35])
    def test_non_alphanumeric_group_char_is_invalid(self, position):
        for bad in ("-", "_", " ", "!", "é"):
            token = VALID[:position] + bad + VALID[position + 1:]
            assert is_valid_check_id(token) is False, repr(token)

    def test_letters_beyond_f_are_accepted(self):
        """Known boundary: every ASCII letter passes, not only a-f."""
        token = "zzzzzzzz-ghij-klmn-opqr-stuvwxyzZZZZ"
        assert len(token) == 36
        assert is_valid_check_id(token) is True

    def test_non_string_is_invalid(self):
        assert is_valid_check_id(None) is False
        assert is_valid_check_id(b"5f0c3a4e-7b1d-4c2a-9e8f-0123456789ab") is False


@pytest.mark.unit
class TestValidateCheckId:
    """Test cases for the raising validator."""

    def test_returns_valid_id(self):
        assert validate_check_id(VALID) == VALID

    def test_missing_id(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_check_id(None, field_name="--hcp-id")

        assert str(exc_info.value) == "No Healthcheck Id given"
        assert exc_info.value.field_name == "--hcp-id"
        assert exc_info.value.value is None

    def test_malformed_id(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_check_id("not-a-uuid")

        assert str(exc_info.value) == "Healthcheck Id isn't a valid uuid 'not-a-uuid'"
        assert exc_info.value.value == "not-a-uuid"

    def test_empty_id_is_malformed_not_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_check_id("")

        assert "isn't a valid uuid" in str(exc_info.value)
