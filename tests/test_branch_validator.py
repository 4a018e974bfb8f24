"""Tests for branch record validation."""

import pytest

from managers.branch_errors import ValidationError
from managers.branch_validator import validate_branch


def _valid(**overrides):
    data = {"branchName": "North Hub", "address": "77 Harbour Road, North Bay", "type": "Sub"}
    data.update(overrides)
    return data


class TestValidateBranch:
    """Tests for validate_branch."""

    def test_accepts_valid_record_and_trims(self):
        """Valid records come back trimmed."""
        result = validate_branch(_valid(branchName="  North Hub  ", address="  77 Harbour Road, North Bay "))

        assert result == {"branchName": "North Hub", "address": "77 Harbour Road, North Bay", "type": "Sub"}

    def test_drops_unknown_and_immutable_fields(self):
        """Only the editable fields survive normalization."""
        result = validate_branch(_valid(id="x", createdAt="yesterday", branchCode="NX-NO-1111-S", extra=1))

        assert set(result) == {"branchName", "address", "type"}

    @pytest.mark.parametrize("name", ["ab", "   ab   ", "", None])
    def test_rejects_short_names(self, name):
        """Names shorter than 3 characters after trimming are rejected."""
        with pytest.raises(ValidationError) as exc:
            validate_branch(_valid(branchName=name))

        assert set(exc.value.errors) == {"branchName"}

    def test_address_boundary(self):
        """Exactly 10 trimmed characters is enough, 9 is not."""
        assert validate_branch(_valid(address="  0123456789  "))["address"] == "0123456789"

        with pytest.raises(ValidationError) as exc:
            validate_branch(_valid(address="012345678"))
        assert "address" in exc.value.errors

    def test_rejects_unknown_type(self):
        """Type must be Main or Sub."""
        with pytest.raises(ValidationError) as exc:
            validate_branch(_valid(type="Regional"))

        assert exc.value.errors["type"] == "Vui lòng chọn loại chi nhánh hợp lệ."

    def test_reports_every_failing_field_together(self):
        """No short-circuit on the first failure."""
        with pytest.raises(ValidationError) as exc:
            validate_branch({"branchName": "x", "address": "short", "type": "HQ", "status": "Paused"})

        assert set(exc.value.errors) == {"branchName", "address", "type", "status"}

    def test_status_checked_only_when_present(self):
        """Status is optional but must be a known value when given."""
        assert "status" not in validate_branch(_valid())
        assert validate_branch(_valid(status="Inactive"))["status"] == "Inactive"

    def test_partial_checks_only_present_fields(self):
        """Edits can validate a subset of fields."""
        assert validate_branch({"address": "12 Long Avenue, District 4"}, partial=True) == {
            "address": "12 Long Avenue, District 4"
        }

    def test_code_required_on_create(self):
        """A missing or malformed code fails validation instead of being stored."""
        with pytest.raises(ValidationError) as exc:
            validate_branch(_valid(branchCode=""), require_code=True)
        assert exc.value.errors == {"branchCode": "Mã chi nhánh là bắt buộc."}

        with pytest.raises(ValidationError) as exc:
            validate_branch(_valid(branchCode="BR-123"), require_code=True)
        assert "branchCode" in exc.value.errors

        result = validate_branch(_valid(branchCode="NX-NO-1234-S"), require_code=True)
        assert result["branchCode"] == "NX-NO-1234-S"

    def test_code_must_match_name_and_type(self):
        """A code built for another name or type is rejected."""
        data = {"branchName": "Eastgate Center", "address": "9 Eastgate Road, Sector 2", "type": "Main"}

        with pytest.raises(ValidationError) as exc:
            validate_branch({**data, "branchCode": "NX-ZZ-1111-S"}, require_code=True)
        assert exc.value.errors == {"branchCode": "Mã chi nhánh không khớp với tên và loại chi nhánh."}

        with pytest.raises(ValidationError) as exc:
            validate_branch(_valid(branchCode="NX-a--1234-S"), require_code=True)
        assert exc.value.errors == {"branchCode": "Mã chi nhánh phải có dạng NX-XX-0000-M."}

        assert validate_branch({**data, "branchCode": "NX-EA-1111-M"}, require_code=True)["branchCode"] == "NX-EA-1111-M"
