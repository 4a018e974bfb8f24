from .branch_errors import ValidationError
from .code_generator import code_matches, is_valid_branch_code

BRANCH_TYPES = ("Main", "Sub")
BRANCH_STATUSES = ("Active", "Inactive")
MIN_NAME_LENGTH = 3
MIN_ADDRESS_LENGTH = 10


def _clean_text(value):
    if value is None:
        return ""
    return str(value).strip()


def validate_branch(candidate: dict, partial: bool = False, require_code: bool = False) -> dict:
    """
    Checks a candidate branch record and returns a normalized copy.

    Every rule is evaluated, so a form can show all of its errors at once; if any
    fails a ValidationError is raised with the full field -> message map and
    nothing is returned. With `partial=True` only the fields present in the
    candidate are checked (edits). With `require_code=True` the generated
    branchCode must be present and well formed (creates).
    """
    candidate = candidate or {}
    normalized = {}
    errors = {}

    if not partial or "branchName" in candidate:
        name = _clean_text(candidate.get("branchName"))
        if not name:
            errors["branchName"] = "Tên chi nhánh là bắt buộc."
        elif len(name) < MIN_NAME_LENGTH:
            errors["branchName"] = f"Tên chi nhánh phải có ít nhất {MIN_NAME_LENGTH} ký tự."
        normalized["branchName"] = name

    if not partial or "address" in candidate:
        address = _clean_text(candidate.get("address"))
        if not address:
            errors["address"] = "Địa chỉ là bắt buộc."
        elif len(address) < MIN_ADDRESS_LENGTH:
            errors["address"] = "Vui lòng nhập địa chỉ chi tiết hơn."
        normalized["address"] = address

    if not partial or "type" in candidate:
        branch_type = candidate.get("type")
        if branch_type not in BRANCH_TYPES:
            errors["type"] = "Vui lòng chọn loại chi nhánh hợp lệ."
        normalized["type"] = branch_type

    # Status is optional even on a full record; creates assign it themselves.
    if candidate.get("status") is not None:
        status = candidate.get("status")
        if status not in BRANCH_STATUSES:
            errors["status"] = "Trạng thái phải là Active hoặc Inactive."
        normalized["status"] = status

    if require_code:
        code = _clean_text(candidate.get("branchCode"))
        if not code:
            errors["branchCode"] = "Mã chi nhánh là bắt buộc."
        elif not is_valid_branch_code(code):
            errors["branchCode"] = "Mã chi nhánh phải có dạng NX-XX-0000-M."
        elif not code_matches(code, candidate.get("branchName"), candidate.get("type")):
            errors["branchCode"] = "Mã chi nhánh không khớp với tên và loại chi nhánh."
        normalized["branchCode"] = code

    if errors:
        raise ValidationError(errors)
    return normalized
