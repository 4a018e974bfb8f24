ACTIVE = "Active"
INACTIVE = "Inactive"

MAIN_DEACTIVATION_WARNING = (
    "⚠️ Ngừng hoạt động chi nhánh chính '{name}' có thể hạn chế truy cập toàn hệ thống. Tiếp tục?"
)
MAIN_DEMOTION_WARNING = (
    "⚠️ Hạ chi nhánh chính '{name}' xuống chi nhánh phụ sẽ khiến hệ thống không còn chi nhánh chính. Tiếp tục?"
)
MAIN_DELETE_WARNING = (
    "Cảnh báo: Xóa chi nhánh chính '{name}' có thể làm gián đoạn toàn hệ thống. Bạn có chắc chắn?"
)
SUB_DELETE_WARNING = "Bạn có chắc muốn xóa chi nhánh '{name}'? Hành động này không thể hoàn tác."


def next_status(status):
    """Active -> Inactive, anything else -> Active."""
    return INACTIVE if status == ACTIVE else ACTIVE


def requires_confirmation(record: dict) -> bool:
    """Only taking a Main branch offline needs the operator to confirm."""
    return record.get('type') == "Main" and next_status(record.get('status')) == INACTIVE


def confirmation_message(record: dict) -> str:
    return MAIN_DEACTIVATION_WARNING.format(name=record.get('branchName', record.get('id')))


def edit_requires_confirmation(current: dict, changes: dict) -> bool:
    """An edit of a Main branch that takes it offline or demotes it to Sub."""
    if current.get('type') != "Main":
        return False
    deactivates = current.get('status') == ACTIVE and changes.get('status') == INACTIVE
    demotes = changes.get('type', "Main") != "Main"
    return deactivates or demotes


def edit_confirmation_message(current: dict, changes: dict) -> str:
    name = current.get('branchName', current.get('id'))
    warnings = []
    if changes.get('type', "Main") != "Main":
        warnings.append(MAIN_DEMOTION_WARNING.format(name=name))
    if current.get('status') == ACTIVE and changes.get('status') == INACTIVE:
        warnings.append(MAIN_DEACTIVATION_WARNING.format(name=name))
    return " ".join(warnings)


def delete_confirmation_message(record: dict) -> str:
    name = record.get('branchName', record.get('id'))
    if record.get('type') == "Main":
        return MAIN_DELETE_WARNING.format(name=name)
    return SUB_DELETE_WARNING.format(name=name)


def is_confirmed(confirm, message) -> bool:
    """A missing callback counts as a decline."""
    if confirm is None:
        return False
    return bool(confirm(message))
