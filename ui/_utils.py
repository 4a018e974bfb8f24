import streamlit as st

from managers.branch_errors import ConfirmationDeclined, ConflictError, StoreError, ValidationError

FIELD_LABELS = {
    'branchName': "Tên chi nhánh",
    'address': "Địa chỉ",
    'type': "Loại chi nhánh",
    'status': "Trạng thái",
    'branchCode': "Mã chi nhánh",
}


def show_toast(message, type='success'):
    st.toast(message, icon='✅' if type == 'success' else '⚠️')


def show_field_errors(errors: dict):
    for field, message in errors.items():
        st.error(f"**{FIELD_LABELS.get(field, field)}**: {message}")


def report_registry_error(e):
    """Shows a registry exception the way the page should surface it. Never re-raises."""
    if isinstance(e, ValidationError):
        show_field_errors(e.errors)
    elif isinstance(e, ConflictError):
        st.error(f"🚫 Đã tồn tại một chi nhánh chính (id `{e.existing_id}`). Vui lòng hạ cấp chi nhánh đó trước.")
    elif isinstance(e, ConfirmationDeclined):
        st.info("Không có thay đổi nào được thực hiện.")
    elif isinstance(e, StoreError):
        st.error("Không thể cập nhật danh sách chi nhánh. Vui lòng thử lại.")
    else:
        st.error(f"Lỗi: {e}")
