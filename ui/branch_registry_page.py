"""
Registry screen: live counts, search/filter, table, and per-branch edit,
status toggle and delete.

The Firestore listener behind the table is opened once per browser session and
closed when the user switches to another page (see app.main). Streamlit has no
callback for a session ending, so when a browser tab is simply closed its
listener stays attached until the server process exits.
"""
import streamlit as st
import pandas as pd

from managers.branch_errors import RegistryError
from managers.branch_manager import BranchManager
from managers.branch_projection import TYPE_FILTERS, to_table_rows
from managers import status_lifecycle
from ui._utils import report_registry_error, show_toast

FEED_KEY = 'branch_feed'
REFRESH_SECONDS = 2

TYPE_LABELS = {"All": "Tất cả", "Main": "Chi nhánh chính", "Sub": "Chi nhánh phụ"}
STATUS_LABELS = {status_lifecycle.ACTIVE: "Hoạt động", status_lifecycle.INACTIVE: "Ngừng hoạt động"}


def get_feed(branch_mgr: BranchManager):
    """One live feed per session, opened on first use."""
    feed = st.session_state.get(FEED_KEY)
    if feed is None or not feed.is_open:
        feed = branch_mgr.open_feed()
        st.session_state[FEED_KEY] = feed
    return feed


def close_feed():
    feed = st.session_state.pop(FEED_KEY, None)
    if feed is not None:
        feed.close()


def _render_stats(stats):
    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Tổng số", stats['total'])
    c2.metric("Chính", stats['main'])
    c3.metric("Phụ", stats['sub'])
    c4.metric("Hoạt động", stats['active'])
    c5.metric("Ngừng", stats['inactive'])


def _submit_edit(branch_mgr, bid, updates, confirm=None):
    try:
        branch_mgr.update_branch(bid, updates, confirm=confirm)
        show_toast(f"Đã cập nhật {updates.get('branchName', '')}")
    except RegistryError as e:
        report_registry_error(e)


def _render_edit_form(branch_mgr, branch):
    bid = branch['id']
    confirm_key = f"confirm_edit_{bid}"

    with st.form(f"form_edit_{bid}"):
        st.caption(f"MÃ: {branch.get('branchCode', '')}")
        new_name = st.text_input("Tên chi nhánh", value=branch.get('branchName', ''), key=f"name_{bid}")
        status_options = [status_lifecycle.ACTIVE, status_lifecycle.INACTIVE]
        new_status = st.selectbox(
            "Trạng thái", options=status_options, key=f"status_{bid}", format_func=STATUS_LABELS.get,
            index=status_options.index(branch['status']) if branch.get('status') in status_options else 0,
        )
        type_options = ["Sub", "Main"]
        new_type = st.selectbox(
            "Loại chi nhánh", options=type_options, key=f"type_{bid}", format_func=TYPE_LABELS.get,
            index=type_options.index(branch['type']) if branch.get('type') in type_options else 0,
        )
        new_address = st.text_area("Địa chỉ", value=branch.get('address', ''), key=f"addr_{bid}")

        if st.form_submit_button("Lưu thay đổi"):
            updates = {
                'branchName': new_name, 'status': new_status,
                'type': new_type, 'address': new_address,
            }
            if status_lifecycle.edit_requires_confirmation(branch, updates):
                st.session_state[confirm_key] = updates
            else:
                _submit_edit(branch_mgr, bid, updates)

    pending = st.session_state.get(confirm_key)
    if pending:
        st.warning(status_lifecycle.edit_confirmation_message(branch, pending))
        cd_c1, cd_c2 = st.columns(2)
        if cd_c1.button("Xác nhận", key=f"confirm_edit_btn_{bid}", type="primary"):
            del st.session_state[confirm_key]
            _submit_edit(branch_mgr, bid, pending, confirm=lambda _msg: True)
        if cd_c2.button("Hủy", key=f"cancel_edit_btn_{bid}"):
            del st.session_state[confirm_key]
            st.rerun()


def _render_status_toggle(branch_mgr, branch):
    bid = branch['id']
    confirm_key = f"confirm_toggle_{bid}"
    label = "⏻ " + STATUS_LABELS.get(branch.get('status'), STATUS_LABELS[status_lifecycle.INACTIVE])

    if st.button(label, key=f"toggle_{bid}", use_container_width=True):
        if status_lifecycle.requires_confirmation(branch):
            st.session_state[confirm_key] = True
        else:
            try:
                branch_mgr.toggle_status(bid)
            except RegistryError as e:
                report_registry_error(e)

    if st.session_state.get(confirm_key):
        st.warning(status_lifecycle.confirmation_message(branch))
        cd_c1, cd_c2 = st.columns(2)
        if cd_c1.button("Xác nhận", key=f"confirm_toggle_btn_{bid}", type="primary"):
            del st.session_state[confirm_key]
            try:
                branch_mgr.toggle_status(bid, confirm=lambda _msg: True)
            except RegistryError as e:
                report_registry_error(e)
        if cd_c2.button("Hủy", key=f"cancel_toggle_btn_{bid}"):
            del st.session_state[confirm_key]
            st.rerun()


def _render_delete(branch_mgr, branch):
    bid = branch['id']
    confirm_key = f"confirm_delete_{bid}"

    if st.button("Xóa", key=f"del_{bid}", use_container_width=True):
        st.session_state[confirm_key] = True

    if st.session_state.get(confirm_key):
        st.warning(status_lifecycle.delete_confirmation_message(branch))
        cd_c1, cd_c2 = st.columns(2)
        if cd_c1.button("Xác nhận Xóa", key=f"confirm_btn_{bid}", type="primary"):
            del st.session_state[confirm_key]
            try:
                branch_mgr.delete_branch(bid, confirm=lambda _msg: True)
                st.success("Đã xóa thành công!")
            except RegistryError as e:
                report_registry_error(e)
        if cd_c2.button("Hủy", key=f"cancel_btn_{bid}"):
            del st.session_state[confirm_key]
            st.rerun()


def render_branch_registry_page(branch_mgr: BranchManager):
    st.title("🏢 Danh sách Chi nhánh")

    c1, c2 = st.columns([0.7, 0.3])
    with c1:
        search = st.text_input("Tìm kiếm", placeholder="Tìm theo tên hoặc mã chi nhánh...")
    with c2:
        type_filter = st.selectbox("Loại", options=list(TYPE_FILTERS), format_func=TYPE_LABELS.get)

    try:
        feed = get_feed(branch_mgr)
    except RegistryError as e:
        report_registry_error(e)
        return

    @st.fragment(run_every=REFRESH_SECONDS)
    def _live_registry():
        view = feed.view(search, type_filter)
        _render_stats(view['stats'])

        if not view['branches']:
            st.info("Chưa có chi nhánh nào phù hợp.")
            return

        st.dataframe(pd.DataFrame(to_table_rows(view['branches'])), use_container_width=True, hide_index=True)

        for branch in view['branches']:
            with st.container(border=True):
                b_c1, b_c2, b_c3 = st.columns([0.6, 0.2, 0.2])
                with b_c1:
                    type_label = TYPE_LABELS.get(branch.get('type'), branch.get('type', ''))
                    st.markdown(f"**{branch.get('branchName', '')}** · `{branch.get('branchCode', '')}` · {type_label}")
                    with st.expander("Chỉnh sửa"):
                        _render_edit_form(branch_mgr, branch)
                with b_c2:
                    _render_status_toggle(branch_mgr, branch)
                with b_c3:
                    _render_delete(branch_mgr, branch)

    _live_registry()
