import streamlit as st

from managers.branch_errors import RegistryError
from managers.branch_manager import BranchManager
from ui._utils import report_registry_error, show_toast

TYPE_LABELS = {"Main": "Chi nhánh chính", "Sub": "Chi nhánh phụ"}
FORM_KEYS = ('new_branch_name', 'new_branch_type', 'new_branch_address')


def _current_code(branch_mgr: BranchManager, name, branch_type):
    """Regenerates the previewed code only when the name or the type changed."""
    source = (name, branch_type)
    if st.session_state.get('code_source') != source:
        st.session_state.code_source = source
        st.session_state.code_preview = branch_mgr.preview_code(name, branch_type)
    return st.session_state.code_preview


def _mark_in_flight():
    st.session_state.create_in_flight = True


def _reset_form():
    for key in FORM_KEYS + ('code_source', 'code_preview'):
        st.session_state.pop(key, None)


def render_create_branch_page(branch_mgr: BranchManager):
    st.title("🏢 Tạo Chi nhánh")

    c1, c2 = st.columns([0.6, 0.4])
    with c1:
        name = st.text_input("Tên chi nhánh", key='new_branch_name', placeholder="VD: Chi nhánh Trung tâm")
        branch_type = st.selectbox(
            "Loại chi nhánh", options=["Sub", "Main"], key='new_branch_type', format_func=TYPE_LABELS.get,
        )
        address = st.text_area("Địa chỉ", key='new_branch_address', placeholder="Số nhà, tên đường, tòa nhà, tầng...")

    code = _current_code(branch_mgr, name, branch_type)
    with c2:
        with st.container(border=True):
            st.caption(TYPE_LABELS[branch_type])
            st.subheader(name or "Chi nhánh mới")
            st.write(address or "Chưa nhập địa chỉ...")
        with st.container(border=True):
            st.caption("Mã chi nhánh tự động")
            st.code(code or "NX-____")

    in_flight = st.session_state.get('create_in_flight', False)
    st.button(
        "Đang tạo..." if in_flight else "Tạo chi nhánh",
        type="primary", use_container_width=True,
        disabled=in_flight, on_click=_mark_in_flight,
    )

    if not in_flight:
        return

    try:
        with st.spinner("Đang tạo chi nhánh..."):
            branch = branch_mgr.create_branch({
                'branchName': name, 'address': address,
                'type': branch_type, 'branchCode': code,
            })
    except RegistryError as e:
        report_registry_error(e)
        return
    finally:
        st.session_state.create_in_flight = False

    _reset_form()
    show_toast(f"Đã tạo chi nhánh {branch['branchCode']}")
    st.rerun()
