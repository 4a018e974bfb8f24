
import logging
import streamlit as st

# --- Firebase ---
from managers.firebase_client import FirebaseClient
from managers.branch_store import BranchStore

# --- Import Managers ---
from managers.branch_manager import BranchManager, CODE_RETRY_LIMIT, DEFAULT_COLLECTION

# --- Import UI Pages ---
from ui.create_branch_page import render_create_branch_page
from ui.branch_registry_page import render_branch_registry_page, close_feed

st.set_page_config(layout="wide")

REGISTRY_PAGE = "Danh sách Chi nhánh"
CREATE_PAGE = "Tạo Chi nhánh"
PAGES = [REGISTRY_PAGE, CREATE_PAGE]


def get_corrected_creds(secrets_key):
    """
    Reads a service-account section from Streamlit secrets into a plain dict
    and un-escapes the newlines of its 'private_key'.
    """
    creds_section = st.secrets[secrets_key]
    creds_dict = {key: creds_section[key] for key in creds_section.keys()}

    if 'private_key' in creds_dict:
        creds_dict['private_key'] = creds_dict['private_key'].replace('\\n', '\n')

    return creds_dict


def get_registry_config():
    """Optional [branch_registry] secrets section; every key has a default."""
    section = st.secrets.get("branch_registry", {})
    return {
        'collection': section.get('collection', DEFAULT_COLLECTION),
        'code_retry_limit': int(section.get('code_retry_limit', CODE_RETRY_LIMIT)),
        'log_level': str(section.get('log_level', 'INFO')).upper(),
    }


def init_managers():
    config = get_registry_config()
    logging.basicConfig(
        level=getattr(logging, config['log_level'], logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if 'firebase_client' not in st.session_state:
            firebase_creds_info = get_corrected_creds("firebase_credentials")
            st.session_state.firebase_client = FirebaseClient(firebase_creds_info)
    except Exception as e:
        logging.error(f"Firebase initialization failed: {e}")
        st.error(f"Lỗi nghiêm trọng khi khởi tạo credentials: {e}")
        st.stop()

    if 'branch_mgr' not in st.session_state:
        store = BranchStore(st.session_state.firebase_client.db)
        st.session_state.branch_mgr = BranchManager(
            store,
            collection_name=config['collection'],
            code_retry_limit=config['code_retry_limit'],
        )
    return True


def display_sidebar():
    st.sidebar.title("Chức năng")
    for page_name in PAGES:
        if st.sidebar.button(page_name, key=f"btn_{page_name.replace(' ', '_')}", use_container_width=True):
            st.session_state.page = page_name
            st.rerun()


def main():
    if not init_managers(): return

    display_sidebar()
    page = st.session_state.setdefault('page', REGISTRY_PAGE)
    branch_mgr = st.session_state.branch_mgr

    # The live listener only lives while the registry is on screen. A session that
    # ends without leaving the page keeps its listener until the process exits,
    # since Streamlit has no session-end hook.
    if page != REGISTRY_PAGE:
        close_feed()

    page_renderers = {
        REGISTRY_PAGE: lambda: render_branch_registry_page(branch_mgr),
        CREATE_PAGE: lambda: render_create_branch_page(branch_mgr),
    }

    renderer = page_renderers.get(page)
    if renderer: renderer()
    else: st.warning(f"Trang '{page}' đang phát triển.")


if __name__ == "__main__":
    main()
