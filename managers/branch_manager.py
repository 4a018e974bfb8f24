import logging
from google.cloud import firestore

from .branch_errors import BranchNotFound, ConfirmationDeclined, ValidationError
from .branch_validator import validate_branch
from .code_generator import code_matches, generate_branch_code
from .registry_feed import RegistryFeed
from .uniqueness_guard import ensure_single_main
from . import status_lifecycle

DEFAULT_COLLECTION = 'branches'
CODE_RETRY_LIMIT = 3


class BranchManager:
    """
    Write flows for the branch registry: Validator -> Uniqueness Guard -> store.
    Nothing here trusts a client-side cache; decisions are made on fresh reads.
    """
    def __init__(self, store, collection_name=DEFAULT_COLLECTION, rng=None, code_retry_limit=CODE_RETRY_LIMIT):
        self.store = store
        self.collection = collection_name
        self.rng = rng
        self.code_retry_limit = code_retry_limit

    # --------------------------------------------------------------------------
    # READS
    # --------------------------------------------------------------------------

    def list_branches(self):
        return self.store.list_all(self.collection)

    def get_branch(self, branch_id):
        if not branch_id:
            return None
        return self.store.get(self.collection, branch_id)

    def _require_branch(self, branch_id):
        branch = self.get_branch(branch_id)
        if branch is None:
            raise BranchNotFound(branch_id)
        return branch

    def open_feed(self):
        """Live, snapshot-driven view of the collection. Close it when done."""
        return RegistryFeed(self.store, self.collection).open()

    def preview_code(self, branch_name, branch_type):
        """Code shown while the create form is being filled in."""
        return generate_branch_code(branch_name, branch_type, self.rng)

    # --------------------------------------------------------------------------
    # CREATE
    # --------------------------------------------------------------------------

    def _code_taken(self, code):
        return bool(self.store.query_by_field(self.collection, 'branchCode', code))

    def _unique_code(self, data):
        """
        Keeps the previewed code unless another branch already uses it, in which
        case a fresh one is drawn. Random suffixes make this best-effort only.
        """
        code = (data.get('branchCode') or "").strip()
        attempts = 0
        while code and self._code_taken(code):
            attempts += 1
            if attempts > self.code_retry_limit:
                raise ValidationError({'branchCode': "Không thể tạo mã chi nhánh chưa được sử dụng."})
            logging.warning(f"Branch code {code} is already in use, regenerating.")
            code = generate_branch_code(data.get('branchName'), data.get('type'), self.rng)
        return code

    def create_branch(self, data: dict):
        """Creates an Active branch. Returns the stored record including its new id."""
        candidate = dict(data)
        code = (candidate.get('branchCode') or "").strip()
        if code and not code_matches(code, candidate.get('branchName'), candidate.get('type')):
            # A preview drawn for an earlier name or type is stale.
            logging.warning(f"Branch code {code} does not match the branch name/type, regenerating.")
            code = ""
        if not code:
            code = generate_branch_code(candidate.get('branchName'), candidate.get('type'), self.rng)
        candidate['branchCode'] = code

        record = validate_branch(candidate, require_code=True)
        ensure_single_main(self.store, self.collection, record['type'])
        record['branchCode'] = self._unique_code(record)

        record['status'] = status_lifecycle.ACTIVE
        record['createdAt'] = firestore.SERVER_TIMESTAMP
        branch_id = self.store.insert(self.collection, record)
        logging.info(f"Branch {record['branchCode']} created with id {branch_id}.")

        record['id'] = branch_id
        return record

    # --------------------------------------------------------------------------
    # EDIT
    # --------------------------------------------------------------------------

    def update_branch(self, branch_id: str, updates: dict, confirm=None):
        """
        Applies an edit. id, branchCode and createdAt are dropped from the
        payload because they never change after creation. Taking the Main
        branch offline or demoting it to Sub needs `confirm(message)` to return
        True, the same gate toggle_status applies; otherwise
        ConfirmationDeclined is raised and nothing is written.
        """
        current = self._require_branch(branch_id)
        merged = {**current, **updates}
        editable = {k: merged.get(k) for k in ('branchName', 'address', 'type', 'status') if k in merged}
        changes = validate_branch(editable)

        if status_lifecycle.edit_requires_confirmation(current, changes):
            message = status_lifecycle.edit_confirmation_message(current, changes)
            if not status_lifecycle.is_confirmed(confirm, message):
                logging.info(f"Edit of Main branch {branch_id} not confirmed.")
                raise ConfirmationDeclined('edit', branch_id)

        ensure_single_main(self.store, self.collection, changes['type'], exclude_id=branch_id)

        changes['updatedAt'] = firestore.SERVER_TIMESTAMP
        self.store.update(self.collection, branch_id, changes)
        logging.info(f"Branch {branch_id} updated.")
        return changes

    # --------------------------------------------------------------------------
    # STATUS & DELETE
    # --------------------------------------------------------------------------

    def toggle_status(self, branch_id: str, confirm=None):
        """
        Flips Active/Inactive on a freshly read record. Taking a Main branch
        offline needs `confirm(message)` to return True; otherwise
        ConfirmationDeclined is raised and nothing is written. Returns the new
        status. The cached view changes only when the store's snapshot arrives.
        """
        branch = self._require_branch(branch_id)
        new_status = status_lifecycle.next_status(branch.get('status'))

        if status_lifecycle.requires_confirmation(branch):
            message = status_lifecycle.confirmation_message(branch)
            if not status_lifecycle.is_confirmed(confirm, message):
                logging.info(f"Deactivation of Main branch {branch_id} not confirmed.")
                raise ConfirmationDeclined('deactivate', branch_id)

        self.store.update(self.collection, branch_id, {
            'status': new_status,
            'updatedAt': firestore.SERVER_TIMESTAMP,
        })
        logging.info(f"Branch {branch_id} is now {new_status}.")
        return new_status

    def delete_branch(self, branch_id: str, confirm=None):
        """Deletes after `confirm(message)` agrees; the Main branch gets a stronger warning."""
        branch = self._require_branch(branch_id)
        message = status_lifecycle.delete_confirmation_message(branch)
        if not status_lifecycle.is_confirmed(confirm, message):
            raise ConfirmationDeclined('delete', branch_id)

        self.store.delete(self.collection, branch_id)
        logging.info(f"Branch {branch_id} ({branch.get('branchCode')}) deleted.")
        return True
