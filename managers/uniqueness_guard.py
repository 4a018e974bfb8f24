"""
Keeps the collection down to a single Main branch.

Firestore gives no cross-document constraint for this, so the rule is enforced
in the application with a query followed by the caller's write. The two steps
are not atomic: two operators promoting different branches to Main at the same
moment can both pass the check and both commit. The operator population is
small and such collisions are rare, so the guarantee is best-effort only.
A strict version would need a singleton marker document written with a
conditional write (or a transaction) alongside every Main-type write.
"""
import logging

from .branch_errors import ConflictError

MAIN_TYPE = "Main"
MAIN_EXISTS = "main-branch-exists"


def find_other_main(store, collection_name, exclude_id=None):
    """Fresh query for a Main branch other than `exclude_id`. Returns its record or None."""
    mains = store.query_by_field(collection_name, "type", MAIN_TYPE)
    for record in mains:
        if record.get('id') != exclude_id:
            return record
    return None


def ensure_single_main(store, collection_name, branch_type, exclude_id=None):
    """
    Raises ConflictError when a write producing `branch_type` would create a
    second Main branch. The existing Main branch is never touched.
    """
    if branch_type != MAIN_TYPE:
        return

    existing = find_other_main(store, collection_name, exclude_id)
    if existing is not None:
        logging.warning(
            f"Rejected Main branch write (target={exclude_id}); "
            f"'{existing.get('branchName')}' ({existing['id']}) is already Main."
        )
        raise ConflictError(MAIN_EXISTS, existing['id'])
