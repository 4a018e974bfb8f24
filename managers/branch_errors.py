class RegistryError(Exception):
    """Base class for every error raised by the branch registry."""


class ValidationError(RegistryError):
    """
    One or more fields of a branch record failed validation.
    `errors` maps each failing field to its message, all fields at once.
    """
    def __init__(self, errors: dict):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Invalid branch fields: {fields}")


class ConflictError(RegistryError):
    """A write would leave more than one Main branch in the collection."""
    def __init__(self, reason: str, existing_id: str):
        self.reason = reason
        self.existing_id = existing_id
        super().__init__(f"{reason}: {existing_id}")


class StoreError(RegistryError):
    """The document store rejected an operation (network, permission, unknown)."""
    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        message = f"Store operation '{operation}' failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class BranchNotFound(RegistryError):
    def __init__(self, branch_id: str):
        self.branch_id = branch_id
        super().__init__(f"Branch '{branch_id}' does not exist")


class ConfirmationDeclined(RegistryError):
    """A guarded action was not confirmed by the operator. Nothing was written."""
    def __init__(self, action: str, branch_id: str):
        self.action = action
        self.branch_id = branch_id
        super().__init__(f"{action} of branch '{branch_id}' was not confirmed")
