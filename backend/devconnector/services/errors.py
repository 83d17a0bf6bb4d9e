"""
Store error kinds.

Services raise these; the API layer translates them into responses.

    StoreError
    ├── NotFoundError          - referenced entity does not exist (safe to report)
    ├── ConflictError          - uniqueness violated (duplicate profile, email)
    ├── PermissionDeniedError  - caller does not own the entity
    └── StorageError           - the database call itself failed
"""


class StoreError(Exception):
    message = "Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotFoundError(StoreError):
    message = "Not found"


class ProfileNotFoundError(NotFoundError):
    message = "There is no profile for this user"


class SubRecordNotFoundError(NotFoundError):
    """An experience or education id is not present on the profile."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} not found")


class UserNotFoundError(NotFoundError):
    message = "User not found"


class PostNotFoundError(NotFoundError):
    message = "Post not found"


class ConflictError(StoreError):
    message = "Conflict"


class ProfileConflictError(ConflictError):
    message = "Profile already exists for this user"


class UserExistsError(ConflictError):
    message = "User already exists"


class PermissionDeniedError(StoreError):
    message = "User not authorized"


class StorageError(StoreError):
    message = "Server Error"
