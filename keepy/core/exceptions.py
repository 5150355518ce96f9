"""Error taxonomy for the account and permit core.

Every failure reaches the caller as one of these types. Store-level
driver errors are chained as ``__cause__`` so the original is never lost.
"""


class KeepyError(Exception):
    """Base exception for the keepy core."""

    error_code: str = "KEEPY_ERROR"

    def __init__(self, message: str = ""):
        self.message = message or self.__class__.__doc__ or ""
        super().__init__(self.message)


class NotFound(KeepyError):
    """No record matches the given id."""

    error_code: str = "NOT_FOUND"


class ConstraintViolation(KeepyError):
    """A store-level constraint rejected the write."""

    error_code: str = "CONSTRAINT_VIOLATION"


class DuplicateAccount(KeepyError):
    """An account with this name or email already exists."""

    error_code: str = "DUPLICATE_ACCOUNT"


class AuthFailure(KeepyError):
    """Invalid email or password."""

    error_code: str = "AUTH_FAILURE"


class StoreUnavailable(KeepyError):
    """The backing store could not be reached."""

    error_code: str = "STORE_UNAVAILABLE"
