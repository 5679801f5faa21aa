"""Exceptions raised while migrating secrets."""
from typing import Optional


class MigrationError(Exception):
    """Base class for migration failures."""
    pass


class ClusterAccessError(MigrationError):
    """Kubernetes client could not be configured or a secret read failed."""
    pass


class EmptyResultError(MigrationError):
    """The source namespace contains no secrets."""
    pass


class InvalidSecretNameError(MigrationError):
    """A destination name could not be derived from a source secret."""
    pass


class WriterError(MigrationError):
    """A Secret Manager call failed.

    ``kind`` is one of ``already_exists``, ``permission_denied``,
    ``not_found`` or ``unknown``.
    """

    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"

    def __init__(self, message: str, kind: str = UNKNOWN, secret_name: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.secret_name = secret_name


class MigrationAborted(MigrationError):
    """Processing stopped on the first failed item.

    Carries the partial report so the caller can still print what was done.
    """

    def __init__(self, message: str, report, cause: Exception):
        super().__init__(message)
        self.report = report
        self.cause = cause
