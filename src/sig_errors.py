"""
Errors and warnings raised while loading and assembling SIG tables.

Structural problems raise; data-quality problems only warn so a graph can
still be built from imperfect sheets.
"""


class SigError(Exception):
    """Base class for fatal SIG errors."""


class MissingColumnError(SigError, ValueError):
    def __init__(self, table: str, columns: list[str]):
        self.table = table
        self.columns = list(columns)
        super().__init__(f"Missing required {table} columns: {', '.join(self.columns)}")


class NullValueError(SigError, ValueError):
    pass


class InvalidTableError(SigError, TypeError):
    pass


class InvalidArgumentError(SigError, ValueError):
    pass


class UnresolvedDependencyError(SigError, RuntimeError):
    pass


class ConfigurationError(SigError, RuntimeError):
    pass


class SigWarning(UserWarning):
    """Base class for non-fatal data-quality warnings."""


class EmptyInputWarning(SigWarning):
    pass


class NullValueWarning(SigWarning):
    pass


class DuplicateKeyWarning(SigWarning):
    pass


class UnresolvedReferenceWarning(SigWarning):
    pass
