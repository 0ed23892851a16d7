class CyclecalError(Exception):
    """Base error."""

class DefinitionError(CyclecalError):
    """Raised when a calendar or culture definition cannot be evaluated."""

class UnsupportedOperationError(CyclecalError, NotImplementedError):
    """Raised by capabilities that are declared but not implemented."""

class ProviderError(CyclecalError):
    """Raised by the bundled data providers when a definition cannot be read."""
