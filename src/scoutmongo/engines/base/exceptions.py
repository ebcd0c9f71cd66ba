"""Engine-specific exceptions."""


class EngineError(Exception):
    """Base exception for search engine errors."""


class ContractViolationError(EngineError):
    """Raised when a caller breaks the engine contract (a programming error)."""


class ConfigurationError(EngineError):
    """Raised when engine configuration is invalid."""
