class GroceryError(Exception):
    """Base class for everything the engine raises on purpose."""


class NotFoundError(GroceryError):
    """Raised when a name does not resolve to a known item or location."""

    def __init__(self, kind, name):
        super().__init__(f"unknown {kind}: {name!r}")
        self.kind = kind
        self.name = name


class PreconditionError(GroceryError):
    """
    A recoverable refusal. The Director turns these into error events,
    so 'reason' must be one of the codes the Narrator knows how to word.
    """

    def __init__(self, reason, details=None):
        super().__init__(reason)
        self.reason = reason
        self.details = details or {}


class InvariantViolation(GroceryError):
    """Internal data disagrees with itself. Never shown as a normal failure."""


class ConfigurationError(GroceryError):
    """Seed data or config.yaml cannot be turned into a playable store."""
