"""Error taxonomy shared by the validation, service and data-access layers."""


class EMRError(Exception):
    """Base class for every error raised by the EMR manager."""
    pass


class InvalidInput(EMRError):
    """A field failed a validation rule, a referenced key is missing, or a key is a duplicate."""

    __match_args__ = ("field", "reason")

    def __init__(self, field: str, reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason


class NotFound(EMRError):
    """The targeted row does not exist."""

    __match_args__ = ("entity_type", "key")

    def __init__(self, entity_type: str, key):
        super().__init__(f"{entity_type} with ID '{key}' not found")
        self.entity_type = entity_type
        self.key = key


class StorageFailure(EMRError):
    """The underlying database call failed."""

    __match_args__ = ("message", "cause")

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
