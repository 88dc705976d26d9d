"""
Exceptions raised by recordgen.
"""


class RecordGenError(Exception):
    """Base class for all recordgen errors."""

    pass


class ConfigurationError(RecordGenError):
    """Raised when configuration is invalid."""

    pass


class SynthesisError(RecordGenError):
    """Raised when generated members cannot be synthesized consistently."""

    pass


class UnrepresentableFieldError(SynthesisError):
    """Raised in strict mode for a field lacking an identifier or a type annotation."""

    def __init__(self, record: str, field: str | None, reason: str):
        self.record = record
        self.field = field
        self.reason = reason
        label = field if field is not None else "<pattern>"
        super().__init__(f"{record}.{label}: {reason}")


class DuplicateFieldError(SynthesisError):
    """Raised when two stored fields of a record share a name."""

    def __init__(self, record: str, field: str):
        self.record = record
        self.field = field
        super().__init__(f"{record}: duplicate field '{field}'")


class DeclarationSourceError(RecordGenError):
    """Raised when source text cannot be turned into declarations."""

    pass
