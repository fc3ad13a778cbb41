"""
Engine errors.

Validity predicates convert all of these into a False result.
Only UnresolvedOutcome is allowed to escape make().
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class NotFound(EngineError):
    """A pile or card id is absent from the snapshot or the registry."""

    def __init__(self, kind: str, key: str | None):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} {key} not found!")


class InvalidOperation(EngineError):
    """An operation cannot be applied (empty subject, too few cards, rule fault)."""


class UnresolvedOutcome(EngineError):
    """Combat produced an outcome outside the defined set."""
