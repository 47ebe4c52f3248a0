"""Error taxonomy shared by every context.

Callers branch on the error kind, never on message text. Every error carries a
``messages`` mapping of field name to a list of human-readable messages, the same
shape protean's ``ValidationError`` uses and the HTTP layer renders under ``"error"``.
Input and state errors are protean ``ValidationError``s and missing objects are
``ObjectNotFoundError``s, so code written against protean's exceptions catches them.
"""

from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError


class ErrorKind(Enum):
    UNAUTHENTICATED = "Unauthenticated"
    NOT_FOUND = "NotFound"
    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_STATE = "InvalidState"
    TRANSACTION_FAILED = "TransactionFailed"


class StorefrontError(Exception):
    kind: ErrorKind

    def __init__(self, messages: dict[str, list[str]] | str):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        super().__init__(messages)
        self.messages = messages


class UnauthenticatedError(StorefrontError):
    """No identity, or an identity that could not be verified."""

    kind = ErrorKind.UNAUTHENTICATED


class NotFoundError(StorefrontError, ObjectNotFoundError):
    """A product, profile or order does not exist for the caller."""

    kind = ErrorKind.NOT_FOUND


class InvalidArgumentError(StorefrontError, ValidationError):
    """Input rejected as-is (e.g. a negative quantity)."""

    kind = ErrorKind.INVALID_ARGUMENT


class InvalidStateError(StorefrontError, ValidationError):
    """The operation is not valid for the current state (e.g. empty-cart checkout)."""

    kind = ErrorKind.INVALID_STATE


class TransactionFailedError(StorefrontError):
    """Storage failed inside an atomic unit of work. Nothing was written."""

    kind = ErrorKind.TRANSACTION_FAILED
