"""
Exceptions raised by the note sorter.

Only ``AuthError`` escapes a sort run. Everything else is raised at a single
document's boundary and converted into a failed outcome there.
"""


class SorterError(Exception):
    """Base exception for all note sorter errors."""


class AuthError(SorterError):
    """Raised when the selected provider has no credential configured."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(
            f"No API key configured for provider '{provider}'. "
            f"Set the {provider.upper()} API key before sorting."
        )


class ClassificationError(SorterError):
    """Raised when the classification call itself fails."""


class TransportError(ClassificationError):
    """Raised when the provider answers with a non-success status or is unreachable."""

    def __init__(self, status: int | None, message: str = "", provider: str = ""):
        self.status = status
        self.provider = provider

        full_message = message or "Provider request failed"
        if provider:
            full_message += f" (Provider: {provider})"
        if status is not None:
            full_message += f" (HTTP status: {status})"

        super().__init__(full_message)


class StoreError(SorterError):
    """Raised when the document store rejects an operation."""


class ReadError(StoreError):
    """Raised when a document's content cannot be read."""


class MoveError(StoreError):
    """Raised when a document cannot be moved or a location cannot be created."""

    def __init__(self, message: str, identifier: str = "", destination: str = ""):
        self.identifier = identifier
        self.destination = destination

        full_message = message
        if identifier:
            full_message += f" (Document: {identifier})"
        if destination:
            full_message += f" (Destination: {destination})"

        super().__init__(full_message)
