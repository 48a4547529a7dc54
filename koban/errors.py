"""Error types raised by koban."""

from __future__ import annotations


class KobanError(Exception):
    """Base class for every error koban reports."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidFilterError(KobanError):
    """A list filter was not given in key=value form."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid filter `{value}`; expected key=value")
        self.value = value


class InvalidPayloadError(KobanError):
    """A request payload or path segment could not be used."""


class InvalidRequestError(KobanError):
    """A request combination is not allowed."""


class ConfirmationRequiredError(KobanError):
    """A mutation was attempted without --yes or --dry-run."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"{operation} requires confirmation; pass --yes to proceed or --dry-run to preview"
        )
        self.operation = operation


class FileError(KobanError):
    """A local file could not be read or written."""


class CredentialError(KobanError):
    """Stored credentials could not be read, written or removed."""


class MissingTokenError(KobanError):
    """No API token is available from any source."""

    def __init__(self) -> None:
        super().__init__(
            "missing API token; set INVOICE_NINJA_API_TOKEN or run `koban auth login`"
        )


class DecodeError(KobanError):
    """A value could not be encoded or decoded."""