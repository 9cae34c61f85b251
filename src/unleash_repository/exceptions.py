"""unleash_repository exception types."""

from __future__ import annotations


class RepositoryError(Exception):
    """Base error of the unleash_repository library."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class RepositoryErrorCodes:
    """RepositoryError code constants."""

    CONFIGURATION_ERROR: str = "CONFIGURATION_ERROR"
    FETCHING_DISABLED: str = "FETCHING_DISABLED"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
    TRANSPORT_ERROR: str = "TRANSPORT_ERROR"
    HTTP_STATUS: str = "HTTP_STATUS_ERROR"
    INVALID_JSON: str = "INVALID_JSON"
    MISSING_FEATURES: str = "MISSING_FEATURES"
    INVALID_PAYLOAD: str = "INVALID_PAYLOAD"
    EXHAUSTED: str = "EXHAUSTED"
    BOOTSTRAP_ERROR: str = "BOOTSTRAP_ERROR"


class ConfigurationError(RepositoryError):
    """Invalid or incomplete configuration. Not retryable."""

    def __init__(
        self,
        message: str,
        code: str = RepositoryErrorCodes.CONFIGURATION_ERROR,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)


class TransportError(RepositoryError):
    """Connection-level failure of the live fetch."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(RepositoryErrorCodes.TRANSPORT_ERROR, message, cause)


class UpstreamStatusError(RepositoryError):
    """The upstream answered with a non-success status code."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(
            RepositoryErrorCodes.HTTP_STATUS,
            message or f"Invalid status code: '{status_code}'",
        )
        self.status_code = status_code


class PayloadError(RepositoryError):
    """Raw payload is structurally invalid."""

    def __init__(
        self,
        message: str,
        code: str = RepositoryErrorCodes.INVALID_PAYLOAD,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)


class ExhaustionError(RepositoryError):
    """No raw payload is available from any source."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(RepositoryErrorCodes.EXHAUSTED, message, cause)
        self.status_code = status_code


class BootstrapError(RepositoryError):
    """A bootstrap provider failed to produce its content."""

    def __init__(
        self,
        message: str,
        code: str = RepositoryErrorCodes.BOOTSTRAP_ERROR,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)
