# =============================================================================
# WEATHER OBSERVER - EXCEPTIONS
# =============================================================================
#
# EXCEPTION HIERARCHY:
#
# WeatherError (base)
# ├── ProviderError        - transport failure or non-200 status
# │   └── DecodeError      - response body is not the expected JSON shape
# ├── NotFoundError        - geocoder returned no usable US candidate
# ├── NoDataError          - forecast feed returned no periods
# ├── ServiceError         - orchestration step failed (wraps the cause)
# ├── CancelledError       - shutdown requested before a fetch started
# └── ConfigError          - invalid configuration value
#
# Every layer raises its own error "from" the underlying one, so the full
# causal chain is available at the top via error_chain().
#
# =============================================================================

from typing import Optional


class WeatherError(Exception):
    """
    Base class for all weather lookup errors.

    Allows catching every failure of the pipeline in a single except block.
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        """
        Args:
            message: Error description
            operation: Name of the step that failed (e.g. "forecast")
        """
        self.message = message
        self.operation = operation
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ProviderError(WeatherError):
    """
    An external API call failed.

    status_code is None when the request never produced a response
    (connection error, timeout).
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message, operation)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(
        cls,
        source: str,
        status_code: int,
        body: str,
        operation: Optional[str] = None,
    ) -> "ProviderError":
        """Build the error for a non-200 response."""
        return cls(
            f"{source} response with non-200 status code {status_code} and message {body}",
            operation=operation,
            status_code=status_code,
            body=body,
        )

    def __str__(self) -> str:
        if self.operation:
            return f"unable to get {self.operation} from api: {self.message}"
        return self.message


class DecodeError(ProviderError):
    """The response could not be decoded into the expected shape."""

    def __init__(self, operation: str, detail: Optional[str] = None):
        message = f"unable to decode {operation}"
        if detail:
            message += f" ({detail})"
        super().__init__(message, operation=operation)

    def __str__(self) -> str:
        return self.message


class NotFoundError(WeatherError):
    """No geocoding candidate matched."""

    def __init__(self, city: str):
        super().__init__(
            f"could not find US coordinates for {city!r} in photon api",
            operation="coordinates",
        )
        self.city = city


class NoDataError(WeatherError):
    """The forecast feed contained no periods."""

    def __init__(self, operation: str = "forecast"):
        super().__init__(
            "unable to get forecast information from api: no forecast periods returned",
            operation=operation,
        )


class ServiceError(WeatherError):
    """A step of the combined forecast/alerts fetch failed."""

    def __init__(self, operation: str):
        super().__init__(f"unable to get {operation} information", operation=operation)


class CancelledError(WeatherError):
    """Shutdown was requested before the named request started."""

    def __init__(self, operation: str):
        super().__init__(f"cancelled before {operation} request", operation=operation)


class ConfigError(WeatherError):
    """Invalid configuration value."""

    def __init__(self, name: str, value: str, reason: str):
        super().__init__(f"invalid value for {name}: {value!r} ({reason})", operation="config")
        self.name = name
        self.value = value


def error_chain(exc: BaseException) -> str:
    """
    Render an exception and its __cause__ chain as one message.

    Example:
        "unable to get forecast information: unable to get forecast from api:
         api.weather.gov response with non-200 status code 503 and message ..."
    """
    parts = []
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        parts.append(text)
        current = current.__cause__
    return ": ".join(parts)


def find_cause(exc: BaseException, exc_type: type) -> Optional[BaseException]:
    """Return the first exception of exc_type in the __cause__ chain, or None."""
    current: Optional[BaseException] = exc
    seen = set()
    while current is not None and id(current) not in seen:
        if isinstance(current, exc_type):
            return current
        seen.add(id(current))
        current = current.__cause__
    return None
