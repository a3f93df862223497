"""Application exceptions."""


class GreeterBotException(Exception):
    """Base exception for the greeter bot."""

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code
        super().__init__(message)


class ConfigurationError(GreeterBotException):
    """Required configuration is missing or malformed."""

    def __init__(self, variable: str, details: str = None):
        message = f"{variable} is not set"
        if details:
            message = f"{variable}: {details}"

        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR"
        )
        self.variable = variable


class SessionClientError(GreeterBotException):
    """Session client operation failed."""

    def __init__(self, operation: str, details: str = None):
        message = f"Session client error during {operation}"
        if details:
            message += f": {details}"

        super().__init__(
            message=message,
            code="SESSION_CLIENT_ERROR"
        )
