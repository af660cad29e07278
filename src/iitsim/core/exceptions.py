"""Custom exceptions for the IIT Simulator."""


class SimulatorError(Exception):
    """Base exception for all simulator errors."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class NotFoundError(SimulatorError):
    """Element identifier is not a member of the graph."""

    def __init__(self, element_id: str, details: str | None = None):
        message = f"Element not found: {element_id}"
        super().__init__(message, details)
        self.element_id = element_id


class ValidationError(SimulatorError):
    """Input validation error."""

    pass


class ConfigError(SimulatorError):
    """Configuration file could not be read or parsed."""

    def __init__(self, path: str, details: str | None = None):
        message = f"Invalid configuration file {path}"
        super().__init__(message, details)
        self.path = path
