"""Custom exceptions used throughout the procviz package."""

from typing import Any, Optional


class ProcessorError(Exception):
    """Base exception for all processor visualizer errors.

    All procviz-specific exceptions should inherit from this class.
    This allows catching all of them with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(ProcessorError):
    """Raised when there's an error in configuration.

    This includes:
    - Unreadable or malformed YAML
    - Missing required configuration
    - Invalid register names or cycle time
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class SequenceAbandoned(ProcessorError):
    """Raised inside an execution sequence that a newer program load replaced.

    The engine raises it after a cycle delay when its generation is no longer
    current, and catches it at the top of the run loop. It never escapes
    ExecutionEngine.run().
    """

    def __init__(self, generation: int, current: int):
        message = f"Execution sequence {generation} abandoned (current: {current})"
        super().__init__(message=message, details={"generation": generation, "current": current})
        self.generation = generation
        self.current = current
