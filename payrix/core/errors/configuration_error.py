"""Invalid client construction.

Unlike DomainError values, configuration errors are raised: they happen
before any logical operation exists and can never reach the network.
"""

from payrix.core.enums import ErrorCode


class ConfigurationError(ValueError):
    """Raised when a client component is constructed with invalid settings.

    Attributes:
        code: Always ErrorCode.CONFIGURATION_INVALID.
        setting: Name of the offending setting, when known.
    """

    code = ErrorCode.CONFIGURATION_INVALID

    def __init__(self, message: str, *, setting: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Human-readable description of the problem.
            setting: Name of the offending setting.
        """
        super().__init__(message)
        self.setting = setting
