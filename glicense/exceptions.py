"""Custom exceptions for glicense."""


class GlicenseError(Exception):
    """Base exception for all glicense operations."""


class ConfigurationError(GlicenseError):
    """Raised when configuration validation fails."""


class ManifestError(GlicenseError):
    """Raised when the dependency manifest cannot be used."""


class ManifestNotFoundError(ManifestError):
    """Raised when the project directory has no go.mod file."""


class ManifestParseError(ManifestError):
    """Raised when go.mod does not follow the go.mod grammar."""

    def __init__(self, message: str, filename: str = "go.mod", line: int = 0) -> None:
        self.filename = filename
        self.line = line
        location = f"{filename}:{line}" if line else filename
        super().__init__(f"{location}: {message}")


class APIError(GlicenseError):
    """Raised when a license API call fails."""


class FileProcessingError(GlicenseError):
    """Raised when file operations fail."""
