"""Custom exception classes for the Railway CLI."""

from typing import Optional


class RailwayError(Exception):
    """Base class for all custom exceptions in the Railway CLI."""

    pass


class LinkResolutionError(RailwayError):
    """Raised when no linked project applies to the working directory."""

    pass


class NoLinkedProjectError(LinkResolutionError):
    """Raised when neither the current directory nor any ancestor is linked."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "No linked project found. Run `railway link` to connect to a project"
        )


class ProjectNotFoundError(LinkResolutionError):
    """Raised when there is no stored project entry to update."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Project not found. Run `railway link` to connect to a project"
        )


class HomeDirectoryError(RailwayError):
    """Raised when the user's home directory cannot be determined."""

    pass


class ConfigWriteError(RailwayError):
    """
    Raised when persisting the config document fails. The in-memory
    document is unaffected.
    """

    def __init__(self, path: str, orig_exc: Optional[Exception] = None):
        self.path = path
        self.orig_exc = orig_exc

        full_msg = f"Failed to write config file: {path}"
        if orig_exc:
            full_msg += f" ({type(orig_exc).__name__}: {orig_exc})"
        super().__init__(full_msg)


class UnauthorizedError(RailwayError):
    """Raised when an authenticated request is attempted without a token."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Unauthorized. Please login with `railway login`")


class GraphQLError(RailwayError):
    """Raised when the backboard API rejects a query or returns errors."""

    def __init__(self, message: str, errors: Optional[list] = None):
        self.errors = errors or []
        super().__init__(f"GraphQL error: {message}")


class UpdateCheckError(RailwayError):
    """Raised when the release metadata cannot be fetched or parsed."""

    pass
