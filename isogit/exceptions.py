# isogit Exceptions
# Error hierarchy for git command execution and repository lifecycle


class IsogitError(Exception):
    """Base exception for isogit errors."""

    def __init__(self, message: str, stderr: str = ""):
        self.message = message
        self.stderr = stderr
        super().__init__(message)


class ConfigurationError(IsogitError):
    """Raised when the SSH proxy script or a credential path is unusable."""


class IdentityError(ConfigurationError):
    """Raised when the identity file does not exist or is not readable."""


class CloneError(IsogitError):
    """Raised when cloning and checking out a repository fails."""

    @classmethod
    def from_stderr(cls, stderr: str) -> "CloneError":
        return cls(stderr.strip() or "git clone failed", stderr=stderr)


class GitCommandError(IsogitError, RuntimeError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        self.returncode = returncode
        super().__init__(message, stderr=stderr)

    @classmethod
    def from_result(cls, result) -> "GitCommandError":
        """Build an error carrying the stderr of a failed GitProcessResult."""
        message = result.stderr.strip() or f"Git command failed: {result.command_line}"
        return cls(message, returncode=result.returncode, stderr=result.stderr)


class GitTimeoutError(GitCommandError):
    """Raised when a git command exceeds its timeout."""


class GitFileNotFoundError(IsogitError, FileNotFoundError):
    """Raised when a file does not exist at the requested revision."""
