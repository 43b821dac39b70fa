"""Error taxonomy for poppler tool invocations.

Every failure raised by this package derives from PdfProcessError, so callers
can catch a single base class and branch on the subclass.

Hierarchy:
    PdfProcessError
    ├── InvalidArguments        (local validation, raised before spawning)
    │   └── PageOutOfRange      (tool rejected the requested page range)
    ├── ExecutableNotFound
    ├── ProcessIOError
    │   ├── StdinWriteError
    │   └── OutputReadError
    ├── ProcessTimeout
    │   └── ProcessCancelled
    ├── PasswordRequired
    ├── IncorrectPassword
    ├── ProcessFailed           (catch-all for non-zero exits, keeps stderr)
    │   ├── NotPdfFile
    │   └── PermissionDenied
    └── MalformedOutput
"""


class PdfProcessError(Exception):
    """Base class for all pdf_process errors."""

    pass


class InvalidArguments(PdfProcessError):
    """Raised when caller-supplied options fail validation."""

    pass


class PageOutOfRange(InvalidArguments):
    """Raised when the tool reports the requested pages do not exist."""

    def __init__(self, tool: str, stderr: str) -> None:
        super().__init__(f"{tool} rejected the page range: {stderr.strip()}")
        self.tool = tool
        self.stderr = stderr


class ExecutableNotFound(PdfProcessError):
    """Raised when the tool binary cannot be resolved or executed."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Executable not found or not runnable: {executable}")
        self.executable = executable


class ProcessIOError(PdfProcessError):
    """Raised when piping data to or from the child process fails."""

    def __init__(self, executable: str, message: str) -> None:
        super().__init__(f"{executable}: {message}")
        self.executable = executable


class StdinWriteError(ProcessIOError):
    """Raised when the input payload could not be written to stdin."""

    pass


class OutputReadError(ProcessIOError):
    """Raised when stdout or stderr could not be drained."""

    pass


class ProcessTimeout(PdfProcessError):
    """Raised when the deadline expired and the child was killed."""

    def __init__(self, executable: str, timeout: float | None) -> None:
        super().__init__(f"{executable} did not finish within {timeout}s")
        self.executable = executable
        self.timeout = timeout


class ProcessCancelled(ProcessTimeout):
    """Raised when the caller's cancel event fired and the child was killed."""

    def __init__(self, executable: str) -> None:
        PdfProcessError.__init__(self, f"{executable} was cancelled")
        self.executable = executable
        self.timeout = None


class PasswordRequired(PdfProcessError):
    """Raised when the document is encrypted and no password was given."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"{tool}: document is encrypted and no password was provided")
        self.tool = tool


class IncorrectPassword(PdfProcessError):
    """Raised when the supplied password does not open the document."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"{tool}: incorrect password was provided")
        self.tool = tool


class ProcessFailed(PdfProcessError):
    """Raised for a non-zero exit that no more specific error matched.

    Attributes:
        tool: Name of the tool that failed.
        exit_code: The process exit status.
        stderr: Raw stderr text, kept for caller diagnostics.
    """

    def __init__(self, tool: str, exit_code: int, stderr: str) -> None:
        detail = stderr.strip() or "no stderr output"
        super().__init__(f"{tool} exited with code {exit_code}: {detail}")
        self.tool = tool
        self.exit_code = exit_code
        self.stderr = stderr


class NotPdfFile(ProcessFailed):
    """Raised when the tool reports the input is not a PDF."""

    pass


class PermissionDenied(ProcessFailed):
    """Raised when the document's permissions forbid the operation."""

    pass


class MalformedOutput(PdfProcessError):
    """Raised when a tool exited cleanly but its output could not be parsed."""

    def __init__(self, tool: str, message: str) -> None:
        super().__init__(f"{tool} produced unexpected output: {message}")
        self.tool = tool
