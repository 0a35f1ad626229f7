from typing import Optional


class TemplatizeError(Exception):
    """
    Base class for every error that aborts a packaging or instantiation run.

    The command-line entry points catch this class, print its message on a single
    line prefixed with ``Error:`` and exit with a non-zero status.

    Example:
        >>> error = TemplatizeError("something went wrong")
        >>> str(error)
        'something went wrong'
    """

    pass


class PreconditionError(TemplatizeError):
    """
    Exception raised when a run cannot start because the filesystem is not in the expected state.

    Typical causes are an instantiation target directory that already exists, a template
    root that would overlap the project it is built from, or a source root that is missing.
    The check happens before anything is written.

    Attributes:
        path (str): The offending path.
        reason (str): Short description of the violated precondition.

    Example:
        >>> error = PreconditionError("my-app", "directory already exists")
        >>> str(error)
        'Directory my-app already exists!'
    """

    def __init__(self, path: str, reason: str) -> None:
        """
        Initialize the exception.

        Args:
            path (str): The offending path.
            reason (str): Short description of the violated precondition, phrased so that it
                reads naturally after the path (e.g. "directory already exists").
        """
        self.path = path
        self.reason = reason
        if reason == "directory already exists":
            message = f"Directory {path} already exists!"
        else:
            message = f"{path}: {reason}"
        super().__init__(message)


class FilesystemError(TemplatizeError):
    """
    Exception raised when a filesystem operation fails part way through a run.

    No rollback is attempted, so partial output may remain on disk. Re-running the packager
    starts from a clean slate because it deletes its destination first.

    Attributes:
        path (str): Path the operation was applied to.
        operation (str): Name of the failed operation (e.g. "copy", "mkdir", "remove").
        cause (Optional[OSError]): The underlying error, if any.

    Example:
        >>> error = FilesystemError("/tmp/x", "mkdir", PermissionError(13, "Permission denied"))
        >>> str(error)
        'Cannot mkdir /tmp/x: Permission denied'
    """

    def __init__(self, path: str, operation: str, cause: Optional[OSError] = None) -> None:
        """
        Initialize the exception.

        Args:
            path (str): Path the operation was applied to.
            operation (str): Name of the failed operation.
            cause (Optional[OSError]): The underlying error. Its ``strerror`` (or string form)
                is appended to the message.
        """
        self.path = path
        self.operation = operation
        self.cause = cause
        message = f"Cannot {operation} {path}"
        if cause is not None:
            detail = cause.strerror or str(cause)
            message = f"{message}: {detail}"
        super().__init__(message)


class ManifestParseError(TemplatizeError):
    """
    Exception raised when a package manifest is not valid JSON or is not a JSON object.

    A broken manifest would silently corrupt every generated project, so it is never skipped.

    Attributes:
        path (str): Path to the manifest that failed to parse.
        detail (str): Parser message describing the problem.

    Example:
        >>> error = ManifestParseError("package.json", "Expecting value: line 1 column 1 (char 0)")
        >>> str(error)
        'Invalid manifest package.json: Expecting value: line 1 column 1 (char 0)'
    """

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid manifest {path}: {detail}")
