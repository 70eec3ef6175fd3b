from typing import Optional


class UnresolvablePathError(Exception):
    """
    Exception raised when a path cannot be turned into its canonical form.

    This happens when the entry was deleted during the walk, when access to it is
    denied, or when it is a link whose target no longer exists. The walker never
    lets this exception reach its caller; it is part of the path identity contract
    and is converted into an absence signal at the access boundary.

    Attributes:
        path (str): The path that could not be resolved.
        cause (Optional[BaseException]): The underlying filesystem error, if any.

    Example:
        >>> error = UnresolvablePathError("/gone/away")
        >>> str(error)
        'Cannot resolve path: /gone/away'
        >>> error.cause is None
        True
    """

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        """
        Initialize the exception with the offending path.

        Args:
            path (str): The path that could not be resolved.
            cause (Optional[BaseException]): The error raised by the file system, if any.
        """
        self.path = path
        self.cause = cause
        message = f"Cannot resolve path: {path}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)
