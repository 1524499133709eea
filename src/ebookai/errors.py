"""Error types for the EbookAI toolkit.

The cost and scoring core never raises. These errors are used by the
configuration layer and by the generation, polling and session helpers
that sit around it.
"""

from typing import Optional


class EbookAIError(Exception):
    """Base class for all toolkit errors."""

    pass


class ConfigurationError(EbookAIError):
    """The pricing table could not be loaded.

    Attributes:
        path: The pricing file involved, when known
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class ConfigFileNotFoundError(ConfigurationError):
    """No pricing file exists at the resolved location.

    Examples:
        >>> try:
        ...     PricingTable.load("/missing/pricing.yml")
        ... except ConfigFileNotFoundError as e:
        ...     print(f"No pricing at {e.path}")
    """

    pass


class InvalidConfigFormatError(ConfigurationError):
    """The pricing file is not valid YAML or lacks a ``providers`` mapping."""

    def __init__(self, message: str, path: Optional[str] = None, expected_type: str = "dict") -> None:
        super().__init__(message, path)
        self.expected_type = expected_type


class GenerationError(EbookAIError):
    """Raised (or carried in a result) when a content generator fails.

    Examples:
        >>> result = generate_content(prompt, generators)
        >>> if not result.ok:
        ...     print(f"{result.error.provider} failed: {result.error}")
    """

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        """Initialize generation error.

        Args:
            message: Error message
            provider: Name of the generator that failed, if any
        """
        super().__init__(message)
        self.message = message
        self.provider = provider


class JobError(EbookAIError):
    """Base class for errors raised while waiting on a submitted job."""

    def __init__(self, message: str, job_id: Optional[str] = None) -> None:
        """Initialize job error.

        Args:
            message: Error message
            job_id: Identifier of the job handle involved
        """
        super().__init__(message)
        self.message = message
        self.job_id = job_id


class JobFailedError(JobError):
    """Raised when a job reaches the failed state."""

    pass


class JobTimeoutError(JobError):
    """Raised when a job does not finish before the backoff policy timeout."""

    def __init__(self, message: str, job_id: Optional[str] = None, timeout: Optional[float] = None) -> None:
        """Initialize job timeout error.

        Args:
            message: Error message
            job_id: Identifier of the job handle involved
            timeout: The timeout in seconds that elapsed
        """
        super().__init__(message, job_id)
        self.timeout = timeout


class JobCancelledError(JobError):
    """Raised when waiting is interrupted through a cancellation token."""

    pass


class SessionError(EbookAIError):
    """Base class for RAG session registry errors."""

    def __init__(self, message: str, book_id: Optional[str] = None) -> None:
        """Initialize session error.

        Args:
            message: Error message
            book_id: The book whose session was involved
        """
        super().__init__(message)
        self.message = message
        self.book_id = book_id


class SessionNotFoundError(SessionError):
    """Raised when no session is registered for a book."""

    pass


class SessionExistsError(SessionError):
    """Raised when creating a session for a book that already has one."""

    pass


class InvalidStateTransitionError(EbookAIError):
    """Raised when a variation batch is moved through an illegal transition.

    Examples:
        >>> batch = VariationBatch()
        >>> try:
        ...     batch.select("A")
        ... except InvalidStateTransitionError as e:
        ...     print(f"Cannot go from {e.current} to {e.target}")
    """

    def __init__(self, message: str, current: str, target: str) -> None:
        """Initialize state transition error.

        Args:
            message: Error message
            current: The state the batch was in
            target: The state that was requested
        """
        super().__init__(message)
        self.message = message
        self.current = current
        self.target = target
