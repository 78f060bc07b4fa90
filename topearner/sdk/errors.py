"""Exception hierarchy for Top Earner."""

from typing import Optional


class TopEarnerError(Exception):
    """Base class for all Top Earner errors."""
    pass


class InvalidPayloadError(TopEarnerError):
    """Raised when a task payload is not shaped like {"id", "transactions"}."""
    pass


class InvalidRecordError(InvalidPayloadError):
    """Raised when a single transaction record is malformed."""

    def __init__(self, index: int, problems: list, transaction_id: Optional[str] = None):
        self.index = index
        self.problems = problems
        self.transaction_id = transaction_id
        where = f"transaction #{index}"
        if transaction_id:
            where += f" ({transaction_id})"
        super().__init__(f"Invalid record at {where}: {'; '.join(problems)}")


class ApiError(TopEarnerError):
    """Raised when a remote endpoint cannot be reached or answers badly."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class RetrievalError(ApiError):
    """Raised when the task payload cannot be fetched."""
    pass


class SubmissionError(ApiError):
    """Raised when the submission cannot be delivered."""
    pass
