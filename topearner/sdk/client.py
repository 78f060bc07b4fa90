"""HTTP client for the task endpoints.

GET the task payload, POST the submission. No retries: a failed call is
reported once and the run stops.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .config import DEFAULT_GET_TASK_URL, DEFAULT_SUBMIT_TASK_URL, DEFAULT_TIMEOUT
from .errors import RetrievalError, SubmissionError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass
class SubmissionResponse:
    """Status of a submission POST. Not validated beyond the status code."""

    status_code: int
    reason: str
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def __str__(self) -> str:
        return f"STATUS: {self.status_code} {self.reason}"


class TaskClient:
    """Talks to the get-task and submit-task endpoints.

    Usage:
        with TaskClient() as client:
            payload = client.fetch_task()
            response = client.submit(submission)
    """

    def __init__(
        self,
        get_url: str = DEFAULT_GET_TASK_URL,
        submit_url: str = DEFAULT_SUBMIT_TASK_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.get_url = get_url
        self.submit_url = submit_url
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def __enter__(self) -> "TaskClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def fetch_task(self) -> Any:
        """GET the raw task payload.

        Returns:
            Decoded JSON body (expected {"id": ..., "transactions": [...]}).

        Raises:
            RetrievalError: On connection failure, timeout, non-2xx status
                or a body that is not JSON.
        """
        logger.debug(f"GET {self.get_url}")
        try:
            r = self.session.get(self.get_url, timeout=self.timeout)
        except requests.RequestException as e:
            raise RetrievalError(f"Could not fetch task from {self.get_url}: {e}", self.get_url) from e

        if not r.ok:
            raise RetrievalError(
                f"Fetching task failed: {r.status_code} {r.reason}",
                self.get_url,
                status_code=r.status_code,
            )

        try:
            payload = r.json()
        except ValueError as e:
            raise RetrievalError(
                f"Task response from {self.get_url} is not JSON: {e}",
                self.get_url,
                status_code=r.status_code,
            ) from e

        logger.debug(f"fetched task: {r.status_code}, {len(r.content)} bytes")
        return payload

    def submit(self, submission: dict) -> SubmissionResponse:
        """POST the submission payload as JSON.

        A non-2xx answer is returned, not raised; callers decide what it means.

        Raises:
            SubmissionError: On connection failure or timeout.
        """
        logger.debug(f"POST {self.submit_url}: {len(submission.get('result', []))} transaction id(s)")
        try:
            r = self.session.post(
                self.submit_url,
                json=submission,
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SubmissionError(f"Could not submit to {self.submit_url}: {e}", self.submit_url) from e

        response = SubmissionResponse(status_code=r.status_code, reason=r.reason or "", text=r.text or "")
        if response.ok:
            logger.info(str(response))
        else:
            logger.warning(f"{response} from {self.submit_url}")
        return response
