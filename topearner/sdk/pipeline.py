"""Top earner pipeline: fetch -> aggregate -> filter -> submit.

CLI commands should be thin wrappers around run_pipeline().

Boundary failures (network, malformed payload) do not raise out of
run_pipeline(). They stop the run at the failing stage and come back in a
PipelineResult, so nothing after a failed fetch is ever attempted.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Optional

from . import config
from .category import filter_category
from .client import SubmissionResponse, TaskClient
from .dates import target_year as compute_target_year
from .earners import EarnerSelection, aggregate
from .errors import TopEarnerError
from .schemas import Task, parse_task

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

Stage = Literal["fetch", "parse", "aggregate", "filter", "submit", "done"]


@dataclass
class PipelineResult:
    """Outcome of one run. error is set iff ok is False."""

    ok: bool
    stage: Stage
    target_year: int
    category: str
    error: Optional[TopEarnerError] = None
    task: Optional[Task] = None
    selection: Optional[EarnerSelection] = None
    submission: Optional[dict] = None
    response: Optional[SubmissionResponse] = None

    @property
    def submitted(self) -> bool:
        """True if the sink accepted the submission (2xx)."""
        return self.response is not None and self.response.ok

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "stage": self.stage,
            "target_year": self.target_year,
            "category": self.category,
            "error": str(self.error) if self.error else None,
            "selection": self.selection.to_dict() if self.selection else None,
            "submission": self.submission,
            "response": (
                {"status_code": self.response.status_code, "reason": self.response.reason}
                if self.response else None
            ),
        }


def build_client() -> TaskClient:
    """TaskClient configured from profile.yaml and settings.json."""
    return TaskClient(
        get_url=config.get_task_url(),
        submit_url=config.get_submit_url(),
        timeout=config.get_timeout(),
    )


def run_pipeline(
    client: Optional[TaskClient] = None,
    payload: Any = None,
    category: Optional[str] = None,
    year_offset: Optional[int] = None,
    reference: Optional[datetime] = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Run the whole job once.

    Args:
        client: Client for both endpoints. Built from config when omitted.
        payload: Raw task payload to use instead of fetching one.
        category: Transaction type to submit. Defaults to the profile's.
        year_offset: Years back from the reference year. Defaults to the profile's.
        reference: "Now" for the target year rule. Defaults to the clock.
        dry_run: Stop after filtering; nothing is POSTed.

    Returns:
        PipelineResult describing how far the run got.
    """
    if category is None:
        category = config.get_category()
    if year_offset is None:
        year_offset = config.get_year_offset()

    # One target year for every stage of this run
    year = compute_target_year(reference, offset=year_offset)
    result = PipelineResult(ok=False, stage="fetch", target_year=year, category=category)
    logger.debug(f"target year {year}, category {category!r}")

    owns_client = client is None and (payload is None or not dry_run)
    if owns_client:
        client = build_client()

    try:
        if payload is None:
            logger.info(f"Fetching task from {client.get_url}")
            payload = client.fetch_task()

        result.stage = "parse"
        task = parse_task(payload)
        result.task = task
        logger.info(f"Task {task.id}: {len(task.transactions)} transaction(s)")

        result.stage = "aggregate"
        selection = aggregate(task.transactions, target_year=year)
        result.selection = selection
        if selection.has_winner:
            logger.info(
                f"Top earner for {year}: {selection.employee_id} "
                f"({selection.amount:,.2f} over {len(selection.totals)} employee(s))"
            )
        else:
            logger.info(f"No transactions in {year}; submitting an empty result")

        result.stage = "filter"
        submission = filter_category(
            task.id, task.transactions, selection.employee_id,
            category=category, target_year=year,
        )
        result.submission = submission
        logger.info(f"{len(submission['result'])} {category!r} transaction(s) selected")

        if dry_run:
            logger.info("Dry run: submission not sent")
        else:
            result.stage = "submit"
            logger.info(f"Submitting to {client.submit_url}")
            result.response = client.submit(submission)

    except TopEarnerError as e:
        logger.error(f"{result.stage} failed: {e}")
        result.error = e
        return result
    finally:
        if owns_client:
            client.close()

    result.ok = True
    result.stage = "done"
    return result
