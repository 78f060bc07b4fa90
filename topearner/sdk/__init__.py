"""Top Earner SDK - Core functionality for the prior-year top earner report."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_profile_path,
    load_profile,
    save_profile,
    get_profile_value,
    set_profile_value,
    ProfileNotFoundError,
    DEFAULT_PROFILE,
)

from .errors import (
    TopEarnerError,
    InvalidPayloadError,
    InvalidRecordError,
    ApiError,
    RetrievalError,
    SubmissionError,
)

from .dates import parse_timestamp, local_year, target_year
from .schemas import Employee, Transaction, Task, parse_task, parse_transaction
from .earners import EarnerSelection, accumulate, select_max, aggregate
from .category import filter_category
from .client import TaskClient, SubmissionResponse
from .pipeline import PipelineResult, run_pipeline, build_client

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "get_profile_value",
    "set_profile_value",
    "ProfileNotFoundError",
    "DEFAULT_PROFILE",
    # Errors
    "TopEarnerError",
    "InvalidPayloadError",
    "InvalidRecordError",
    "ApiError",
    "RetrievalError",
    "SubmissionError",
    # Dates
    "parse_timestamp",
    "local_year",
    "target_year",
    # Schemas
    "Employee",
    "Transaction",
    "Task",
    "parse_task",
    "parse_transaction",
    # Aggregation
    "EarnerSelection",
    "accumulate",
    "select_max",
    "aggregate",
    # Category filter
    "filter_category",
    # HTTP
    "TaskClient",
    "SubmissionResponse",
    # Pipeline
    "PipelineResult",
    "run_pipeline",
    "build_client",
]
