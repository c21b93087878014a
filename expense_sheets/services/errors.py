"""Error taxonomy for the expense submission pipeline.

Every failure of a submission attempt is one of these exceptions. Each carries
a single human readable ``message`` which is shown to the user verbatim; none
of them carries retry metadata because nothing in the pipeline retries.

  - ConfigurationError: missing/untrusted endpoint URL (no network call made)
  - ExpenseValidationError: bad form input (no network call made)
  - TransportError: non-2xx status or a 2xx body that is not the expected JSON
  - ApplicationError: the remote script reported ``status: "error"``
  - NetworkError: the request never completed (DNS, connect, timeout)
  - SubmissionInProgressError: a submission is already in flight
"""

from __future__ import annotations
from typing import Optional


class SubmissionError(Exception):
    kind = "submission_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(SubmissionError):
    kind = "configuration_error"


class ExpenseValidationError(SubmissionError):
    kind = "validation_error"


class TransportError(SubmissionError):
    kind = "transport_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApplicationError(SubmissionError):
    kind = "application_error"


class NetworkError(SubmissionError):
    kind = "network_error"


class SubmissionInProgressError(SubmissionError):
    kind = "submission_in_progress"


__all__ = [
    "SubmissionError",
    "ConfigurationError",
    "ExpenseValidationError",
    "TransportError",
    "ApplicationError",
    "NetworkError",
    "SubmissionInProgressError",
]
