from fastapi import HTTPException, status

from domain.errors import ConfigurationError
from infrastructure.jira import TicketFetchError
from infrastructure.observability.logging_utils import safe_message


INTERNAL_WORKFLOW_ERROR_MESSAGE = "Internal error while generating the PR description"


class WorkflowExecutionError(RuntimeError):
    """Controlled exception for flow failures in the HTTP adapter."""


def _root_cause(error: Exception) -> BaseException:
    if isinstance(error, WorkflowExecutionError) and error.__cause__ is not None:
        return error.__cause__
    return error


def to_http_exception(error: Exception) -> HTTPException:
    cause = _root_cause(error)
    if isinstance(cause, ConfigurationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=safe_message(str(cause)),
        )
    if isinstance(cause, TicketFetchError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=safe_message(str(cause)),
        )

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_WORKFLOW_ERROR_MESSAGE,
    )
