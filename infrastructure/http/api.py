import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from starlette.responses import Response

from infrastructure.http.errors import to_http_exception
from infrastructure.http.schemas import GenerateDescriptionRequest, GenerateDescriptionResponse
from infrastructure.http.workflow_service import execute_workflow
from infrastructure.observability.context import reset_request_id, set_request_id
from infrastructure.observability.logging_utils import configure_logging, log_event


REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


async def _with_request_id(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    token = set_request_id(request_id)
    started = time.perf_counter()
    route = f"{request.method} {request.url.path}"
    log_event(logger, logging.INFO, "http.request.start", route=route)

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        log_event(
            logger,
            logging.INFO,
            "http.request.end",
            route=route,
            status=status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        reset_request_id(token)


def health() -> dict[str, str]:
    return {"status": "ok"}


def generate_description(payload: GenerateDescriptionRequest) -> GenerateDescriptionResponse:
    try:
        return execute_workflow(payload)
    except Exception as error:
        log_event(
            logger,
            logging.ERROR,
            "http.pr_description.failed",
            ticket_key=payload.ticket_key,
            error=str(error.__cause__ or error),
        )
        raise to_http_exception(error) from error


def create_app() -> FastAPI:
    configure_logging()
    application = FastAPI(title="PR Description Generator API")
    application.middleware("http")(_with_request_id)
    application.get("/health")(health)
    application.post(
        "/pr-description/generate",
        response_model=GenerateDescriptionResponse,
        status_code=status.HTTP_200_OK,
    )(generate_description)
    return application


app = create_app()
