import logging

from application.pr_description import run_pr_description_flow
from infrastructure.config import load_settings
from infrastructure.http.errors import WorkflowExecutionError
from infrastructure.http.mappers import to_generate_description_response, to_pr_description_config
from infrastructure.http.schemas import GenerateDescriptionRequest, GenerateDescriptionResponse
from infrastructure.http.workflow_factory import build_pr_description_dependencies
from infrastructure.observability.logging_utils import log_event


logger = logging.getLogger(__name__)


def execute_workflow(payload: GenerateDescriptionRequest) -> GenerateDescriptionResponse:
    try:
        settings = load_settings()
        flow_config = to_pr_description_config(payload, settings)
        flow_dependencies = build_pr_description_dependencies(settings, flow_config.repository_directory)
        result = run_pr_description_flow(flow_config, flow_dependencies)
    except Exception as error:
        log_event(logger, logging.ERROR, "http.workflow.execution_failed", error=str(error))
        raise WorkflowExecutionError("PR description flow failed") from error

    return to_generate_description_response(result)
