"""HTTP layer package"""

from infrastructure.http.schemas import GenerateDescriptionRequest, GenerateDescriptionResponse
from infrastructure.http.workflow_factory import build_pr_description_dependencies
from infrastructure.http.workflow_service import execute_workflow

__all__ = [
    "GenerateDescriptionRequest",
    "GenerateDescriptionResponse",
    "build_pr_description_dependencies",
    "execute_workflow",
]
