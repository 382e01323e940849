from pydantic import BaseModel, Field


class GenerateDescriptionRequest(BaseModel):
    ticket_key: str = Field(..., pattern=r"^[A-Z][A-Z0-9]*-\d+$")
    base_branch: str = Field(default="main", min_length=1)
    title: str | None = Field(default=None, min_length=1, max_length=256)
    provider: str | None = None
    dry_run: bool = True
    repository_directory: str = Field(default=".", min_length=1)


class GenerateDescriptionResponse(BaseModel):
    status: str
    message: str
    title: str | None = None
    body: str | None = None
    summary: str | None = None
    source: str | None = None
    pr_url: str | None = None
