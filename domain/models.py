from dataclasses import dataclass, field
from enum import Enum


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class ProviderId(str, Enum):
    # Declaration order is the selection and fallback priority.
    CLAUDE = "claude"
    CHATGPT = "chatgpt"
    GEMINI = "gemini"
    COPILOT = "copilot"

    @property
    def display_name(self) -> str:
        return _PROVIDER_DISPLAY_NAMES[self]


_PROVIDER_DISPLAY_NAMES = {
    ProviderId.CLAUDE: "Claude (Anthropic)",
    ProviderId.CHATGPT: "ChatGPT (OpenAI)",
    ProviderId.GEMINI: "Gemini (Google)",
    ProviderId.COPILOT: "GitHub Copilot",
}

PROVIDER_PRIORITY: tuple[ProviderId, ...] = tuple(ProviderId)

OFFLINE_SOURCE = "offline"


@dataclass(frozen=True)
class LineNumbers:
    added: tuple[int, ...] = ()
    removed: tuple[int, ...] = ()


@dataclass(frozen=True)
class FileChange:
    path: str
    status: FileStatus
    insertions: int
    deletions: int
    binary: bool = False
    diff: str | None = None
    line_numbers: LineNumbers | None = None

    @property
    def changes(self) -> int:
        return self.insertions + self.deletions


@dataclass(frozen=True)
class ChangeSet:
    files: tuple[FileChange, ...]
    total_insertions: int
    total_deletions: int
    commits: tuple[str, ...] = ()

    @property
    def total_files(self) -> int:
        return len(self.files)


@dataclass(frozen=True)
class ParentTicket:
    key: str
    summary: str
    issue_type: str


@dataclass(frozen=True)
class LinkedDocument:
    title: str
    url: str
    content: str


@dataclass(frozen=True)
class Ticket:
    key: str
    summary: str
    description: str
    issue_type: str
    status: str
    assignee: str | None
    reporter: str
    created: str | None = None
    updated: str | None = None
    parent: ParentTicket | None = None
    linked_documents: tuple[LinkedDocument, ...] = ()


@dataclass(frozen=True)
class RepoLink:
    owner: str
    repo: str
    branch: str

    def file_url(self, path: str) -> str:
        return f"https://github.com/{self.owner}/{self.repo}/blob/{self.branch}/{path}"

    def line_url(self, path: str, line_number: int) -> str:
        return f"{self.file_url(path)}#L{line_number}"


@dataclass(frozen=True)
class PullRequestTemplate:
    name: str
    content: str


@dataclass(frozen=True)
class PromptContext:
    ticket: Ticket
    change_set: ChangeSet
    diff_text: str | None = None
    template: PullRequestTemplate | None = None
    repo_link: RepoLink | None = None
    pr_title: str | None = None


@dataclass(frozen=True)
class GeneratedContent:
    title: str
    body: str
    summary: str | None = None
    source: str | None = field(default=None, compare=False)
