import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from domain.errors import ConfigurationError
from domain.models import PROVIDER_PRIORITY, ProviderId
from infrastructure.observability.logging_utils import log_event


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".create-pr" / "env-config.json"
DEFAULT_PROVIDER_TIMEOUT_SECONDS = 30.0

# Environment fallbacks per provider: (api key variables, model variable).
_PROVIDER_ENV = {
    ProviderId.CLAUDE: (("ANTHROPIC_API_KEY", "CLAUDE_API_KEY"), "ANTHROPIC_MODEL"),
    ProviderId.CHATGPT: (("OPENAI_API_KEY", "CHATGPT_API_KEY"), "OPENAI_MODEL"),
    ProviderId.GEMINI: (("GEMINI_API_KEY", "GOOGLE_API_KEY"), "GEMINI_MODEL"),
    ProviderId.COPILOT: (("COPILOT_API_TOKEN", "GITHUB_TOKEN"), "COPILOT_MODEL"),
}
# Section names used by the JSON config file.
_PROVIDER_CONFIG_KEYS = {
    ProviderId.CLAUDE: "claude",
    ProviderId.CHATGPT: "openai",
    ProviderId.GEMINI: "gemini",
    ProviderId.COPILOT: "copilot",
}


@dataclass(frozen=True)
class ProviderCredentials:
    provider_id: ProviderId
    api_key: str = field(repr=False)
    model: str | None = None


@dataclass(frozen=True)
class JiraSettings:
    base_url: str
    username: str
    api_token: str = field(repr=False)


@dataclass(frozen=True)
class Settings:
    providers: tuple[ProviderCredentials, ...] = ()
    provider_priority: tuple[ProviderId, ...] = PROVIDER_PRIORITY
    explicit_provider: ProviderId | None = None
    provider_timeout_seconds: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS
    jira: JiraSettings | None = None
    github_token: str | None = field(default=None, repr=False)

    def secrets(self) -> list[str]:
        values = [credentials.api_key for credentials in self.providers]
        if self.jira:
            values.append(self.jira.api_token)
        if self.github_token:
            values.append(self.github_token)
        return values


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _first_env(names: tuple[str, ...]) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    config_path = path or Path(os.getenv("CREATE_PR_CONFIG", str(DEFAULT_CONFIG_PATH)))
    if not config_path.is_file():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as error:
        raise ConfigurationError(f"Invalid config file {config_path}: {error}") from error
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid config file {config_path}: expected a JSON object")
    log_event(logger, logging.INFO, "config.file.loaded", path=str(config_path))
    return data


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def parse_provider_id(value: str) -> ProviderId:
    normalized = value.strip().lower()
    try:
        return ProviderId(normalized)
    except ValueError:
        supported = ", ".join(provider_id.value for provider_id in ProviderId)
        raise ConfigurationError(
            f"Invalid AI provider '{normalized}'. Supported values: {supported}"
        ) from None


def _resolve_providers(file_data: Mapping[str, Any]) -> tuple[ProviderCredentials, ...]:
    providers_section = _section(file_data, "aiProviders")
    github_token = _section(file_data, "github").get("token")
    resolved: list[ProviderCredentials] = []

    for provider_id in ProviderId:
        key_variables, model_variable = _PROVIDER_ENV[provider_id]
        file_entry = _section(providers_section, _PROVIDER_CONFIG_KEYS[provider_id])
        # Config file wins over the environment.
        api_key = file_entry.get("apiKey") or file_entry.get("apiToken") or _first_env(key_variables)
        if provider_id is ProviderId.COPILOT and not api_key:
            api_key = github_token
        if not api_key:
            continue
        model = file_entry.get("model") or os.getenv(model_variable) or None
        resolved.append(ProviderCredentials(provider_id=provider_id, api_key=api_key, model=model))

    return tuple(resolved)


def _resolve_priority() -> tuple[ProviderId, ...]:
    raw_priority = os.getenv("AI_PROVIDER_PRIORITY", "")
    names = [name for name in raw_priority.split(",") if name.strip()]
    if not names:
        return PROVIDER_PRIORITY
    return tuple(parse_provider_id(name) for name in names)


def _resolve_jira(file_data: Mapping[str, Any]) -> JiraSettings | None:
    jira_section = _section(file_data, "jira")
    base_url = jira_section.get("baseUrl") or os.getenv("JIRA_BASE_URL")
    username = jira_section.get("username") or os.getenv("JIRA_USERNAME")
    api_token = jira_section.get("apiToken") or os.getenv("JIRA_API_TOKEN")
    if not (base_url and username and api_token):
        return None
    return JiraSettings(base_url=base_url.rstrip("/"), username=username, api_token=api_token)


def load_settings(config_path: Path | None = None) -> Settings:
    file_data = load_config_file(config_path)
    explicit_provider = os.getenv("AI_PROVIDER")
    timeout = os.getenv("PROVIDER_TIMEOUT_SECONDS")
    return Settings(
        providers=_resolve_providers(file_data),
        provider_priority=_resolve_priority(),
        explicit_provider=parse_provider_id(explicit_provider) if explicit_provider else None,
        provider_timeout_seconds=float(timeout) if timeout else DEFAULT_PROVIDER_TIMEOUT_SECONDS,
        jira=_resolve_jira(file_data),
        github_token=_section(file_data, "github").get("token") or os.getenv("GITHUB_TOKEN"),
    )


def require_jira_settings(settings: Settings) -> JiraSettings:
    if settings.jira is None:
        # Surface the first missing variable, as the rest of the configuration does.
        for name in ("JIRA_BASE_URL", "JIRA_USERNAME", "JIRA_API_TOKEN"):
            _required_env(name)
        raise RuntimeError("Missing Jira configuration")
    return settings.jira
