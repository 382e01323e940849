from infrastructure.config.settings import (
    JiraSettings,
    ProviderCredentials,
    Settings,
    load_settings,
    parse_provider_id,
    require_jira_settings,
)

__all__ = [
    "JiraSettings",
    "ProviderCredentials",
    "Settings",
    "load_settings",
    "parse_provider_id",
    "require_jira_settings",
]
