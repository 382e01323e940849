from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from application.ports import AIProvider
from domain.errors import AllProvidersFailedError, ConfigurationError, ProviderError, ProviderFailure
from domain.models import PROVIDER_PRIORITY, ProviderId


NO_PROVIDERS_MESSAGE = (
    "No AI providers configured. Please set ANTHROPIC_API_KEY, OPENAI_API_KEY, "
    "GEMINI_API_KEY, or configure GitHub Copilot."
)


@dataclass(frozen=True)
class ProviderResult:
    provider_id: ProviderId
    content: str


def _first_available(available: list[ProviderId]) -> ProviderId:
    return available[0]


def _noop_observe_attempt(_: ProviderId, __: str, ___: str | None = None) -> None:
    return None


class ProviderManager:
    """Run-scoped owner of the configured adapters and of the selected provider."""

    def __init__(
        self,
        providers: Mapping[ProviderId, AIProvider],
        *,
        priority: Sequence[ProviderId] = PROVIDER_PRIORITY,
        choose_provider: Callable[[list[ProviderId]], ProviderId] = _first_available,
        observe_attempt: Callable[[ProviderId, str, str | None], None] = _noop_observe_attempt,
    ) -> None:
        self._providers = {
            provider_id: providers[provider_id]
            for provider_id in ProviderId
            if provider_id in providers
        }
        self._priority = tuple(priority)
        self._choose_provider = choose_provider
        self._observe_attempt = observe_attempt
        self._selected: ProviderId | None = None

    @property
    def selected_provider(self) -> ProviderId | None:
        return self._selected

    def available_providers(self) -> list[ProviderId]:
        return list(self._providers)

    def has_provider(self, provider_id: ProviderId) -> bool:
        return provider_id in self._providers

    def select_provider(self) -> ProviderId:
        if self._selected is not None:
            return self._selected

        available = self.available_providers()
        if not available:
            raise ConfigurationError(NO_PROVIDERS_MESSAGE)

        if len(available) == 1:
            self._selected = available[0]
            return self._selected

        for provider_id in self._priority:
            if provider_id in self._providers:
                self._selected = provider_id
                return self._selected

        chosen = self._choose_provider(available)
        if chosen not in self._providers:
            raise ConfigurationError(f"Provider {chosen.value} not available")
        self._selected = chosen
        return self._selected

    def fallback_order(self, exclude: ProviderId) -> list[ProviderId]:
        ranked = [provider_id for provider_id in self._priority if provider_id in self._providers]
        ranked += [provider_id for provider_id in self._providers if provider_id not in ranked]
        return [provider_id for provider_id in ranked if provider_id != exclude]

    def generate_content(
        self,
        prompt: str,
        explicit_provider: ProviderId | None = None,
    ) -> ProviderResult:
        if explicit_provider is not None:
            # Explicit choice is authoritative: no other provider is tried.
            if not self.has_provider(explicit_provider):
                raise ConfigurationError(f"Provider {explicit_provider.value} not available")
            self._observe_attempt(explicit_provider, "start", "explicit")
            try:
                content = self._providers[explicit_provider].generate_content(prompt)
            except ProviderError as error:
                self._observe_attempt(explicit_provider, "error", str(error))
                raise AllProvidersFailedError(
                    (ProviderFailure(provider_id=explicit_provider, error=error),)
                ) from error
            self._observe_attempt(explicit_provider, "success", None)
            return ProviderResult(provider_id=explicit_provider, content=content)

        selected = self.select_provider()
        failures: list[ProviderFailure] = []
        for provider_id in [selected, *self.fallback_order(exclude=selected)]:
            self._observe_attempt(provider_id, "start", "fallback" if failures else None)
            try:
                content = self._providers[provider_id].generate_content(prompt)
            except ProviderError as error:
                failures.append(ProviderFailure(provider_id=provider_id, error=error))
                self._observe_attempt(provider_id, "error", str(error))
                continue

            self._observe_attempt(provider_id, "success", None)
            return ProviderResult(provider_id=provider_id, content=content)

        raise AllProvidersFailedError(tuple(failures))
