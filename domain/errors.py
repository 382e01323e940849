from dataclasses import dataclass

from domain.models import ProviderId


class PRGenerationError(RuntimeError):
    """Base class for failures raised by the generation pipeline."""


class ConfigurationError(PRGenerationError):
    """Raised when no usable provider is configured for the run."""


class ProviderError(PRGenerationError):
    """A single provider failed; the fallback chain may continue with the next one."""

    def __init__(self, provider_id: ProviderId, message: str) -> None:
        super().__init__(message)
        self.provider_id = provider_id


class AuthenticationError(ProviderError):
    pass


class RateLimitError(ProviderError):
    pass


class TransientServerError(ProviderError):
    pass


class ProviderTimeoutError(ProviderError):
    pass


class GenericProviderError(ProviderError):
    pass


class ContentExtractionError(ProviderError):
    """The response arrived but the vendor-specific text path was missing."""


@dataclass(frozen=True)
class ProviderFailure:
    provider_id: ProviderId
    error: ProviderError

    def describe(self) -> str:
        return f"{self.provider_id.value}: {self.error}"


class AllProvidersFailedError(PRGenerationError):
    def __init__(self, failures: tuple[ProviderFailure, ...]) -> None:
        self.failures = failures
        causes = "; ".join(failure.describe() for failure in failures) or "no provider attempted"
        super().__init__(f"All AI providers failed: {causes}")

    @property
    def causes(self) -> tuple[ProviderError, ...]:
        return tuple(failure.error for failure in self.failures)
