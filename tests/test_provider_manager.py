import unittest

from application.provider_manager import NO_PROVIDERS_MESSAGE, ProviderManager
from domain.errors import (
    AllProvidersFailedError,
    AuthenticationError,
    ConfigurationError,
    ContentExtractionError,
    ProviderTimeoutError,
    RateLimitError,
)
from domain.models import ProviderId


class FakeProvider:
    def __init__(self, provider_id: ProviderId, outcomes: list) -> None:
        self.provider_id = provider_id
        self.model = "fake-model"
        self.outcomes = list(outcomes)
        self.calls: list[str] = []

    def generate_content(self, prompt: str) -> str:
        self.calls.append(prompt)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _manager(*providers: FakeProvider, **kwargs) -> ProviderManager:
    return ProviderManager({provider.provider_id: provider for provider in providers}, **kwargs)


class SelectProviderTests(unittest.TestCase):
    def test_no_providers_is_a_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError) as raised_error:
            _manager().select_provider()

        self.assertEqual(str(raised_error.exception), NO_PROVIDERS_MESSAGE)

    def test_single_provider_is_auto_selected(self) -> None:
        manager = _manager(FakeProvider(ProviderId.GEMINI, ["ok"]))

        self.assertEqual(manager.select_provider(), ProviderId.GEMINI)

    def test_priority_order_picks_first_configured(self) -> None:
        manager = _manager(
            FakeProvider(ProviderId.COPILOT, ["ok"]),
            FakeProvider(ProviderId.CHATGPT, ["ok"]),
        )

        self.assertEqual(manager.select_provider(), ProviderId.CHATGPT)

    def test_custom_priority_is_honoured(self) -> None:
        manager = _manager(
            FakeProvider(ProviderId.CLAUDE, ["ok"]),
            FakeProvider(ProviderId.GEMINI, ["ok"]),
            priority=(ProviderId.GEMINI, ProviderId.CLAUDE),
        )

        self.assertEqual(manager.select_provider(), ProviderId.GEMINI)

    def test_chooser_is_used_when_priority_has_no_match(self) -> None:
        offered: list[list[ProviderId]] = []

        def choose(available: list[ProviderId]) -> ProviderId:
            offered.append(available)
            return available[-1]

        manager = _manager(
            FakeProvider(ProviderId.CLAUDE, ["ok"]),
            FakeProvider(ProviderId.COPILOT, ["ok"]),
            priority=(ProviderId.GEMINI,),
            choose_provider=choose,
        )

        self.assertEqual(manager.select_provider(), ProviderId.COPILOT)
        self.assertEqual(offered, [[ProviderId.CLAUDE, ProviderId.COPILOT]])

    def test_selection_is_memoized(self) -> None:
        calls: list[list[ProviderId]] = []

        def choose(available: list[ProviderId]) -> ProviderId:
            calls.append(available)
            return available[0]

        manager = _manager(
            FakeProvider(ProviderId.CLAUDE, ["ok"]),
            FakeProvider(ProviderId.GEMINI, ["ok"]),
            priority=(),
            choose_provider=choose,
        )

        first = manager.select_provider()
        second = manager.select_provider()

        self.assertEqual(first, second)
        self.assertEqual(manager.selected_provider, first)
        self.assertEqual(len(calls), 1)

    def test_separate_managers_do_not_share_selection(self) -> None:
        first = _manager(FakeProvider(ProviderId.CLAUDE, ["ok"]))
        second = _manager(FakeProvider(ProviderId.GEMINI, ["ok"]))

        first.select_provider()

        self.assertIsNone(second.selected_provider)


class GenerateContentTests(unittest.TestCase):
    def test_third_provider_answers_after_two_failures(self) -> None:
        claude = FakeProvider(ProviderId.CLAUDE, [ProviderTimeoutError(ProviderId.CLAUDE, "timeout")])
        chatgpt = FakeProvider(ProviderId.CHATGPT, [RateLimitError(ProviderId.CHATGPT, "rate limited")])
        gemini = FakeProvider(ProviderId.GEMINI, ["gemini content"])
        manager = _manager(claude, chatgpt, gemini)

        result = manager.generate_content("prompt")

        self.assertEqual(result.provider_id, ProviderId.GEMINI)
        self.assertEqual(result.content, "gemini content")
        self.assertEqual((len(claude.calls), len(chatgpt.calls), len(gemini.calls)), (1, 1, 1))

    def test_fallback_success_keeps_the_priority_selection(self) -> None:
        claude = FakeProvider(ProviderId.CLAUDE, [AuthenticationError(ProviderId.CLAUDE, "bad key")])
        gemini = FakeProvider(ProviderId.GEMINI, ["first", "second"])
        manager = _manager(claude, gemini)

        self.assertEqual(manager.select_provider(), ProviderId.CLAUDE)
        first = manager.generate_content("summary prompt")
        second = manager.generate_content("final prompt")

        self.assertEqual(first.provider_id, ProviderId.GEMINI)
        self.assertEqual(second.content, "second")
        self.assertEqual(manager.select_provider(), ProviderId.CLAUDE)
        self.assertEqual(claude.calls, ["summary prompt", "final prompt"])

    def test_all_failures_are_reported_in_order(self) -> None:
        errors = [
            ProviderTimeoutError(ProviderId.CLAUDE, "timeout"),
            RateLimitError(ProviderId.CHATGPT, "rate limited"),
            ContentExtractionError(ProviderId.COPILOT, "No content received from Copilot API"),
        ]
        manager = _manager(
            FakeProvider(ProviderId.CLAUDE, [errors[0]]),
            FakeProvider(ProviderId.CHATGPT, [errors[1]]),
            FakeProvider(ProviderId.COPILOT, [errors[2]]),
        )

        with self.assertRaises(AllProvidersFailedError) as raised_error:
            manager.generate_content("prompt")

        failures = raised_error.exception.failures
        self.assertEqual(len(failures), 3)
        self.assertEqual(
            [failure.provider_id for failure in failures],
            [ProviderId.CLAUDE, ProviderId.CHATGPT, ProviderId.COPILOT],
        )
        self.assertEqual(list(raised_error.exception.causes), errors)
        self.assertIn("All AI providers failed", str(raised_error.exception))

    def test_explicit_provider_does_not_fall_back(self) -> None:
        chatgpt = FakeProvider(ProviderId.CHATGPT, [RateLimitError(ProviderId.CHATGPT, "rate limited")])
        gemini = FakeProvider(ProviderId.GEMINI, ["unused"])
        manager = _manager(chatgpt, gemini)

        with self.assertRaises(AllProvidersFailedError) as raised_error:
            manager.generate_content("prompt", ProviderId.CHATGPT)

        failures = raised_error.exception.failures
        self.assertEqual([failure.provider_id for failure in failures], [ProviderId.CHATGPT])
        self.assertIsInstance(failures[0].error, RateLimitError)
        self.assertEqual(gemini.calls, [])

    def test_explicit_provider_must_be_configured(self) -> None:
        manager = _manager(FakeProvider(ProviderId.GEMINI, ["ok"]))

        with self.assertRaises(ConfigurationError):
            manager.generate_content("prompt", ProviderId.CLAUDE)

    def test_fallback_order_excludes_the_failed_provider(self) -> None:
        manager = _manager(
            FakeProvider(ProviderId.COPILOT, ["ok"]),
            FakeProvider(ProviderId.CLAUDE, ["ok"]),
            FakeProvider(ProviderId.GEMINI, ["ok"]),
        )

        self.assertEqual(
            manager.fallback_order(exclude=ProviderId.CLAUDE),
            [ProviderId.GEMINI, ProviderId.COPILOT],
        )

    def test_attempts_are_observed(self) -> None:
        events: list[tuple[ProviderId, str]] = []
        manager = _manager(
            FakeProvider(ProviderId.CLAUDE, [ProviderTimeoutError(ProviderId.CLAUDE, "timeout")]),
            FakeProvider(ProviderId.GEMINI, ["ok"]),
            observe_attempt=lambda provider_id, status, detail=None: events.append((provider_id, status)),
        )

        manager.generate_content("prompt")

        self.assertEqual(
            events,
            [
                (ProviderId.CLAUDE, "start"),
                (ProviderId.CLAUDE, "error"),
                (ProviderId.GEMINI, "start"),
                (ProviderId.GEMINI, "success"),
            ],
        )


if __name__ == "__main__":
    unittest.main()
