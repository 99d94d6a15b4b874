import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import openai  # noqa: E402

from app.core.errors import ResumeReviewError  # noqa: E402
from app.services.scoring_llm import json_completion, scoring_llm_enabled  # noqa: E402

CONFIGURED_ENV = {
    "SCORING_LLM_ENABLED": "1",
    "AI_PROVIDER": "openai",
    "OPENAI_API_KEY": "sk-test-key",
}


def _fake_client(content=None, error=None):
    create = MagicMock()
    if error is not None:
        create.side_effect = error
    else:
        message = SimpleNamespace(content=content)
        create.return_value = SimpleNamespace(choices=[SimpleNamespace(message=message)])
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create))), create


def _sdk_error(error_cls, status_code=None):
    # skip the SDK constructors, which need transport request/response objects
    error = error_cls.__new__(error_cls)
    if status_code is not None:
        error.status_code = status_code
    return error


class ScoringLlmConfigTests(unittest.TestCase):
    def test_enabled_with_real_key(self):
        with patch.dict(os.environ, CONFIGURED_ENV):
            self.assertTrue(scoring_llm_enabled())

    def test_disabled_by_flag_provider_or_placeholder_key(self):
        for override in (
            {"SCORING_LLM_ENABLED": "0"},
            {"AI_PROVIDER": "gemini"},
            {"OPENAI_API_KEY": ""},
            {"OPENAI_API_KEY": "your_openai_api_key_here"},
        ):
            with patch.dict(os.environ, {**CONFIGURED_ENV, **override}):
                self.assertFalse(scoring_llm_enabled(), override)

    def test_unconfigured_service_is_never_called(self):
        client, create = _fake_client(content="{}")
        with patch.dict(os.environ, {**CONFIGURED_ENV, "OPENAI_API_KEY": ""}):
            with patch("app.services.scoring_llm._client", return_value=client):
                with self.assertRaises(ResumeReviewError) as ctx:
                    json_completion(system_prompt="system", user_prompt="user")
        self.assertEqual(ctx.exception.code, "service_unavailable")
        create.assert_not_called()


class JsonCompletionTests(unittest.TestCase):
    def _complete(self, client):
        with patch.dict(os.environ, CONFIGURED_ENV):
            with patch("app.services.scoring_llm._client", return_value=client):
                return json_completion(system_prompt="system", user_prompt="resume prompt")

    def test_parses_json_object_and_sends_fixed_parameters(self):
        client, create = _fake_client(content='{"overallScore": 81, "summary": "Good"}')
        payload = self._complete(client)

        self.assertTrue(payload.structured)
        self.assertEqual(payload.data["overallScore"], 81)
        create.assert_called_once()
        kwargs = create.call_args.kwargs
        self.assertEqual(kwargs["temperature"], 0.3)
        self.assertEqual(kwargs["max_tokens"], 4000)
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})
        self.assertEqual([message["role"] for message in kwargs["messages"]], ["system", "user"])

    def test_code_fenced_json_is_accepted(self):
        client, _ = _fake_client(content='```json\n{"overallScore": 70}\n```')
        self.assertEqual(self._complete(client).data, {"overallScore": 70})

    def test_non_object_json_is_passed_through(self):
        client, _ = _fake_client(content="[1, 2, 3]")
        payload = self._complete(client)
        self.assertFalse(payload.structured)
        self.assertEqual(payload.data, [1, 2, 3])

    def test_invalid_json_is_malformed_response(self):
        client, _ = _fake_client(content="Here is my review: the resume is great.")
        with self.assertRaises(ResumeReviewError) as ctx:
            self._complete(client)
        self.assertEqual(ctx.exception.code, "malformed_response")
        self.assertEqual(ctx.exception.status_code, 502)

    def test_pathological_json_is_malformed_response(self):
        for content in ('{"overallScore": ' + "9" * 5000 + "}", "[" * 100000 + "]" * 100000):
            client, _ = _fake_client(content=content)
            with self.assertRaises(ResumeReviewError) as ctx:
                self._complete(client)
            self.assertEqual(ctx.exception.code, "malformed_response")
            self.assertEqual(ctx.exception.status_code, 502)

    def test_empty_content_is_malformed_response(self):
        client, _ = _fake_client(content="")
        with self.assertRaises(ResumeReviewError) as ctx:
            self._complete(client)
        self.assertEqual(ctx.exception.code, "malformed_response")

    def test_sdk_errors_map_to_error_kinds(self):
        cases = [
            (_sdk_error(openai.APITimeoutError), "timeout"),
            (_sdk_error(openai.RateLimitError, 429), "rate_limited"),
            (_sdk_error(openai.APIConnectionError), "service_unavailable"),
            (_sdk_error(openai.AuthenticationError, 401), "service_unavailable"),
            (_sdk_error(openai.InternalServerError, 500), "service_unavailable"),
        ]
        for error, expected in cases:
            client, create = _fake_client(error=error)
            with self.assertRaises(ResumeReviewError) as ctx:
                self._complete(client)
            self.assertEqual(ctx.exception.code, expected, type(error).__name__)
            self.assertIs(ctx.exception.__cause__, error)
            create.assert_called_once()


if __name__ == "__main__":
    unittest.main()
