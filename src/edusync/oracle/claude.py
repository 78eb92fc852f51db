"""Segmentation oracle backed by the Claude API."""

from __future__ import annotations

import json
import os
import re
from typing import Any

import anthropic
from pydantic import BaseModel, ValidationError

from edusync.errors import OracleInvocationError
from edusync.models.config import OracleConfig
from edusync.models.discourse import ParagraphSplitResult, UnitSplitResult
from edusync.oracle.base import Effort
from edusync.segmentation.prompts import build_paragraph_prompt, build_unit_prompt
from edusync.utils.retry import retry_api

TRANSIENT_API_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


class ClaudeOracle:
    """Text-segmentation oracle that prompts Claude for JSON splits.

    Transient API failures are retried with backoff; whatever is left is
    surfaced as OracleInvocationError. The client is thread-safe, so one
    instance serves concurrent paragraph requests.
    """

    name = "claude"

    def __init__(
        self,
        config: OracleConfig | None = None,
        *,
        api_key: str | None = None,
        client: Any = None,
    ) -> None:
        self.config = config or OracleConfig()
        if client is None:
            api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
            if not api_key:
                raise OracleInvocationError(
                    "ANTHROPIC_API_KEY not set: cannot reach the segmentation oracle",
                    retryable=False,
                )
            client = anthropic.Anthropic(
                api_key=api_key,
                timeout=self.config.timeout_seconds,
                max_retries=0,
            )
        self._client = client
        self._create = retry_api(
            self.config.api_retry_attempts,
            retry_on=TRANSIENT_API_ERRORS,
        )(self._client.messages.create)

    def split_paragraphs(self, article: str) -> ParagraphSplitResult:
        text = self._complete(build_paragraph_prompt(article), self.config.max_tokens)
        return _validate(ParagraphSplitResult, parse_json_response(text))

    def split_units(self, paragraph: str, *, effort: Effort = "medium") -> UnitSplitResult:
        high = effort == "high"
        max_tokens = self.config.high_effort_max_tokens if high else self.config.max_tokens
        text = self._complete(build_unit_prompt(paragraph, high_effort=high), max_tokens)
        return _validate(UnitSplitResult, parse_json_response(text))

    def _complete(self, prompt: str, max_tokens: int) -> str:
        try:
            message = self._create(
                model=self.config.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except TRANSIENT_API_ERRORS as e:
            raise OracleInvocationError(f"Claude API unavailable: {e}") from e
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            raise OracleInvocationError(
                f"Claude API rejected credentials: {e}", retryable=False
            ) from e
        except anthropic.APIStatusError as e:
            raise OracleInvocationError(
                f"Claude API error {e.status_code}: {e}", retryable=False
            ) from e

        return "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )


def parse_json_response(text: str) -> Any:
    """Parse JSON from an LLM reply, tolerating code fences and surrounding prose."""
    text = text.strip()
    if text.startswith("```"):
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        text = "\n".join(lines)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if match:
            try:
                return json.loads(match.group())
            except json.JSONDecodeError:
                pass
    raise OracleInvocationError("Oracle reply is not valid JSON")


def _validate(model: type[BaseModel], data: Any):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise OracleInvocationError(
            f"Oracle reply does not match {model.__name__}: {e.error_count()} error(s)"
        ) from e
