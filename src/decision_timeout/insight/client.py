"""Claude client used to generate decision insights.

This module wraps the Claude Agent SDK with retry logic and
text extraction. Callers should go through InsightService, which never
lets a failure here escape.
"""

import asyncio
from typing import Any

import structlog
from claude_agent_sdk import ClaudeAgentOptions
from claude_agent_sdk import query as sdk_query

from decision_timeout.config.settings import InsightSettings, get_settings
from decision_timeout.insight.exceptions import InsightError

__all__ = ["InsightClient"]

logger = structlog.get_logger(__name__)


class InsightClient:
    """Text-completion client backed by the Claude Agent SDK.

    Attributes:
        model: Model identifier.
        max_retries: Attempts for retryable errors.
        retry_delay: Base delay between attempts in seconds.
        timeout_seconds: Per-attempt timeout.

    """

    def __init__(self, settings: InsightSettings | None = None) -> None:
        """Initialize the client.

        Args:
            settings: Insight settings (default from get_settings()).

        """
        settings = settings or get_settings().insight
        self.model = settings.model
        self.max_retries = settings.max_retries
        self.retry_delay = settings.retry_delay_seconds
        self.timeout_seconds = settings.timeout_seconds

    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The user prompt.
            system_prompt: Optional system prompt.

        Returns:
            The generated text.

        Raises:
            InsightError: If every attempt fails or no text comes back.

        """
        last_error: Exception | None = None

        for attempt in range(self.max_retries):
            try:
                logger.debug("insight_query_attempt", attempt=attempt + 1, model=self.model)
                return await asyncio.wait_for(
                    self._query(prompt, system_prompt), timeout=self.timeout_seconds
                )
            except (asyncio.TimeoutError, ConnectionError, OSError) as e:
                last_error = e
                logger.warning(
                    "insight_api_error_retryable",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(self.retry_delay * (2**attempt))
            except InsightError:
                raise
            except Exception as e:
                logger.error(
                    "insight_api_error_unexpected",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise InsightError(f"Unexpected error from insight service: {e}") from e

        raise InsightError(
            f"Insight request failed after {self.max_retries} attempts: {last_error}"
        )

    async def _query(self, prompt: str, system_prompt: str | None) -> str:
        result_message: Any = None
        assistant_content: Any = None

        async for message in sdk_query(
            prompt=prompt,
            options=ClaudeAgentOptions(
                model=self.model,
                max_turns=1,
                system_prompt=system_prompt,
                permission_mode="plan",
            ),
        ):
            msg_type = type(message).__name__
            if msg_type == "AssistantMessage":
                assistant_content = getattr(message, "content", None)
            elif msg_type == "ResultMessage":
                result_message = message

        text = None
        if result_message is not None:
            text = _extract_text(getattr(result_message, "result", None))
        if not text:
            text = _extract_text(assistant_content)
        if not text:
            raise InsightError("Insight service returned no text")
        return text


def _extract_text(content: Any) -> str | None:
    if content is None:
        return None
    if isinstance(content, str):
        return content.strip() or None
    if isinstance(content, list):
        texts = []
        for block in content:
            if hasattr(block, "text"):
                texts.append(block.text)
            elif isinstance(block, dict) and "text" in block:
                texts.append(block["text"])
        if texts:
            return "\n".join(texts).strip() or None
    return None
