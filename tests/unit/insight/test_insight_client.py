"""Tests for InsightClient."""

from unittest.mock import patch

import pytest

from decision_timeout.config.settings import InsightSettings
from decision_timeout.insight.client import InsightClient, _extract_text
from decision_timeout.insight.exceptions import InsightError


class AssistantMessage:
    def __init__(self, content) -> None:
        self.content = content


class ResultMessage:
    def __init__(self, result) -> None:
        self.result = result


class TextBlock:
    def __init__(self, text: str) -> None:
        self.text = text


def fake_query(*messages):
    async def _query(prompt, options):
        for message in messages:
            yield message

    return _query


@pytest.fixture
def client() -> InsightClient:
    return InsightClient(
        InsightSettings(max_retries=2, retry_delay_seconds=0.0, timeout_seconds=5)
    )


class TestExtractText:
    """Tests for _extract_text."""

    def test_string(self) -> None:
        """Test plain strings are stripped."""
        assert _extract_text("  hello \n") == "hello"

    def test_blocks(self) -> None:
        """Test text blocks and dicts are joined."""
        assert _extract_text([TextBlock("a"), {"text": "b"}]) == "a\nb"

    def test_empty(self) -> None:
        """Test empty content yields None."""
        assert _extract_text(None) is None
        assert _extract_text("   ") is None
        assert _extract_text([object()]) is None


class TestInsightClient:
    """Tests for InsightClient.generate."""

    @pytest.mark.asyncio
    async def test_result_message_preferred(self, client: InsightClient) -> None:
        """Test the final result text is returned."""
        query = fake_query(
            AssistantMessage([TextBlock("draft")]), ResultMessage("final answer")
        )
        with patch("decision_timeout.insight.client.sdk_query", query):
            assert await client.generate("prompt") == "final answer"

    @pytest.mark.asyncio
    async def test_falls_back_to_assistant_content(self, client: InsightClient) -> None:
        """Test assistant content is used when the result is empty."""
        query = fake_query(AssistantMessage([TextBlock("from assistant")]), ResultMessage(None))
        with patch("decision_timeout.insight.client.sdk_query", query):
            assert await client.generate("prompt") == "from assistant"

    @pytest.mark.asyncio
    async def test_no_text_raises(self, client: InsightClient) -> None:
        """Test an empty response raises InsightError."""
        with patch("decision_timeout.insight.client.sdk_query", fake_query()):
            with pytest.raises(InsightError, match="no text"):
                await client.generate("prompt")

    @pytest.mark.asyncio
    async def test_retries_connection_errors(self, client: InsightClient) -> None:
        """Test a retryable error is retried before giving up."""
        calls = 0

        async def flaky(prompt, options):
            nonlocal calls
            calls += 1
            if calls == 1:
                raise ConnectionError("reset")
            yield ResultMessage("second time lucky")

        with patch("decision_timeout.insight.client.sdk_query", flaky):
            assert await client.generate("prompt") == "second time lucky"
        assert calls == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, client: InsightClient) -> None:
        """Test persistent retryable errors end in InsightError."""

        async def down(prompt, options):
            raise ConnectionError("refused")
            yield

        with patch("decision_timeout.insight.client.sdk_query", down):
            with pytest.raises(InsightError, match="after 2 attempts"):
                await client.generate("prompt")

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self, client: InsightClient) -> None:
        """Test non-retryable errors are wrapped without retrying."""

        async def broken(prompt, options):
            raise ValueError("bad options")
            yield

        with patch("decision_timeout.insight.client.sdk_query", broken):
            with pytest.raises(InsightError, match="Unexpected error"):
                await client.generate("prompt")
