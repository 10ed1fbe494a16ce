"""Insight service adapter interface and Anthropic implementation.

Defines the InsightsAdapter protocol for turning a transaction set into
free-text spending insights, plus two implementations:
- AnthropicAdapter: sends the transactions to the Anthropic Messages API via httpx.
- NullAdapter: no-op adapter that always returns an empty string (insights disabled).

The insight call happens after aggregation and is fully isolated from it:
adapters never raise, so a failed call cannot disturb an already computed
AggregateResult. Adapters receive plain dicts, not Transaction objects.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_API_VERSION = "2023-06-01"

# Keeps the prompt bounded for multi-year exports.
MAX_PROMPT_TRANSACTIONS = 500


class InsightsAdapter(Protocol):
    """Protocol for generating spending insights from transactions.

    On any failure, implementations must return an empty string rather
    than raising.
    """

    def generate(self, transactions: list[dict]) -> str:
        """Produce free-text insights for a transaction set.

        Args:
            transactions: List of dicts, each with keys:
                date, description, category, amount.

        Returns:
            Insight text, or an empty string on any failure.
        """
        ...


def _build_prompt(transactions: list[dict]) -> str:
    """Construct the insights prompt from canonical transaction dicts.

    Only the most recent :data:`MAX_PROMPT_TRANSACTIONS` transactions are
    included.

    Args:
        transactions: Transaction dicts with date, description, category, amount.

    Returns:
        The fully formatted prompt string.
    """
    recent = sorted(transactions, key=lambda t: t["date"])[-MAX_PROMPT_TRANSACTIONS:]

    txn_lines: list[str] = []
    for txn in recent:
        category = txn.get("category") or "-"
        txn_lines.append(f"{txn['date']} | {txn['description']} | {category} | {txn['amount']}")
    txn_text = "\n".join(txn_lines)

    return (
        "You are reviewing a household's bank and credit card transactions.\n"
        "Negative amounts are spending, positive amounts are income.\n"
        "\n"
        "## Transactions (date | description | category | amount)\n"
        f"{txn_text}\n"
        "\n"
        "## Instructions\n"
        "Write 3 to 5 short, specific observations about this spending:\n"
        "notable trends, unusual charges, subscriptions worth reviewing,\n"
        "and one practical suggestion to save money.\n"
        "Respond with plain text bullet points only."
    )


class AnthropicAdapter:
    """Insights adapter that calls the Anthropic Messages API via httpx.

    Reads the API key from the environment variable specified in config
    (``api_key_env``). Sends one HTTP POST containing the transaction set
    and returns the text of the response.

    On any failure (missing API key, network error, auth error, rate
    limit, unparseable response), returns an empty string.

    Args:
        model: The Anthropic model identifier, e.g.
            :data:`~spending_dashboard.models.DEFAULT_INSIGHTS_MODEL`.
        api_key_env: Name of the environment variable containing the API key.
        max_tokens: Maximum tokens in the response. Default: 1024.
        timeout: HTTP request timeout in seconds. Default: 60.
    """

    def __init__(
        self,
        model: str,
        api_key_env: str,
        max_tokens: int = 1024,
        timeout: float = 60.0,
    ) -> None:
        self.model = model
        self.api_key_env = api_key_env
        self.max_tokens = max_tokens
        self.timeout = timeout

    def generate(self, transactions: list[dict]) -> str:
        """Send the transaction set to Anthropic and return its insights.

        Args:
            transactions: List of dicts with date, description, category, amount.

        Returns:
            Insight text, or an empty string on any failure.
        """
        if not transactions:
            return ""

        api_key = os.environ.get(self.api_key_env, "")
        if not api_key:
            logger.warning(
                "Insights API key not found in environment variable '%s'",
                self.api_key_env,
            )
            return ""

        request_body = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": _build_prompt(transactions),
                }
            ],
        }

        headers = {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
            "content-type": "application/json",
        }

        try:
            response = httpx.post(
                ANTHROPIC_API_URL,
                json=request_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException:
            logger.warning("Insights request timed out")
            return ""
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Insights API returned HTTP %d: %s",
                exc.response.status_code,
                exc.response.text[:200],
            )
            return ""
        except httpx.HTTPError as exc:
            logger.warning("Insights request failed: %s", exc)
            return ""

        # Extract text from the Anthropic response format
        try:
            body = response.json()
            text_parts: list[str] = []
            for block in body.get("content", []):
                if block.get("type") == "text":
                    text_parts.append(block["text"])
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Failed to extract text from insights response: %s", exc)
            return ""

        text = "\n".join(text_parts).strip()
        if not text:
            logger.warning("Insights response contained no text content")
        return text


class NullAdapter:
    """No-op insights adapter used when insights are disabled.

    Always returns an empty string.
    """

    def generate(self, transactions: list[dict]) -> str:
        return ""


def get_adapter(provider: str, model: str, api_key_env: str) -> InsightsAdapter:
    """Build the adapter for a configured provider name.

    Unknown providers fall back to :class:`NullAdapter` with a warning.
    """
    if provider == "anthropic":
        return AnthropicAdapter(model=model, api_key_env=api_key_env)
    if provider != "none":
        logger.warning("Unknown insights provider %r; insights disabled", provider)
    return NullAdapter()
