"""LLM-assisted description cleanup via Groq.

The enhancer sends a batch of (sanitized) descriptions to a Groq chat
model and expects back a JSON array of the same length and order. Any
deviation is an EnhancementError; callers keep the rule-based
descriptions in that case.
"""

import json
import logging
import re
from typing import Any

from langchain_core.prompts import ChatPromptTemplate

from statement_ingest.cleaning.sanitizer import sanitize_description
from statement_ingest.config import settings
from statement_ingest.core.exceptions import EnhancementError

logger = logging.getLogger(__name__)

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

CLEANING_PROMPT = ChatPromptTemplate.from_template(
    """Clean and summarize these bank transaction descriptions. Make them SHORT and ESSENTIAL only.

Rules:
- For peer-to-peer transfers: keep the person's name exactly as provided. "Received from John Smith" stays "Received from John Smith"
- For transfers: "Transfer to [Name]" or "Transfer from [Name]" - preserve the full name
- For ATM: "ATM Withdrawal"
- For purchases: "[Merchant Name]" only
- For refunds: "Refund from [Merchant]"
- Remove technical details, amounts, card numbers, balances, email addresses
- Maximum 5-7 words per description
- Keep names in proper title case

Return ONLY a JSON array of cleaned descriptions in the EXACT same order:
["cleaned description 1", "cleaned description 2", ...]

Descriptions to clean:
{descriptions}"""
)


class DescriptionEnhancer:
    """Rewrites transaction descriptions with a Groq-hosted LLM.

    Example:
        >>> enhancer = DescriptionEnhancer()
        >>> enhancer.enhance(["Paid to NETFLIX.COM Singapore SG"])
        ['Netflix']
    """

    def __init__(self, llm: Any | None = None, api_key: str | None = None):
        """Initialize the enhancer.

        Args:
            llm: Pre-built chat model (anything with .invoke); built lazily if omitted
            api_key: Groq API key (default: GROQ_API_KEY setting)
        """
        self._llm = llm
        self.api_key = api_key or settings.groq_api_key

    @property
    def llm(self) -> Any:
        if self._llm is None:
            if not self.api_key:
                raise EnhancementError(
                    "GROQ_API_KEY environment variable is not set",
                    details={"reason": "missing_api_key"},
                )
            try:
                from langchain_groq import ChatGroq

                self._llm = ChatGroq(
                    model=settings.groq_model,
                    temperature=settings.llm_temperature,
                    max_tokens=settings.llm_max_tokens,
                    timeout=settings.llm_timeout_seconds,
                    max_retries=settings.llm_max_retries,
                    groq_api_key=self.api_key,
                )
            except Exception as e:
                logger.warning(
                    "Groq client setup failed", extra={"error_type": type(e).__name__}
                )
                raise EnhancementError(
                    f"Groq API Error: client setup failed: {e}",
                    details={"reason": "client_setup"},
                ) from e
        return self._llm

    def build_messages(self, descriptions: list[str]) -> list[Any]:
        numbered = "\n".join(
            f"{i}. {sanitize_description(d)}" for i, d in enumerate(descriptions, start=1)
        )
        return CLEANING_PROMPT.format_messages(descriptions=numbered)

    def enhance(self, descriptions: list[str]) -> list[str]:
        """Clean a batch of descriptions.

        Args:
            descriptions: Descriptions in display order

        Returns:
            Cleaned descriptions, same length and order

        Raises:
            EnhancementError: On missing key, transport failure or a malformed reply
        """
        if not descriptions:
            return []

        messages = self.build_messages(descriptions)
        llm = self.llm

        try:
            response = llm.invoke(messages)
        except Exception as e:
            logger.warning("Groq request failed", extra={"error_type": type(e).__name__})
            raise EnhancementError(f"Groq API Error: {e}") from e

        content = getattr(response, "content", None)
        if not content or not isinstance(content, str):
            raise EnhancementError("Groq API Error: API response is missing content")

        cleaned = self._parse_response(content)
        if len(cleaned) != len(descriptions):
            raise EnhancementError(
                f"Groq API Error: Mismatch: Got {len(cleaned)} cleaned descriptions "
                f"but expected {len(descriptions)}",
                details={"expected": len(descriptions), "received": len(cleaned)},
            )

        logger.info("Enhanced descriptions", extra={"count": len(cleaned)})
        return [sanitize_description(c) if c.strip() else "" for c in cleaned]

    def _parse_response(self, content: str) -> list[str]:
        match = _JSON_ARRAY.search(content)
        if not match:
            raise EnhancementError("Groq API Error: Could not parse JSON from API response")

        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise EnhancementError(
                "Groq API Error: Could not parse JSON from API response"
            ) from e

        if not isinstance(parsed, list):
            raise EnhancementError("Groq API Error: API response is not an array of descriptions")
        if not all(isinstance(item, str) for item in parsed):
            raise EnhancementError("Groq API Error: API response contains non-string items")

        return parsed
