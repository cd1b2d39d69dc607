"""Prompt-injection sanitization for transaction descriptions.

Descriptions come straight out of third-party documents and are later
shown in the UI and pasted into LLM prompts, so every description is
passed through sanitize_description() before it leaves the parser.
"""

from __future__ import annotations

import re

REDACTION_MARKER = "[REMOVED]"
MAX_DESCRIPTION_LENGTH = 500
EMPTY_DESCRIPTION = "Transaction"

PROMPT_INJECTION_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"ignore\s+(?:all\s+)?previous\s+instructions?", re.I),
    re.compile(r"ignore\s+(?:all\s+)?above\s+instructions?", re.I),
    re.compile(r"disregard\s+(?:all\s+)?previous", re.I),
    re.compile(r"forget\s+(?:all\s+)?previous", re.I),
    re.compile(r"new\s+instructions?:", re.I),
    re.compile(r"system\s*:", re.I),
    re.compile(r"assistant\s*:", re.I),
    re.compile(r"user\s*:", re.I),
    re.compile(r"\[INST\]", re.I),
    re.compile(r"\[/INST\]", re.I),
    re.compile(r"<\|im_start\|>", re.I),
    re.compile(r"<\|im_end\|>", re.I),
    re.compile(r"<<SYS>>", re.I),
    re.compile(r"</SYS>>", re.I),
    re.compile(r"you\s+are\s+now", re.I),
    re.compile(r"pretend\s+you\s+are", re.I),
    re.compile(r"override\s+(?:all\s+)?rules", re.I),
    re.compile(r"bypass\s+(?:all\s+)?restrictions", re.I),
    re.compile(r"```[\s\S]*```"),
    re.compile(r"<script[\s\S]*</script>", re.I),
]

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")


def contains_injection(text: str) -> bool:
    """Return True if any known injection trigger is present in text."""
    return any(pattern.search(text) for pattern in PROMPT_INJECTION_PATTERNS)


def _redact(text: str) -> str:
    # Repeat until stable; a removal can bring two halves of a trigger together.
    previous = None
    while previous != text:
        previous = text
        for pattern in PROMPT_INJECTION_PATTERNS:
            text = pattern.sub(REDACTION_MARKER, text)
    return text


def sanitize_description(description: str | None) -> str:
    """Strip injection triggers and noise from a description.

    Whitespace runs collapse to single spaces and the remaining control
    characters are removed before redaction, so they cannot hide a
    trigger. The result is hard capped at MAX_DESCRIPTION_LENGTH
    characters (ellipsis included).
    Applying the function twice gives the same result as applying it once.

    Args:
        description: Raw description text (may be None)

    Returns:
        Sanitized description, never empty
    """
    if not description or not isinstance(description, str):
        return EMPTY_DESCRIPTION

    sanitized = _WHITESPACE.sub(" ", description)
    sanitized = _CONTROL_CHARS.sub("", sanitized)
    sanitized = _redact(sanitized)
    sanitized = _WHITESPACE.sub(" ", sanitized).strip()

    if len(sanitized) > MAX_DESCRIPTION_LENGTH:
        sanitized = sanitized[: MAX_DESCRIPTION_LENGTH - 3].rstrip() + "..."

    return sanitized or EMPTY_DESCRIPTION
