"""Deterministic description cleaning.

Raw statement descriptions carry transfer templates, merchant city/country
suffixes, reference numbers and channel labels. clean_description() turns
them into a short human label by running an ordered list of rules; the
first rule that returns a value wins, otherwise a word-based fallback
applies.

Ordering matters: later rules assume earlier ones already handled their
cases (e.g. the reversal rule never sees a plain "Paid to").
"""

from __future__ import annotations

import re
from collections.abc import Callable

Rule = Callable[[str], "str | None"]

FALLBACK_WORD_LIMIT = 5
FALLBACK_MAX_LENGTH = 50
EMPTY_DESCRIPTION = "Transaction"

_MONEY_RECEIVED = re.compile(r"\b(?:money\s+)?received\s+from\s+(.+)", re.I)
_MONEY_SENT = re.compile(r"\b(?:money\s+)?sent\s+to\s+(.+)", re.I)
_OUTGOING_TRANSFER = re.compile(r"outgoing\s+fund\s+transfer\s+to\s+(.+)", re.I)
_INCOMING_TRANSFER = re.compile(r"incoming\s+fund\s+transfer\s+from\s+(.+)", re.I)
# Merchant ends at " BY ", at a "City CC" suffix, or at end of text.
_PAID_TO = re.compile(
    r"paid\s+to\s+([A-Z0-9.\s]+?)(?:\s+BY\s+|\s+[A-Z][a-z]+\s+[A-Z]{2}|\s*$)", re.I
)
_REVERSAL = re.compile(
    r"Reversed:\s+paid\s+to\s+([A-Z0-9.\s]+?)(?:\s+[A-Z][a-z]+\s+[A-Z]{2}|\s*$)", re.I
)
_REVERSED_PREFIX = re.compile(r"Reversed:", re.I)
_DOT_COM_SUFFIX = re.compile(r"\.com$", re.I)
_PURE_NUMBER = re.compile(r"^\d+$")
_REFERENCE_CODE = re.compile(r"^[A-Z0-9]{10,}$")


def _first_words(text: str, count: int) -> str:
    return " ".join(text.split()[:count])


def _merchant_name(raw: str) -> str:
    """Reduce a raw merchant token to a display name.

    "NETFLIX.COM" -> "Netflix", "VULTR BY CONSTANT" -> "Vultr",
    "Netflix.com" -> "Netflix".
    """
    merchant = _DOT_COM_SUFFIX.sub("", raw.strip())
    words = merchant.split()
    first_word = words[0] if words else merchant
    if first_word == first_word.upper() and len(first_word) > 2:
        return first_word[0] + first_word[1:].lower()
    return first_word


def money_received(text: str) -> str | None:
    match = _MONEY_RECEIVED.search(text)
    if match:
        return f"Received from {match.group(1).strip()}"
    return None


def money_sent(text: str) -> str | None:
    match = _MONEY_SENT.search(text)
    if match:
        return f"Sent to {match.group(1).strip()}"
    return None


def outgoing_transfer(text: str) -> str | None:
    match = _OUTGOING_TRANSFER.search(text)
    if match:
        return f"Transfer to {match.group(1).strip()}"
    return None


def incoming_transfer(text: str) -> str | None:
    match = _INCOMING_TRANSFER.search(text)
    if match:
        return f"Transfer from {_first_words(match.group(1), 3)}"
    return None


def paid_to_merchant(text: str) -> str | None:
    if _REVERSED_PREFIX.search(text):
        return None
    match = _PAID_TO.search(text)
    if match:
        return _merchant_name(match.group(1))
    return None


def reversal(text: str) -> str | None:
    match = _REVERSAL.search(text)
    if match:
        return f"{_merchant_name(match.group(1))} Refund"
    return None


def atm_withdrawal(text: str) -> str | None:
    lowered = text.lower()
    if "atm" in lowered or "cash withdrawal" in lowered:
        return "ATM Withdrawal"
    return None


def mobile_top_up(text: str) -> str | None:
    lowered = text.lower()
    if "mobile" in lowered and "top" in lowered:
        return "Mobile Top-up"
    return None


RULES: list[tuple[str, Rule]] = [
    ("money_received", money_received),
    ("money_sent", money_sent),
    ("outgoing_transfer", outgoing_transfer),
    ("incoming_transfer", incoming_transfer),
    ("paid_to_merchant", paid_to_merchant),
    ("reversal", reversal),
    ("atm_withdrawal", atm_withdrawal),
    ("mobile_top_up", mobile_top_up),
]


def fallback_description(text: str) -> str:
    """Keep the first few meaningful words, capped at FALLBACK_MAX_LENGTH."""
    words = [
        w
        for w in text.split()
        if len(w) > 2 and not _PURE_NUMBER.match(w) and not _REFERENCE_CODE.match(w)
    ]
    if not words:
        return EMPTY_DESCRIPTION

    meaningful = " ".join(words[:FALLBACK_WORD_LIMIT])
    if len(meaningful) > FALLBACK_MAX_LENGTH:
        return meaningful[:FALLBACK_MAX_LENGTH] + "..."
    return meaningful


def clean_description(description: str | None) -> str:
    """Turn a raw statement description into a short label.

    Args:
        description: Raw description assembled by a bank parser

    Returns:
        Cleaned description, never empty
    """
    text = (description or "").strip()
    if not text:
        return EMPTY_DESCRIPTION

    for _name, rule in RULES:
        result = rule(text)
        if result:
            return result

    return fallback_description(text)
