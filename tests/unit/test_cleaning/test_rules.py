"""Tests for deterministic description cleaning."""

import pytest

from statement_ingest.cleaning.rules import (
    RULES,
    clean_description,
    fallback_description,
    paid_to_merchant,
    reversal,
)


class TestCleanDescription:
    """Test suite for clean_description."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Money Received from Ahmed Ali", "Received from Ahmed Ali"),
            ("received from Zara Khan", "Received from Zara Khan"),
            ("Money Sent to Bilal Raza", "Sent to Bilal Raza"),
            ("Outgoing fund transfer to Sara Ahmed", "Transfer to Sara Ahmed"),
            (
                "Incoming fund transfer from Ali Raza Khan Ahmed Meezan",
                "Transfer from Ali Raza Khan",
            ),
            ("Paid to NETFLIX.COM Singapore SG", "Netflix"),
            ("Paid to VULTR BY CONSTANT", "Vultr"),
            ("Paid to Netflix.com", "Netflix"),
            ("Paid to KFC Karachi PK", "Kfc"),
            ("Paid to PK", "PK"),
            ("Reversed: Paid to DARAZ.COM Lahore PK", "Daraz Refund"),
            ("ATM withdrawal Clifton branch", "ATM Withdrawal"),
            ("Cash Withdrawal at branch", "ATM Withdrawal"),
            ("Mobile Top-up Jazz 0300", "Mobile Top-up"),
        ],
    )
    def test_rules(self, raw, expected):
        assert clean_description(raw) == expected

    @pytest.mark.parametrize("raw", ["", None, "   "])
    def test_empty(self, raw):
        assert clean_description(raw) == "Transaction"

    def test_first_rule_wins(self):
        """Money received is checked before ATM."""
        assert clean_description("Received from ATM Services") == "Received from ATM Services"

    def test_sent_to_needs_word_boundary(self):
        """"consent to" must not read as a transfer."""
        assert clean_description("Form consent to share data") == "Form consent share data"

    def test_rule_order(self):
        names = [name for name, _ in RULES]
        assert names.index("paid_to_merchant") < names.index("reversal")
        assert names[0] == "money_received"


class TestMerchantRules:
    """Test the paid-to and reversal rules in isolation."""

    def test_paid_to_skips_reversals(self):
        assert paid_to_merchant("Reversed: Paid to DARAZ.COM Lahore PK") is None

    def test_reversal_requires_prefix(self):
        assert reversal("Paid to DARAZ.COM Lahore PK") is None


class TestFallbackDescription:
    """Test suite for the word-based fallback."""

    def test_keeps_first_five_meaningful_words(self):
        text = "POS 12345 ABCDEFGHIJ12 Utility bill for the month of March"
        assert fallback_description(text) == "POS Utility bill for the"

    def test_drops_short_words_numbers_and_codes(self):
        assert fallback_description("to 12 AB 998877 REF9988776655") == "Transaction"

    def test_truncates_long_result(self):
        text = "Supercalifragilistic Expialidocious Pneumonoultramicroscopic Words"
        result = fallback_description(text)
        assert result.endswith("...")
        assert len(result) == 53

    @pytest.mark.parametrize(
        "text",
        [
            "a",
            "x" * 200,
            "one two three four five six seven eight",
            "12345 67890",
            "Lorem ipsum dolor sit amet consectetur adipiscing elit sed do",
        ],
    )
    def test_never_empty_and_bounded(self, text):
        result = fallback_description(text)
        assert result
        assert len(result) <= 53
