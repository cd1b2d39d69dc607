"""Tests for bank detector."""

import pytest

from statement_ingest.parsers.detector import BankDetector
from statement_ingest.parsers.generic import BankProfile
from statement_ingest.parsers.refinements import HblProfile, NayaPayProfile


class AlwaysMatchProfile(BankProfile):
    """Profile that claims every statement."""

    bank_id = "always"
    name = "Always"
    INDICATORS = ("",)
    DEFAULT_THRESHOLD = 1


class TestBankDetector:
    """Test suite for BankDetector."""

    def test_initialization_empty(self):
        detector = BankDetector()
        assert detector.profiles == []
        assert detector.get_supported_banks() == []

    def test_detect_nayapay(self, nayapay_text):
        """NayaPay statement is detected by the NayaPay profile."""
        detector = BankDetector([NayaPayProfile(), HblProfile()])
        profile = detector.detect(nayapay_text)
        assert profile is not None
        assert profile.bank_id == "nayapay"

    def test_detect_hbl(self, hbl_text):
        """HBL statement falls through NayaPay and matches HBL."""
        detector = BankDetector([NayaPayProfile(), HblProfile()])
        profile = detector.detect(hbl_text)
        assert profile is not None
        assert profile.bank_id == "hbl"

    def test_detect_unknown(self):
        """Text with no fingerprints is not detected."""
        detector = BankDetector([NayaPayProfile(), HblProfile()])
        assert detector.detect("Some other bank\nStatement of account") is None

    @pytest.mark.parametrize("text", ["", None, 123])
    def test_detect_invalid_input(self, text):
        detector = BankDetector([NayaPayProfile()])
        assert detector.detect(text) is None

    def test_first_registered_match_wins(self, hbl_text):
        """Detection order is registration order."""
        detector = BankDetector([AlwaysMatchProfile(), HblProfile()])
        assert detector.detect(hbl_text).bank_id == "always"

        detector = BankDetector([HblProfile(), AlwaysMatchProfile()])
        assert detector.detect(hbl_text).bank_id == "hbl"

    def test_detection_is_stable(self, nayapay_text):
        """Repeated detection of the same text returns the same profile."""
        detector = BankDetector([NayaPayProfile(), HblProfile()])
        first = detector.detect(nayapay_text)
        assert all(detector.detect(nayapay_text) is first for _ in range(5))

    def test_register_replaces_same_bank_id(self):
        """Re-registering a bank keeps its position."""
        original = NayaPayProfile()
        replacement = NayaPayProfile(detection_threshold=5)
        detector = BankDetector([original, HblProfile()])

        detector.register(replacement)

        assert detector.profiles[0] is replacement
        assert len(detector.profiles) == 2

    def test_unregister(self):
        detector = BankDetector([NayaPayProfile(), HblProfile()])
        detector.unregister("nayapay")
        assert detector.get_supported_banks() == ["HBL"]

    def test_supported_banks_in_priority_order(self):
        detector = BankDetector([NayaPayProfile(), HblProfile()])
        assert detector.get_supported_banks() == ["NayaPay", "HBL"]


class TestProfileThresholds:
    """Test indicator counting against thresholds."""

    def test_nayapay_below_threshold(self):
        """A single non-brand indicator is not enough for NayaPay."""
        assert not NayaPayProfile().detect("TIME TYPE DESCRIPTION")

    def test_nayapay_case_insensitive(self):
        """Lower-cased phrases still count."""
        assert NayaPayProfile().detect("www.nayapay.com\namount balance")

    def test_hbl_needs_three_indicators(self):
        text = "Habib Bank\nAccount Number 123"
        assert not HblProfile().detect(text)
        assert HblProfile().detect(text + "\nCNIC Number 42101")

    def test_threshold_override(self):
        text = "Habib Bank\nAccount Number 123"
        assert HblProfile(detection_threshold=2).detect(text)
