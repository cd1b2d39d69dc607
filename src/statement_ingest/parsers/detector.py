"""Bank detection from extracted statement text.

This module picks the bank profile whose fingerprint phrases appear in
the statement. Profiles are tried in registration order and the first
one whose detection threshold is met wins.
"""

import logging

from statement_ingest.parsers.generic import BankProfile

logger = logging.getLogger(__name__)


class BankDetector:
    """Detects the issuing bank from statement text.

    Example:
        >>> detector = BankDetector([NayaPayProfile(), HblProfile()])
        >>> profile = detector.detect(full_text)
        >>> if profile is None:
        ...     print("Unsupported statement")
    """

    def __init__(self, profiles: list[BankProfile] | None = None):
        """Initialize the detector.

        Args:
            profiles: Profiles in priority order (default: none registered)
        """
        self._profiles: list[BankProfile] = list(profiles or [])

    @property
    def profiles(self) -> list[BankProfile]:
        return list(self._profiles)

    def register(self, profile: BankProfile) -> None:
        """Append a profile; earlier registrations keep priority.

        Re-registering a bank_id replaces the old profile in place.
        """
        for i, existing in enumerate(self._profiles):
            if existing.bank_id == profile.bank_id:
                self._profiles[i] = profile
                return
        self._profiles.append(profile)

    def unregister(self, bank_id: str) -> None:
        self._profiles = [p for p in self._profiles if p.bank_id != bank_id]

    def detect(self, text: str) -> BankProfile | None:
        """Detect the bank from statement text.

        Args:
            text: Full text extracted from the statement

        Returns:
            First matching profile, or None if nothing matches
        """
        if not text or not isinstance(text, str):
            return None

        for profile in self._profiles:
            if profile.detect(text):
                logger.info("Detected bank", extra={"bank": profile.bank_id})
                return profile

        logger.info("No bank profile matched")
        return None

    def get_supported_banks(self) -> list[str]:
        """Display names of registered banks, in priority order."""
        return [profile.name for profile in self._profiles]
