"""Bank-specific statement profiles.

Each profile extends BankProfile and supplies that bank's fingerprints
and transaction layout rules.
"""

from .hbl import HblProfile
from .nayapay import NayaPayProfile

__all__ = ["NayaPayProfile", "HblProfile"]
