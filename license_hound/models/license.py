"""License family enumeration."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional


class LicenseFamily(str, Enum):
    """Accepted license families, declared in preference order.

    When several families are plausible for the same evidence, the one
    declared first wins (MIT > BSD-3-Clause > MPL-2.0).
    """

    MIT = "MIT"
    BSD_3_CLAUSE = "BSD-3-Clause"
    MPL_2_0 = "MPL-2.0"

    @property
    def rank(self) -> int:
        """Position in the preference order (0 is most preferred)."""
        return list(LicenseFamily).index(self)

    @classmethod
    def from_spdx(cls, spdx_id: Optional[str]) -> Optional[LicenseFamily]:
        """Map an SPDX identifier to a family.

        Args:
            spdx_id: SPDX identifier such as "MIT" (case-insensitive).

        Returns:
            The matching LicenseFamily, or None for anything outside the
            accepted set.
        """
        if not spdx_id:
            return None
        wanted = spdx_id.strip().upper()
        for family in cls:
            if family.value.upper() == wanted:
                return family
        return None

    @classmethod
    def preferred(
        cls, families: Iterable[Optional[LicenseFamily]]
    ) -> Optional[LicenseFamily]:
        """Pick the most preferred family, ignoring None entries."""
        present = [family for family in families if family is not None]
        if not present:
            return None
        return min(present, key=lambda family: family.rank)
