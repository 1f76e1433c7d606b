"""License text classification.

Decides which accepted license family a license file represents by
looking for fingerprint phrases in normalized text. A fingerprint is a
set of phrases that must all be present; a family matches when any one
of its fingerprints is complete. Anything short of a complete
fingerprint is reported as unrecognized rather than guessed.
"""
import re
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from license_hound.models.license import LicenseFamily


class Fingerprint(NamedTuple):
    """Named group of phrases that together identify a license text.

    A text carrying any of the exclusion phrases is a different license
    that merely shares the wording (e.g. BSD-4-Clause).
    """

    name: str
    phrases: tuple[str, ...]
    exclusions: tuple[str, ...] = ()


# Phrases are written the way they appear in the canonical texts and are
# normalized with the content before comparison.
FINGERPRINTS: dict[LicenseFamily, tuple[Fingerprint, ...]] = {
    LicenseFamily.MIT: (
        Fingerprint(
            "mit-permission-grant",
            (
                "Permission is hereby granted, free of charge, to any person "
                "obtaining a copy of this software and associated documentation "
                'files (the "Software"), to deal in the Software without '
                "restriction",
                "The above copyright notice and this permission notice shall be "
                "included in all copies or substantial portions of the Software.",
                'THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND',
            ),
        ),
    ),
    LicenseFamily.BSD_3_CLAUSE: (
        Fingerprint(
            "bsd-three-clauses",
            (
                "Redistribution and use in source and binary forms, with or "
                "without modification, are permitted provided that the following "
                "conditions are met",
                "Redistributions of source code must retain the above copyright "
                "notice",
                "Redistributions in binary form must reproduce the above "
                "copyright notice",
                "to endorse or promote products derived from this software "
                "without specific prior written permission",
            ),
            (
                "All advertising materials mentioning features or use of this "
                "software must display the following acknowledgement",
            ),
        ),
    ),
    LicenseFamily.MPL_2_0: (
        Fingerprint(
            "mpl-full-text",
            (
                "Mozilla Public License Version 2.0",
                '"Covered Software" means',
                "Exhibit A - Source Code Form License Notice",
            ),
        ),
        Fingerprint(
            "mpl-source-notice",
            (
                "This Source Code Form is subject to the terms of the Mozilla "
                "Public License, v. 2.0.",
                "If a copy of the MPL was not distributed with this file",
            ),
        ),
    ),
}

_NON_WORD = re.compile(r"[^a-z0-9]+")


def normalize_text(text: str) -> str:
    """Normalize license text for phrase matching.

    Case-folds, replaces punctuation and markup with spaces and collapses
    whitespace, so line wrapping and quoting style do not matter.

    Args:
        text: Raw license text.

    Returns:
        Normalized text.
    """
    folded = _NON_WORD.sub(" ", text.casefold())
    return " ".join(folded.split())


def decode_content(content: bytes) -> str:
    """Decode license file bytes, tolerating invalid UTF-8 and a BOM."""
    return content.decode("utf-8-sig", errors="replace")


_NORMALIZED_FINGERPRINTS: dict[LicenseFamily, tuple[Fingerprint, ...]] = {
    family: tuple(
        Fingerprint(
            fp.name,
            tuple(normalize_text(phrase) for phrase in fp.phrases),
            tuple(normalize_text(phrase) for phrase in fp.exclusions),
        )
        for fp in fingerprints
    )
    for family, fingerprints in FINGERPRINTS.items()
}


class Classification(BaseModel):
    """Result of classifying a candidate license file."""

    model_config = {"extra": "forbid", "frozen": True}

    family: Optional[LicenseFamily] = Field(
        default=None, description="Matched family, None when unrecognized"
    )
    fingerprint: Optional[str] = Field(
        default=None, description="Name of the fingerprint that matched"
    )
    candidates: tuple[LicenseFamily, ...] = Field(
        default=(), description="Every family with a complete fingerprint"
    )

    @property
    def is_recognized(self) -> bool:
        """True if the content matched an accepted family."""
        return self.family is not None


def _matching_fingerprint(
    normalized: str, fingerprints: tuple[Fingerprint, ...]
) -> Optional[str]:
    for fingerprint in fingerprints:
        if any(phrase in normalized for phrase in fingerprint.exclusions):
            continue
        if all(phrase in normalized for phrase in fingerprint.phrases):
            return fingerprint.name
    return None


def classify_text(text: str) -> Classification:
    """Classify decoded license text.

    Args:
        text: License file content.

    Returns:
        Classification naming the preferred matching family, or an
        unrecognized result when no fingerprint is complete.
    """
    normalized = normalize_text(text)
    if not normalized:
        return Classification()

    matches: dict[LicenseFamily, str] = {}
    for family in LicenseFamily:
        name = _matching_fingerprint(normalized, _NORMALIZED_FINGERPRINTS[family])
        if name is not None:
            matches[family] = name

    family = LicenseFamily.preferred(matches)
    if family is None:
        return Classification()
    return Classification(
        family=family,
        fingerprint=matches[family],
        candidates=tuple(matches),
    )


def classify(content: bytes) -> Classification:
    """Classify raw license file bytes.

    Args:
        content: Bytes of a candidate license file.

    Returns:
        Classification of the content.
    """
    return classify_text(decode_content(content))
