"""License filename matching.

Matches directory listings against a static catalog of license-file
names seen in published packages, including British spelling and
common typos. Lower rank means higher confidence.
"""
from typing import Iterable, NamedTuple


class FilenamePattern(NamedTuple):
    """A known license-file name and its confidence rank."""

    filename: str
    rank: int


FILENAME_CATALOG: tuple[FilenamePattern, ...] = (
    FilenamePattern("LICENSE", 0),
    FilenamePattern("LICENSE.txt", 1),
    FilenamePattern("LICENSE.md", 2),
    FilenamePattern("LICENSE-MIT", 3),
    FilenamePattern("LICENSE-MIT.txt", 4),
    FilenamePattern("LICENSE-MIT.md", 5),
    FilenamePattern("LICENCE", 6),
    FilenamePattern("LICENCE.txt", 7),
    FilenamePattern("LICENCE.md", 8),
    FilenamePattern("LICENCE-MIT", 9),
    FilenamePattern("COPYING", 10),
    FilenamePattern("COPYING.txt", 11),
    FilenamePattern("COPYING.md", 12),
    FilenamePattern("MIT-LICENSE", 13),
    FilenamePattern("MIT-LICENSE.txt", 14),
    FilenamePattern("LICENSE.MIT", 15),
    FilenamePattern("LICENSE-BSD", 16),
    FilenamePattern("LICENSE-MPL", 17),
    FilenamePattern("LICENSE-MPL2", 18),
    FilenamePattern("LICENSE.rst", 19),
    # Typos found in the wild
    FilenamePattern("LISENSE", 20),
    FilenamePattern("LICENSCE", 21),
    FilenamePattern("LICNESE", 22),
    FilenamePattern("LICESNE", 23),
)

_RANK_BY_NAME: dict[str, int] = {
    pattern.filename.casefold(): pattern.rank for pattern in FILENAME_CATALOG
}


def filename_rank(filename: str) -> int | None:
    """Return the catalog rank of a filename, or None if it is not listed.

    Args:
        filename: Bare filename (no directory component).

    Returns:
        Rank of the matching catalog entry (case-insensitive).
    """
    return _RANK_BY_NAME.get(filename.strip().casefold())


def match_license_filenames(listing: Iterable[str]) -> list[str]:
    """Select likely license files from a directory listing.

    Args:
        listing: Filenames found in a directory.

    Returns:
        Matching filenames, most confident first. Empty if nothing matches.
    """
    ranked: list[tuple[int, str]] = []
    for filename in listing:
        rank = filename_rank(filename)
        if rank is not None:
            ranked.append((rank, filename))
    return [filename for _, filename in sorted(ranked)]


def remote_candidates() -> list[str]:
    """Catalog filenames in rank order, for probing remote repositories."""
    return [
        pattern.filename
        for pattern in sorted(FILENAME_CATALOG, key=lambda pattern: pattern.rank)
    ]
