"""License file discovery and text analysis for license-hound."""
from license_hound.analysis.attribution import recover_copyright_notice
from license_hound.analysis.classifier import (
    FINGERPRINTS,
    Classification,
    Fingerprint,
    classify,
    classify_text,
    normalize_text,
)
from license_hound.analysis.filenames import (
    FILENAME_CATALOG,
    FilenamePattern,
    filename_rank,
    match_license_filenames,
    remote_candidates,
)

__all__ = [
    "Classification",
    "FILENAME_CATALOG",
    "FINGERPRINTS",
    "FilenamePattern",
    "Fingerprint",
    "classify",
    "classify_text",
    "filename_rank",
    "match_license_filenames",
    "normalize_text",
    "recover_copyright_notice",
    "remote_candidates",
]
