"""Copyright notice recovery from license texts."""
from typing import Optional


def _paragraphs(text: str) -> list[str]:
    """Join consecutive non-blank lines into single-line paragraphs."""
    paragraphs: list[str] = []
    current: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line[2:] if raw_line.startswith("//") else raw_line
        line = line.strip()
        if line:
            current.append(line)
        elif current:
            paragraphs.append(" ".join(current))
            current = []
    if current:
        paragraphs.append(" ".join(current))
    return paragraphs


def recover_copyright_notice(license_text: str) -> Optional[str]:
    """Find the copyright notice in a license document.

    Lines are stripped of a leading ``//`` comment marker and joined into
    paragraphs; the first paragraph mentioning "copyright" is the notice.

    Args:
        license_text: Full license document.

    Returns:
        The copyright paragraph, or None if the text has none.
    """
    for paragraph in _paragraphs(license_text):
        if "copyright" in paragraph.lower():
            return paragraph
    return None
