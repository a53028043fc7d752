"""
Section splitting for document compression.
"""

import re

from .estimators import estimate_tokens

HEADING_BOUNDARY = re.compile(r"\n(?=#{1,3}\s)")
PARAGRAPH_BOUNDARY = re.compile(r"\n\n+")


def split_into_sections(
    content: str,
    max_section_tokens: int = 2000,
    fallback_window_chars: int = 8000,
) -> list[str]:
    """
    Split a document into heading- and paragraph-bounded sections.

    Args:
        content: Document text
        max_section_tokens: Sections above this size are split further
        fallback_window_chars: Window size used when a section has no
            heading or paragraph boundary left to split on

    Returns:
        Non-blank sections in document order
    """
    sections: list[str] = []

    for heading_section in HEADING_BOUNDARY.split(content):
        if estimate_tokens(heading_section) <= max_section_tokens:
            sections.append(heading_section)
            continue

        for paragraph in PARAGRAPH_BOUNDARY.split(heading_section):
            if estimate_tokens(paragraph) > max_section_tokens:
                sections.extend(split_into_windows(paragraph, fallback_window_chars))
            else:
                sections.append(paragraph)

    return [section for section in sections if section.strip()]


def split_into_windows(text: str, window_chars: int) -> list[str]:
    """
    Cut text into windows of at most window_chars characters.

    Cuts land on the last line break of a window, else on its last
    whitespace, else mid-word. Joining the windows gives back the text.
    """
    if window_chars < 1:
        raise ValueError("window_chars must be >= 1")

    windows = []
    start = 0
    while len(text) - start > window_chars:
        end = start + window_chars
        window = text[start:end]

        # Only accept a cut in the second half, otherwise windows get tiny
        floor = window_chars // 2
        cut = window.rfind("\n", floor)
        if cut == -1:
            cut = max(window.rfind(" ", floor), window.rfind("\t", floor))

        if cut > 0:
            end = start + cut + 1

        windows.append(text[start:end])
        start = end

    if start < len(text):
        windows.append(text[start:])
    return windows
