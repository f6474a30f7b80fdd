"""Note title extraction."""

import html
import re

__all__ = ["MAX_TITLE_LENGTH", "note_to_title"]

MAX_TITLE_LENGTH = 120

_BLOCK_END_RE = re.compile(r"(</(?:h\d|p|div)+>)")
_LINE_BREAK_RE = re.compile(r"<br\s*/?>")
_LEADING_TAG_RE = re.compile(r"^<[^>\n]+[^/]>\n")
_TAG_RE = re.compile(r"<[^>]*>")


def note_to_title(text: str, stop_at_line_break: bool = False) -> str:
    """Return the first line of note HTML, at most 120 characters.

    Parameters
    ----------
    text : str
        Note HTML.
    stop_at_line_break : bool, optional
        End the title at ``<br>`` instead of reading it as a space.

    Returns
    -------
    str
        Plain-text title.

    Examples
    --------
    >>> note_to_title("<p>Reading list</p><p>Second paragraph</p>")
    'Reading list'
    """
    original = text
    text = text.strip()
    text = _BLOCK_END_RE.sub("\\1\n", text)
    text = _LINE_BREAK_RE.sub("\n" if stop_at_line_break else " ", text)
    text = html.unescape(_TAG_RE.sub("", text))

    # A first line holding only an opening tag leaves a blank line
    if _LEADING_TAG_RE.match(original):
        text = text.strip()

    title = text[:MAX_TITLE_LENGTH]
    newline = title.find("\n")
    if newline > -1:
        title = title[:newline]
    return title
