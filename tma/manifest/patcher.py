"""Line insertion into bracketed lists embedded in manifest text.

Tuist manifests are Swift source files.  Rather than parsing Swift, the
patcher finds a literal anchor that ends with the list's opening bracket
(``projects: [``), walks forward counting ``[``/``]`` until the bracket that
closes that list, and inserts one new line in front of it.

The scanner does not understand string literals: an unbalanced bracket
inside a quoted string within the list will throw the depth count off.
Anchors are produced by ``tma init`` itself, so in practice the lists it
edits only contain quoted paths and ``.project(...)`` expressions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

OPENING_BRACKET = "["
CLOSING_BRACKET = "]"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PatchError(Exception):
    """Raised when a manifest does not have the expected shape."""

    def __init__(self, anchor: str, message: str) -> None:
        self.anchor = anchor
        super().__init__(message)


class AnchorNotFoundError(PatchError):
    """The anchor text does not occur in the document."""

    def __init__(self, anchor: str) -> None:
        super().__init__(anchor, f"Could not find '{anchor}'")


class ClosingBracketNotFoundError(PatchError):
    """The list opened by the anchor is never closed."""

    def __init__(self, anchor: str) -> None:
        super().__init__(anchor, f"No closing '{CLOSING_BRACKET}' for list opened by '{anchor}'")


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


class PatchStatus(str, Enum):
    """Outcome of a successful :func:`insert_into_list` call."""
    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"


@dataclass(frozen=True)
class InsertionTarget:
    """Where a list lives inside a document.

    ``search_from`` is where the anchor lookup started; ``list_start`` is the
    offset right after the anchor (inside the list) and ``close`` the offset
    of the bracket that terminates it.  Offsets are only valid for the text
    they were computed from.
    """

    anchor: str
    search_from: int
    list_start: int
    close: int
    closing: str = CLOSING_BRACKET


@dataclass(frozen=True)
class PatchResult:
    """New document text plus what happened to it."""

    text: str
    status: PatchStatus
    position: int | None = None

    @property
    def changed(self) -> bool:
        return self.status is PatchStatus.INSERTED


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def find_closing_bracket(
    text: str,
    start: int,
    opening: str = OPENING_BRACKET,
    closing: str = CLOSING_BRACKET,
) -> int | None:
    """Return the offset of the bracket closing a list whose body starts at *start*.

    Depth is 1 at *start* (the opening bracket has already been consumed).
    Nested lists are skipped, so for ``["a", ["b", "c"]]`` the outer ``]`` is
    returned.  Returns ``None`` when the text ends first.
    """
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return index
    return None


def locate(document: str, anchor: str, search_from: int = 0) -> InsertionTarget:
    """Resolve the list that *anchor* opens, searching from *search_from*.

    Raises:
        AnchorNotFoundError: The anchor does not occur after *search_from*.
        ClosingBracketNotFoundError: The list is never closed.
    """
    anchor_at = document.find(anchor, search_from)
    if anchor_at == -1:
        raise AnchorNotFoundError(anchor)
    list_start = anchor_at + len(anchor)
    close = find_closing_bracket(document, list_start)
    if close is None:
        raise ClosingBracketNotFoundError(anchor)
    return InsertionTarget(
        anchor=anchor,
        search_from=search_from,
        list_start=list_start,
        close=close,
    )


def _strip_line_comment(line: str) -> str:
    """Drop a ``//`` comment from *line*, ignoring ``//`` inside string literals."""
    in_string = False
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = in_string
        elif char == '"':
            in_string = not in_string
        elif not in_string and line.startswith("//", index):
            return line[:index]
    return line


def _needs_separator(document: str, target: InsertionTarget) -> bool:
    """True if the list's last element is not followed by a comma.

    Trailing line comments and comment-only lines are not elements, so
    ``"App", // main app`` already ends with its separator.
    """
    body = document[target.list_start:target.close]
    for line in reversed(body.splitlines()):
        code = _strip_line_comment(line).rstrip()
        if code:
            return not code.endswith(",")
    return False


# ---------------------------------------------------------------------------
# Insertion
# ---------------------------------------------------------------------------


def insert_into_list(
    document: str,
    anchor: str,
    entry: str,
    indent: str = "    ",
    *,
    search_from: int = 0,
    closing_indent: str = "",
) -> PatchResult:
    """Insert ``indent + entry + ","`` as the last element of a bracketed list.

    Args:
        document: Full manifest text.
        anchor: Literal text that opens the list and ends with ``[``, e.g.
            ``"projects: ["``.
        entry: The element to add, on a single line.
        indent: Prefix written before *entry*.
        search_from: Offset at which the anchor lookup starts.  Used to pick
            the list of one particular block when the anchor text occurs
            several times in the document.
        closing_indent: Written after the newline when the closing bracket
            has to be moved onto its own line.

    Returns:
        A :class:`PatchResult`.  If *entry* already occurs anywhere in the
        document, the text is returned unchanged with ``ALREADY_PRESENT``.

    Raises:
        ValueError: *entry* is empty or spans lines, or *anchor* does not end
            with an opening bracket.
        AnchorNotFoundError: *anchor* does not occur after *search_from*.
        ClosingBracketNotFoundError: The list opened by *anchor* never closes.
    """
    if not entry or "\n" in entry or "\r" in entry:
        raise ValueError(f"entry must be a single non-empty line, got {entry!r}")
    if not anchor.rstrip().endswith(OPENING_BRACKET):
        raise ValueError(f"anchor must end with '{OPENING_BRACKET}', got {anchor!r}")

    if document.find(anchor, search_from) == -1:
        raise AnchorNotFoundError(anchor)

    if entry in document:
        return PatchResult(text=document, status=PatchStatus.ALREADY_PRESENT)

    target = locate(document, anchor, search_from)

    line = f"{indent}{entry},"
    if _needs_separator(document, target):
        line = "," + line
    text = document[:target.close] + line + document[target.close:]

    # The bracket moved right by the length of the inserted line.
    close = target.close + len(line)
    if text[close - 1] != "\n":
        text = text[:close] + "\n" + closing_indent + text[close:]

    return PatchResult(text=text, status=PatchStatus.INSERTED, position=target.close)
