"""Documentation block parser.

Splits a doc comment (``/** ... */`` block or plain docstring) into its
leading description and a map of ``@tag`` bodies.
"""

import re

from .base import TagMap

TAG_INTRODUCER = "@"

_FRAME_OPEN_RE = re.compile(r"^\s*/\*\*+")
_FRAME_CLOSE_RE = re.compile(r"\*+/\s*$")
_DECORATION_RE = re.compile(r"^[ \t]*\*?[ \t]*", re.MULTILINE)
_SPAN_RE = re.compile(r"([\w\-]+)\s*(.*)", re.DOTALL)
_LINE_PREFIX_RE = re.compile(r"[ \t]*\*?[ \t]*")

TAG_ALIASES = {"return": "returns"}


def normalize(content: str) -> str:
    """Strip per-line comment decoration and surrounding whitespace."""
    return _DECORATION_RE.sub("", content).strip()


def parse_block(doc_block: str | None) -> TagMap:
    """Parse a documentation block into a tag map.

    Repeated tags are collected into a list in source order. The text before
    the first tag is stored under the ``description`` key.
    """
    tags: TagMap = {"description": ""}
    if doc_block is None:
        return tags

    lead, spans = _split_spans(_strip_frame(doc_block))
    tags["description"] = normalize(lead)

    for span in spans:
        match = _SPAN_RE.match(span)
        if not match:
            # Nameless span, skip it and keep going
            continue
        _add_tag(tags, _canonical(match.group(1)), normalize(match.group(2)))
    return tags


def get_tag(name: str, doc_block: str | None) -> str | None:
    """Return the body of the first ``@name`` tag, or None if it is absent.

    Only a tag that opens a doc line counts, so ``@name`` inside prose is ignored.
    """
    if doc_block is None:
        return None
    wanted = _canonical(name)
    text = _strip_frame(doc_block)
    starts = _tag_starts(text)
    for start, end in zip(starts, starts[1:] + [len(text)]):
        if not _starts_line(text, start):
            continue
        match = _SPAN_RE.match(text, start + 1, end)
        if match and _canonical(match.group(1)) == wanted:
            return normalize(match.group(2))
    return None


def tag_values(tags: TagMap, name: str) -> list[str]:
    """Return all bodies of a tag as a list (empty when the tag is absent)."""
    value = tags.get(name)
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def _canonical(name: str) -> str:
    return TAG_ALIASES.get(name, name)


def _add_tag(tags: TagMap, name: str, value: str) -> None:
    if name not in tags:
        tags[name] = value
    elif isinstance(tags[name], list):
        tags[name].append(value)
    else:
        tags[name] = [tags[name], value]


def _strip_frame(doc_block: str) -> str:
    text = _FRAME_OPEN_RE.sub("", doc_block, count=1)
    return _FRAME_CLOSE_RE.sub("", text, count=1)


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _is_introducer(text: str, pos: int) -> bool:
    """An ``@`` starts a tag unless it is glued to a word, braced or escaped."""
    if text[pos] != TAG_INTRODUCER:
        return False
    if pos > 0:
        prev = text[pos - 1]
        if _is_word_char(prev) or prev in "{\\":
            return False
    nxt = text[pos + 1:pos + 2]
    return bool(nxt) and (_is_word_char(nxt) or nxt == "-")


def _starts_line(text: str, pos: int) -> bool:
    """True when only comment decoration precedes ``pos`` on its line."""
    line_start = text.rfind("\n", 0, pos) + 1
    return _LINE_PREFIX_RE.fullmatch(text, line_start, pos) is not None


def _tag_starts(text: str) -> list[int]:
    return [pos for pos in range(len(text)) if _is_introducer(text, pos)]


def _split_spans(text: str) -> tuple[str, list[str]]:
    """Split text into (leading description, [tag spans without the introducer])."""
    starts = _tag_starts(text)
    if not starts:
        return text, []
    ends = starts[1:] + [len(text)]
    spans = [text[start + 1:end] for start, end in zip(starts, ends)]
    return text[:starts[0]], spans
