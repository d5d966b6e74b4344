"""Split one normalized line into code-anchored segments."""

from dataclasses import dataclass

from .item_codes import detect_item_code


@dataclass(frozen=True)
class LineSegments:
    """Leading continuation text plus the segments that start at an item code."""

    prefix: str
    segments: tuple[str, ...]


def segment_line(line: str) -> LineSegments:
    """
    Cut a line at every token where an item code starts.

    A PDF text line can hold several short rows side by side, and it can also
    begin with the tail of the previous row. That tail is returned as ``prefix``
    so the caller can attach it to the record it belongs to.
    """
    tokens = line.split()
    starts = [
        i
        for i, token in enumerate(tokens)
        if detect_item_code(token, tokens[i + 1] if i + 1 < len(tokens) else "")
    ]
    if not starts:
        return LineSegments(prefix=line, segments=())

    prefix = " ".join(tokens[: starts[0]])
    segments: list[str] = []
    for idx, start in enumerate(starts):
        end = starts[idx + 1] if idx + 1 < len(starts) else len(tokens)
        segment = " ".join(tokens[start:end])
        if segment:
            segments.append(segment)
    return LineSegments(prefix=prefix, segments=tuple(segments))
