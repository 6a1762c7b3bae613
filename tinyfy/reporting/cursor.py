from tinyfy.editor.base import BaseDocument


def offset_for(text: str, line: int, column: int) -> int:
    """Convert a 0-based (line, column) pair into a character offset.

    Lines past the end of the text clamp to the last line; the result
    never exceeds the text length.
    """
    lines = text.split("\n")
    position = sum(len(current) + 1 for current in lines[: min(max(line, 0), len(lines))])
    position += max(column, 0)
    return min(position, len(text))


def jump_to_error(document: BaseDocument, line: int, column: int) -> int:
    """Select the error location in the document and return its offset."""
    position = offset_for(document.text, line, column)
    document.select_offset(position)
    return position
