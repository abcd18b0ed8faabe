"""A1 notation helpers.

Columns are alphabetical and 1-based: 1 -> A, 26 -> Z, 27 -> AA, up to
18278 -> ZZZ. Rows are 1-based integers.
"""

MAX_COLUMNS = 18278


def column_letter(index: int) -> str:
    """Convert a 1-based column index to its letters.

    Raises:
        ValueError: If index is outside 1..MAX_COLUMNS
    """
    if not 1 <= index <= MAX_COLUMNS:
        raise ValueError(f"column index must be between 1 and {MAX_COLUMNS}, got {index}")
    letters = ""
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def column_index(letters: str) -> int:
    """Convert column letters back to a 1-based index."""
    if not letters or not letters.isalpha():
        raise ValueError(f"invalid column letters: '{letters}'")
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    if index > MAX_COLUMNS:
        raise ValueError(f"column '{letters}' is beyond {MAX_COLUMNS} columns")
    return index


def a1_range(sheet: str, start_col: int, start_row: int, end_col: int, end_row: int) -> str:
    """Build a bounded range like "y7_results!D9:H24"."""
    return (
        f"{sheet}!{column_letter(start_col)}{start_row}"
        f":{column_letter(end_col)}{end_row}"
    )
