def column_index(cell_ref: str) -> int:
    """
    Convert a cell reference like "C5" into a 0-based column index.

    Column letters form a base-26 number without a zero digit (A=1 ... Z=26),
    so "A1" -> 0, "Z1" -> 25 and "AA1" -> 26. The row number is only stripped.

    Returns:
        The 0-based column, or -1 when the reference has no column letters or
        contains characters other than ASCII letters before the row number.
    """
    letters = cell_ref.rstrip("0123456789").upper()
    if not letters:
        return -1

    idx = 0
    for char in letters:
        if not "A" <= char <= "Z":
            return -1
        idx = idx * 26 + (ord(char) - 64)  # A=1
    return idx - 1
