# tests/helpers.py
# Shared puzzle data and tag builders for the test modules.

SAMPLE_REGIONS = [
    "0001111223",
    "0001221223",
    "0001222223",
    "0000224433",
    "5544444433",
    "5555466663",
    "5577566663",
    "8877666663",
    "8997777663",
    "8999976666",
]


def tags_from_strings(rows):
    return [[int(ch) for ch in row] for row in rows]


def row_tags(height, width):
    """One region per row."""
    return [[r] * width for r in range(height)]
