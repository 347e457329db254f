"""Text normalization of free-text event type labels."""

from typing import Any, List


def _separator_or_letter(ch: str) -> str:
    # Digits, punctuation, symbols, underscores and numeric letters like '½' or 'Ⅻ'
    return ch if ch.isalpha() or ch.isspace() else " "


def normalize_label(label: Any) -> List[str]:
    """
    Split an event type label into lowercase word tokens.

    Digits and punctuation are replaced by a space before splitting, so
    'TSTM WIND/HAIL' gives ['tstm', 'wind', 'hail'] and '123-456' gives [].
    Any character that is not alphabetic counts as a separator.

    Args:
        label: Raw label; anything that is not a string yields no tokens

    Returns:
        Ordered list of tokens
    """
    if not isinstance(label, str):
        return []

    # Lowercase first: some letters lowercase to a letter plus a combining mark
    text = "".join(_separator_or_letter(ch) for ch in label.lower())
    return text.split()
