"""
Text normalization for fuzzy matching.

Case-folds and strips diacritics so "Café" and "cafe" compare equal.
"""

import unicodedata


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(text) -> str:
    """
    Lower-case a string and remove combining diacritical marks.

    Idempotent: normalize(normalize(s)) == normalize(s).

    Args:
        text: Any string (None and non-strings yield "")

    Returns:
        Normalized string

    Example:
        >>> normalize("Crème Brûlée")
        'creme brulee'
    """
    if not isinstance(text, str) or not text:
        return ""

    folded = _fold(text)
    # Lower-casing can expose new marks or compatibility forms ("İ", "㎒")
    while True:
        again = _fold(folded)
        if again == folded:
            return folded
        folded = again
