"""
"Did you mean" suggestions for catalog search.
"""

from core.context import Intent
from config.settings import SUGGESTION_COUNT


def extract_suggestions(intent: Intent, limit: int = SUGGESTION_COUNT) -> list[str]:
    """
    Names of an intent's runner-up candidates, in score order.

    Blank names are skipped. Selecting one of these should re-run the whole
    search with the name as the new query, not jump into a cached result.

    Args:
        intent: Classified intent
        limit: Maximum names to return

    Returns:
        Up to `limit` entity names
    """
    names = []
    for match in intent.suggestions:
        name = getattr(match.item, "name", "")
        if name:
            names.append(name)
        if len(names) >= limit:
            break
    return names
