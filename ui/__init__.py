"""
UI layer for catalog search.

Provides response formatting and search session state.
"""

from ui.responses import (
    ResponseFormatter,
    get_response_formatter
)
from ui.state import SearchSession

__all__ = [
    'ResponseFormatter',
    'get_response_formatter',
    'SearchSession',
]
