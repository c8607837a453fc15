"""
Tests for search configuration.

Run with: pytest tests/test_config.py -v
"""

import pytest

from config import settings
from core.search import SearchConfig


class TestDefaults:

    def test_defaults_match_settings(self):
        config = SearchConfig()
        assert config.debounce_ms == settings.DEBOUNCE_MS == 250
        assert config.page_size == settings.PAGE_SIZE == 20
        assert config.near_bottom_px == 40
        assert config.category_min_score == 0.58
        assert config.subcategory_min_score == 0.55
        assert config.product_min_score == 0.55
        assert config.broad_min_score == 0.45
        assert config.suggestion_count == 3
        assert config.href_prefix == "/home"

    def test_debounce_seconds(self):
        assert SearchConfig(debounce_ms=500).debounce_seconds == 0.5


class TestFromDict:

    def test_empty(self):
        assert SearchConfig.from_dict(None) == SearchConfig()
        assert SearchConfig.from_dict({}) == SearchConfig()

    def test_coerces_types(self):
        config = SearchConfig.from_dict({"page_size": "10", "category_min_score": "0.7"})
        assert config.page_size == 10
        assert config.category_min_score == 0.7

    def test_ignores_unknown_keys(self):
        config = SearchConfig.from_dict({"colour": "blue", "href_prefix": "/shop"})
        assert config.href_prefix == "/shop"
        assert not hasattr(config, "colour")

    def test_invalid_value(self):
        with pytest.raises(ValueError, match="page_size"):
            SearchConfig.from_dict({"page_size": "lots"})

    @pytest.mark.parametrize("values, field", [
        ({"page_size": 0}, "page_size"),
        ({"pool_limit": "-1"}, "pool_limit"),
        ({"broad_limit": 0}, "broad_limit"),
        ({"category_min_score": "-0.1"}, "category_min_score"),
        ({"debounce_ms": -5}, "debounce_ms"),
    ])
    def test_out_of_range(self, values, field):
        with pytest.raises(ValueError, match=field):
            SearchConfig.from_dict(values)

    def test_valid_config_builds_session(self):
        from ui.state import SearchSession

        config = SearchConfig.from_dict({"page_size": "5", "suggestion_count": 0})
        session = SearchSession(config=config)
        assert session.loaded_count == 5
