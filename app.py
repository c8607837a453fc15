"""
Catalog Search Streamlit App - storefront search assistant demo

Run with: streamlit run app.py

Architecture:
- This file: Streamlit UI only
- catalog_loader.py: JSON / Excel / CSV catalog files → catalog tree
- core/: Search engine (flattening, scoring, intent, views, pagination)
- ui/: Session state and Markdown formatting

Streamlit only reruns when the text input is committed (Enter or blur), so
the widget commit plays the role of the debounce timer here.
"""

import streamlit as st

from catalog_loader import CatalogLoadError, get_catalog_statistics, load_catalog
from core.context import ChipsItem, HeaderItem, ProductRowItem, SearchConfig
from core.structured_logging import setup_logging, get_logger
from ui.responses import ResponseFormatter
from ui.state import SearchSession


# =============================================================================
# CONFIGURATION
# =============================================================================

DEBUG_MODE = False  # Set to True for development debugging

setup_logging(
    log_dir="logs",
    console_level=20,  # INFO
    file_level=10,     # DEBUG
    enable_console=True,
    enable_file=False,
    enable_error_log=True,
)
app_logger = get_logger("app")

st.set_page_config(
    page_title="Catalog Search",
    page_icon="🔎",
    layout="wide"
)


def load_config() -> SearchConfig:
    """Search tunables, overridable via the [search] table in Streamlit secrets."""
    try:
        if "search" in st.secrets:
            return SearchConfig.from_dict(dict(st.secrets["search"]))
    except Exception as e:
        app_logger.warning(f"Search config not loaded from secrets: {e}")
    return SearchConfig()


# =============================================================================
# COMPONENT INITIALIZATION
# =============================================================================

@st.cache_resource
def load_snapshot(catalog_path: str):
    """Load and flatten the catalog (cached per path)."""
    try:
        catalog = load_catalog(catalog_path)
        return catalog, get_catalog_statistics(catalog), None
    except CatalogLoadError as e:
        return None, {}, str(e)


def get_session(config: SearchConfig) -> SearchSession:
    """Search session for this browser tab."""
    if "search_session" not in st.session_state:
        st.session_state.search_session = SearchSession(config=config)
    return st.session_state.search_session


# =============================================================================
# CALLBACKS
# =============================================================================

def on_query_change():
    session = st.session_state.search_session
    session.commit_query(st.session_state.query_input)


def on_pick(text: str):
    """Suggestion, chip or badge click: fresh search with that text."""
    st.session_state.query_input = text
    st.session_state.search_session.select_chip(text)


def on_load_more():
    st.session_state.search_session.load_more()


# =============================================================================
# RENDERING
# =============================================================================

def render_items(session: SearchSession, formatter: ResponseFormatter):
    """Render visible rows; chips become buttons that re-run the search."""
    for item in session.visible_items():
        if isinstance(item, HeaderItem):
            st.markdown(formatter.format_header(item))
        elif isinstance(item, ChipsItem):
            cols = st.columns(min(len(item.chips), 6))
            for i, chip in enumerate(item.chips):
                cols[i % len(cols)].button(
                    chip.text,
                    key=f"{item.key}-{i}",
                    on_click=on_pick,
                    args=(chip.text,),
                )
        elif isinstance(item, ProductRowItem):
            col_img, col_text = st.columns([1, 8])
            col_img.image(item.image_url, width=formatter.image_width)
            col_text.markdown(formatter.format_product_row(item).replace('- ', '', 1))


def main():
    st.title("🔎 Catalog Search")

    config = load_config()
    formatter = ResponseFormatter(show_images=False)

    # Sidebar - Catalog source
    with st.sidebar:
        st.header("📁 Catalog")
        catalog_path = st.text_input(
            "Catalog file",
            value="catalog.json",
            help="JSON tree, or an Excel/CSV export with category, subcategory, product columns"
        )
        if st.button("🔄 Reload catalog"):
            load_snapshot.clear()

    catalog, stats, error = load_snapshot(catalog_path)
    if error:
        st.error(f"❌ {error}")
        st.stop()
    if catalog.is_empty():
        st.warning(f"⚠️ {catalog_path} has no categories to search")
        st.stop()

    session = get_session(config)
    if session.catalog.snapshot_id != catalog.snapshot_id:
        session.replace_catalog(catalog)

    with st.sidebar:
        st.metric("Categories", stats['categories'])
        col1, col2 = st.columns(2)
        with col1:
            st.metric("Subcategories", stats['subcategories'])
        with col2:
            st.metric("Products", stats['products'])

    # Quick badges
    badges = catalog.quick_badges()
    if badges:
        cols = st.columns(min(len(badges), 8))
        for i, name in enumerate(badges):
            cols[i % len(cols)].button(name, key=f"badge-{i}", on_click=on_pick, args=(name,))

    st.text_input(
        "Search",
        key="query_input",
        placeholder="Type to explore...",
        on_change=on_query_change,
    )

    if not session.debounced_query:
        return

    result = session.result
    if result is None or not result.has_results():
        st.info(formatter.format_no_matches(session.debounced_query))

    if session.suggestions:
        st.caption(formatter.format_suggestions(session.suggestions))
        cols = st.columns(len(session.suggestions))
        for i, text in enumerate(session.suggestions):
            cols[i].button(text, key=f"suggest-{i}", on_click=on_pick, args=(text,))

    if result is not None and result.has_results():
        st.markdown(formatter.format_summary(
            session.intent_type, session.visible_product_count(), result.total_products
        ))
        render_items(session, formatter)
        if session.has_more():
            st.button("Load more", on_click=on_load_more)

    if DEBUG_MODE:
        with st.expander("🔍 Debug Info"):
            st.json(session.to_dict())


if __name__ == "__main__":
    main()
