"""
Streamlit UI -- KPI Generator.

Features:
  - Domain / column inputs and a tier selector (default: all tiers)
  - One generation call per click, guarded against blank inputs
  - Overview table plus a card per KPI with SQL, Pandas and DAX snippets
  - Copy-to-clipboard for each snippet
  - Plain-text download of every result
"""
import streamlit as st
import streamlit.components.v1 as components

from src.kpi.export import (
    EXPORT_FILENAME,
    EXPORT_MIME,
    SNIPPET_FIELDS,
    kpis_to_frame,
    render_text_export,
)
from src.ui.client import KPIClient, ViewState, clipboard_script, run_generation, tier_options


_CODE_LANGUAGES = {"sql": "sql", "pandas": "python", "dax": None}

st.set_page_config(
    page_title="KPI Generator",
    page_icon="bar_chart",
    layout="centered",
)


if "view" not in st.session_state:
    st.session_state.view = ViewState()

if "tier_options" not in st.session_state:
    with KPIClient() as client:
        st.session_state.tier_options = tier_options(client)

view: ViewState = st.session_state.view


def _start_generation() -> None:
    # runs before the rerun, so the button is drawn disabled for the whole call
    view.loading = True


def _show_notice(notice) -> None:
    if notice.kind == "success":
        st.toast(f"**{notice.title}** -- {notice.message}")
    else:
        st.error(f"**{notice.title}**  \n{notice.message}")


def _copy_to_clipboard(text: str, label: str) -> None:
    components.html(clipboard_script(text), height=0)
    st.toast(f"{label} code copied to clipboard.")


def _render_kpi(index: int, kpi: dict) -> None:
    with st.container(border=True):
        head, badge = st.columns([5, 1])
        head.subheader(kpi["name"])
        head.caption(kpi["description"])
        badge.markdown(f"`{kpi['tier']}`")

        for field, label in SNIPPET_FIELDS.items():
            title, button = st.columns([5, 1])
            title.markdown(f"**{label} {'Code' if field == 'pandas' else 'Query'}**")
            if button.button("Copy", key=f"copy_{field}_{index}"):
                _copy_to_clipboard(kpi[field], label)
            st.code(kpi[field], language=_CODE_LANGUAGES[field])



st.title("KPI Generator")
st.markdown("Generate relevant KPIs with SQL, Pandas, and DAX queries")


# ── Dataset Information ─────────────────────────────────
st.subheader("Dataset Information")
st.caption("Describe your data domain and provide column headings to get personalized KPI suggestions")

view.domain = st.text_area(
    "Data Domain & Description",
    key="domain_input",
    placeholder=(
        "e.g., E-commerce retail platform with customer transactions, product catalog, "
        "and user behavior data. We track sales, inventory, customer engagement, and marketing campaigns..."
    ),
    height=100,
)
view.columns = st.text_area(
    "Dataset Column Headings",
    key="columns_input",
    placeholder=(
        "e.g., customer_id, order_date, product_id, quantity, price, category, customer_age, "
        "region, payment_method, discount_applied, shipping_cost..."
    ),
    height=80,
)

options = st.session_state.tier_options
labels = {t["value"]: t["label"] for t in options}
view.selected_tier = st.radio(
    "KPI Tier Focus",
    [t["value"] for t in options],
    key="tier_input",
    format_func=labels.get,
    captions=[t.get("summary", "") for t in options],
    horizontal=True,
)

st.button(
    "Generate KPI Suggestions",
    type="primary",
    use_container_width=True,
    disabled=view.loading,
    on_click=_start_generation,
)

if view.loading:
    with st.spinner("Generating KPIs..."):
        with KPIClient() as client:
            st.session_state.notice = run_generation(view, client)
    st.rerun()

if "notice" in st.session_state:
    _show_notice(st.session_state.pop("notice"))


# ── Results ─────────────────────────────────────────────
if view.results:
    left, right = st.columns([3, 1])
    left.subheader(f"Generated KPIs ({len(view.results)})")
    if right.download_button(
        "Download Results",
        render_text_export(view.results),
        file_name=EXPORT_FILENAME,
        mime=EXPORT_MIME,
    ):
        st.toast("Your KPI suggestions are being downloaded.")

    st.dataframe(kpis_to_frame(view.results), use_container_width=True, hide_index=True)

    for i, kpi in enumerate(view.results):
        _render_kpi(i, kpi)

elif view.is_empty:
    st.info(
        "**Ready to Generate KPIs**  \n"
        "Fill in your dataset information above to get personalized KPI suggestions "
        "with SQL, Pandas, and DAX queries."
    )
