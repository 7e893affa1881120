"""
Dataset Analysis Application

A Streamlit app for descriptive statistics over categorized datasets:
- Category frequency distribution
- Deduplicated keyword frequency distribution
- Interactive charts and tables
- JSON, CSV, and Excel export
"""
import streamlit as st
import logging

# Page config must be first
st.set_page_config(
    page_title="Dataset Analysis Tool",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Imports
from config.settings import get_settings
from core.exceptions import InputFormatError
from core.job_manager import JobManager
from core.logging_setup import configure_logging
from ingestion.csv_parser import preview_uploaded_file
from visualization.charts import (
    create_category_bar,
    create_category_pie,
    create_top_keywords_bar
)
from visualization.metrics_display import (
    display_summary_metrics,
    display_category_table,
    display_keyword_table,
    display_unique_keywords,
    display_exclusion_summary
)
from export.json_exporter import JSONExporter
from export.csv_exporter import CSVExporter, create_download_link
from export.excel_exporter import ExcelExporter

LOGGER = logging.getLogger(__name__)


@st.cache_resource
def setup_logging() -> bool:
    """Configure logging once per server process."""
    configure_logging(get_settings())
    return True


def init_session_state():
    """Initialize session state variables."""
    defaults = {
        "error": None,
        "csv_preview": None,
        "csv_parser": None,
        "file_key": None,
        "file_name": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def render_sidebar() -> dict:
    """Render sidebar with display options."""
    settings = get_settings()
    st.sidebar.title("📊 Dataset Analysis")

    st.sidebar.markdown("### Display")

    top_chart = st.sidebar.slider(
        "Keywords in Chart",
        min_value=5,
        max_value=50,
        value=settings.display.top_keywords_chart
    )

    top_table = st.sidebar.slider(
        "Keywords in Table",
        min_value=10,
        max_value=200,
        value=settings.display.top_keywords_table,
        step=10
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Keyword Deduplication")
    st.sidebar.caption(
        "Within each row, keywords are lowercased and trimmed. A keyword "
        "is dropped when an earlier one in the same row is identical, is "
        "its plural/singular form, or contains it (or is contained in it) "
        f"and the shorter one has at least "
        f"{settings.normalization.min_substring_length} characters."
    )

    return {
        "top_keywords_chart": top_chart,
        "top_keywords_table": top_table
    }


def _default_index(options: list, detected) -> int:
    if detected is None:
        return 0
    try:
        return options.index(detected)
    except ValueError:
        return 0


def render_upload_section():
    """Render file upload section with column selection."""
    st.markdown("## 📤 Upload Dataset")

    uploaded_file = st.file_uploader(
        "Upload CSV File",
        type=["csv"],
        help="Rows need a category, a department, and comma-separated keywords"
    )

    if uploaded_file is None:
        st.session_state.csv_preview = None
        st.session_state.csv_parser = None
        st.session_state.file_key = None
        return

    file_key = f"{uploaded_file.name}_{uploaded_file.size}"

    if st.session_state.file_key != file_key:
        try:
            parser, preview = preview_uploaded_file(uploaded_file)
        except InputFormatError as e:
            LOGGER.warning("Could not read %s: %s", uploaded_file.name, e)
            st.error(e.message)
            return
        st.session_state.csv_parser = parser
        st.session_state.csv_preview = preview
        st.session_state.file_key = file_key
        st.session_state.file_name = uploaded_file.name

    preview = st.session_state.csv_preview
    parser = st.session_state.csv_parser

    st.success(
        f"📄 Loaded **{preview['row_count']:,}** rows "
        f"with **{len(preview['columns'])}** columns"
    )

    if preview["warnings"]:
        with st.expander(f"⚠️ {len(preview['warnings'])} parsing warnings"):
            for warning in preview["warnings"]:
                st.markdown(f"• {warning}")

    st.markdown("### Select Columns")
    col_a, col_b, col_c = st.columns(3)

    with col_a:
        cat_options = [""] + preview["columns"]
        category_col = st.selectbox(
            "**Category Column** (required)",
            options=cat_options,
            index=_default_index(
                cat_options, preview["detected_category_column"]
            )
        )

    with col_b:
        kw_options = [""] + preview["columns"]
        keywords_col = st.selectbox(
            "**Keywords Column** (required)",
            options=kw_options,
            index=_default_index(
                kw_options, preview["detected_keywords_column"]
            ),
            help="Comma-separated keywords per row"
        )

    with col_c:
        dept_options = ["(none)"] + preview["columns"]
        department_col = st.selectbox(
            "Department Column (optional)",
            options=dept_options,
            index=_default_index(
                dept_options, preview["detected_department_column"]
            )
        )

    with st.expander("📋 Preview Data"):
        import pandas as pd
        st.dataframe(
            pd.DataFrame(preview["sample_data"]),
            use_container_width=True
        )

    if not category_col or not keywords_col:
        st.warning("⚠️ Please select the category and keywords columns")
        return

    if st.button("🚀 Analyze Dataset", type="primary"):
        dept = department_col if department_col != "(none)" else None
        try:
            rows = parser.parse_with_selection(
                category_column=category_col,
                keywords_column=keywords_col,
                department_column=dept
            )
        except InputFormatError as e:
            st.error(e.message)
            return

        LOGGER.info("Column selection: %s", parser.get_column_info())
        run_analysis(rows, st.session_state.file_name)


def run_analysis(rows: list, source_name: str):
    """Run the analysis with a progress bar and record the outcome."""
    LOGGER.info("Analyzing %s (%d rows)", source_name, len(rows))
    manager = JobManager()
    progress_bar = st.progress(0, text="Analyzing dataset...")

    def update_progress(stage, pct, msg):
        progress_bar.progress(pct, text=msg)

    job = manager.run_analysis(
        rows,
        source_name=source_name,
        progress_callback=update_progress
    )

    if job.succeeded:
        st.session_state.error = None
        st.rerun()
    else:
        progress_bar.empty()
        st.session_state.error = job.error_message


def render_results(result, config: dict):
    """Render analysis results."""
    settings = get_settings()
    colors = settings.display.chart_colors

    st.markdown("## 📊 Dataset Analysis Dashboard")

    display_summary_metrics(
        total_records=result.total_records,
        total_categories=result.total_categories,
        total_unique_keywords=result.total_unique_keywords,
        total_keywords=result.total_keyword_instances
    )

    display_exclusion_summary(
        result.excluded_records,
        result.exclusion_reasons,
        result.suppressed_variants
    )

    tab1, tab2, tab3, tab4 = st.tabs([
        "🗂️ Categories",
        "🔑 Keywords",
        "🔤 Unique Keywords",
        "📥 Export"
    ])

    with tab1:
        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(
                create_category_bar(result.category_stats, color=colors[0]),
                use_container_width=True
            )
        with col2:
            st.plotly_chart(
                create_category_pie(result.category_stats, colors=colors),
                use_container_width=True
            )

        st.markdown("### Category Breakdown")
        display_category_table(result.category_stats)

    with tab2:
        st.plotly_chart(
            create_top_keywords_bar(
                result.keyword_stats,
                top_n=config["top_keywords_chart"],
                color=colors[1]
            ),
            use_container_width=True
        )

        st.markdown("### Keyword Analysis")
        display_keyword_table(
            result.keyword_stats,
            limit=config["top_keywords_table"]
        )

    with tab3:
        display_unique_keywords(result.unique_keywords)

    with tab4:
        render_export_section(result, config)


def render_export_section(result, config: dict):
    """Render download buttons for all export formats."""
    export_settings = get_settings().export

    st.markdown("### Export Results")
    col1, col2, col3 = st.columns(3)

    with col1:
        st.markdown("#### JSON")
        json_exporter = JSONExporter(indent=export_settings.json_indent)
        st.download_button(
            label="📄 Download Results",
            data=json_exporter.export_bytes(result),
            file_name=export_settings.json_filename,
            mime="application/json"
        )

    with col2:
        st.markdown("#### CSV")
        csv_exporter = CSVExporter()
        st.download_button(
            label="🗂️ Download Categories CSV",
            data=create_download_link(
                csv_exporter.export_categories(result.category_stats),
                export_settings.categories_csv_filename
            ),
            file_name=export_settings.categories_csv_filename,
            mime="text/csv"
        )
        st.download_button(
            label="🔑 Download Keywords CSV",
            data=create_download_link(
                csv_exporter.export_keywords(result.keyword_stats),
                export_settings.keywords_csv_filename
            ),
            file_name=export_settings.keywords_csv_filename,
            mime="text/csv"
        )
        st.download_button(
            label="🔤 Download Unique Keywords CSV",
            data=create_download_link(
                csv_exporter.export_unique_keywords(result.unique_keywords),
                export_settings.unique_keywords_csv_filename
            ),
            file_name=export_settings.unique_keywords_csv_filename,
            mime="text/csv"
        )
        st.download_button(
            label="📋 Download Full Report CSV",
            data=create_download_link(
                csv_exporter.export_full_report(result),
                export_settings.report_csv_filename
            ),
            file_name=export_settings.report_csv_filename,
            mime="text/csv"
        )

    with col3:
        st.markdown("#### Excel")
        excel_exporter = ExcelExporter(
            top_keywords_chart=config["top_keywords_chart"]
        )
        st.download_button(
            label="📊 Download Excel Report",
            data=excel_exporter.export_full_report(result),
            file_name=export_settings.excel_filename,
            mime="application/vnd.openxmlformats-officedocument"
                 ".spreadsheetml.sheet"
        )


def main():
    """Main application entry point."""
    setup_logging()
    init_session_state()

    config = render_sidebar()

    st.title("📊 Dataset Analysis Tool")
    st.markdown(
        "Upload a dataset with category, department, and keyword columns "
        "to see how records and keywords are distributed."
    )

    manager = JobManager()
    result = manager.get_latest_result()

    # Upload stays available; a new run replaces the dashboard only on success
    render_upload_section()

    # Show error if any; the previous dashboard stays visible
    if st.session_state.error:
        st.error(st.session_state.error)

    if result is not None:
        render_results(result, config)

        if st.button("🔄 Start New Analysis"):
            manager.reset()
            for key in list(st.session_state.keys()):
                del st.session_state[key]
            st.rerun()


if __name__ == "__main__":
    main()
