import streamlit as st
import streamlit.components.v1 as components

from utils.api_client import AnalyzerApiClient
from utils.config import load_settings
from utils.prompt_session import PromptSession

LEVEL_ICONS = {"strong": "🟢", "ok": "🟡", "weak": "🟠", "missing": "🔴"}


# Page config
st.set_page_config(page_title="Prompt Analyzer", page_icon="🧠", layout="wide")

settings = load_settings()

if "session" not in st.session_state:
    st.session_state.session = PromptSession()
session: PromptSession = st.session_state.session

# The text area owns the prompt between reruns; session mirrors it
if "prompt_text" not in st.session_state:
    st.session_state.prompt_text = session.prompt_text


def _sync_prompt():
    session.prompt_text = st.session_state.prompt_text


def _on_analyze():
    _sync_prompt()
    client = AnalyzerApiClient(st.session_state.api_url)
    with st.spinner("🔄 Analyzing prompt..."):
        session.analyze(client)


def _on_use_improved():
    if session.use_improved_prompt():
        st.session_state.prompt_text = session.prompt_text


# Title and description
st.title("🧠 Prompt Analyzer")
st.markdown("""
Paste any prompt and let Gemini grade it on context, goal, format, constraints, and examples.
Get an improved version with one click.
""")

# Sidebar for configuration
st.sidebar.header("⚙️ Configuration")
st.sidebar.text_input(
    "API Endpoint", value=settings.api_url, key="api_url", help="FastAPI backend URL"
)

col1, col2 = st.columns([1.1, 1])

with col1:
    st.subheader("✍️ Your prompt")
    st.text_area(
        "Paste a prompt and let Gemini analyze it against the checklist:",
        key="prompt_text",
        height=260,
        placeholder="Describe your task, context, and desired output...",
        on_change=_sync_prompt,
    )

    col_btn1, col_btn2, col_count = st.columns([1, 1, 1])
    with col_btn1:
        st.button(
            "Analyzing..." if session.is_busy else "🚀 Analyze prompt",
            key="analyze",
            type="primary",
            use_container_width=True,
            disabled=session.is_busy or not st.session_state.prompt_text.strip(),
            on_click=_on_analyze,
        )
    with col_btn2:
        st.button(
            "✨ Use improved prompt",
            key="use_improved",
            use_container_width=True,
            disabled=session.analysis is None,
            on_click=_on_use_improved,
        )
    with col_count:
        st.caption(f"{len(st.session_state.prompt_text.strip())} characters")

    if session.error:
        st.error(f"❌ {session.error}")

with col2:
    st.subheader("📊 Overview")

    col_score, col_status = st.columns(2)
    with col_score:
        st.metric("Overall score", f"{session.overall_score}/100")
        st.caption(session.overall_label)
    with col_status:
        st.markdown("**Analysis status**")
        st.caption(session.status_text)

    st.progress(session.overall_score / 100)

    for criterion in session.criteria_rows():
        with st.container(border=True):
            col_label, col_value = st.columns([3, 1])
            with col_label:
                st.markdown(f"**{criterion.label}**")
                st.caption(criterion.feedback)
            with col_value:
                st.markdown(f"{LEVEL_ICONS[criterion.level]} **{criterion.score}/100**")
                st.caption(criterion.level.capitalize())

    # Ready-to-copy improved prompt
    st.markdown("---")
    st.subheader("📋 Ready-to-copy prompt")
    if session.improved_prompt.strip():
        components.html(session.copy_button(), height=48)
        st.code(session.improved_prompt, language=None, wrap_lines=True)
    else:
        st.info("Run an analysis first to generate an improved, export-ready prompt.")

# Suggestions
st.markdown("---")
st.subheader("💡 Targeted suggestions")
if session.analysis is None:
    st.caption("Run an analysis to see targeted suggestions for upgrading your prompt.")
elif not session.analysis.suggestions:
    st.success("Gemini didn't find any major issues. Try changing your goal or context to explore variants.")
else:
    for suggestion in session.analysis.suggestions:
        st.markdown(f"- {suggestion}")

# Footer
st.markdown("---")
st.markdown(
    """
<div style='text-align: center; color: gray;'>
    <small>Powered by Google Gemini AI | Built with Streamlit & FastAPI</small>
</div>
""",
    unsafe_allow_html=True,
)
