import streamlit as st

from diffgraph_pkg import config
from diffgraph_pkg.expression import to_latex
from diffgraph_pkg.layout import clamp_point_count
from diffgraph_pkg.logging_config import setup_logging
from diffgraph_pkg.plotting import render_session
from diffgraph_pkg.session import Workspace

# Page config
st.set_page_config(
    page_title="Differential Graph",
    page_icon="📈",
    layout="wide"
)

setup_logging("WARNING")

st.title("Differential Graph")

# Workspace survives reruns; a rejected formula keeps the previous one
if "workspace" not in st.session_state:
    workspace = Workspace()
    workspace.submit(config.DEFAULT_FORMULA)
    st.session_state.workspace = workspace
workspace = st.session_state.workspace

# --- INPUT ---
with st.form("formula_form"):
    func_input = st.text_input(
        "Function f(x):",
        value=workspace.session.text if workspace.session else config.DEFAULT_FORMULA,
    )
    submitted = st.form_submit_button("OK")
    st.caption("Use math syntax, e.g., sin(x), cos(x), exp(x), x^2")

if submitted:
    result = workspace.submit(func_input)
    if not result.ok:
        st.error(f"{result.error.kind.value}: {result.error}")

raw_points = st.number_input(
    "Number of points:",
    min_value=config.MIN_POINTS,
    max_value=config.MAX_POINTS,
    value=config.DEFAULT_POINTS,
    step=1,
)
n = clamp_point_count(raw_points)

# --- CURRENT FORMULA ---
session = workspace.session
if session is not None:
    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"**Current function: f(x) = {session.text}**")
        st.latex(f"f(x) = {to_latex(session.ast)}")
    with col2:
        st.markdown(f"**Derivative: f'(x) = {session.derivative_text}**")
        st.latex(f"f'(x) = {to_latex(session.simplified_derivative)}")

    # --- VISUALIZATION ---
    st.pyplot(render_session(session, n))
else:
    st.info("Enter a function and press OK.")
