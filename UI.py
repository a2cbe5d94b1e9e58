import io

import streamlit as st

from weaselsim.cli import run_simulation_from_config
from weaselsim.config import build_config
from weaselsim.io.reporter import HistoryReporter

# ==========================================
# 0. Page Configuration
# ==========================================
st.set_page_config(
    page_title="WEASEL",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("WEASEL")
st.caption("Hill-climbing a string of 'A's towards a target, one mutation at a time")

# ==========================================
# 1. Session State Initialization
# ==========================================

if "config" not in st.session_state:
    st.session_state.config = {
        "target": "METHINKS IT IS LIKE A WEASEL",
        "mutation": {"probability": 0.05},
        "population": {"size": 100, "filler": "A"},
        "seed": 0,
        "max_generations": 10000,
        "reporting": [{"type": "console", "interval": 1}],
    }

config = st.session_state.config

# ==========================================
# 2. Sidebar: Run Settings
# ==========================================

st.sidebar.title("Search Config")
st.sidebar.markdown("---")

config["target"] = st.sidebar.text_input(
    "Target",
    value=config["target"],
    help="Letters A-Z and space. Lowercase is upper-cased."
).upper()

config["mutation"]["probability"] = st.sidebar.slider(
    "Mutation Probability",
    min_value=0.0,
    max_value=1.0,
    value=float(config["mutation"]["probability"]),
    step=0.005,
    format="%.3f"
)

config["population"]["size"] = int(st.sidebar.number_input(
    "Population Size",
    min_value=1,
    value=config["population"]["size"],
    help="Candidate 0 is never mutated, so at least 2 are needed to make progress."
))

config["seed"] = int(st.sidebar.number_input("Seed", min_value=0, value=config["seed"]))

config["max_generations"] = int(st.sidebar.number_input(
    "Generation Cap",
    min_value=1,
    value=config["max_generations"],
    help="The search stops here even if the target was not reached."
))

# ==========================================
# 3. Run
# ==========================================

if st.button("Run Search", type="primary"):
    try:
        conf = build_config(config)
    except ValueError as e:
        st.error(str(e))
        st.stop()

    history = HistoryReporter()
    console = io.StringIO()
    with st.spinner("Evolving..."):
        try:
            result = run_simulation_from_config(conf, reporters=[history], stream=console)
        except ValueError as e:
            st.error(str(e))
            st.stop()

    if result.matched:
        st.success(f"Matched '{result.best}' after {result.generations} generations.")
    else:
        st.warning(f"Stopped after {result.generations} generations. Best: '{result.best}' "
                   f"({result.best_score}/{len(conf['target'])})")

    c1, c2, c3 = st.columns(3)
    c1.metric("Generations", result.generations)
    c2.metric("Best Score", f"{result.best_score}/{len(conf['target'])}")
    c3.metric("Seconds", f"{result.elapsed_seconds:.3f}")

    df = history.to_dataframe()
    if not df.empty:
        st.subheader("Best Score per Generation")
        st.line_chart(df.set_index("generation")["score"])

        st.subheader("Winners")
        st.dataframe(df, use_container_width=True, hide_index=True)

    with st.expander("Console Output"):
        st.code(console.getvalue())
