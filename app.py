# app.py
# Streamlit front end: define, draw, simulate and swap a DFA
import logging
import os

import streamlit as st

from interpreter import Simulator, Visualizer, batch_table, build_definition, delta_table, load_dfa, split_batch, trace_table

logging.basicConfig(level=os.environ.get("DFA_APP_LOG_LEVEL", "INFO").upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("dfa_app")

DEFAULT_STATES = "q0,q1,q2"
DEFAULT_ALPHABET = "0,1"
DEFAULT_START = "q0"
DEFAULT_FINAL = "q0"
# multiples of three in binary
DEFAULT_TRANSITIONS = "(q0,0)->q0\n(q0,1)->q1\n(q1,0)->q2\n(q1,1)->q0\n(q2,0)->q1\n(q2,1)->q2"
DEFAULT_INPUT = "110"


def show_automaton(dfa):
    st.graphviz_chart(Visualizer(dfa).render())
    st.markdown("##### Transition Table (δ)")
    st.table(delta_table(dfa))

# ===================================================================
#  STREAMLIT USER INTERFACE
# ===================================================================

st.set_page_config(layout="wide")
st.title("⚙️ Deterministic Finite Automaton")
st.markdown("Define a **DFA** by its 5-tuple, then draw it, test strings against it and swap its symbols. "
            "Type `e` to test the empty string.")

if 'diagram_generated' not in st.session_state: st.session_state.diagram_generated = False
if 'dfa' not in st.session_state: st.session_state.dfa = None

with st.form("fa_form"):
    st.subheader("1. Define the Automaton (5-Tuple)")
    col1, col2 = st.columns(2)
    with col1:
        states_in = st.text_input("States (Q)", DEFAULT_STATES, help="A comma-separated list of state names.")
        alphabet_in = st.text_input("Alphabet (Σ)", DEFAULT_ALPHABET, help="A comma-separated list of single-character symbols.")
        start_state_in = st.text_input("Start State (q₀)", DEFAULT_START, help="A single state name.")
        final_states_in = st.text_input("Final States (F)", DEFAULT_FINAL, help="A comma-separated list of final state names.")
    with col2:
        transitions_in = st.text_area("Transitions (δ)", DEFAULT_TRANSITIONS, height=205, help="One transition rule per line: (state,symbol)->state")
    submitted_definition = st.form_submit_button("📊 Generate State Diagram")

if submitted_definition:
    if not all([states_in, alphabet_in, start_state_in]):
        st.warning("States, alphabet and start state are required.")
        st.session_state.diagram_generated = False
    else:
        fa_code = build_definition(states_in, alphabet_in, start_state_in, final_states_in, transitions_in)
        try:
            st.session_state.dfa = load_dfa(fa_code); st.session_state.diagram_generated = True
            logger.info("Loaded %r", st.session_state.dfa)
        except (SyntaxError, ValueError) as e:
            logger.warning("Rejected definition: %s", e)
            st.error(f"⚠️ **Error in definition:**\n\n{e}"); st.session_state.diagram_generated = False
        except Exception as e:
            logger.exception("Unexpected error while loading definition")
            st.error(f"An unexpected error occurred: {e}"); st.session_state.diagram_generated = False

if st.session_state.diagram_generated:
    dfa = st.session_state.dfa
    st.markdown("---"); st.subheader("Your Automaton's Structure")
    show_automaton(dfa)
    with st.expander("Canonical description"):
        st.code(str(dfa), language=None)
    st.markdown("---")

    with st.form("simulation_form"):
        st.subheader("2. Test a Sequence")
        input_string = st.text_input("Enter the sequence to test:", DEFAULT_INPUT)
        submitted_simulation = st.form_submit_button("▶️ Run Simulation")

    if submitted_simulation:
        st.subheader("Simulation Results")
        result, trace, path = Simulator(dfa).run_with_trace(input_string)
        if result == "Accepted": st.success(f"✔️ **Result:** The sequence '{input_string}' is **Accepted**.")
        else: st.error(f"❌ **Result:** The sequence '{input_string}' is **Rejected**."); st.caption(result)
        if trace:
            st.markdown("##### Execution Trace")
            st.table(trace_table(trace))
        if path:
            st.write(f"**End of sequence.** The machine finished in state **`{path[-1]}`**.")

    with st.form("batch_form"):
        st.subheader("3. Test Many Sequences")
        batch_in = st.text_area("One sequence per line:", "e\n0\n11\n110\n111", height=150)
        submitted_batch = st.form_submit_button("▶️ Run All")

    if submitted_batch:
        strings = split_batch(batch_in)
        st.dataframe(batch_table(dfa, strings), hide_index=True)

    with st.form("swap_form"):
        st.subheader("4. Swap Two Symbols")
        sigma = dfa.get_sigma()
        col1, col2 = st.columns(2)
        with col1: symb1 = st.selectbox("First symbol", sigma, index=0 if sigma else None)
        with col2: symb2 = st.selectbox("Second symbol", sigma, index=min(1, len(sigma) - 1) if sigma else None)
        submitted_swap = st.form_submit_button("🔁 Swap")

    if submitted_swap:
        swapped = dfa.swap(symb1, symb2)
        if swapped is None:
            st.error("Both symbols must belong to the alphabet.")
        else:
            st.markdown(f"##### Swapped '{symb1}' ↔ '{symb2}'")
            show_automaton(swapped)
            st.code(str(swapped), language=None)
