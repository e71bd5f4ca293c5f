import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import streamlit as st

from kmap_loops.draw import draw_kmap, figure_to_png, loop_color
from kmap_loops.errors import KMapError
from kmap_loops.grid_state import KMapGrid
from kmap_loops.kmap_engine import GRID_VARS, rc_to_idx
from kmap_loops.logic import MAX_VARS, MIN_VARS, parse_expression
from kmap_loops.pipeline import solve_and_build
from kmap_loops.share import (
    BatchItem,
    batch_to_csv,
    decode_share_params,
    encode_share_params,
    parse_int_list,
)

# ------------------------------- page setup -------------------------------

st.set_page_config(page_title="K-Map Loops", layout="wide")
st.title("🧮 K-Map Loops")
st.markdown("---")

shared = decode_share_params(dict(st.query_params))
default_n = shared.nvars if shared and MIN_VARS <= shared.nvars <= MAX_VARS else 4

if "batch" not in st.session_state:
    st.session_state["batch"] = []

mode = st.radio("Input mode:", ["Minterms", "Expression", "Interactive grid"])
n = st.number_input(
    "Number of variables:", min_value=MIN_VARS, max_value=MAX_VARS, value=default_n, step=1
)
n = int(n)


# ------------------------------- interactive grid -------------------------------
def grid_for(nvars: int) -> KMapGrid:
    key = f"grid_{nvars}"
    if key not in st.session_state:
        st.session_state[key] = KMapGrid(nvars)
    return st.session_state[key]


def draw_interactive_grid(grid: KMapGrid) -> None:
    for r in range(grid.nrows):
        row_cols = st.columns(grid.ncols)
        for c in range(grid.ncols):
            state = grid.state_at(r, c)
            idx = rc_to_idx(grid.nvars, r, c)
            if row_cols[c].button(state.symbol, key=f"cell_{grid.nvars}_{r}_{c}", help=f"Minterm {idx}"):
                grid.cycle(r, c)
                st.rerun()
    if st.button("Clear grid"):
        grid.clear()
        st.rerun()


if mode == "Minterms":
    raw_mins = st.text_input(
        "Minterms (e.g. 1,3,5,7):", value=",".join(map(str, shared.minterms)) if shared else ""
    )
    raw_dcs = st.text_input(
        "Don't cares (optional):", value=",".join(map(str, shared.dontcares)) if shared else ""
    )
elif mode == "Expression":
    raw_expr = st.text_input("Expression (e.g. A'BC + AB'):")
else:
    if n in GRID_VARS:
        draw_interactive_grid(grid_for(n))
    else:
        st.info("Interactive mode available for 2-4 variables only.")


def read_inputs():
    if mode == "Minterms":
        return parse_int_list(raw_mins), parse_int_list(raw_dcs)
    if mode == "Expression":
        return parse_expression(raw_expr, n), []
    if n not in GRID_VARS:
        return [], []
    return grid_for(n).extract()


# ------------------------------- solve -------------------------------
if st.button("Solve 🚀"):
    try:
        mins, dcs = read_inputs()
        if not mins:
            raise ValueError("Please enter at least one minterm.")
        solved = solve_and_build(n, mins, dcs)
        st.session_state["solution"] = (n, mins, dcs, solved.result, solved.report)
        st.query_params.from_dict(encode_share_params(n, mins, dcs))
    except KMapError as e:
        st.error(f"Invalid input:\n{e}")
    except ValueError as e:
        st.error(f"Could not solve:\n{e}")

solution = st.session_state.get("solution")
if solution and solution[0] == n:
    nvars, mins, dcs, result, report = solution

    st.success(f"**SOP:**  \nF = {result.expression}")
    steps = (
        f"• variables: {nvars}\n"
        f"• minterms = {mins}\n"
        f"• don't cares = {dcs if dcs else '—'}\n"
        f"• result (SOP): F = {result.expression}"
    )
    st.text_area("Details:", steps, height=130)

    # ---- loops on the map ----
    if report is None:
        st.info("K-map visualization available for 2-4 variables only.")
    else:
        for message in report.diagnostics:
            st.warning(message)
        fig = draw_kmap(nvars, mins, dcs, report.loops)
        st.pyplot(fig)
        st.download_button(
            "Download PNG", figure_to_png(fig), file_name="kmap.png", mime="image/png"
        )
        plt.close(fig)

    # ---- prime implicant legend ----
    st.markdown("### Prime Implicants")
    for idx, imp in enumerate(result.implicants):
        color = loop_color(idx)
        st.markdown(
            f"<span style='color:{color}'>■</span> **{imp.term}** covers minterms "
            f"{', '.join(map(str, imp.minterms))} `{imp.pattern}`",
            unsafe_allow_html=True,
        )

    if st.button("Add to batch"):
        st.session_state["batch"].append(
            BatchItem(nvars, tuple(mins), tuple(dcs), result.expression)
        )

# ------------------------------- batch -------------------------------
batch = st.session_state["batch"]
st.markdown("---")
st.markdown("### Batch")
if not batch:
    st.caption("No items in batch. Add K-maps to process multiple expressions.")
else:
    for idx, item in enumerate(batch):
        cols = st.columns([6, 1])
        cols[0].markdown(
            f"**K-Map {idx + 1}** - {item.nvars} variables, minterms "
            f"{', '.join(map(str, item.minterms))}: `{item.expression}`"
        )
        if cols[1].button("Remove", key=f"remove_{idx}"):
            batch.pop(idx)
            st.rerun()
    st.download_button(
        "Export CSV", batch_to_csv(batch), file_name="kmap-batch.csv", mime="text/csv"
    )
