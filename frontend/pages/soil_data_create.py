"""Form for recording a new soil measurement."""

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))
from api_client import SoilDataApiError, out_of_bounds
from streamlit_app import get_api, load_plots


def main():
    st.set_page_config(page_title="New Soil Data", layout="centered")
    st.title("Add soil measurement")

    try:
        plots = load_plots()
    except SoilDataApiError as exc:
        st.error(f"Could not load plots: {exc}")
        return
    if not plots:
        st.warning("No plots exist yet; seed or create a plot first.")
        return

    with st.form("create_soil_data"):
        plot_name = st.selectbox("Plot", [plot["name"] for plot in plots])
        moisture = st.number_input("Moisture (%)", min_value=0.0, max_value=100.0, value=30.0, step=0.01, format="%.2f")
        ph = st.number_input("pH", min_value=0.0, max_value=14.0, value=7.0, step=0.01, format="%.2f")
        temperature = st.number_input(
            "Temperature (°C)", min_value=-50.0, max_value=100.0, value=20.0, step=0.1, format="%.1f"
        )
        submitted = st.form_submit_button("Create")

    if not submitted:
        return

    payload = {
        "plotId": next(plot["id"] for plot in plots if plot["name"] == plot_name),
        "moisture": round(moisture, 2),
        "pH": round(ph, 2),
        "temperature": round(temperature, 1),
    }
    problems = out_of_bounds(payload)
    if problems:
        for problem in problems:
            st.error(problem)
        return

    try:
        created = get_api().create_soil_data(payload)
    except SoilDataApiError as exc:
        st.error(f"Failed to create measurement: {exc}")
        return

    st.success(f"Created measurement {created['id']}")
    st.session_state.selected_id = created["id"]


if __name__ == "__main__":
    main()
