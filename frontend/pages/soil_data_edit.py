"""Form for editing an existing soil measurement; only changed fields are sent."""

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))
from api_client import SoilDataApiError, out_of_bounds, widget_bounds
from streamlit_app import get_api, load_plots


def changed_fields(original: dict, edited: dict) -> dict:
    return {key: value for key, value in edited.items() if original.get(key) != value}


def main():
    st.set_page_config(page_title="Edit Soil Data", layout="centered")
    st.title("Edit soil measurement")

    record_id = st.text_input("Measurement ID", value=st.session_state.get("selected_id", ""))
    if not record_id:
        st.info("Pick a measurement from the list or paste its ID.")
        return

    api = get_api()
    try:
        record = api.get_soil_data(record_id.strip())
        plots = load_plots()
    except SoilDataApiError as exc:
        st.error(f"Failed to load measurement: {exc}")
        return

    plot_ids = [plot["id"] for plot in plots]
    names = {plot["id"]: plot["name"] for plot in plots}
    if record["plotId"] not in names:
        plot_ids.insert(0, record["plotId"])
        names[record["plotId"]] = f"{record['plotId']} (missing plot)"

    moisture_min, moisture_max = widget_bounds("moisture", float(record["moisture"]))
    ph_min, ph_max = widget_bounds("pH", float(record["pH"]))
    temperature_min, temperature_max = widget_bounds("temperature", float(record["temperature"]))

    with st.form("edit_soil_data"):
        plot_id = st.selectbox(
            "Plot", plot_ids, index=plot_ids.index(record["plotId"]), format_func=names.get
        )
        moisture = st.number_input(
            "Moisture (%)",
            min_value=moisture_min,
            max_value=moisture_max,
            value=float(record["moisture"]),
            step=0.01,
            format="%.2f",
        )
        ph = st.number_input(
            "pH", min_value=ph_min, max_value=ph_max, value=float(record["pH"]), step=0.01, format="%.2f"
        )
        temperature = st.number_input(
            "Temperature (°C)",
            min_value=temperature_min,
            max_value=temperature_max,
            value=float(record["temperature"]),
            step=0.1,
            format="%.1f",
        )
        submitted = st.form_submit_button("Save")

    if not submitted:
        return

    edited = {
        "plotId": plot_id,
        "moisture": round(moisture, 2),
        "pH": round(ph, 2),
        "temperature": round(temperature, 1),
    }
    changes = changed_fields(record, edited)
    if not changes:
        st.info("Nothing changed.")
        return

    # Untouched fields may already be out of range; only edits are checked.
    problems = out_of_bounds(changes)
    if problems:
        for problem in problems:
            st.error(problem)
        return

    try:
        api.update_soil_data(record["id"], changes)
    except SoilDataApiError as exc:
        st.error(f"Failed to update measurement: {exc}")
        return
    st.success("Measurement updated")


if __name__ == "__main__":
    main()
