"""Soil data detail view."""

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))
from api_client import SoilDataApiError
from streamlit_app import get_api, plot_label


def main():
    st.set_page_config(page_title="Soil Data Detail", layout="centered")
    st.title("Measurement detail")

    record_id = st.text_input("Measurement ID", value=st.session_state.get("selected_id", ""))
    if not record_id:
        st.info("Pick a measurement from the list or paste its ID.")
        return

    try:
        record = get_api().get_soil_data(record_id.strip())
    except SoilDataApiError as exc:
        if exc.status_code == 404:
            st.warning("Soil data measurement not found")
        else:
            st.error(f"Failed to load measurement: {exc}")
        return

    st.subheader(plot_label(record.get("plot"), record["plotId"]))
    moisture_col, ph_col, temperature_col = st.columns(3)
    moisture_col.metric("Moisture", f"{record['moisture']}%")
    ph_col.metric("pH", record["pH"])
    temperature_col.metric("Temperature", f"{record['temperature']}°C")
    st.caption(f"Recorded at {record['timestamp']} | ID {record['id']}")

    if st.button("Edit"):
        st.session_state.selected_id = record["id"]
        st.switch_page("pages/soil_data_edit.py")


if __name__ == "__main__":
    main()
