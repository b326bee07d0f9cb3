"""Streamlit client for the Soil Data API: paginated, filterable list."""

from __future__ import annotations

import math
import os
from datetime import date, datetime, time
from typing import Any

import pandas as pd
import streamlit as st

from api_client import DEFAULT_PAGE_SIZE, SoilDataApi, SoilDataApiError

DEFAULT_API_BASE = "http://localhost:8000"


def get_api_base() -> str:
    """Prefer Streamlit secrets/env var overrides for API base URL."""
    # Streamlit raises when no secrets file exists, so guard the lookup.
    secret_value: str | None = None
    try:
        secret_value = st.secrets["api_base"]
    except Exception:  # noqa: BLE001 - secrets module raises custom errors
        secret_value = None

    env_value = os.environ.get("API_BASE_URL")
    return secret_value or env_value or DEFAULT_API_BASE


def get_api() -> SoilDataApi:
    return SoilDataApi(get_api_base())


@st.cache_data(ttl=600)
def load_plots() -> list[dict[str, Any]]:
    """Load and cache plots for selector widgets."""
    return get_api().list_plots()


def plot_label(plot: dict[str, Any] | None, plot_id: str) -> str:
    if plot:
        return plot["name"]
    return f"{plot_id} (missing plot)"


def to_frame(records: list[dict[str, Any]]) -> pd.DataFrame:
    rows = [
        {
            "id": record["id"],
            "plot": plot_label(record.get("plot"), record["plotId"]),
            "moisture (%)": record["moisture"],
            "pH": record["pH"],
            "temperature (°C)": record["temperature"],
            "timestamp": pd.to_datetime(record["timestamp"]),
        }
        for record in records
    ]
    return pd.DataFrame(rows)


def _range_inputs(label: str, key: str, lower: float, upper: float) -> tuple[float | None, float | None]:
    enabled = st.checkbox(f"Filter by {label}", key=f"{key}_enabled")
    if not enabled:
        return None, None
    selected = st.slider(label, min_value=lower, max_value=upper, value=(lower, upper), key=key)
    return selected


def build_filters() -> dict[str, Any]:
    filters: dict[str, Any] = {}

    try:
        plots = load_plots()
    except SoilDataApiError as exc:
        st.warning(f"Could not load plots: {exc}")
        plots = []

    options = ["All plots", *[plot["name"] for plot in plots]]
    selected = st.selectbox("Plot", options)
    if selected != options[0]:
        filters["plotId"] = plots[options.index(selected) - 1]["id"]

    from_day: date | None = st.date_input("From date", value=None)
    to_day: date | None = st.date_input("To date", value=None)
    if from_day:
        filters["fromDate"] = datetime.combine(from_day, time.min).isoformat()
    if to_day:
        filters["toDate"] = datetime.combine(to_day, time.max).isoformat()

    filters["minMoisture"], filters["maxMoisture"] = _range_inputs("Moisture", "moisture", 0.0, 100.0)
    filters["minPh"], filters["maxPh"] = _range_inputs("pH", "ph", 0.0, 14.0)
    filters["minTemperature"], filters["maxTemperature"] = _range_inputs(
        "Temperature", "temperature", -50.0, 100.0
    )
    return filters


def main() -> None:
    st.set_page_config(page_title="Soil Data", layout="wide")
    st.title("Soil Data")
    st.caption("Moisture, pH and temperature readings per plot")

    with st.sidebar:
        st.header("Filters")
        filters = build_filters()
        limit = st.select_slider("Rows per page", options=[10, 25, 50, 100, 250], value=DEFAULT_PAGE_SIZE)

    # Any filter change starts again from the first page.
    signature = (tuple(sorted(filters.items())), limit)
    if st.session_state.get("list_signature") != signature:
        st.session_state.list_signature = signature
        st.session_state.page = 1
    page = st.session_state.get("page", 1)

    api = get_api()
    try:
        payload = api.list_soil_data(filters, page=page, limit=limit)
    except SoilDataApiError as exc:
        st.error(f"Failed to fetch soil data: {exc}")
        return

    total = payload["total"]
    total_pages = max(1, math.ceil(total / limit))
    st.write(f"{total} measurements | page {payload['page']} of {total_pages}")

    if not payload["data"]:
        st.info("No rows matched the current filters.")
    else:
        st.dataframe(to_frame(payload["data"]), use_container_width=True, hide_index=True)

    previous_col, next_col, _ = st.columns([1, 1, 6])
    if previous_col.button("Previous", disabled=page <= 1):
        st.session_state.page = page - 1
        st.rerun()
    if next_col.button("Next", disabled=page >= total_pages):
        st.session_state.page = page + 1
        st.rerun()

    st.divider()
    st.subheader("Manage a measurement")
    ids = [record["id"] for record in payload["data"]]
    if not ids:
        return
    selected_id = st.selectbox("Measurement", ids)
    view_col, edit_col, delete_col, _ = st.columns([1, 1, 1, 5])
    if view_col.button("View"):
        st.session_state.selected_id = selected_id
        st.switch_page("pages/soil_data_detail.py")
    if edit_col.button("Edit"):
        st.session_state.selected_id = selected_id
        st.switch_page("pages/soil_data_edit.py")
    if delete_col.button("Delete", type="primary"):
        st.session_state.pending_delete = selected_id

    pending = st.session_state.get("pending_delete")
    if pending:
        st.warning(f"Delete measurement {pending}? This cannot be undone.")
        confirm_col, cancel_col, _ = st.columns([1, 1, 6])
        if confirm_col.button("Confirm delete"):
            try:
                api.delete_soil_data(pending)
            except SoilDataApiError as exc:
                st.error(f"Failed to delete item: {exc}")
            st.session_state.pending_delete = None
            st.rerun()
        if cancel_col.button("Cancel"):
            st.session_state.pending_delete = None
            st.rerun()


if __name__ == "__main__":
    main()
