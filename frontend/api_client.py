"""httpx client for the Soil Data API, shared by the Streamlit pages."""

from __future__ import annotations

from typing import Any

import httpx

DEFAULT_PAGE_SIZE = 50

# Mirrors the backend validator so forms can warn before submitting.
FIELD_BOUNDS = {
    "moisture": (0.0, 100.0),
    "pH": (0.0, 14.0),
    "temperature": (-50.0, 100.0),
}


class SoilDataApiError(Exception):
    """Raised for non-2xx responses or when the API cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


def widget_bounds(field: str, stored: float) -> tuple[float, float]:
    """Input limits for a form field, widened to hold an already out-of-range value."""
    lower, upper = FIELD_BOUNDS[field]
    return min(lower, stored), max(upper, stored)


def out_of_bounds(values: dict[str, float]) -> list[str]:
    """Return a message for every value outside its field's range."""
    problems = []
    for field, (lower, upper) in FIELD_BOUNDS.items():
        value = values.get(field)
        if value is not None and not lower <= value <= upper:
            problems.append(f"{field} must be between {lower:g} and {upper:g}")
    return problems


class SoilDataApi:
    """Thin wrapper over the ``/api/soildatas`` and ``/api/plots`` endpoints."""

    def __init__(self, base_url: str, timeout: float = 30, transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}/api{path}"
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self.transport) as client:
                response = client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise SoilDataApiError(f"No response received from server: {exc}") from exc

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            detail = body.get("detail", body) if isinstance(body, dict) else body
            raise SoilDataApiError(
                f"API Error: {response.status_code} - {detail}",
                status_code=response.status_code,
                detail=detail,
            )
        return response.json()

    def list_soil_data(
        self,
        filters: dict[str, Any] | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> dict[str, Any]:
        """Fetch one page; empty filter values are not sent."""
        params = {key: value for key, value in (filters or {}).items() if value not in (None, "")}
        params["page"] = page
        params["limit"] = limit
        return self._request("GET", "/soildatas", params=params)

    def get_soil_data(self, record_id: str) -> dict[str, Any]:
        return self._request("GET", f"/soildatas/{record_id}")

    def create_soil_data(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/soildatas", json=payload)

    def update_soil_data(self, record_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/soildatas/{record_id}", json=payload)

    def delete_soil_data(self, record_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/soildatas/{record_id}")

    def list_plots(self) -> list[dict[str, Any]]:
        return self._request("GET", "/plots")
