# obsportal/services/adapters.py
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from obsportal.models.schemas import ApiResult, Option, Teacher
from obsportal.services.api_client import ApiClient


def first_present(record: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """
    First value under `keys` that is not None.
    Falsy values such as 0 or "" still count as present.
    """
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return default


def _records(res: ApiResult) -> List[Dict[str, Any]]:
    if not res.ok or not isinstance(res.data, list):
        return []
    return [r for r in res.data if isinstance(r, dict)]


def _teacher_name(t: Dict[str, Any]) -> str:
    if t.get("User_Surname") and t.get("User_Forename"):
        return f"{t['User_Surname']}, {t['User_Forename']}"
    if t.get("Teacher_Surname") and t.get("Teacher_Forename"):
        return f"{t['Teacher_Surname']}, {t['Teacher_Forename']}"
    name = t.get("name")
    if name is not None:
        return name
    return f"{t.get('User_Surname') or ''} {t.get('User_Forename') or ''}".strip()


# ---------------------------------------------------------------------------
# Dropdown lists
# ---------------------------------------------------------------------------
def get_teachers(client: ApiClient) -> List[Teacher]:
    return [
        Teacher(
            id=first_present(t, "User_ID", "id", "user_id"),
            name=_teacher_name(t),
            email=first_present(t, "User_Email", "email"),
        )
        for t in _records(client.get("/api/teachers"))
    ]


def get_departments(client: ApiClient) -> List[Option]:
    return [
        Option(
            id=first_present(d, "Department_ID", "id"),
            name=first_present(d, "Department_Name", "name"),
        )
        for d in _records(client.get("/api/departments"))
    ]


def get_focus_areas(client: ApiClient) -> List[Option]:
    return [
        Option(
            id=first_present(f, "Focus_ID", "id", "FocusArea_ID"),
            name=first_present(f, "Focus_Name", "name", "FocusArea_Name"),
        )
        for f in _records(client.get("/api/focus_areas"))
    ]


# ---------------------------------------------------------------------------
# Observations
# ---------------------------------------------------------------------------
def get_observations(client: ApiClient) -> List[Dict[str, Any]]:
    res = client.get("/api/observations")
    return res.data if res.ok and isinstance(res.data, list) else []


def get_observation(client: ApiClient, obs_id: int) -> ApiResult:
    return client.get(f"/api/observations/{obs_id}")


def create_observation(client: ApiClient, payload: Dict[str, Any]) -> ApiResult:
    return client.post("/api/new", payload)


def update_observation(client: ApiClient, obs_id: int, body: Dict[str, Any]) -> ApiResult:
    return client.put(f"/api/observation/{obs_id}", body)


def delete_observation(client: ApiClient, obs_id: int) -> ApiResult:
    return client.delete(f"/api/observations/{obs_id}")


def email_observation(client: ApiClient, obs_id: Any) -> ApiResult:
    # backend route triggers the server-side mailer
    return client.post(f"/api/observations/{obs_id}/email?notify=true", {})


def fetch_observation_pdf(client: ApiClient, obs_id: int) -> Tuple[int, bytes, str]:
    """
    Returns (status, body, content_type). Status 0 means the backend
    could not be reached.
    """
    resp = client.fetch_raw(f"/api/pdf/{obs_id}")
    if resp is None:
        return 0, b"", ""
    return resp.status_code, resp.content, resp.headers.get("Content-Type", "application/pdf")
