# obsportal/render/observations.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from obsportal.core.config import CONFIG
from obsportal.models.constants import NO_OBSERVATIONS_HTML
from obsportal.utils.text_tools import display, esc, format_date, full_name


def _nested(obs: Dict[str, Any], key: str, field: str) -> Any:
    inner = obs.get(key)
    if isinstance(inner, dict):
        return inner.get(field)
    return None


def department_label(obs: Dict[str, Any]) -> Any:
    for value in (
        obs.get("Department_Name"),
        _nested(obs, "department", "Department_Name"),
        obs.get("Observation_Department"),
    ):
        if value is not None:
            return value
    return None


def focus_label(obs: Dict[str, Any]) -> Any:
    for value in (
        obs.get("Focus_Name"),
        _nested(obs, "focus", "Focus_Name"),
        obs.get("Observation_Focus"),
    ):
        if value is not None:
            return value
    return None


def render_no_observations() -> str:
    return NO_OBSERVATIONS_HTML


def _row(obs: Dict[str, Any]) -> str:
    obs_id = esc(obs.get("Observation_ID"))
    teacher = esc(full_name(obs.get("Teacher_Forename"), obs.get("Teacher_Surname")))
    date = format_date(obs.get("Observation_Date"), CONFIG.DATE_FORMAT)
    return f"""
      <tr>
        <td>{teacher}</td>
        <td>{display(department_label(obs))}</td>
        <td>{display(focus_label(obs))}</td>
        <td>{display(obs.get("Observation_Class"))}</td>
        <td>{date}</td>
        <td>
          <a href="/observations/{obs_id}" class="btn btn-sm btn-info">View</a>
          <form class="inline" method="post" action="/observations/{obs_id}/delete"
                onsubmit="return confirm('Delete observation?');">
            <button type="submit" class="btn btn-sm btn-danger">Delete</button>
          </form>
          <a href="/api/pdf/{obs_id}" class="btn btn-sm btn-secondary">PDF</a>
        </td>
      </tr>"""


def render_observations(observations: Optional[List[Dict[str, Any]]]) -> str:
    if not observations:
        return render_no_observations()

    rows = "".join(_row(obs) for obs in observations if isinstance(obs, dict))
    return f"""
    <h2>Observations</h2>
    <table class="table table-striped table-bordered">
      <thead class="thead-dark">
        <tr>
          <th>Teacher</th>
          <th>Department</th>
          <th>Focus</th>
          <th>Class</th>
          <th>Date</th>
          <th>Actions</th>
        </tr>
      </thead>
      <tbody>{rows}
      </tbody></table>"""


def render_observation_detail(obs: Dict[str, Any]) -> str:
    teacher = esc(full_name(obs.get("Teacher_Forename"), obs.get("Teacher_Surname")))
    date = format_date(obs.get("Observation_Date"), CONFIG.DATE_FORMAT)
    focus = obs.get("Focus_Name")
    if focus is None:
        focus = obs.get("Observation_Focus")

    items = [
        ("Teacher", teacher),
        ("Date", date),
        ("Class", display(obs.get("Observation_Class"))),
        ("Focus Area", display(focus)),
        ("Strengths", display(obs.get("Observation_Strengths"))),
        ("Areas for Development", display(obs.get("Observation_Weaknesses"))),
        ("Other Comments", display(obs.get("Observation_Comments"))),
    ]
    lis = "".join(
        f'\n      <li class="list-group-item"><strong>{label}:</strong> {value}</li>'
        for label, value in items
    )
    return f"""
    <h2>Observation Details</h2>
    <ul class="list-group">{lis}
    </ul>
    <a href="/" class="btn btn-secondary mt-3">Back to list</a>"""
