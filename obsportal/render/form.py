# obsportal/render/form.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from obsportal.models.schemas import Option
from obsportal.render.page import flash
from obsportal.utils.text_tools import esc

MISSING_LISTS_MSG = (
    "Departments/Focus failed to load. Submit is disabled. / "
    "BR: Departamentos/Foco não carregaram. Envio desabilitado."
)


def form_flash(departments: List[Option], focus: List[Option]) -> str:
    if not departments or not focus:
        return flash("warning", MISSING_LISTS_MSG)
    return ""


def _options(items: List[Option], selected: Any = None) -> str:
    out = []
    for item in items:
        sel = " selected" if selected is not None and str(item.id) == str(selected) else ""
        out.append(f'<option value="{esc(item.id)}"{sel}>{esc(item.name)}</option>')
    return "".join(out)


def _select(field: str, label: str, help_id: str, help_text: str,
            items: List[Option], selected: Any, disable_when_empty: bool = True) -> str:
    disabled = " disabled" if disable_when_empty and not items else ""
    return f"""
      <div class="form-group">
        <label for="{field}">{label}</label>
        <select id="{field}" name="{field}" class="form-control" aria-describedby="{help_id}"{disabled}>
          {_options(items, selected)}
        </select>
        <small id="{help_id}" class="form-text text-muted">
          {help_text}
        </small>
      </div>"""


def _textarea(field: str, label: str, placeholder: str, value: str) -> str:
    return f"""
      <div class="form-group">
        <label for="{field}">{label}</label>
        <textarea id="{field}" name="{field}" class="form-control" rows="3" placeholder="{placeholder}">{esc(value)}</textarea>
      </div>"""


def build_observation_form(
    teachers: List[Option],
    departments: List[Option],
    focus: List[Option],
    values: Optional[Dict[str, Any]] = None,
) -> str:
    """
    New-observation form. Empty department/focus lists disable their select
    and the submit button. `values` refills the fields after a failed create.
    """
    values = values or {}
    missing_deps = not departments or not focus
    checked = " checked" if values.get("sendEmail") else ""

    teacher_select = _select(
        "Observation_Teacher", "Teacher / Professor", "teacherHelp",
        "EN: Choose the observed teacher. / BR: Escolha o professor observado.",
        teachers, values.get("Observation_Teacher"), disable_when_empty=False,
    )
    dept_select = _select(
        "Observation_Department", "Department / Departamento", "deptHelp",
        "EN: Select the department. / BR: Selecione o departamento.",
        departments, values.get("Observation_Department"),
    )
    focus_select = _select(
        "Observation_Focus", "Focus Area / Foco", "focusHelp",
        "EN: Select the focus for this observation. / BR: Selecione o foco desta observação.",
        focus, values.get("Observation_Focus"),
    )
    strengths = _textarea(
        "Observation_Strengths", "Strengths / Pontos fortes", "Short notes...",
        values.get("Observation_Strengths", ""),
    )
    weaknesses = _textarea(
        "Observation_Weaknesses", "Areas for Development / Pontos a desenvolver", "Short notes...",
        values.get("Observation_Weaknesses", ""),
    )
    comments = _textarea(
        "Observation_Comments", "Other Comments / Outros comentários", "Optional...",
        values.get("Observation_Comments", ""),
    )
    class_value = esc(values.get("Observation_Class", ""))
    submit_disabled = " disabled" if missing_deps else ""

    return f"""
    <h2 class="mb-3">New Observation</h2>

    <form id="obsForm" class="mb-5" method="post" action="/new_observation" novalidate>
      {teacher_select}
      {dept_select}
      {focus_select}

      <div class="form-group">
        <label for="Observation_Class">Class / Turma</label>
        <input id="Observation_Class" name="Observation_Class" type="text" class="form-control"
               placeholder="e.g. 10A / ex.: 10A" aria-label="Class" value="{class_value}"/>
      </div>
      {strengths}
      {weaknesses}
      {comments}

      <div class="form-group form-check text-left">
        <input type="checkbox" class="form-check-input" id="sendEmail" name="sendEmail" value="on"{checked}>
        <label class="form-check-label" for="sendEmail">
          Send feedback to observed teacher / Enviar feedback ao professor observado
        </label>
        <small id="emailHelp" class="form-text text-muted d-block">
          EN: If checked, an email with the observation PDF will be sent to the teacher. <br>
          BR: Se marcado, um e-mail com o PDF da observação será enviado ao professor.
        </small>
      </div>

      <button id="submitBtn" type="submit" class="btn btn-success"{submit_disabled}>
        Submit / Enviar
      </button>
      <a href="/" class="btn btn-light ml-2">Cancel</a>
    </form>"""
