# obsportal/services/submission.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from obsportal.core.logger import get_logger
from obsportal.models.constants import NEW_ID_KEYS, OBSERVATION_TEXT_FIELDS
from obsportal.models.schemas import Option
from obsportal.render.form import MISSING_LISTS_MSG
from obsportal.render.page import flash
from obsportal.services.adapters import create_observation, email_observation, first_present
from obsportal.services.api_client import ApiClient
from obsportal.services.dropdowns import DataCache
from obsportal.utils.text_tools import parse_int

logger = get_logger("submission")

MISSING_FIELDS_MSG = (
    "Department/Focus missing - cannot submit. / "
    "BR: Departamento/Foco ausentes - não é possível enviar."
)


class SubmissionBlocked(Exception):
    """Raised when the payload must not reach the create endpoint."""


class SubmissionOutcome(BaseModel):
    flash_html: str = ""
    # True -> show the form again with the entered values
    show_form: bool = True
    redirect_to: Optional[str] = None
    created_id: Any = None
    email_sent: bool = False


def build_payload(
    form: Mapping[str, Any],
    departments: List[Option],
    focus: List[Option],
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "Observation_Teacher": parse_int(form.get("Observation_Teacher")),
        "Observation_Department": parse_int(form.get("Observation_Department")) if departments else None,
        "Observation_Focus": parse_int(form.get("Observation_Focus")) if focus else None,
    }
    for field in OBSERVATION_TEXT_FIELDS:
        payload[field] = (form.get(field) or "").strip()
    return payload


def validate_payload(payload: Dict[str, Any]) -> None:
    for key in ("Observation_Department", "Observation_Focus"):
        if not isinstance(payload.get(key), int):
            raise SubmissionBlocked(MISSING_FIELDS_MSG)


def _email_flash(client: ApiClient, new_id: Any) -> tuple[str, bool]:
    mail_res = email_observation(client, new_id)
    if mail_res.ok:
        return flash(
            "success",
            "Observation created and email sent. / BR: Observação criada e e-mail enviado.",
        ), True

    emsg = mail_res.detail or mail_res.status or "unknown"
    logger.warning("Email for observation %s failed: %s", new_id, emsg)
    return flash(
        "warning",
        f"Observation created. Email failed ({emsg}). / BR: Observação criada. Falha no e-mail ({emsg}).",
    ), False


def submit_observation(
    client: ApiClient,
    form: Mapping[str, Any],
    cache: DataCache,
) -> SubmissionOutcome:
    """
    Create an observation from a submitted form.

    Nothing is posted when the dropdown lists are missing or the
    department/focus values are not integers. Backend failures end up
    as flash banners, never as exceptions.
    """
    if cache.missing_required:
        return SubmissionOutcome(flash_html=flash("warning", MISSING_LISTS_MSG))

    payload = build_payload(form, cache.departments, cache.focus)
    try:
        validate_payload(payload)
    except SubmissionBlocked as e:
        return SubmissionOutcome(flash_html=flash("warning", str(e)))

    try:
        res = create_observation(client, payload)

        if not res.ok:
            logger.error("Create failed: status=%s data=%s", res.status, res.data)
            msg = res.detail or res.status or "network"
            return SubmissionOutcome(
                flash_html=flash("danger", f"Create failed ({msg}). / BR: Falha ao criar ({msg})."),
            )

        data = res.data if isinstance(res.data, dict) else {}
        new_id = first_present(data, *NEW_ID_KEYS)
        logger.info("Observation created: id=%s", new_id)

        email_sent = False
        if form.get("sendEmail") and new_id:
            flash_html, email_sent = _email_flash(client, new_id)
        else:
            flash_html = flash("success", "Observation created. / BR: Observação criada.")

        return SubmissionOutcome(
            flash_html=flash_html,
            show_form=False,
            redirect_to="/",
            created_id=new_id,
            email_sent=email_sent,
        )

    except Exception as e:
        logger.exception("Unexpected submit error: %s", e)
        return SubmissionOutcome(flash_html=flash("danger", "Unexpected error. / BR: Erro inesperado."))
