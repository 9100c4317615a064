# obsportal/routes/observation_routes.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse

from obsportal.render.form import build_observation_form, form_flash
from obsportal.render.page import render_page
from obsportal.services.api_client import ApiClient, get_client
from obsportal.services.dropdowns import preload_dropdowns
from obsportal.services.submission import submit_observation

router = APIRouter(tags=["New Observation"])


@router.get("/new_observation", response_class=HTMLResponse)
def new_observation_page(client: ApiClient = Depends(get_client)) -> HTMLResponse:
    cache = preload_dropdowns(client)
    form_html = build_observation_form(cache.teachers, cache.departments, cache.focus)
    return HTMLResponse(
        render_page(content=form_html, flash_html=form_flash(cache.departments, cache.focus))
    )


@router.post("/new_observation", response_class=HTMLResponse)
def submit_new_observation(
    Observation_Teacher: str = Form(""),
    Observation_Department: str = Form(""),
    Observation_Focus: str = Form(""),
    Observation_Class: str = Form(""),
    Observation_Strengths: str = Form(""),
    Observation_Weaknesses: str = Form(""),
    Observation_Comments: str = Form(""),
    sendEmail: Optional[str] = Form(None),
    client: ApiClient = Depends(get_client),
) -> HTMLResponse:
    form = {
        "Observation_Teacher": Observation_Teacher,
        "Observation_Department": Observation_Department,
        "Observation_Focus": Observation_Focus,
        "Observation_Class": Observation_Class,
        "Observation_Strengths": Observation_Strengths,
        "Observation_Weaknesses": Observation_Weaknesses,
        "Observation_Comments": Observation_Comments,
        "sendEmail": sendEmail,
    }

    # Dropdown data is reloaded so a stale or empty cache never gates the submit
    cache = preload_dropdowns(client)
    outcome = submit_observation(client, form, cache)

    content = ""
    if outcome.show_form:
        content = build_observation_form(cache.teachers, cache.departments, cache.focus, values=form)

    return HTMLResponse(
        render_page(
            content=content,
            flash_html=outcome.flash_html,
            redirect_to=outcome.redirect_to,
        )
    )
