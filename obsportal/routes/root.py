# obsportal/routes/root.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, Response

from obsportal.core.config import CONFIG
from obsportal.core.logger import get_logger
from obsportal.render.observations import (
    render_no_observations,
    render_observation_detail,
    render_observations,
)
from obsportal.render.page import flash, render_page
from obsportal.services.adapters import (
    delete_observation,
    fetch_observation_pdf,
    get_observation,
    get_observations,
)
from obsportal.services.api_client import ApiClient, get_client

logger = get_logger("routes")

router = APIRouter(tags=["Observations"])


def _list_table(client: ApiClient) -> str:
    try:
        return render_observations(get_observations(client))
    except Exception as e:
        logger.error("Failed to load observations: %s", e)
        return render_no_observations()


@router.get("/", response_class=HTMLResponse)
def index(client: ApiClient = Depends(get_client)) -> HTMLResponse:
    return HTMLResponse(render_page(table=_list_table(client)))


@router.get("/observations/{obs_id}", response_class=HTMLResponse)
def view_observation(obs_id: int, client: ApiClient = Depends(get_client)) -> HTMLResponse:
    res = get_observation(client, obs_id)
    if not res.ok or not isinstance(res.data, dict):
        logger.error("Observation %s not found: %s", obs_id, res.detail or "Not found")
        return HTMLResponse(
            render_page(
                flash_html=flash("danger", "Observation not found."),
                table=_list_table(client),
            ),
            status_code=404,
        )
    return HTMLResponse(render_page(content=render_observation_detail(res.data)))


@router.post("/observations/{obs_id}/delete", response_class=HTMLResponse)
def remove_observation(obs_id: int, client: ApiClient = Depends(get_client)) -> HTMLResponse:
    """
    Delete, then re-fetch and re-render the list whatever the outcome.
    """
    res = delete_observation(client, obs_id)
    if res.ok:
        data = res.data if isinstance(res.data, dict) else {}
        banner = flash("success", data.get("message") or "Observation deleted!")
    else:
        logger.error("Delete failed: %s", res.detail or f"HTTP {res.status}")
        banner = flash("danger", "Something went wrong while deleting.")

    return HTMLResponse(render_page(flash_html=banner, table=_list_table(client)))


@router.get("/api/pdf/{obs_id}")
def observation_pdf(obs_id: int, client: ApiClient = Depends(get_client)) -> Response:
    status, body, content_type = fetch_observation_pdf(client, obs_id)
    if status == 0:
        raise HTTPException(status_code=502, detail="Backend unreachable while fetching the PDF.")
    if status >= 400:
        raise HTTPException(status_code=status, detail=f"PDF not available (HTTP {status}).")
    return Response(
        content=body,
        media_type=content_type,
        headers={"Content-Disposition": f'inline; filename="observation_{obs_id}.pdf"'},
    )


@router.get("/healthz")
def healthz():
    return {"status": "ok", "backend": CONFIG.API_BASE_URL}
