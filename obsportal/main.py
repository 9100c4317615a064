# obsportal/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from obsportal import __version__
from obsportal.core.config import CONFIG
from obsportal.core.logger import get_logger
from obsportal.render.page import flash, render_page
from obsportal.routes.observation_routes import router as observation_router
from obsportal.routes.root import router as root_router

logger = get_logger("main")

app = FastAPI(
    title=CONFIG.APP_TITLE,
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CONFIG.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> HTMLResponse:
    # last-resort trap: show the error inline instead of a bare 500
    logger.exception("[GLOBAL ERROR] %s %s: %s", request.method, request.url.path, exc)
    return HTMLResponse(
        render_page(flash_html=flash("danger", f"Error: {exc}")),
        status_code=500,
    )


app.include_router(root_router)
app.include_router(observation_router)
