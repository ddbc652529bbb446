"""
Configuration console.

Small FastAPI app showing the current reportable addresses and letting the
operator edit notification settings.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ip_radar import __version__
from ip_radar.poll_loop import Scanner
from ip_radar.settings_store import SettingsCell, SettingsStore

logger = logging.getLogger(__name__)

# Setup paths
UI_DIR = Path(__file__).parent
TEMPLATES_DIR = UI_DIR / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def create_app(cell: SettingsCell, store: SettingsStore, scanner: Scanner) -> FastAPI:
    """
    Build the console application.

    Args:
        cell: Shared notification settings
        store: Persists settings after each edit
        scanner: Called on every page view for the live address list

    Returns:
        FastAPI app
    """
    app = FastAPI(
        title="IP Radar Configuration",
        description="View current addresses and edit notification settings",
        version=__version__,
    )

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        """Settings form and current addresses."""
        return templates.TemplateResponse(
            request,
            "index.html",
            {"settings": cell.get(), "addresses": scanner.scan()},
        )

    @app.post("/save")
    def save(
        sender: str = Form("", alias="from"),
        password: str = Form(""),
        recipient: str = Form("", alias="to"),
        smtp_host: str = Form("", alias="smtpHost"),
        smtp_port: str = Form("", alias="smtpPort"),
    ):
        """Apply and persist edited settings."""
        settings = cell.update(
            sender=sender,
            sender_credential=password,
            recipient=recipient,
            relay_host=smtp_host,
            relay_port=smtp_port,
        )
        if not store.save(settings):
            return PlainTextResponse("Error saving configuration", status_code=500)

        logger.info("Notification settings updated from console")
        return RedirectResponse(url="/", status_code=303)

    @app.get("/api/addresses")
    def addresses() -> List[Dict[str, Any]]:
        """Current scan results as JSON."""
        return [observed.model_dump(mode="json") for observed in scanner.scan()]

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


class ConsoleServer:
    """Runs the console with uvicorn on a background daemon thread."""

    def __init__(self, app: FastAPI, host: str = "0.0.0.0", port: int = 8087):
        self.host = host
        self.port = port
        self._server = uvicorn.Server(
            uvicorn.Config(app, host=host, port=port, log_level="warning")
        )
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._server.run, name="ip-radar-console", daemon=True
        )
        self._thread.start()
        logger.info(f"Configuration interface available at http://localhost:{self.port}")

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread is None:
            return
        self._server.should_exit = True
        self._thread.join(timeout)
        self._thread = None
