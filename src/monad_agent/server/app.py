"""FastAPI server exposing the agent and the chat UI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from monad_agent.config import AppConfig, resolve_config
from monad_agent.core.agent import WalletAgent
from monad_agent.core.factory import create_agent, create_session_store
from monad_agent.core.planner import Planner
from monad_agent.session import SessionStore
from monad_agent.tools.registry import ToolRegistry

logger = logging.getLogger("monad_agent.server")

STATIC_DIR = Path(__file__).parent / "static"

WELCOME = "Welcome to Monad AI Agent! Use POST /agent to interact with the agent."


class AgentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    input: Optional[str] = None
    private_key: Optional[str] = Field(default=None, alias="privateKey")
    session_id: Optional[str] = Field(default=None, alias="sessionId")


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def create_app(
    config: AppConfig | None = None,
    planner: Planner | None = None,
    sessions: SessionStore | None = None,
) -> FastAPI:
    """Build the application.

    The model-backed agent is created on the first request, so a missing
    model API key surfaces as a 500 response instead of a failed startup.
    """
    if config is None:
        config = resolve_config()
    app = FastAPI(title="Monad Agent")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.config = config
    app.state.sessions = sessions if sessions is not None else create_session_store(config)
    app.state.agent = create_agent(config, planner) if planner is not None else None

    def get_agent() -> WalletAgent:
        if app.state.agent is None:
            app.state.agent = create_agent(config)
        return app.state.agent

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        details = "; ".join(str(e.get("msg")) for e in exc.errors()) or "malformed request"
        return _error(400, f"Invalid request body: {details}")

    @app.get("/")
    async def index():
        return {"message": WELCOME}

    async def run_agent(body: AgentRequest):
        if not body.input or not body.input.strip():
            return _error(400, "Input is required")
        try:
            agent = get_agent()
            session = app.state.sessions.get(body.session_id)
            result = await agent.run(body.input, session, private_key=body.private_key)
        except Exception as exc:
            logger.exception("Agent handler error")
            return _error(500, f"Internal server error: {exc}")
        return {"response": result.response}

    app.post("/agent")(run_agent)
    app.post("/api/agent")(run_agent)

    @app.get("/api/tools")
    async def list_tools():
        return [
            {"name": t.name, "description": t.description}
            for t in ToolRegistry.get().get_tools()
        ]

    @app.get("/chat")
    async def chat_page():
        return HTMLResponse((STATIC_DIR / "index.html").read_text(encoding="utf-8"))

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    return app


def run_server(config: AppConfig | None = None, host: str | None = None, port: int | None = None) -> None:
    if config is None:
        config = resolve_config()
    app = create_app(config)
    host = host or config.server.host
    port = port or config.server.port
    logger.info("Server running on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level="info")
