"""FastAPI server exposing the Excalidraw render tools over HTTP.

Start with:
    uv run uvicorn server:app --host 127.0.0.1 --port 8000

Endpoints
---------
GET    /tools              List tool definitions (name, description, input_schema)
POST   /tools/{name}       Call a tool; body {"arguments": {...}}
GET    /health             Render session state

Tool calls always answer 200 with ``{"content": [...], "isError": bool}``;
render failures are reported in the body, not as HTTP errors.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

import config as cfg
from backends import excalidraw
from tools import TOOL_DEFINITIONS, TOOL_NAMES, dispatch_tool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    # Release the headless browser on shutdown.
    await excalidraw.shutdown()


# ── App ───────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Excalidraw Render API",
    description="Headless Excalidraw diagram rendering to PNG and SVG.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request / response models ─────────────────────────────────────────────────

class ToolCallRequest(BaseModel):
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolCallResponse(BaseModel):
    content: list[dict[str, Any]]
    isError: bool = False


# ── Endpoints ─────────────────────────────────────────────────────────────────

@app.get("/tools")
async def list_tools():
    return {"tools": TOOL_DEFINITIONS}


@app.post("/tools/{name}", response_model=ToolCallResponse)
async def call_tool(name: str, body: ToolCallRequest | None = None):
    """Run one tool call and return its result blocks."""
    if name not in TOOL_NAMES:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")
    arguments = body.arguments if body is not None else {}
    result = await dispatch_tool(name, arguments)
    if result["isError"]:
        logger.info("Tool %s returned an error: %s", name, result["content"][0]["text"])
    return result


@app.get("/health")
async def health():
    return {"status": "ok", "render_session": excalidraw.sessions.state.value}


# ── Dev entry-point ───────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=cfg.LOG_LEVEL)
    uvicorn.run(
        "server:app",
        host=cfg.SERVER_HOST,
        port=cfg.SERVER_PORT,
    )
