"""FastAPI application so editor integrations can hand over their open tabs."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError
from ..generator import CommandGenerator, Preparation
from ..interaction import AcceptPrompt, RecordingNotifier, SelectAllPicker, StdoutClipboard


class ResolveRequest(BaseModel):
    root: str
    files: List[str] = Field(default_factory=list)


class PickerItemModel(BaseModel):
    label: str
    description: str
    path: str
    detail: Optional[str] = None


class ResolveResponse(BaseModel):
    files: List[str]
    provenance: Dict[str, List[str]]
    errors: Dict[str, str]
    items: List[PickerItemModel]


class CommandRequest(BaseModel):
    root: str
    files: List[str] = Field(default_factory=list)
    selected: Optional[List[str]] = None


class CommandResponse(BaseModel):
    command: str
    files: List[str]


class HealthResponse(BaseModel):
    status: str


def _default_generator() -> CommandGenerator:
    # The editor owns picking, editing and the clipboard; the service only computes.
    return CommandGenerator(
        picker=SelectAllPicker(),
        prompt=AcceptPrompt(),
        clipboard=StdoutClipboard(),
        notifier=RecordingNotifier(),
    )


async def _run_blocking(func: Callable[[], Any]) -> Any:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return func()
    return await loop.run_in_executor(None, func)


def _require_root(root: str) -> None:
    path = Path(root).expanduser()
    if not path.is_dir():
        raise FileNotFoundError(f"Project root not found: {root}")


def create_app(
    generator_factory: Callable[[], CommandGenerator] = _default_generator,
) -> FastAPI:
    """Create the FastAPI application exposing ffgen operations."""

    app = FastAPI(title="ffgen Service", version="1.0.0")

    async def get_generator() -> CommandGenerator:
        # Fresh per request so configuration and aliases are always reloaded.
        return generator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/resolve", response_model=ResolveResponse)
    async def resolve(
        payload: ResolveRequest,
        generator: CommandGenerator = Depends(get_generator),
    ) -> ResolveResponse:
        _require_root(payload.root)

        def _prepare() -> Preparation:
            return generator.prepare(payload.root, payload.files)

        prepared: Preparation = await _run_blocking(_prepare)
        walk = prepared.walk
        return ResolveResponse(
            files=[str(path) for path in walk.files],
            provenance={
                str(path): [str(origin) for origin in walk.origins(path)]
                for path in walk.files
            },
            errors={str(path): error for path, error in walk.errors.items()},
            items=[
                PickerItemModel(
                    label=item.label,
                    description=item.description,
                    path=str(item.path),
                    detail=item.detail,
                )
                for item in prepared.items
            ],
        )

    @app.post("/command", response_model=CommandResponse)
    async def command(
        payload: CommandRequest,
        generator: CommandGenerator = Depends(get_generator),
    ) -> CommandResponse:
        _require_root(payload.root)

        def _build() -> CommandResponse:
            prepared = generator.prepare(payload.root, payload.files)
            files = list(prepared.walk.files)
            if payload.selected is not None:
                root = Path(os.path.abspath(Path(payload.root).expanduser()))
                wanted = {
                    Path(os.path.abspath(root / Path(item).expanduser()))
                    for item in payload.selected
                }
                files = [path for path in files if path in wanted]
            text = generator.render(prepared.config, files)
            return CommandResponse(
                command=text,
                files=[str(path) for path in sorted(files, key=lambda p: str(p).lower())],
            )

        return await _run_blocking(_build)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8765
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
