"""FastAPI application serving a game folder with case-insensitive lookups."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from urllib.parse import quote

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, Response
from starlette.staticfiles import StaticFiles

from ..cache import PathLookupCache
from ..patching import PatchRegistry
from ..saves import SaveDataStore
from .settings import ServerSettings

logger = logging.getLogger(__name__)

PATCHED_SCRIPT_NAME = "main.js"


def _raw_request_path(request: Request) -> str | None:
    """Return the request path exactly as sent, still percent-encoded.

    ``None`` is returned when the raw bytes are not valid UTF-8.
    """

    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return quote(request.url.path)
    try:
        return raw_path.split(b"?", 1)[0].decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Treating undecodable request path %r as missing", raw_path)
        return None


def _join_under(root: str, request_path: str, *parts: str) -> str:
    return os.path.join(root, request_path.lstrip("/"), *parts)


def _is_within(root: str, candidate: str) -> bool:
    try:
        return os.path.commonpath([root, candidate]) == root
    except ValueError:
        return False


def create_app(
    settings: ServerSettings | None = None,
    *,
    cache: PathLookupCache | None = None,
    patches: PatchRegistry | None = None,
    saves: SaveDataStore | None = None,
) -> FastAPI:
    """Create a FastAPI app serving ``settings.root``.

    Every request path is matched against the game folder without regard to
    case. A ``main.js`` with a known content digest is replaced by its patch,
    which mirrors the browser's ``localStorage`` through ``/mvix/save`` and
    ``/mvix/load``.
    """

    resolved_settings = settings or ServerSettings.from_env()
    root = os.path.abspath(resolved_settings.root)
    # The resolver percent-decodes the whole joined path.
    encoded_root = quote(root, safe=os.sep + "/:")

    lookup_cache = cache if cache is not None else PathLookupCache()
    patch_registry = patches if patches is not None else PatchRegistry()
    save_store = saves if saves is not None else SaveDataStore(resolved_settings.save_path)

    logger.debug(
        "Serving %s with patches %s", root, ", ".join(patch_registry.available())
    )

    app = FastAPI(title="mvix", debug=resolved_settings.debug)

    app.mount("/static", StaticFiles(directory=root), name="static")

    @app.post("/mvix/save")
    async def save_game(request: Request) -> Response:
        body = await request.body()
        try:
            content = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HTTPException(
                status_code=400, detail="Save data must be UTF-8 encoded."
            ) from exc

        save_store.save(content)
        return Response(status_code=200)

    @app.post("/mvix/load")
    async def load_game() -> Response:
        content = save_store.load()
        return Response(
            content=content if content is not None else "null",
            media_type="application/json",
        )

    @app.api_route("/{request_path:path}", methods=["GET", "HEAD"])
    def serve_asset(request: Request, request_path: str) -> Response:
        raw_path = _raw_request_path(request)
        if raw_path is None:
            raise HTTPException(status_code=404, detail="Not Found")

        found = lookup_cache.lookup(_join_under(encoded_root, raw_path))
        if found is not None and _is_within(root, found):
            if os.path.basename(found) == PATCHED_SCRIPT_NAME:
                patch = patch_registry.patch_for(Path(found))
                if patch is not None:
                    return Response(content=patch, media_type="application/javascript")
            return FileResponse(found)

        index = lookup_cache.lookup(_join_under(encoded_root, raw_path, "index.html"))
        if index is not None and _is_within(root, index):
            return FileResponse(index)

        logger.debug("No asset matches /%s", request_path)
        raise HTTPException(status_code=404, detail="Not Found")

    return app


__all__ = ["PATCHED_SCRIPT_NAME", "create_app"]
