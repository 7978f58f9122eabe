"""FastAPI service that lints a Go source archive."""

from __future__ import annotations

import argparse
import io
import os
import zipfile
from dataclasses import replace
from pathlib import Path
from tempfile import TemporaryDirectory
from urllib.parse import urlparse

import httpx
from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse

from .parser import ParseError
from .pipeline import lint_paths, resolve_config
from .report import report_to_dict


DOWNLOAD_TIMEOUT = 60.0

app = FastAPI(title="stutterlint API")


def _unpack_archive(archive_bytes: bytes, target_dir: Path) -> Path:
    """Unpack a zip into ``target_dir`` and return the Go source root.

    Archives made by ``git archive`` or code hosts wrap everything in one
    top-level directory; that directory becomes the root.
    """
    if not archive_bytes:
        raise HTTPException(status_code=400, detail="Empty archive.")
    try:
        with zipfile.ZipFile(io.BytesIO(archive_bytes)) as archive:
            archive.extractall(target_dir)
    except zipfile.BadZipFile as exc:
        raise HTTPException(status_code=400, detail="Invalid zip archive.") from exc

    top_level = list(target_dir.iterdir())
    if len(top_level) == 1 and top_level[0].is_dir():
        return top_level[0]
    return target_dir


def _fetch_archive(archive_url: str) -> bytes:
    if urlparse(archive_url).scheme not in {"http", "https"}:
        raise HTTPException(status_code=400, detail="archive_url must be http/https.")
    try:
        response = httpx.get(archive_url, timeout=DOWNLOAD_TIMEOUT, follow_redirects=True)
    except httpx.RequestError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to reach {archive_url}.") from exc
    if response.status_code != 200:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to download archive (status {response.status_code}).",
        )
    return response.content


def _parse_error_detail(exc: ParseError, root: Path) -> str:
    path = os.path.relpath(exc.path, root)
    if exc.line:
        return f"{path}:{exc.line}:{exc.column}: {exc.message}"
    return f"{path}: {exc.message}"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/lint")
def lint_archive(
    file: UploadFile | None = File(default=None),
    archive_url: str | None = Query(default=None),
    include_tests: bool = False,
) -> JSONResponse:
    if archive_url:
        archive_bytes = _fetch_archive(archive_url)
    elif file is not None:
        if not file.filename or not file.filename.lower().endswith(".zip"):
            raise HTTPException(status_code=400, detail="Upload a .zip archive.")
        archive_bytes = file.file.read()
    else:
        raise HTTPException(
            status_code=400, detail="Provide either a zip file upload or archive_url."
        )

    config = resolve_config()
    if include_tests:
        config = replace(config, include_tests=True)

    with TemporaryDirectory() as temp_dir:
        root = _unpack_archive(archive_bytes, Path(temp_dir))
        try:
            visitors, stats = lint_paths([root], config=config)
        except ParseError as exc:
            raise HTTPException(status_code=422, detail=_parse_error_detail(exc, root)) from exc
        return JSONResponse(content=report_to_dict(visitors, stats, relative_to=root))


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the stutterlint API server")
    parser.add_argument("--host", default="127.0.0.1", help="Bind host")
    parser.add_argument("--port", type=int, default=9000, help="Bind port")
    args = parser.parse_args()

    import uvicorn

    uvicorn.run("stutterlint.api:app", host=args.host, port=args.port, reload=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
