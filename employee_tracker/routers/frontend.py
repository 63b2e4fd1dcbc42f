from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from employee_tracker.config import settings

router = APIRouter(tags=["frontend"])


def _static_root() -> Path:
    return Path(settings.STATIC_DIR).resolve()


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str):
    """Serve a front-end asset, or index.html for any path the browser app routes itself."""
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(404, "Not Found")

    root = _static_root()
    if full_path:
        candidate = (root / full_path).resolve()
        if candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)

    index = root / "index.html"
    if not index.is_file():
        raise HTTPException(404, "Front-end not found")
    return FileResponse(index)
