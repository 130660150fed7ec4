"""Safe static-file resolution and content-type helpers for UI assets."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

_TEXT_MIME_TYPES = frozenset(
    {
        "application/javascript",
        "application/json",
        "image/svg+xml",
    }
)


def resolve_static_file(ui_root: Path, request_path: str) -> Optional[Path]:
    """Resolve a request path to a file inside the UI root, or None."""
    root = ui_root.resolve()
    relative = unquote(request_path or "").lstrip("/")
    if not relative:
        return None

    if any(part.startswith(".") for part in Path(relative).parts):
        return None

    candidate = (root / relative).resolve()
    if root not in candidate.parents or not candidate.is_file():
        return None
    return candidate


def guess_content_type(path: Path) -> str:
    """Guess an HTTP content type, adding a UTF-8 charset for text assets."""
    mime_type, _ = mimetypes.guess_type(str(path))
    if not mime_type:
        return "application/octet-stream"
    if mime_type.startswith("text/") or mime_type in _TEXT_MIME_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type
