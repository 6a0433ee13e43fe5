"""JSON artifact writer."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from sfmap.core.errors import OutputError

logger = logging.getLogger(__name__)


def _to_jsonable(document: Any) -> Any:
    """Convert models (anything with `to_dict`) and sequences of them."""
    if hasattr(document, "to_dict"):
        return document.to_dict()
    if isinstance(document, (list, tuple)):
        return [_to_jsonable(item) for item in document]
    if isinstance(document, dict):
        return {k: _to_jsonable(v) for k, v in document.items()}
    return document


def render_document(document: Any) -> str:
    """Serialize a document to pretty-printed JSON text."""
    return json.dumps(_to_jsonable(document), indent=2, ensure_ascii=False) + "\n"


def write_formatted_output(path: Path | str, document: Any) -> Path:
    """
    Write `document` as pretty-printed JSON to `path`.

    Missing parent directories are created. The text goes to a temporary
    file next to `path` which is then renamed over it, so readers never
    see a partially written artifact.

    Raises:
        OutputError: If the directory or file cannot be written.
    """
    path = Path(path)
    text = render_document(document)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise OutputError(path, exc) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise OutputError(path, exc) from exc

    logger.debug("Written output to %s", path)
    return path
