"""File utilities."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json_document(path: str) -> Any:
    """Read a UTF-8 JSON file and return the decoded value.

    Raises FileNotFoundError for missing files and ValueError when the
    content is not valid JSON.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Missing file: {path}")
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(f"File is not UTF-8 text: {p.name}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {p.name}: {exc}") from exc
