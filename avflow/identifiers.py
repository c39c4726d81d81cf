"""Identifier rules shared by schema validation and flattening."""
from __future__ import annotations

import re
from typing import Any

ID_PATTERN = r"^[A-Za-z0-9._:-]+$"

_ID_RE = re.compile(r"[A-Za-z0-9._:-]+")


def is_valid_id(value: Any) -> bool:
    """Return True when the whole value is an area/node/edge identifier."""
    if not isinstance(value, str):
        return False
    return _ID_RE.fullmatch(value) is not None
