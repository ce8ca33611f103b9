import re
import time
from typing import Any, Mapping

REMOTE_RE = re.compile(r"^https?://", re.IGNORECASE)
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")
_WORD_RE = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]+|[0-9]|\b|_)|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def is_remote(file_path: str) -> bool:
    return bool(REMOTE_RE.match(file_path))


def to_safe_path(text: str) -> str:
    """Turn arbitrary text into a relative path without traversal segments.

    Empty and dot-only segments are dropped, characters outside
    ``[A-Za-z0-9._-]`` are each replaced by ``_``.
    """
    segments: list[str] = []
    for segment in text.split("/"):
        if not segment or set(segment) == {"."}:
            continue
        segments.append(_UNSAFE_CHARS_RE.sub("_", segment))
    return "/".join(segments)


def camel_case(text: str) -> str:
    """Camel case an identifier: ``vercel-blob`` -> ``vercelBlob``."""
    words = _WORD_RE.findall(text or "")
    if not words:
        return ""
    head, *rest = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in rest)


def deep_merge(*mappings: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge mappings left to right into a new dict.

    Nested mappings are merged key by key, anything else (lists included)
    is replaced by the later value.
    """
    out: dict[str, Any] = {}
    for mapping in mappings:
        if not mapping:
            continue
        for key, value in mapping.items():
            if isinstance(value, Mapping):
                current = out.get(key)
                out[key] = deep_merge(current if isinstance(current, Mapping) else None, value)
            else:
                out[key] = value
    return out


def now_ms() -> int:
    return time.time_ns() // 1_000_000
