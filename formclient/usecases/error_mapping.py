"""Translate transport failures into the flat mapping stored in a form's error bag."""

from __future__ import annotations

from typing import Any, Dict, Mapping

DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."

_MISSING = object()


def extract_errors(payload: Any) -> Dict[str, Any]:
    """Normalize a failure payload into ``{field: messages}``.

    Rules, first match wins:
        1. A ``response`` envelope is unwrapped first.
        2. No ``data`` -> ``{"error": DEFAULT_ERROR_MESSAGE}``.
        3. ``data.errors`` -> shallow copy of it; a list is keyed by index.
           Any other shape degrades to the generic message.
        4. ``data.message`` -> ``{"error": message}``.
        5. Otherwise a shallow copy of ``data``.

    Args:
        payload: Exception, response object, or mapping produced by a transport.

    Returns:
        Dict[str, Any]: Mapping ready for ``FormErrors.set``. Never raises.
    """
    response = _lookup(payload, "response")
    if _present(response):
        payload = response

    data = _lookup(payload, "data")
    if not _present(data):
        return {"error": DEFAULT_ERROR_MESSAGE}

    errors = _lookup(data, "errors")
    if _present(errors):
        if isinstance(errors, (list, tuple)):
            return {str(index): item for index, item in enumerate(errors)}
        copied = _copy_mapping(errors)
        if copied is None:
            return {"error": DEFAULT_ERROR_MESSAGE}
        return copied

    message = _lookup(data, "message")
    if _present(message):
        return {"error": message}

    copied = _copy_mapping(data)
    if copied is None:
        return {"error": DEFAULT_ERROR_MESSAGE}
    return copied


def _lookup(obj: Any, key: str) -> Any:
    """Read ``key`` as a mapping item or attribute, without raising."""
    if obj is None:
        return _MISSING
    if isinstance(obj, Mapping):
        return obj.get(key, _MISSING)
    if isinstance(obj, (str, bytes, list, tuple)):
        return _MISSING
    try:
        return getattr(obj, key, _MISSING)
    except Exception:
        return _MISSING


def _present(value: Any) -> bool:
    # Empty containers count as present; falsy scalars do not.
    if value is _MISSING or value is None or value is False:
        return False
    if isinstance(value, (str, bytes)):
        return len(value) > 0
    if isinstance(value, (int, float)):
        return value != 0
    return True


def _copy_mapping(value: Any) -> Dict[str, Any] | None:
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}
    return None


__all__ = ["DEFAULT_ERROR_MESSAGE", "extract_errors"]
