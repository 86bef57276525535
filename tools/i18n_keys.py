#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Key extraction helpers shared by the translation validation tools.

A translation document is a JSON object whose values are either nested
objects or leaves. Every leaf is identified by the dotted path of its
ancestor keys, e.g. {"menu": {"title": "Hi"}} -> "menu.title".
"""

import json
from typing import Any, Dict, Set


class DocumentError(ValueError):
    """Raised when a translation file cannot be read as a JSON object."""


def get_all_keys(obj: Dict[str, Any], prefix: str = "") -> Set[str]:
    """Recursively get all leaf keys from a JSON object, supporting nested objects.

    Only objects are descended into. Arrays, null and scalars are leaves and
    contribute one key each, so an empty nested object contributes nothing.

    Args:
        obj: JSON object
        prefix: Current key prefix for building the full key path

    Returns:
        A set containing all keys
    """
    keys = set()
    for key, value in obj.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            keys.update(get_all_keys(value, full_key))
        else:
            keys.add(full_key)
    return keys


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def load_document(path: str) -> Dict[str, Any]:
    """Load a translation file with strict JSON rules.

    Raises:
        DocumentError: the file is unreadable, is not valid JSON, or its
            root is not an object.
    """
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            data = json.load(f, parse_constant=_reject_constant)
    except FileNotFoundError as e:
        raise DocumentError(f"File not found - {e.filename}") from e
    except OSError as e:
        raise DocumentError(f"File could not be read - {e}") from e
    except UnicodeDecodeError as e:
        raise DocumentError(f"File is not valid UTF-8 - {e}") from e
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too
        raise DocumentError(f"JSON parsing failed - {e}") from e
    except RecursionError as e:
        raise DocumentError("JSON nesting too deep") from e

    if not isinstance(data, dict):
        raise DocumentError(
            f"Expected a JSON object at the top level, got {type(data).__name__}"
        )
    return data


def load_keys(path: str) -> Set[str]:
    """Shortcut for get_all_keys(load_document(path))."""
    data = load_document(path)
    try:
        return get_all_keys(data)
    except RecursionError as e:
        raise DocumentError("JSON nesting too deep") from e
