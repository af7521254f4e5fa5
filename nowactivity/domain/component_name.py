"""Component name parsing and canonicalization.

Android reports activities as ``package/class`` pairs in several shorthand
spellings (``com.app/.Main``, ``com.app/Main``, ``com.app/com.app.ui.Main``).
Everything downstream works with the single canonical ``com.app.Main`` form
produced here.
"""

from __future__ import annotations

import re
from typing import Optional

from .entities import ActivityId

COMPONENT_PATTERN = re.compile(r"[A-Za-z0-9_.]+/[A-Za-z0-9_.]+")


def find_component(line: str) -> Optional[str]:
    """Return the first ``pkg/cls`` token found in ``line``."""
    match = COMPONENT_PATTERN.search(line or "")
    if not match:
        return None
    return match.group(0)


def canonical_class_name(package: str, class_name: str) -> str:
    """Merge a package and a possibly-abbreviated class name."""
    pkg = (package or "").strip()
    cls = (class_name or "").strip()
    if not pkg or not cls:
        raise ValueError("Component requires both a package and a class name.")
    if cls.startswith("."):
        return pkg + cls
    if "." not in cls:
        return f"{pkg}.{cls}"
    return cls


def normalize_component(component: str, class_name: Optional[str] = None) -> ActivityId:
    """Normalize a component into an ``ActivityId``.

    Accepts either ``(package, class_name)`` or a single ``pkg/cls`` token.
    A single token without ``/`` is taken as already canonical, which makes
    ``normalize_component(str(normalize_component(x)))`` a no-op.

    Raises:
        ValueError: If the package or class part is empty.
    """
    if class_name is not None:
        return ActivityId(canonical_class_name(component, class_name))
    token = (component or "").strip()
    if not token:
        raise ValueError("Component must be a non-empty string.")
    if "/" not in token:
        return ActivityId(token)
    package, cls = token.split("/", 1)
    return ActivityId(canonical_class_name(package, cls))


__all__ = [
    "COMPONENT_PATTERN",
    "canonical_class_name",
    "find_component",
    "normalize_component",
]
