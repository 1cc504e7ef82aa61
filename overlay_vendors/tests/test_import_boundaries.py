"""Import boundary checks for the vendor layer.

Static scans (no imports executed) that keep the dependency direction
inward:

1) ``base``, ``config`` and ``persistence`` never import a vendor package or
   the host-facing ``service`` package. The registry refers to vendors by
   module path strings only.
2) Vendor packages never import each other; shared wire helpers live in
   ``base``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
VENDORS = ("openai", "gemini", "anthropic", "perplexity")
INNER_PACKAGES = ("base", "config", "persistence")

_IMPORT_LINE = re.compile(r"^\s*(?:from\s+(\S+)\s+import|import\s+(\S+))", re.MULTILINE)


def _iter_python_files(root: Path) -> Iterable[Path]:
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _imported_packages(path: Path) -> List[str]:
    """Top-level ``overlay_vendors`` subpackages imported by ``path``."""
    rel_parts = path.relative_to(PACKAGE_ROOT).parts[:-1]
    found: List[str] = []
    for match in _IMPORT_LINE.finditer(path.read_text(encoding="utf-8", errors="replace")):
        target = match.group(1) or match.group(2)
        if target.startswith("overlay_vendors."):
            found.append(target.split(".")[1])
        elif target.startswith("."):
            depth = len(target) - len(target.lstrip("."))
            remainder = target.lstrip(".").split(".")[0]
            anchor = rel_parts[: max(len(rel_parts) - (depth - 1), 0)]
            found.append(anchor[0] if anchor else remainder)
    return found


@pytest.mark.parametrize("package", INNER_PACKAGES)
def test_inner_layers_do_not_import_vendors_or_service(package: str) -> None:
    forbidden = set(VENDORS) | {"service"}
    offenders = [
        f"{path.relative_to(PACKAGE_ROOT)} -> {name}"
        for path in _iter_python_files(PACKAGE_ROOT / package)
        for name in _imported_packages(path)
        if name in forbidden
    ]
    assert not offenders, "forbidden imports:\n" + "\n".join(offenders)


@pytest.mark.parametrize("vendor", VENDORS)
def test_vendor_packages_are_independent(vendor: str) -> None:
    others = set(VENDORS) - {vendor}
    offenders = [
        f"{path.relative_to(PACKAGE_ROOT)} -> {name}"
        for path in _iter_python_files(PACKAGE_ROOT / vendor)
        for name in _imported_packages(path)
        if name in others
    ]
    assert not offenders, "cross-vendor imports:\n" + "\n".join(offenders)
