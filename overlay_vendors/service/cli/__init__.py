"""Vendor diagnostics CLI (package entrypoint).

Usage::

    python -m overlay_vendors.service.cli vendors
    python -m overlay_vendors.service.cli resolve --vendor gemini --discover
    python -m overlay_vendors.service.cli ask --vendor anthropic "What is SSE?"
"""

from __future__ import annotations

from typing import List, Optional

from .cli_actions import handle_ask, handle_resolve, handle_vendors
from .cli_parser import build_parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint; returns the process exit code."""
    p = build_parser()
    args = p.parse_args(argv)
    if args.cmd == "resolve":
        return handle_resolve(args)
    if args.cmd == "ask":
        return handle_ask(args)
    if args.cmd == "vendors":
        return handle_vendors(args)
    p.print_help()
    return 2


__all__ = ["main", "build_parser"]
