"""CLI parser construction for the vendor CLI.

Wires subparsers only; handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ...config import VENDOR_IDS
from ...config.defaults import CLI_DEFAULT_VENDOR


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``vendors``, ``resolve`` and ``ask``.

    No I/O or network calls happen here.
    """
    p = argparse.ArgumentParser(prog="overlay-vendors", description="Vendor streaming diagnostics")
    sub = p.add_subparsers(dest="cmd")

    p_vendors = sub.add_parser("vendors", help="List supported vendors and their capabilities")
    p_vendors.add_argument("--json", action="store_true")

    p_resolve = sub.add_parser("resolve", help="Show the model a vendor would use")
    p_resolve.add_argument("--vendor", choices=VENDOR_IDS, default=CLI_DEFAULT_VENDOR)
    p_resolve.add_argument("--model", default=None, help="Requested model (returned unless excluded)")
    p_resolve.add_argument("--exclude", nargs="*", default=[], help="Models to exclude")
    p_resolve.add_argument("--images", action="store_true", help="Require image input support")
    p_resolve.add_argument(
        "--discover", action="store_true", help="Ignore the configured model and run cache/discovery"
    )
    p_resolve.add_argument("--json", action="store_true")

    p_ask = sub.add_parser("ask", help="Stream an answer to a prompt")
    p_ask.add_argument("--vendor", choices=VENDOR_IDS, default=CLI_DEFAULT_VENDOR)
    p_ask.add_argument("--model", default=None)
    p_ask.add_argument("--system", default=None, help="Optional system instruction")
    p_ask.add_argument("--image", action="append", default=[], help="Image file to attach (repeatable)")
    p_ask.add_argument("--json", action="store_true", help="Print one JSON document instead of live text")
    p_ask.add_argument("prompt")

    return p


__all__ = ["build_parser"]
