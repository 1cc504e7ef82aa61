"""CLI action handlers.

Each handler takes the parsed ``argparse.Namespace`` and returns a process
exit code. Vendor failures are printed to stderr as JSON and yield exit code
1; nothing here swallows exception types in logs.
"""

from __future__ import annotations

import argparse
import base64
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from ...base.errors import ProviderError
from ...base.factory import create_vendor_provider
from ...base.models import StreamCallbacks, VendorMessage
from ...config import VENDOR_IDS, get_vendor_metadata


def _print_error(exc: ProviderError, stream: TextIO) -> None:
    payload = {
        "error": exc.message,
        "code": exc.code.value,
        "vendor": exc.provider,
        "model": exc.model,
        "status": exc.status,
    }
    print(json.dumps({k: v for k, v in payload.items() if v is not None}), file=stream)


def vendor_rows() -> List[Dict[str, Any]]:
    """Metadata of every vendor as plain dictionaries (catalog models by name)."""
    rows = []
    for vendor_id in VENDOR_IDS:
        meta = asdict(get_vendor_metadata(vendor_id))
        meta["model_catalog"] = [m["name"] for m in meta["model_catalog"]]
        rows.append(meta)
    return rows


def handle_vendors(args: argparse.Namespace, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    rows = vendor_rows()
    if args.json:
        print(json.dumps(rows, indent=2), file=out)
        return 0
    for row in rows:
        flags = [
            name
            for name, key in (
                ("images", "supports_images"),
                ("meetings-audio", "supports_meetings_audio"),
                ("recorder", "supports_audio_recorder"),
                ("audio-summary", "supports_audio_summary"),
            )
            if row[key]
        ]
        print(f"{row['id']:<11} {row['label']:<20} default={row['default_model']}  [{', '.join(flags)}]", file=out)
    return 0


def handle_resolve(args: argparse.Namespace, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    out, err = out or sys.stdout, err or sys.stderr
    try:
        provider = create_vendor_provider(args.vendor, model=args.model)
        model = provider.resolve_model(
            use_requested=not args.discover,
            exclude_models=args.exclude,
            images=args.images,
        )
    except ProviderError as exc:
        _print_error(exc, err)
        return 1
    if args.json:
        print(json.dumps({"vendor": args.vendor, "model": model}), file=out)
    else:
        print(model, file=out)
    return 0


def _read_images(paths: List[str]) -> List[str]:
    return [base64.b64encode(Path(p).read_bytes()).decode("ascii") for p in paths]


def handle_ask(args: argparse.Namespace, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    out, err = out or sys.stdout, err or sys.stderr
    messages = []
    if args.system:
        messages.append(VendorMessage("system", args.system))
    messages.append(VendorMessage("user", args.prompt))

    def _live(chunk: str) -> None:
        out.write(chunk)
        out.flush()

    callbacks = StreamCallbacks(on_chunk=None if args.json else _live)
    try:
        provider = create_vendor_provider(args.vendor, model=args.model)
        if args.image:
            text = provider.stream_multimodal(messages, _read_images(args.image), callbacks)
        else:
            text = provider.stream_text(messages, callbacks)
    except ProviderError as exc:
        _print_error(exc, err)
        return 1
    if args.json:
        print(json.dumps({"vendor": args.vendor, "text": text}), file=out)
    else:
        out.write("\n")
    return 0


__all__ = ["handle_vendors", "handle_resolve", "handle_ask", "vendor_rows"]
