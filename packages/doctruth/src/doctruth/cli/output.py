"""CLI message helpers."""

from __future__ import annotations

from ..core.serialize import dumps_json


def generation_summary(error_count: int) -> list[str]:
    lines = ["✅ Truth generated successfully"]
    if error_count > 0:
        lines.append(f"⚠️  {error_count} warnings encountered")
    return lines


def check_summary(changed: bool) -> str:
    if changed:
        return "⚠️  Truth has changed - documentation may be outdated"
    return "✅ Truth unchanged - documentation is up to date"


def render_error(*, as_json: bool, message: str, code: int, kind: str) -> str:
    if as_json:
        return dumps_json(
            {
                "schema_name": "doctruth.error.v1",
                "schema_version": 1,
                "tool": "doctruth",
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            pretty=False,
        )
    return f"❌ Error: {message}"
