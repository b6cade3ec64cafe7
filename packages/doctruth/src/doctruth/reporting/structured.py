from __future__ import annotations

from typing import Any

from ..core.serialize import dumps_json
from ..truth.model import ErrorRecord, ResultTree


def structured_payload(tree: ResultTree, errors: tuple[ErrorRecord, ...]) -> dict[str, Any]:
    payload = tree.to_dict()
    payload["errors"] = [error.to_dict() for error in errors]
    return payload


def render_json(tree: ResultTree, errors: tuple[ErrorRecord, ...]) -> str:
    return dumps_json(structured_payload(tree, errors), pretty=True) + "\n"
