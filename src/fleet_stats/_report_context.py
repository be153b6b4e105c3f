"""Shared CLI helpers: input decoding and structured output."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import IO, Any

import yaml
from pydantic import TypeAdapter, ValidationError

from .models.server import ServerRecord

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    """The input is not a JSON array of server objects."""


# ---------------------------------------------------------------------------
# Input decoding
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=1)
def _servers_adapter() -> TypeAdapter[list[ServerRecord] | None]:
    return TypeAdapter(list[ServerRecord] | None)


def decode_servers(raw: str | bytes) -> list[ServerRecord]:
    """Decode a JSON array of server objects. A top-level ``null`` is an empty fleet."""
    try:
        servers = _servers_adapter().validate_json(raw)
    except (ValidationError, UnicodeDecodeError) as exc:
        raise DecodeError(f"failed to decode json: {exc}") from exc
    return list(servers or [])


def load_servers(stream: IO[str] | IO[bytes]) -> list[ServerRecord]:
    """Read *stream* to the end and decode it."""
    try:
        raw = stream.read()
    except UnicodeDecodeError as exc:
        raise DecodeError(f"failed to decode json: {exc}") from exc
    servers = decode_servers(raw)
    logger.debug("Decoded %d server record(s) from %s", len(servers), getattr(stream, "name", "<stream>"))
    return servers


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def dump_view(view: dict[str, Any], fmt: str) -> str:
    """Serialize a report view as ``yaml`` or ``json``."""
    if fmt == "json":
        return json.dumps(view, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.dump(view, default_flow_style=False, sort_keys=False)
    raise ValueError(f"Unsupported output format: {fmt}")


def load_yaml(path: str | Path) -> Any:
    """Load a YAML file; an empty file loads as an empty dict."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return {} if data is None else data
