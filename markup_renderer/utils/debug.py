"""Helpers to persist intermediate representations for debugging."""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

from markup_renderer.model.elements import DrawCommand, Node


class DebugDumper:
    """Writes the node tree and recorded drawing commands onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, tree: Node, commands: Sequence[DrawCommand] = (), config: Mapping[str, Any] | None = None) -> None:
        """Persist the parsed tree, the drawing calls and the effective config as JSON."""
        self.directory.mkdir(parents=True, exist_ok=True)
        self._write("markup_tree.json", tree)
        if commands:
            self._write("draw_commands.json", [{"kind": command.kind, **command.args} for command in commands])
        if config is not None:
            self._write("config.json", config)

    def _write(self, name: str, value: Any) -> None:
        payload = self._serialize(value)
        (self.directory / name).write_text(json.dumps(payload, indent=2, default=str))

    def _serialize(self, value: Any) -> Any:
        if is_dataclass(value):
            return {k: self._serialize(v) for k, v in asdict(value).items()}
        if isinstance(value, Mapping):
            return {k: self._serialize(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._serialize(v) for v in value]
        return value
