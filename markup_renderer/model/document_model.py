"""Output handle produced by a finished render."""
from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Dict, Optional


@dataclass(slots=True)
class RenderedDocument:
    """Serialized document plus the file name suggested by its metadata."""

    content: bytes
    filename: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def stream(self) -> BytesIO:
        """Return a readable stream over the rendered bytes."""
        return BytesIO(self.content)

    def write_to(self, path: Path) -> Path:
        """Write the rendered bytes to ``path`` and return it."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.content)
        return path
