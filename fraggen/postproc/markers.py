"""Marker comments delimiting an embedded fragment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..models import format_timestamp


@dataclass
class FragmentContent:
    """Rendered fragment body together with its identity."""

    id: str
    name: str
    version: str
    body: str


class MarkerManager:
    """Wraps fragment markup in start/end comments and a scoping container."""

    BEGIN_FMT = "<!-- Fragment: {name} -->"
    GENERATED_FMT = "<!-- Generated: {timestamp} -->"
    END_FMT = "<!-- End Fragment: {name} -->"
    WRAPPER_FMT = '<div class="fragment-{id}" data-fragment="{id}" data-version="{version}">'

    def wrap(
        self,
        fragment: FragmentContent,
        generated_at: datetime,
        *,
        script: Optional[str] = None,
    ) -> str:
        """Return the complete fragment document."""
        lines = [
            self.BEGIN_FMT.format(name=fragment.name),
            self.GENERATED_FMT.format(timestamp=format_timestamp(generated_at)),
            self.WRAPPER_FMT.format(id=fragment.id, version=fragment.version),
            fragment.body.rstrip(),
            "</div>",
        ]
        if script:
            lines.append(script.strip())
        lines.append(self.END_FMT.format(name=fragment.name))
        return "\n".join(lines) + "\n"
