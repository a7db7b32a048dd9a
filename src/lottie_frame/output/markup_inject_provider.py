"""Output provider injecting the snapshot markup into an existing text file."""

from pathlib import Path

from ..constants import INJECT_MARKER
from .base import OutputProvider


def inject_snippet(content: str, snippet: str, marker: str = INJECT_MARKER) -> str:
    """
    Place ``snippet`` into ``content``.

    The first line containing ``marker`` is replaced by the snippet; without a
    marker the snippet is appended on a line of its own.
    """
    lines = content.splitlines(keepends=True)
    for index, line in enumerate(lines):
        if marker in line:
            lines[index] = snippet + "\n"
            return "".join(lines)

    if lines and not lines[-1].endswith("\n"):
        lines[-1] += "\n"
    lines.append(snippet + "\n")
    return "".join(lines)


class MarkupInjectOutputProvider(OutputProvider):
    """Writes the snapshot into a text file, replacing a marker line if present."""

    def encode(self, markup: str) -> bytes:
        # Injected markup must stay on one line so it replaces exactly one line
        return " ".join(markup.split()).encode("utf-8")

    def write(self, data: bytes) -> None:
        """
        Inject single-line markup into the target file, creating it if needed.

        Args:
            data: Markup as UTF-8 bytes
        """
        if not self.path:
            raise ValueError("Output path not set")
        target = Path(self.path)
        existing = target.read_text(encoding="utf-8") if target.exists() else ""
        target.write_text(inject_snippet(existing, data.decode("utf-8")), encoding="utf-8")
