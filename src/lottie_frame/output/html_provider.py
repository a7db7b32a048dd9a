"""HTML output provider."""

from html import escape

from .base import OutputProvider

_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{markup}
</body>
</html>
"""


class HtmlOutputProvider(OutputProvider):
    """Output provider wrapping the snapshot in a minimal HTML page."""

    def __init__(self, path: str = "", title: str = "lottie-frame snapshot"):
        super().__init__(path)
        self.title = title

    def encode(self, markup: str) -> bytes:
        page = _TEMPLATE.format(title=escape(self.title), markup=markup)
        return page.encode("utf-8")
