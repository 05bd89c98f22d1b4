"""Markdown + LaTeX rendering shared by the Qt window and the HTTP API.

Question prompts and explanations are stored as markdown with optional
``$...$`` math. Both front ends render the same HTML and leave the math to
MathJax at display time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt

_MATHJAX_SCRIPT = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str | None) -> str:
        """Render a markdown string into an HTML fragment."""
        sanitized = (markdown_text or "").strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line (e.g. an answer option) without a wrapping paragraph."""
        return self._markdown.renderInline(markdown_text.strip())

    def wrap_with_mathjax(
        self,
        body_html: str,
        title: str = "DGCA Practice",
        font_size: int = 14,
        text_color: str = "#1E1E1E",
    ) -> str:
        """Wrap a fragment inside a minimal HTML document that loads MathJax."""
        return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{html.escape(title)}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 0.75rem; background: transparent; color: {text_color}; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
      .explanation {{ margin-top: 1rem; padding: 0.5rem 0.75rem; border-left: 3px solid #0078D4; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src="{_MATHJAX_SCRIPT}"></script>
  </head>
  <body>
    <div class="question-html">{body_html}</div>
  </body>
</html>"""


# Shared by the Qt thread and the uvicorn thread; rendering is read-only.
renderer = MarkdownMathRenderer()
