"""Question rendering utilities for the practice window."""

from __future__ import annotations

from dgca_practice.core.markdown_math_renderer import renderer
from dgca_practice.core.models import QuestionItem


def render_question(question: QuestionItem, font_size: int = 14) -> str:
    """Render a question prompt as a full HTML document for QWebEngineView.

    Options are rendered separately as buttons, so only the prompt and its
    metadata line go into the document.
    """
    meta = question.difficulty.value.capitalize()
    if question.source:
        meta = f"{meta} · {question.source}"
    body = f"<p><small>{meta}</small></p>{renderer.render_fragment(question.prompt)}"
    return renderer.wrap_with_mathjax(body, title=question.id, font_size=font_size)


def render_review(question: QuestionItem, selected_index: int, font_size: int = 12) -> str:
    """Render a finished question with the chosen and the correct answer."""
    lines = [renderer.render_fragment(question.prompt)]
    if selected_index >= 0:
        letter = chr(ord("A") + selected_index)
        lines.append(f"<p>Your answer: <b>{letter}.</b> {renderer.render_inline(question.options[selected_index])}</p>")
    else:
        lines.append("<p>Your answer: <em>not answered</em></p>")
    if selected_index != question.correct_option_index:
        correct = question.correct_option_index
        letter = chr(ord("A") + correct)
        lines.append(f"<p>Correct answer: <b>{letter}.</b> {renderer.render_inline(question.options[correct])}</p>")
    if question.explanation:
        lines.append(
            f'<div class="explanation"><strong>Explanation:</strong> '
            f"{renderer.render_fragment(question.explanation)}</div>"
        )
    return renderer.wrap_with_mathjax("\n".join(lines), title=question.id, font_size=font_size)
