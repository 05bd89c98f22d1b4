from dgca_practice.core.markdown_math_renderer import MarkdownMathRenderer


def test_render_fragment_keeps_math_for_mathjax():
    html = MarkdownMathRenderer().render_fragment("Lift is **proportional** to $V^2$")
    assert "<strong>proportional</strong>" in html
    assert "$V^2$" in html


def test_empty_fragment_has_placeholder():
    assert "No content provided" in MarkdownMathRenderer().render_fragment(None)


def test_raw_html_is_escaped():
    html = MarkdownMathRenderer().render_fragment("<script>alert(1)</script>")
    assert "<script>" not in html


def test_wrap_with_mathjax_applies_font_size():
    document = MarkdownMathRenderer().wrap_with_mathjax("<p>Body</p>", title="inst-001", font_size=18)
    assert "font-size: 18pt" in document
    assert "<title>inst-001</title>" in document
    assert "mathjax" in document.lower()
