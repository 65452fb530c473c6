#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_glfm_overrides.py
"""Unit tests for the GitLab Flavored Markdown override handlers.

Tests cover:
- Placeholder marking in text, links and images
- GitLab task list classes
- Inapplicable and custom-symbol task items
- Wrong node kind errors
- The default_html bypass
"""

import logging
import typing
from typing import Optional

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from glfm_markdown.ast import (
    Document,
    Emphasis,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    SourcePosition,
    TaskItem,
    Text,
)
from glfm_markdown.exceptions import NodeKindError
from glfm_markdown.options import GlfmUserOptions, HtmlFormatterOptions
from glfm_markdown.placeholders import has_placeholder
from glfm_markdown.renderers import GLFM_OVERRIDES, ChildRendering, GlfmHtmlFormatter, HtmlFormatter, RenderContext
from glfm_markdown.renderers.glfm import (
    render_image,
    render_link,
    render_list,
    render_task_item,
    render_text,
)


@pytest.mark.unit
class TestTextPlaceholders:
    """Tests for placeholder spans in text nodes."""

    def test_single_placeholder(self, glfm_render, paragraph_doc):
        """Test a placeholder is wrapped in a data-placeholder span."""
        doc = paragraph_doc(Text(content="value: %{foo}"))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == "<p>value: <span data-placeholder>%{foo}</span></p>\n"

    def test_multiple_placeholders(self, glfm_render, paragraph_doc):
        """Test every placeholder in a text node gets its own span."""
        doc = paragraph_doc(Text(content="%{a} and %{b}"))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == ("<p><span data-placeholder>%{a}</span> and <span data-placeholder>%{b}</span></p>\n")

    def test_surrounding_text_is_escaped(self, glfm_render, paragraph_doc):
        """Test the text between placeholders goes through HTML escaping."""
        doc = paragraph_doc(Text(content="a < %{x} & b"))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == "<p>a &lt; <span data-placeholder>%{x}</span> &amp; b</p>\n"

    def test_detection_disabled(self, glfm_render, paragraph_doc):
        """Test placeholders are plain text when detection is off."""
        doc = paragraph_doc(Text(content="value: %{foo}"))
        assert glfm_render(doc) == "<p>value: %{foo}</p>\n"

    def test_text_without_placeholder(self, glfm_render, paragraph_doc):
        """Test text without placeholders renders like the default formatter."""
        doc = paragraph_doc(Text(content="100% {done}"))
        assert glfm_render(doc, placeholder_detection=True) == "<p>100% {done}</p>\n"

    def test_empty_name_is_not_a_placeholder(self, glfm_render, paragraph_doc):
        """Test %{} is left alone."""
        doc = paragraph_doc(Text(content="%{}"))
        assert glfm_render(doc, placeholder_detection=True) == "<p>%{}</p>\n"

    def test_placeholder_in_emphasis(self, glfm_render, paragraph_doc):
        """Test text nested in inline markup is still scanned."""
        doc = paragraph_doc(Emphasis(content=[Text(content="%{x}")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == "<p><em><span data-placeholder>%{x}</span></em></p>\n"

    def test_placeholder_in_link_label_is_not_wrapped(self, glfm_render, paragraph_doc):
        """Test text directly inside a link label is never wrapped."""
        doc = paragraph_doc(Link(url="https://example.com", content=[Text(content="%{x}")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><a href="https://example.com">%{x}</a></p>\n'


@pytest.mark.unit
class TestLinkPlaceholders:
    """Tests for data-placeholder on links."""

    def test_placeholder_in_url(self, glfm_render, paragraph_doc):
        """Test a link whose URL holds a placeholder gets data-placeholder."""
        doc = paragraph_doc(Link(url="https://example.com/%{id}", content=[Text(content="go")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><a href="https://example.com/%%7Bid%7D" data-placeholder>go</a></p>\n'

    def test_encoded_placeholder_in_url(self, glfm_render, paragraph_doc):
        """Test the percent-encoded form is recognised too."""
        doc = paragraph_doc(Link(url="https://example.com/%7Bid%7D", content=[Text(content="go")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><a href="https://example.com/%7Bid%7D" data-placeholder>go</a></p>\n'

    def test_title_comes_before_marker(self, glfm_render, paragraph_doc):
        """Test the title attribute is written before data-placeholder."""
        doc = paragraph_doc(Link(url="/%{id}", title='say "hi"', content=[Text(content="go")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><a href="/%%7Bid%7D" title="say &quot;hi&quot;" data-placeholder>go</a></p>\n'

    def test_plain_link_unchanged(self, glfm_render, paragraph_doc):
        """Test links without placeholders use the default markup."""
        doc = paragraph_doc(Link(url="https://example.com", content=[Text(content="go")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><a href="https://example.com">go</a></p>\n'

    def test_detection_disabled(self, glfm_render, paragraph_doc):
        """Test no marker is written when detection is off."""
        doc = paragraph_doc(Link(url="/%{id}", content=[Text(content="go")]))
        assert "data-placeholder" not in glfm_render(doc)

    @pytest.mark.security
    def test_dangerous_url_is_suppressed(self, glfm_render, paragraph_doc):
        """Test safe mode still empties a dangerous placeholder URL."""
        doc = paragraph_doc(Link(url="javascript:%{x}", content=[Text(content="go")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><a href="" data-placeholder>go</a></p>\n'

    @pytest.mark.security
    def test_dangerous_url_kept_when_unsafe(self, glfm_render, paragraph_doc):
        """Test unsafe mode keeps a dangerous placeholder URL."""
        doc = paragraph_doc(Link(url="javascript:%{x}", content=[Text(content="go")]))
        result = glfm_render(doc, placeholder_detection=True, unsafe=True)
        assert 'href="javascript:%%7Bx%7D" data-placeholder' in result

    def test_url_rewriter_applies(self, glfm_render, paragraph_doc):
        """Test the link rewriter runs on placeholder links."""
        doc = paragraph_doc(Link(url="https://%{host}/x", content=[Text(content="go")]))
        result = glfm_render(
            doc,
            placeholder_detection=True,
            link_url_rewriter=lambda url: url.replace("%{host}", "example.com"),
        )
        assert result == '<p><a href="https://example.com/x" data-placeholder>go</a></p>\n'

    def test_nested_link_suppressed_with_relaxed_autolinks(self, glfm_render, paragraph_doc):
        """Test a link inside a placeholder link emits no tags of its own."""
        inner = Link(url="https://b.example.com", content=[Text(content="b")])
        doc = paragraph_doc(Link(url="https://a.example.com/%{x}", content=[inner]))
        result = glfm_render(doc, placeholder_detection=True, relaxed_autolinks=True)
        assert result == '<p><a href="https://a.example.com/%%7Bx%7D" data-placeholder>b</a></p>\n'

    def test_nested_placeholder_link_suppressed(self, glfm_render, paragraph_doc):
        """Test the suppression also applies when the nested link has a placeholder."""
        inner = Link(url="https://b.example.com/%{y}", content=[Text(content="b")])
        doc = paragraph_doc(Link(url="https://a.example.com", content=[inner]))
        result = glfm_render(doc, placeholder_detection=True, relaxed_autolinks=True)
        assert result == '<p><a href="https://a.example.com">b</a></p>\n'


@pytest.mark.unit
class TestImagePlaceholders:
    """Tests for data-placeholder on images."""

    def test_placeholder_in_src(self, glfm_render, paragraph_doc):
        """Test data-placeholder goes between src and alt."""
        doc = paragraph_doc(Image(url="/img/%{name}.png", content=[Text(content="logo")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><img src="/img/%%7Bname%7D.png" data-placeholder alt="logo" /></p>\n'

    def test_alt_text_is_plain(self, glfm_render, paragraph_doc):
        """Test markup in the alt text is flattened to plain text."""
        alt = [Emphasis(content=[Text(content="big")]), Text(content=" <logo>")]
        doc = paragraph_doc(Image(url="/%{n}.png", content=alt))
        result = glfm_render(doc, placeholder_detection=True)
        assert 'alt="big &lt;logo&gt;"' in result

    def test_title(self, glfm_render, paragraph_doc):
        """Test the title is written after the alt text."""
        doc = paragraph_doc(Image(url="/%{n}.png", title="Logo", content=[Text(content="logo")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><img src="/%%7Bn%7D.png" data-placeholder alt="logo" title="Logo" /></p>\n'

    def test_figure_with_caption(self, glfm_render, paragraph_doc):
        """Test figure mode wraps the image and adds the caption."""
        doc = paragraph_doc(Image(url="/%{n}.png", title="Logo", content=[Text(content="logo")]))
        result = glfm_render(doc, placeholder_detection=True, figure_with_caption=True)
        assert result == (
            '<p><figure><img src="/%%7Bn%7D.png" data-placeholder alt="logo" title="Logo" />'
            "<figcaption>Logo</figcaption></figure></p>\n"
        )

    def test_plain_image_unchanged(self, glfm_render, paragraph_doc):
        """Test images without placeholders use the default markup."""
        doc = paragraph_doc(Image(url="/logo.png", content=[Text(content="%{alt}")]))
        result = glfm_render(doc, placeholder_detection=True)
        assert result == '<p><img src="/logo.png" alt="%{alt}" /></p>\n'


@pytest.mark.unit
class TestTaskListClass:
    """Tests for the GitLab task-list class on lists."""

    def test_task_list_class(self, glfm_render, task_list_doc):
        """Test task lists use task-list instead of contains-task-list."""
        doc = task_list_doc((None, "a"))
        result = glfm_render(doc, tasklist_classes=True)
        assert result == (
            '<ul class="task-list">\n'
            '<li class="task-list-item"><input type="checkbox" class="task-list-item-checkbox" disabled="" /> a</li>\n'
            "</ul>\n"
        )

    def test_no_class_without_tasklist_classes(self, glfm_render, task_list_doc):
        """Test no class is written when task list classes are off."""
        doc = task_list_doc(("x", "a"))
        result = glfm_render(doc)
        assert result == '<ul>\n<li><input type="checkbox" checked="" disabled="" /> a</li>\n</ul>\n'

    def test_plain_list_gets_no_class(self, glfm_render):
        """Test a list without task items is not marked."""
        doc = Document(children=[List(items=[ListItem(children=[Paragraph(content=[Text(content="a")])])])])
        assert glfm_render(doc, tasklist_classes=True) == "<ul>\n<li>a</li>\n</ul>\n"

    def test_ordered_list_start(self, glfm_render):
        """Test ordered task lists keep their start attribute."""
        item = TaskItem(children=[Paragraph(content=[Text(content="a")])])
        doc = Document(children=[List(ordered=True, start=5, items=[item], is_task_list=True)])
        result = glfm_render(doc, tasklist_classes=True)
        assert result.startswith('<ol class="task-list" start="5">\n')
        assert result.endswith("</ol>\n")

    def test_sourcepos_after_class(self, glfm_render, task_list_doc):
        """Test data-sourcepos follows the class attribute."""
        doc = task_list_doc((None, "a"))
        doc.children[0].source_position = SourcePosition(1, 1, 1, 7)
        result = glfm_render(doc, tasklist_classes=True, sourcepos=True)
        assert result.startswith('<ul class="task-list" data-sourcepos="1:1-1:7">\n')


@pytest.mark.unit
class TestInapplicableTasks:
    """Tests for [~] and custom-symbol task items."""

    def test_inapplicable_item(self, glfm_render, task_list_doc):
        """Test [~] renders as an inapplicable task."""
        doc = task_list_doc(("~", "not needed"))
        result = glfm_render(doc, inapplicable_tasks=True)
        assert result == (
            "<ul>\n"
            '<li class="inapplicable"><input type="checkbox" data-inapplicable disabled=""> not needed</li>\n'
            "</ul>\n"
        )

    def test_inapplicable_item_with_classes(self, glfm_render, task_list_doc):
        """Test the task list classes are added alongside inapplicable."""
        doc = task_list_doc(("~", "not needed"))
        result = glfm_render(doc, inapplicable_tasks=True, tasklist_classes=True)
        assert result == (
            '<ul class="task-list">\n'
            '<li class="inapplicable task-list-item"><input type="checkbox" class="task-list-item-checkbox" '
            'data-inapplicable disabled=""> not needed</li>\n'
            "</ul>\n"
        )

    def test_inapplicable_sourcepos(self, glfm_render, task_list_doc):
        """Test data-sourcepos is written after the class attribute."""
        doc = task_list_doc(("~", "n/a"))
        doc.children[0].items[0].source_position = SourcePosition(2, 1, 2, 9)
        result = glfm_render(doc, inapplicable_tasks=True, sourcepos=True)
        assert '<li class="inapplicable" data-sourcepos="2:1-2:9"><input' in result

    def test_custom_symbol(self, glfm_render, task_list_doc):
        """Test an unknown symbol renders literally without a checkbox."""
        doc = task_list_doc(("?", "maybe"))
        result = glfm_render(doc, inapplicable_tasks=True)
        assert result == "<ul>\n<li>[?] maybe</li>\n</ul>\n"

    def test_custom_symbol_with_classes(self, glfm_render, task_list_doc):
        """Test an unknown symbol keeps the task-list-item class."""
        doc = task_list_doc(("?", "maybe"))
        result = glfm_render(doc, inapplicable_tasks=True, tasklist_classes=True)
        assert '<li class="task-list-item">[?] maybe</li>' in result
        assert "<input" not in result

    def test_custom_symbol_is_escaped(self, glfm_render, task_list_doc):
        """Test the symbol goes through HTML escaping."""
        doc = task_list_doc(("<", "odd"))
        result = glfm_render(doc, inapplicable_tasks=True)
        assert "<li>[&lt;] odd</li>" in result

    def test_checked_and_unchecked_use_default(self, glfm_render, task_list_doc):
        """Test ordinary task items are untouched by the override."""
        doc = task_list_doc((None, "todo"), ("X", "done"))
        result = glfm_render(doc, inapplicable_tasks=True)
        assert result == (
            "<ul>\n"
            '<li><input type="checkbox" disabled="" /> todo</li>\n'
            '<li><input type="checkbox" checked="" disabled="" /> done</li>\n'
            "</ul>\n"
        )

    def test_disabled_falls_back_to_default(self, glfm_render, task_list_doc):
        """Test [~] renders as a literal symbol when the toggle is off."""
        doc = task_list_doc(("~", "not needed"))
        result = glfm_render(doc)
        assert result == "<ul>\n<li>[~] not needed</li>\n</ul>\n"

    def test_loose_inapplicable_item(self, glfm_render):
        """Test paragraphs in a loose list keep their tags."""
        item = TaskItem(symbol="~", children=[Paragraph(content=[Text(content="n/a")])])
        doc = Document(children=[List(items=[item], tight=False, is_task_list=True)])
        result = glfm_render(doc, inapplicable_tasks=True)
        assert '<input type="checkbox" data-inapplicable disabled=""> \n<p>n/a</p>\n</li>' in result


@pytest.mark.unit
class TestWrongNodeKind:
    """Tests for handlers invoked with the wrong node kind."""

    @pytest.mark.parametrize(
        "handler,expected",
        [
            (render_text, "text"),
            (render_link, "link"),
            (render_image, "image"),
            (render_list, "list"),
            (render_task_item, "task_item"),
        ],
    )
    def test_wrong_kind_raises(self, handler, expected):
        """Test each override rejects a paragraph node."""
        context = RenderContext(HtmlFormatterOptions())
        with pytest.raises(NodeKindError) as exc_info:
            handler(context, Paragraph(), True)
        assert exc_info.value.expected_kind == expected
        assert exc_info.value.received_kind == "paragraph"
        assert str(exc_info.value) == f"Attempt to render invalid node as {expected} (got paragraph)"

    def test_nothing_written_on_error(self):
        """Test the sink is untouched when the kind check fails."""
        context = RenderContext(HtmlFormatterOptions(), GlfmUserOptions(placeholder_detection=True))
        with pytest.raises(NodeKindError):
            render_link(context, Text(content="%{x}"), True)
        assert context.getvalue() == ""


NEAR_MISSES = [
    "100%",
    "%{}",
    "%{" + "a" * 31 + "}",
    "%7B%7D",
    "%{a-b}",
    "%7b_lower%7d",
    "%{name",
    "{name}",
]


@pytest.mark.unit
class TestPlaceholderNearMisses:
    """Tests that strings the matcher rejects render exactly like the default formatter."""

    @pytest.mark.parametrize("literal", NEAR_MISSES)
    def test_text_near_miss(self, literal):
        """Test near-miss text gets no span and matches the default output."""
        doc = Document(children=[Paragraph(content=[Text(content=f"value: {literal}")])])
        user = GlfmUserOptions(placeholder_detection=True)
        result = GlfmHtmlFormatter(user=user).format_document(doc)
        assert "data-placeholder" not in result
        assert result == HtmlFormatter().format_document(doc)

    @pytest.mark.parametrize("literal", NEAR_MISSES)
    def test_link_near_miss(self, literal):
        """Test a near-miss link URL gets no data-placeholder attribute."""
        link = Link(url=f"https://example.com/{literal}", content=[Text(content="go")])
        doc = Document(children=[Paragraph(content=[link])])
        user = GlfmUserOptions(placeholder_detection=True)
        result = GlfmHtmlFormatter(user=user).format_document(doc)
        assert "data-placeholder" not in result
        assert result == HtmlFormatter().format_document(doc)

    @pytest.mark.parametrize("literal", NEAR_MISSES)
    def test_image_near_miss(self, literal):
        """Test a near-miss image URL gets no data-placeholder attribute."""
        image = Image(url=f"https://example.com/{literal}.png", content=[Text(content="alt")])
        doc = Document(children=[Paragraph(content=[image])])
        user = GlfmUserOptions(placeholder_detection=True)
        result = GlfmHtmlFormatter(user=user).format_document(doc)
        assert "data-placeholder" not in result
        assert result == HtmlFormatter().format_document(doc)


@pytest.mark.unit
class TestDispatch:
    """Tests for the override dispatch table and the default_html bypass."""

    def test_override_table_kinds(self):
        """Test exactly the five GitLab kinds are overridden."""
        assert set(GLFM_OVERRIDES) == {"text", "link", "image", "list", "task_item"}

    def test_default_html_bypasses_overrides(self, task_list_doc):
        """Test default_html output equals the default formatter output."""
        doc = task_list_doc(("~", "%{x}"), ("x", "done"))
        options = HtmlFormatterOptions(tasklist_classes=True)
        user = GlfmUserOptions(default_html=True, inapplicable_tasks=True, placeholder_detection=True)
        expected = HtmlFormatter(options).format_document(doc)
        assert GlfmHtmlFormatter(options, user).format_document(doc) == expected
        assert "data-inapplicable" not in expected
        assert "contains-task-list" in expected

    def test_empty_override_table(self, paragraph_doc):
        """Test a formatter without overrides behaves like the default formatter."""
        doc = paragraph_doc(Text(content="%{x}"))
        user = GlfmUserOptions(placeholder_detection=True)
        assert GlfmHtmlFormatter(user=user, overrides={}).format_document(doc) == "<p>%{x}</p>\n"

    def test_custom_override(self, paragraph_doc):
        """Test a custom handler is called for its kind."""
        calls = []

        def upper_text(context, node, entering):
            calls.append(node.kind)
            context.escape(node.content.upper())
            return ChildRendering.HTML

        doc = paragraph_doc(Text(content="hi"))
        result = GlfmHtmlFormatter(overrides={"text": upper_text}).format_document(doc)
        assert result == "<p>HI</p>\n"
        assert calls == ["text"]

    def test_constructor_annotations_match_parent(self):
        """Test the option parameters carry the same type hints as HtmlFormatter."""
        hints = typing.get_type_hints(GlfmHtmlFormatter.__init__)
        parent_hints = typing.get_type_hints(HtmlFormatter.__init__)
        assert hints["options"] == parent_hints["options"] == Optional[HtmlFormatterOptions]
        assert hints["user"] == parent_hints["user"] == Optional[GlfmUserOptions]

    def test_fallback_uses_subclass_visit_methods(self, paragraph_doc):
        """Test overrides that fall back reach a subclass's visit_* methods."""

        class BracketFormatter(GlfmHtmlFormatter):
            def visit_text(self, context, node, entering):
                context.write("[")
                context.escape(node.content)
                context.write("]")
                return ChildRendering.HTML

        doc = paragraph_doc(Text(content="plain "), Emphasis(content=[Text(content="em")]))
        user = GlfmUserOptions(placeholder_detection=True)
        assert BracketFormatter(user=user).format_document(doc) == "<p>[plain ]<em>[em]</em></p>\n"

    def test_debug_logging(self, paragraph_doc, caplog):
        """Test override decisions are logged when debug is on."""
        doc = paragraph_doc(Text(content="%{x}"))
        user = GlfmUserOptions(placeholder_detection=True, debug=True)
        with caplog.at_level(logging.DEBUG, logger="glfm_markdown.renderers.glfm"):
            GlfmHtmlFormatter(user=user).format_document(doc)
        assert any("Marked placeholders" in record.getMessage() for record in caplog.records)

    def test_no_logging_without_debug(self, paragraph_doc, caplog):
        """Test overrides stay quiet when debug is off."""
        doc = paragraph_doc(Text(content="%{x}"))
        user = GlfmUserOptions(placeholder_detection=True)
        with caplog.at_level(logging.DEBUG, logger="glfm_markdown.renderers.glfm"):
            GlfmHtmlFormatter(user=user).format_document(doc)
        assert not [r for r in caplog.records if r.name == "glfm_markdown.renderers.glfm"]


@pytest.mark.unit
class TestRenderProperties:
    """Property-based tests for the override layer."""

    @given(
        st.one_of(
            st.text(alphabet="%{}7BDbd_a-0 ", max_size=60),
            st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=80),
        )
    )
    def test_text_without_placeholders_matches_default(self, text):
        """Test text without placeholders renders byte-identical to the default formatter."""
        assume(not has_placeholder(text))
        doc = Document(children=[Paragraph(content=[Text(content=text)])])
        user = GlfmUserOptions(placeholder_detection=True, inapplicable_tasks=True)
        assert GlfmHtmlFormatter(user=user).format_document(doc) == HtmlFormatter().format_document(doc)

    @given(st.text(max_size=80), st.sampled_from([None, "x", "X", "~", "?", "-"]))
    def test_rendering_is_pure(self, text, symbol):
        """Test rendering the same tree twice gives the same HTML."""
        item = TaskItem(symbol=symbol, children=[Paragraph(content=[Text(content=text)])])
        doc = Document(children=[List(items=[item], is_task_list=True)])
        formatter = GlfmHtmlFormatter(
            HtmlFormatterOptions(tasklist_classes=True),
            GlfmUserOptions(placeholder_detection=True, inapplicable_tasks=True),
        )
        assert formatter.format_document(doc) == formatter.format_document(doc)
