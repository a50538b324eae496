"""
Container block rule tests

Tests the ::: rule through a full engine: opening and closing, nesting by
marker length, auto-close, declined parameters and the token contract.
"""

import pytest
from markdown_it import MarkdownIt

from marpext.config import AppSettings
from marpext.lib.container import markerRun_measure
from marpext.lib.engine import engine_create
from marpext.lib.rules import container_plugin


@pytest.fixture
def md():
    return engine_create(AppSettings())


class TestBasicContainers:
    """Test single, non-nested containers"""

    def test_simple_container(self, md):
        """Class-only container wraps a paragraph"""
        html = md.render("::: columns\nHello\n:::\n")
        assert html == '<div class="columns">\n<p>Hello</p>\n</div>\n'

    def test_full_selector_with_styles(self, md):
        """Tag, classes, id and style are rendered in a fixed order"""
        html = md.render("::: aside.note#sidebar small left:10px\nText\n:::\n")
        assert html.startswith(
            '<aside class="note small" id="sidebar" style="left: 10px">\n'
        )
        assert html.endswith('</aside>\n')

    def test_longer_closer_is_accepted(self, md):
        """A closing run may be longer than the opening run"""
        html = md.render("::: note\nHi\n:::::\n")
        assert html == '<div class="note">\n<p>Hi</p>\n</div>\n'

    def test_closer_with_trailing_spaces(self, md):
        """Trailing whitespace after the closing run is allowed"""
        html = md.render("::: note\nHi\n:::   \n")
        assert html == '<div class="note">\n<p>Hi</p>\n</div>\n'

    def test_block_content(self, md):
        """Containers hold arbitrary block content"""
        html = md.render("::: note\n# Title\n\n- one\n- two\n:::\n")
        assert '<div class="note">\n<h1>Title</h1>\n<ul>' in html
        assert html.endswith('</ul>\n</div>\n')

    def test_interrupts_paragraph(self, md):
        """An opener ends a running paragraph"""
        html = md.render("Intro\n::: note\nHi\n:::\n")
        assert html == '<p>Intro</p>\n<div class="note">\n<p>Hi</p>\n</div>\n'

    def test_attribute_values_are_escaped(self, md):
        """Literal CSS is escaped inside the attribute"""
        html = md.render('::: box content:"x";\nHi\n:::\n')
        assert 'style="content:&quot;x&quot;;"' in html


class TestNesting:
    """Test nesting by marker run length"""

    def test_nested_containers(self, md):
        """Outer container uses a longer run"""
        html = md.render(":::: outer\n::: inner\ntext\n:::\n::::\n")
        assert html == (
            '<div class="outer">\n'
            '<div class="inner">\n'
            '<p>text</p>\n'
            '</div>\n'
            '</div>\n'
        )

    def test_sibling_containers_inside_outer(self, md):
        """Two inner containers inside one outer"""
        source = (
            ":::: columns\n"
            "::: column\nLeft\n:::\n"
            "::: column\nRight\n:::\n"
            "::::\n"
        )
        html = md.render(source)
        assert html == (
            '<div class="columns">\n'
            '<div class="column">\n<p>Left</p>\n</div>\n'
            '<div class="column">\n<p>Right</p>\n</div>\n'
            '</div>\n'
        )

    def test_shorter_run_does_not_close(self, md):
        """A bare shorter run inside is plain text"""
        html = md.render(":::: outer\n:::\n::::\n")
        assert html == '<div class="outer">\n<p>:::</p>\n</div>\n'

    def test_marker_line_with_text_is_not_a_closer(self, md):
        """Enough markers followed by text never closes, even if declined as an opener"""
        html = md.render("::: note\nHi\n::: left:1px\nmore\n:::\n")
        assert html == '<div class="note">\n<p>Hi\n::: left:1px\nmore</p>\n</div>\n'

    def test_longer_run_with_text_is_not_a_closer(self, md):
        """A longer run followed by text stays content; the next bare run closes"""
        html = md.render("::: note\nHi\n::::: left:1px\nmore\n:::\nafter\n")
        assert html == (
            '<div class="note">\n'
            '<p>Hi\n::::: left:1px\nmore</p>\n'
            '</div>\n'
            '<p>after</p>\n'
        )

    def test_longer_opener_inside_shorter_container(self, md):
        """A longer valid opener nests and auto-closes at the outer closer"""
        html = md.render("::: note\nHi\n::::: extra\nmore\n:::\nafter\n")
        assert html == (
            '<div class="note">\n'
            '<p>Hi</p>\n'
            '<div class="extra">\n<p>more</p>\n</div>\n'
            '</div>\n'
            '<p>after</p>\n'
        )

    def test_close_tags_follow_open_tags(self, md):
        """Each close renders the tag of its own opener"""
        html = md.render(":::: section.outer\n::: span.inner\nx\n:::\n::::\n")
        assert html.index('</span>') < html.index('</section>')

    def test_fence_inside_container(self, md):
        """Fenced code inside a container stays a code block"""
        html = md.render("::: note\n```\n::: not a container\n```\n:::\n")
        assert '<pre><code>::: not a container\n</code></pre>' in html
        assert html.count('<div') == 1


class TestAutoClose:
    """Test containers without a closing line"""

    def test_unterminated_at_document_end(self, md):
        """Container runs to the end of the document"""
        html = md.render("::: box\ncontent")
        assert html == '<div class="box">\n<p>content</p>\n</div>\n'

    def test_unterminated_inside_blockquote(self, md):
        """Container closes at the end of its enclosing block"""
        html = md.render("> ::: box\n> inside\n\noutside\n")
        assert '<blockquote>\n<div class="box">\n<p>inside</p>\n</div>\n</blockquote>' in html
        assert html.endswith('<p>outside</p>\n')


class TestDeclined:
    """Test lines that are not containers"""

    def test_style_only_parameters(self, md):
        """A colon in the first token declines the rule"""
        html = md.render("::: left:240px\nText\n")
        assert '<div' not in html
        assert html.startswith('<p>::: left:240px')

    def test_bare_marker_run(self, md):
        """A run with no parameters is not an opener"""
        html = md.render(":::\n")
        assert html == '<p>:::</p>\n'

    def test_too_few_markers(self, md):
        """Two markers are below the minimum"""
        html = md.render(":: note\n")
        assert html == '<p>:: note</p>\n'

    def test_indented_code_block(self, md):
        """Four-space indentation makes a code block, not a container"""
        html = md.render("    ::: note\n")
        assert html == '<pre><code>::: note\n</code></pre>\n'


class TestTokens:
    """Test the emitted token stream"""

    def test_open_close_pair(self, md):
        """Close token references its opening token"""
        tokens = md.parse("::: span.note#n1\nHi\n:::\n")
        token_o = tokens[0]
        token_c = tokens[-1]

        assert token_o.type == 'container_open'
        assert token_o.tag == 'span'
        assert token_o.nesting == 1
        assert token_o.markup == ':::'
        assert token_o.map == [0, 2]
        assert token_o.meta['definition'].id == 'n1'

        assert token_c.type == 'container_close'
        assert token_c.nesting == -1
        assert token_c.meta['open'] is token_o

    def test_unterminated_close_has_no_markup(self, md):
        """Auto-closed containers have an empty closing markup"""
        tokens = md.parse("::: note\nHi")
        assert tokens[-1].type == 'container_close'
        assert tokens[-1].markup == ''


class TestConfiguration:
    """Test settings and the standalone plugin"""

    def test_disabled_container_plugin(self):
        """Disabled rule leaves the text as a paragraph"""
        md = engine_create(AppSettings(enable_container_plugin=False))
        html = md.render("::: note\nHi\n:::\n")
        assert '<div' not in html

    def test_custom_marker(self):
        """Any single character can form the marker run"""
        md = engine_create(AppSettings(container_marker='!'))
        html = md.render("!!! note\nHi\n!!!\n")
        assert html == '<div class="note">\n<p>Hi</p>\n</div>\n'

    def test_custom_default_tag(self):
        """Selectors without a tag use the configured default"""
        md = engine_create(AppSettings(default_container_tag='section'))
        html = md.render("::: note\nHi\n:::\n")
        assert html == '<section class="note">\n<p>Hi</p>\n</section>\n'

    def test_plugin_on_plain_markdown_it(self):
        """container_plugin works with MarkdownIt.use()"""
        md = MarkdownIt("commonmark").use(container_plugin)
        assert md.render("::: note\nHi\n:::\n") == '<div class="note">\n<p>Hi</p>\n</div>\n'


class TestMarkerRun:
    """Test marker run measurement"""

    @pytest.mark.parametrize("src, expected", [
        ("::: x", 3),
        (":::::", 5),
        ("x:::", 0),
        ("", 0),
    ])
    def test_measure(self, src, expected):
        assert markerRun_measure(src, 0, len(src), ':') == expected

    def test_measure_stops_at_maximum(self):
        """The run never extends past the line end"""
        assert markerRun_measure("::::::", 0, 2, ':') == 2
