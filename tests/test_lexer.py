"""
Pygments lexer tests

Tests token classification of container lines, directive shorthand,
highlight spans and HTML comments.
"""

from pygments.token import Comment, Generic, Keyword, Literal, Name, Punctuation, String

from marpext.lib.engine import codeHighlighter_make
from marpext.lib.lexer import MarpExtendedLexer, get_lexer, lexer_forMarkers


def tokens_get(text):
    return list(MarpExtendedLexer().get_tokens(text))


class TestContainerLines:
    """Test ::: opener and closer lines"""

    def test_full_selector(self):
        tokens = tokens_get("::: aside.note#sidebar small left:10px\n")
        assert (Keyword.Declaration, ":::") in tokens
        assert (Name.Tag, "aside") in tokens
        assert (Name.Class, "note") in tokens
        assert (Name.Variable, "#sidebar") in tokens
        assert (Name.Class, "small") in tokens
        assert (Name.Attribute, "left") in tokens
        assert (Literal, "10px") in tokens

    def test_multi_word_style_value(self):
        tokens = tokens_get("::: box border:1px solid red\n")
        assert (Name.Attribute, "border") in tokens
        assert (Literal, "solid") in tokens
        assert (Literal, "red") in tokens

    def test_closer(self):
        tokens = tokens_get("::::\n")
        assert tokens[0] == (Keyword.Declaration, "::::")

    def test_state_resets_after_line(self):
        """Text after a container line is not classified as selector"""
        tokens = tokens_get("::: note left:1px\nplain words\n")
        assert (Name.Class, "plain") not in tokens
        assert (Literal, "words") not in tokens


class TestDirectiveLines:
    """Test /// shorthand lines"""

    def test_classes_and_directive(self):
        tokens = tokens_get("/// lead paginate:skip\n")
        assert tokens[0] == (Keyword.Namespace, "///")
        assert (Name.Class, "lead") in tokens
        assert (Name.Attribute, "paginate") in tokens
        assert (Punctuation, ":") in tokens
        assert (Literal, "skip") in tokens

    def test_quoted_value(self):
        tokens = tokens_get('/// footer:"links : rechts"\n')
        assert (String, '"links : rechts"') in tokens


class TestInline:
    """Test highlight spans and comments"""

    def test_mark(self):
        tokens = tokens_get("a ==hi== b\n")
        assert (Generic.Emph, "hi") in tokens
        assert tokens.count((Punctuation, "==")) == 2

    def test_comment(self):
        tokens = tokens_get("<!-- _class: lead -->\n")
        content = [value for token, value in tokens if token is Comment.Multiline]
        assert "".join(content) == "<!-- _class: lead -->"

    def test_text_round_trip(self):
        """Lexing never drops characters"""
        source = "# Title\n::: note\n==x== and /// not-a-directive\n:::\n"
        assert "".join(value for _, value in tokens_get(source)) == source


class TestLexerMetadata:
    """Test lexer registration data"""

    def test_aliases(self):
        assert "marpext" in MarpExtendedLexer.aliases
        assert "*.marp.md" in MarpExtendedLexer.filenames

    def test_get_lexer(self):
        assert isinstance(get_lexer(), MarpExtendedLexer)


class TestCustomMarkers:
    """Test lexers built for non-default marker characters"""

    def test_custom_marker_lines(self):
        tokens = list(get_lexer("!", "%").get_tokens("!!! note left:1px\n%%% lead\n"))
        assert (Keyword.Declaration, "!!!") in tokens
        assert (Name.Class, "note") in tokens
        assert (Literal, "1px") in tokens
        assert (Keyword.Namespace, "%%%") in tokens
        assert (Name.Class, "lead") in tokens

    def test_default_lexer_ignores_custom_markers(self):
        tokens = tokens_get("!!! note\n")
        assert (Keyword.Declaration, "!!!") not in tokens

    def test_custom_lexer_ignores_default_markers(self):
        tokens = list(get_lexer("!", "%").get_tokens("::: note\n"))
        assert (Keyword.Declaration, ":::") not in tokens

    def test_lexer_classes_are_cached(self):
        """Each marker pair compiles one class; the default pair reuses the registered one"""
        assert lexer_forMarkers("!", "%") is lexer_forMarkers("!", "%")
        assert lexer_forMarkers(":", "/") is MarpExtendedLexer
        assert issubclass(lexer_forMarkers("!", "%"), MarpExtendedLexer)

    def test_highlighter_follows_markers(self):
        """Fences use the lexer matching the engine's markers"""
        source = "!!! note\n"
        custom = codeHighlighter_make("monokai", "!", "/")(source, "marpext", "")
        default = codeHighlighter_make("monokai")(source, "marpext", "")
        assert custom != default
