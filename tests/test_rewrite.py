"""Tests for in-place code rewriting."""

from html_safe_keys.models import CodeEdit
from html_safe_keys.rewrite import CodeRewriter, quoted_literal_pattern

HAML = "%h1 Welcome\n%p= t('sample.hello')\n%h2 Contents\n"


class TestQuotedLiteralPattern:
    """Only quoted occurrences match."""

    def test_single_and_double_quotes(self) -> None:
        pattern = quoted_literal_pattern("sample.hello")
        assert pattern.search("t('sample.hello')")
        assert pattern.search('t("sample.hello")')

    def test_partial_identifiers_do_not_match(self) -> None:
        pattern = quoted_literal_pattern("sample.hello")
        assert not pattern.search("t('sample.hello_world')")
        assert not pattern.search("t('my.sample.hello')")
        assert not pattern.search("sample.hello")

    def test_literal_is_escaped(self) -> None:
        assert not quoted_literal_pattern(".hello").search("t('xhello')")


class TestCodeRewriter:
    """Test line rewriting on real files."""

    def test_static_key(self, tmp_path, make_file) -> None:
        path = make_file("app/views/home/index.html.haml", HAML)

        changed = CodeRewriter(tmp_path).rewrite_line(
            "app/views/home/index.html.haml", 2, "sample.hello", "sample.hello_html"
        )

        assert changed
        assert path.read_text(encoding="utf-8") == (
            "%h1 Welcome\n%p= t('sample.hello_html')\n%h2 Contents\n"
        )

    def test_lazy_key(self, tmp_path, make_file) -> None:
        path = make_file("app/views/home/index.html.haml", "%h1 Welcome\n%p= t('.hello')\n")

        CodeRewriter(tmp_path).rewrite_line("app/views/home/index.html.haml", 2, ".hello", ".hello_html")

        assert path.read_text(encoding="utf-8") == "%h1 Welcome\n%p= t('.hello_html')\n"

    def test_only_target_line_changes(self, tmp_path, make_file) -> None:
        path = make_file("a.erb", "t('a.b')\nt('a.b')\n")
        CodeRewriter(tmp_path).rewrite_line("a.erb", 2, "a.b", "a.b_html")
        assert path.read_text(encoding="utf-8") == "t('a.b')\nt('a.b_html')\n"

    def test_crlf_preserved(self, tmp_path, make_file) -> None:
        path = make_file("a.erb", "<h1>\r\n<%= t('a.b') %>\r\n</h1>")
        CodeRewriter(tmp_path).rewrite_line("a.erb", 2, "a.b", "a.b_html")
        assert path.read_bytes() == b"<h1>\r\n<%= t('a.b_html') %>\r\n</h1>"

    def test_already_rewritten_line_untouched(self, tmp_path, make_file) -> None:
        path = make_file("a.erb", "t('a.b_html')\n")
        assert not CodeRewriter(tmp_path).rewrite_line("a.erb", 1, "a.b", "a.b_html")
        assert path.read_text(encoding="utf-8") == "t('a.b_html')\n"

    def test_line_out_of_range(self, tmp_path, make_file) -> None:
        make_file("a.erb", "t('a.b')\n")
        assert not CodeRewriter(tmp_path).rewrite_line("a.erb", 10, "a.b", "a.b_html")

    def test_apply_edits_to_same_file(self, tmp_path, make_file) -> None:
        path = make_file("a.erb", "t('a.b')\nt('.c')\n")
        edits = [
            CodeEdit("a.erb", 1, "a.b", "a.b_html", "a.b"),
            CodeEdit("a.erb", 2, ".c", ".c.html", "x.c"),
        ]
        assert CodeRewriter(tmp_path).apply(edits) == 2
        assert path.read_text(encoding="utf-8") == "t('a.b_html')\nt('.c.html')\n"

    def test_line_with_repeated_lazy_call(self, tmp_path, make_file) -> None:
        path = make_file("app/views/home/index.html.erb", "<%= t('.hello') %> <%= t('.hello') %>\n")
        edits = [CodeEdit("app/views/home/index.html.erb", 1, ".hello", ".hello_html", "home.index.hello")]
        assert CodeRewriter(tmp_path).apply(edits) == 1
        assert path.read_text(encoding="utf-8") == "<%= t('.hello_html') %> <%= t('.hello_html') %>\n"
