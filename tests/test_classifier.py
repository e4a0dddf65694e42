"""Tests for usage classification."""

from html_safe_keys.classifier import UsageClassifier, dynamic_group, lazy_group, static_group
from html_safe_keys.models import Usage, UsageKind


class TestGroups:
    """Test group construction from raw search output."""

    def test_static_with_hits(self) -> None:
        output = (
            "app/views/home/index.html.erb:5:  <%= t('sample.hello') %>\n"
            "app/views/home/show.html.erb:10:  <p><%= t('sample.hello') %></p>\n"
        )
        group = static_group("sample.hello", output)
        assert group.kind is UsageKind.STATIC
        assert group.key == "sample.hello"
        assert group.usages == [
            Usage("app/views/home/index.html.erb", 5, "<%= t('sample.hello') %>"),
            Usage("app/views/home/show.html.erb", 10, "<p><%= t('sample.hello') %></p>"),
        ]

    def test_static_without_hits_is_placeholder(self) -> None:
        group = static_group("sample.hello", "")
        assert group.key == "sample.hello"
        assert group.usages == []

    def test_lazy_line_with_two_calls(self) -> None:
        output = "app/views/users/show.html.erb:4:  <%= t('.heading') %><%= t('.description') %>\n"
        group = lazy_group(output)
        assert group.kind is UsageKind.LAZY
        assert group.key == ""
        assert [u.lazy_suffix for u in group.usages] == [".heading", ".description"]
        assert {(u.file, u.line, u.code) for u in group.usages} == {
            (
                "app/views/users/show.html.erb",
                4,
                "<%= t('.heading') %><%= t('.description') %>",
            )
        }

    def test_dynamic(self) -> None:
        output = 'app/models/blog.rb:115:  message = I18n.t("sample.messages.#{type}")\n'
        group = dynamic_group(output)
        assert group.kind is UsageKind.DYNAMIC
        assert group.usages == [
            Usage("app/models/blog.rb", 115, 'message = I18n.t("sample.messages.#{type}")')
        ]


class TestUsageClassifier:
    """Test the full classification run."""

    def test_group_order(self, fake_search) -> None:
        fake_search.literal["a.b"] = "x.rb:1:t('a.b')"
        fake_search.lazy = "app/views/a/b.html.erb:1:t('.c')"
        fake_search.dynamic = 'y.rb:2:t("a.#{x}")'

        groups = UsageClassifier(fake_search).classify(["a.b", "c.d"])

        assert [(g.kind, g.key) for g in groups] == [
            (UsageKind.STATIC, "a.b"),
            (UsageKind.STATIC, "c.d"),
            (UsageKind.LAZY, ""),
            (UsageKind.DYNAMIC, ""),
        ]
        assert fake_search.queries == ["a.b", "c.d"]

    def test_progress_every_hundred_keys(self, fake_search) -> None:
        calls = []
        keys = [f"sample.hello_{i}" for i in range(1, 202)]

        UsageClassifier(fake_search, on_progress=lambda c, t: calls.append((c, t))).classify(keys)

        assert calls == [(100, 201), (200, 201)]

    def test_custom_progress_interval(self, fake_search) -> None:
        calls = []
        UsageClassifier(
            fake_search, progress_interval=2, on_progress=lambda c, t: calls.append(c)
        ).classify_static(["a", "b", "c", "d", "e"])
        assert calls == [2, 4]
