"""
Tests for the column transformation settings store.
"""

from dbadmin.core.transformations import get_mime, get_options


class TestGetOptions:
    """Option string parsing"""

    def test_empty_string(self):
        """An empty option string has no options"""
        assert get_options("") == {}

    def test_plain_options(self):
        """Plain options split on commas"""
        assert get_options("a,b,c") == {0: "a", 1: "b", 2: "c"}

    def test_quoted_option_keeps_commas(self):
        """Quoted options may contain commas"""
        assert get_options("'a,b',c") == {0: "a,b", 1: "c"}
        assert get_options("'x, y', 'z'") == {0: "x, y", 1: "z"}

    def test_unquoted_option_is_not_trimmed(self):
        """Unquoted options keep their whitespace"""
        assert get_options("a, ; charset=utf-8") == {0: "a", 1: " ; charset=utf-8"}

    def test_backslashes_are_stripped(self):
        """Backslash escapes are removed"""
        assert get_options(r"'it\'s',c:\\tmp") == {0: "it's", 1: "c:\\tmp"}

    def test_charset_option(self):
        """A charset option is kept as-is"""
        assert get_options("; charset=utf-8") == {0: "; charset=utf-8"}


class TestGetMime:
    """Looking up configured columns"""

    def test_returns_configured_columns(self, column_info):
        """Configured columns are returned with their settings"""
        column_info("content", mimetype="image_png", transformation="Image/PNG/Inline")
        column_info("name", mimetype="text_plain", options="; charset=utf-8")

        mime_map = get_mime("main", "files")
        assert set(mime_map) == {"content", "name"}
        assert mime_map["content"]["mimetype"] == "image_png"
        assert mime_map["content"]["transformation"] == "Image/PNG/Inline"
        assert mime_map["name"]["transformation_options"] == "; charset=utf-8"
        assert mime_map["name"]["column_name"] == "name"

    def test_strict_requires_mimetype(self, column_info):
        """Strict lookups need a MIME type"""
        column_info("content", transformation="Text/Plain/Sql")

        assert "content" in get_mime("main", "files")
        assert get_mime("main", "files", strict=True) == {}

    def test_other_tables_are_not_returned(self, column_info):
        """Settings of other tables are not returned"""
        column_info("content", mimetype="image_png")

        assert get_mime("main", "other") == {}
        assert get_mime("other", "files") == {}
