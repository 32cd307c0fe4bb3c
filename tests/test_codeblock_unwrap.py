"""
Codeblock unwrapping tests

Tests removal of a surrounding ``` fence: well-formed fences, language tags,
the three closing forms, and every way the match can fail.
"""

import pytest

from typst_ansi_hl.lib.codeblock import codeblock_unwrap


class TestWellFormedFences:
    """Text wrapped in a fence loses exactly one layer"""

    def test_tagged_fence(self):
        """Scenario: tag, body, bare closing fence"""
        assert codeblock_unwrap("```rs\nfoo\n```") == "foo\n"

    def test_closing_fence_with_newline(self):
        """Trailing newline after the closing fence is consumed too"""
        assert codeblock_unwrap("```rs\nfoo\n```\n") == "foo\n"

    def test_closing_fence_with_crlf(self):
        """Trailing CRLF after the closing fence is consumed too"""
        assert codeblock_unwrap("```rs\nfoo\r\n```\r\n") == "foo\r\n"

    def test_fence_without_tag(self):
        """A missing language tag is the same as an empty one"""
        assert codeblock_unwrap("```\n= Title\n```") == "= Title\n"

    def test_tag_with_punctuation(self):
        """Only whitespace is excluded from the tag"""
        assert codeblock_unwrap("```typ+c++\nx\n```") == "x\n"

    def test_multiline_body(self):
        """Body lines are kept verbatim"""
        source = "```typ\n= Intro\n\n#let x = 1\n```\n"
        assert codeblock_unwrap(source) == "= Intro\n\n#let x = 1\n"

    def test_body_without_final_newline(self):
        """Closing fence directly after body text"""
        assert codeblock_unwrap("```\nfoo```") == "foo"

    def test_empty_body(self):
        """Opening line immediately followed by the closing fence"""
        assert codeblock_unwrap("```\n```") == ""

    def test_only_one_layer_removed(self):
        """Nested fences keep the inner one"""
        source = "```\n```typ\nx\n```\n```"
        assert codeblock_unwrap(source) == "```typ\nx\n```\n"


class TestNoMatch:
    """Anything else is returned unchanged"""

    @pytest.mark.parametrize(
        "source",
        [
            "",
            "plain text",
            "no fence\nat all\n",
            "```rs",
            "``` rs\nfoo\n```",
            "```r s\nfoo\n```",
            "```rs\t\nfoo\n```",
            "```rs\r\nfoo\n```",
            "```rs\nfoo\n",
            "```rs\nfoo\n``",
            "```rs\nfoo\n```  ",
            " ```rs\nfoo\n```",
            "x```rs\nfoo\n```",
        ],
    )
    def test_unchanged(self, source):
        """Text without a well-formed fence pair passes through"""
        assert codeblock_unwrap(source) == source

    def test_unchanged_is_same_object(self):
        """No copy is made when nothing matches"""
        source = "``` rs\nfoo\n```"
        assert codeblock_unwrap(source) is source

    def test_whitespace_in_tag_no_partial_unwrap(self):
        """Scenario: space in tag breaks the match entirely"""
        source = "``` rs\nfoo\n```"
        assert codeblock_unwrap(source) == source

    def test_missing_closing_fence(self):
        """Scenario: opening fence without closing fence"""
        source = "```rs\nfoo\nbar\n"
        assert codeblock_unwrap(source) == source


class TestOverlappingFences:
    """Opening and closing fences must not share characters"""

    def test_single_fence_line(self):
        """'```\\n' is both an opening line and a closing form"""
        assert codeblock_unwrap("```\n") == "```\n"

    def test_four_backticks(self):
        """Closing form would start before the body"""
        assert codeblock_unwrap("````\n") == "````\n"

    def test_crlf_only(self):
        """Opening line ending in \\r never matches"""
        assert codeblock_unwrap("```\r\n") == "```\r\n"


class TestNotIdempotent:
    """A second unwrap is a plain no-op, not a second unwrap"""

    def test_second_application_is_noop(self):
        once = codeblock_unwrap("```typ\nhello\n```")
        assert once == "hello\n"
        assert codeblock_unwrap(once) == once
