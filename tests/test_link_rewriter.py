"""Tests for source-file and module link rewriting."""

import unittest

from exporters.link_rewriter import (
    MODULE_LINK_PATTERN,
    SOURCE_FILE_PATTERN,
    LinkRewriter,
    Literal,
    MatchedLink,
    format_source_code_urls,
    reassemble,
    replace_module_links,
    tokenize,
)
from models import RepositorySettings

BASE_URL = 'https://github.com/jpcx/deep-props/blob/master/'


class TestTokenize(unittest.TestCase):
    def test_literals_and_matches_alternate(self):
        tokens = tokenize("see [a](index.js.html) and [b](util.js.html).", SOURCE_FILE_PATTERN)

        self.assertEqual(tokens, [
            Literal("see [a]("),
            MatchedLink("index.js.html"),
            Literal(") and [b]("),
            MatchedLink("util.js.html"),
            Literal(")."),
        ])

    def test_no_match_is_single_literal(self):
        self.assertEqual(tokenize("plain text", SOURCE_FILE_PATTERN), [Literal("plain text")])

    def test_empty_text(self):
        self.assertEqual(tokenize("", SOURCE_FILE_PATTERN), [])

    def test_match_at_both_ends(self):
        tokens = tokenize("index.js.html index.js.html", SOURCE_FILE_PATTERN)

        self.assertEqual(tokens, [
            MatchedLink("index.js.html"),
            Literal(" "),
            MatchedLink("index.js.html"),
        ])

    def test_source_names_are_ascii_word_characters(self):
        tokens = tokenize("éa.js.html", SOURCE_FILE_PATTERN)

        self.assertEqual(tokens, [Literal("é"), MatchedLink("a.js.html")])

    def test_reassemble_identity(self):
        text = "[x](deep-props.html) then [y](deep-props.extract.html#~Options)."

        tokens = tokenize(text, MODULE_LINK_PATTERN)

        self.assertEqual(reassemble(tokens, lambda target: target), text)

    def test_reassemble_rewrites_only_matches(self):
        tokens = [Literal("a "), MatchedLink("b"), Literal(" c")]

        self.assertEqual(reassemble(tokens, str.upper), "a B c")


class TestSourceUrls(unittest.TestCase):
    def setUp(self):
        self.rewriter = LinkRewriter()

    def test_line_anchor(self):
        result = self.rewriter.rewrite_source_urls("[line 42](Foo_Bar.js.html#line42)")

        self.assertEqual(result, f"[line 42]({BASE_URL}Foo/Bar.js#L42)")

    def test_nested_module_anchor(self):
        result = self.rewriter.rewrite_source_urls("[line 7](libs_extract_index.js.html#line7)")

        self.assertEqual(result, f"[line 7]({BASE_URL}libs/extract/index.js#L7)")

    def test_bare_source_file(self):
        result = self.rewriter.rewrite_source_urls("[index.js](index.js.html)")

        self.assertEqual(result, f"[index.js]({BASE_URL}index.js)")

    def test_source_line_pair(self):
        text = "*   [libs/extract/index.js](libs_extract_index.js.html), [line 27](libs_extract_index.js.html#line27)"

        result = self.rewriter.rewrite_source_urls(text)

        self.assertEqual(
            result,
            f"*   [libs/extract/index.js]({BASE_URL}libs/extract/index.js), "
            f"[line 27]({BASE_URL}libs/extract/index.js#L27)"
        )

    def test_text_without_source_links_unchanged(self):
        text = "[Home](index.html) and [extract](deep-props.extract.html)"

        self.assertEqual(self.rewriter.rewrite_source_urls(text), text)

    def test_custom_base_url(self):
        settings = RepositorySettings(base_url='https://example.com/src/')

        result = format_source_code_urls("[a](a.js.html#line1)", settings)

        self.assertEqual(result, "[a](https://example.com/src/a.js#L1)")


class TestModuleLinks(unittest.TestCase):
    def setUp(self):
        self.rewriter = LinkRewriter()

    def test_module_page(self):
        result = self.rewriter.rewrite_module_links("[extract](deep-props.module_extract.html)")

        self.assertEqual(result, f"[extract]({BASE_URL}libs/extract/docs/API.md)")

    def test_top_namespace_page(self):
        result = self.rewriter.rewrite_module_links("[deep-props](deep-props.html)")

        self.assertEqual(result, f"[deep-props]({BASE_URL}docs/global.md)")

    def test_other_namespace_page(self):
        result = self.rewriter.rewrite_module_links("[SomeOther](deep-props.SomeOther.html)")

        self.assertEqual(result, f"[SomeOther]({BASE_URL}libs/SomeOther/docs/global.md)")

    def test_anchor_kept(self):
        result = self.rewriter.rewrite_module_links("[Options](deep-props.extract.html#~Options)")

        self.assertEqual(result, f"[Options]({BASE_URL}libs/extract/docs/global.md#~Options)")

    def test_links_separated_by_space(self):
        text = "[a](deep-props.html) and [b](deep-props.extract.html)"

        result = self.rewriter.rewrite_module_links(text)

        self.assertEqual(
            result,
            f"[a]({BASE_URL}docs/global.md) and [b]({BASE_URL}libs/extract/docs/global.md)"
        )

    def test_non_html_links_unchanged(self):
        text = f"[ext](https://example.com/) and [Home]({BASE_URL}README.md)"

        self.assertEqual(self.rewriter.rewrite_module_links(text), text)

    def test_plain_html_text_unchanged(self):
        text = "deep-props.html is generated"

        self.assertEqual(replace_module_links(text), text)

    def test_custom_namespace(self):
        settings = RepositorySettings(
            base_url='https://example.com/',
            modules_path='packages/',
            top_namespace='toolkit'
        )

        result = replace_module_links("[m](toolkit.module_parse.html) [t](toolkit.html)", settings)

        self.assertEqual(
            result,
            "[m](https://example.com/packages/parse/docs/API.md) [t](https://example.com/docs/global.md)"
        )


class TestResolvePage(unittest.TestCase):
    def test_classification_order(self):
        rewriter = LinkRewriter()

        self.assertEqual(rewriter.resolve_page('deep-props.module_extract.html'),
                         f"{BASE_URL}libs/extract/docs/API.md")
        self.assertEqual(rewriter.resolve_page('deep-props.html'),
                         f"{BASE_URL}docs/global.md")
        self.assertEqual(rewriter.resolve_page('deep-props.extract.html'),
                         f"{BASE_URL}libs/extract/docs/global.md")


if __name__ == '__main__':
    unittest.main()
