import unittest

from gopher.core.errors import ParseError, UnbalancedQuotes
from gopher.core.tokenizer import tokenize


class TokenizerTests(unittest.TestCase):
    def test_splits_on_spaces(self):
        self.assertEqual(tokenize("a b c"), ["a", "b", "c"])

    def test_runs_of_spaces_are_one_separator(self):
        self.assertEqual(tokenize("  ls   -la  "), ["ls", "-la"])

    def test_quoted_span_keeps_spaces(self):
        self.assertEqual(tokenize('a "b c" d'), ["a", "b c", "d"])

    def test_quotes_are_stripped_inside_tokens(self):
        self.assertEqual(tokenize('--name="my file" x'), ["--name=my file", "x"])
        self.assertEqual(tokenize('""'), [""])

    def test_unterminated_quote_raises(self):
        with self.assertRaises(UnbalancedQuotes) as ctx:
            tokenize('a "unterminated')
        self.assertIsInstance(ctx.exception, ParseError)
        self.assertEqual(ctx.exception.line, 'a "unterminated')

    def test_blank_input_yields_nothing(self):
        self.assertEqual(tokenize("   "), [])
        self.assertEqual(tokenize(""), [])


if __name__ == "__main__":
    unittest.main()
