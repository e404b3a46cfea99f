import unittest

from lrfront.lex import LineMark, Token, Tokenizer, TERMINALS, string_value, tokenize


def kinds(text):
    return [(t.type, t.value) for t in tokenize(text)]


class TestTokenizer(unittest.TestCase):
    def test_statement(self):
        self.assertEqual(kinds("set x = 1.5;"), [
            ("kw_set", "set"),
            ("ident", "x"),
            ("equal", "="),
            ("float", "1.5"),
            ("semicolon", ";"),
        ])

    def test_keywords_are_whole_words(self):
        self.assertEqual(kinds("unset settings"), [("kw_unset", "unset"), ("ident", "settings")])

    def test_numbers(self):
        self.assertEqual(kinds("12 1e5 3. .5 12abc"), [
            ("integer", "12"),
            ("float", "1e5"),
            ("float", "3."),
            ("period", "."),
            ("integer", "5"),
            ("integer", "12"),
            ("ident", "abc"),
        ])

    def test_punctuation(self):
        toks = kinds("[]{}()&*\\^:,$=-.|+?/;")
        self.assertEqual([t for t, _ in toks], [
            "bracket_open", "bracket_close", "brace_open", "brace_close",
            "paren_open", "paren_close", "ampersand", "asterisk", "backslash",
            "caret", "colon", "comma", "dollar", "equal", "minus", "period",
            "vert", "plus", "question", "slash", "semicolon",
        ])
        for t, _ in toks:
            self.assertIn(t, TERMINALS)

    def test_newlines_and_comments(self):
        self.assertEqual(kinds("a # note\n\tb"), [("ident", "a"), ("nl", "\n"), ("ident", "b")])

    def test_string_normalization(self):
        self.assertEqual(kinds(r'"a\"b"'), [("string_d", r'"a\"b"')])
        self.assertEqual(kinds(r"'it\'s'"), [("string_s", r"'it\'s'")])
        self.assertEqual(kinds(r'"tab\x09"'), [("string_d", r'"tab\t"')])
        self.assertEqual(kinds(r'"q\q"'), [("string_d", '"qq"')])
        self.assertEqual(kinds("'say \"hi\"'"), [("string_s", "'say \"hi\"'")])
        self.assertEqual(kinds('"\\x01"'), [("string_d", '"\\x01"')])

    def test_string_value(self):
        self.assertEqual(string_value(r'"a\nb"'), "a\nb")
        self.assertEqual(string_value(r"'it\'s'"), "it's")
        with self.assertRaises(ValueError):
            string_value("abc")

    def test_invalid_tokens(self):
        self.assertEqual(kinds("a @ b"), [("ident", "a"), ("invalid", "@"), ("ident", "b")])
        self.assertEqual(kinds('x "abc\ny'), [
            ("ident", "x"),
            ("invalid", '"abc'),
            ("nl", "\n"),
            ("ident", "y"),
        ])

    def test_peek_then_next(self):
        tk = Tokenizer("a b")
        self.assertEqual(tk.peek(), Token("ident", "a"))
        self.assertEqual(tk.peek(), Token("ident", "a"))
        self.assertEqual(tk.next(), Token("ident", "a"))
        self.assertEqual(tk.next(), Token("ident", "b"))
        self.assertIsNone(tk.peek())
        self.assertIsNone(tk.next())

    def test_events_carry_line_marks(self):
        self.assertEqual(list(Tokenizer("a\nb").events()), [
            LineMark(1), Token("ident", "a"), Token("nl", "\n"),
            LineMark(2), Token("ident", "b"),
        ])
        self.assertEqual(list(Tokenizer("a\n").events()), [
            LineMark(1), Token("ident", "a"), Token("nl", "\n"), LineMark(2),
        ])
        self.assertEqual(list(Tokenizer("").events()), [LineMark(1)])


if __name__ == '__main__':
    unittest.main()
