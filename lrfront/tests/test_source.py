import os
import tempfile
import unittest

from lrfront.errors import InputError
from lrfront.lex import LineMark, Token
from lrfront.lalr.source import (
    Location, TextSource, TokenListSource, TokenSource, WireSource, open_input,
)

A = Token("ident", "a")
B = Token("ident", "b")
EOF_TOK = Token("eof", "")


class _Recording(TokenListSource):
    def __init__(self, events, name, log):
        super().__init__(events, name)
        self.log = log

    def open(self):
        self.log.append(("open", self.name))
        super().open()

    def close(self):
        self.log.append(("close", self.name))
        super().close()


class TestTokenSource(unittest.TestCase):
    def test_peek_is_idempotent(self):
        ts = TokenSource([TokenListSource([A, B])])
        self.assertEqual(ts.peek(), A)
        self.assertEqual(ts.peek(), A)
        self.assertEqual(ts.peek(), A)
        self.assertEqual(ts.next(), A)
        self.assertEqual(ts.next(), B)
        self.assertEqual(ts.next(), EOF_TOK)
        self.assertIsNone(ts.next())
        self.assertIsNone(ts.peek())

    def test_push_back_is_lifo(self):
        x = Token("integer", "1")
        y = Token("integer", "2")
        ts = TokenSource([TokenListSource([A])])
        ts.push_back(x)
        ts.push_back(y)
        self.assertEqual(ts.next(), y)
        self.assertEqual(ts.next(), x)
        self.assertEqual(ts.next(), A)

    def test_chained_sources_each_get_one_eof(self):
        log = []
        ts = TokenSource([
            _Recording([A], "first", log),
            _Recording([B], "second", log),
        ])
        self.assertEqual(ts.next(), A)
        self.assertEqual(ts.location.name, "first")
        self.assertEqual(ts.next(), EOF_TOK)
        self.assertEqual(ts.location.name, "first")
        self.assertEqual(log, [("open", "first"), ("close", "first")])
        self.assertEqual(ts.next(), B)
        self.assertEqual(ts.location.name, "second")
        self.assertEqual(ts.next(), EOF_TOK)
        self.assertIsNone(ts.next())
        self.assertEqual(log, [
            ("open", "first"), ("close", "first"),
            ("open", "second"), ("close", "second"),
        ])

    def test_push_source_reads_next(self):
        ts = TokenSource([TokenListSource([A], name="outer")])
        ts.push_source(TokenListSource([B], name="inner"))
        self.assertEqual(ts.next(), B)
        self.assertEqual(ts.next(), EOF_TOK)
        self.assertEqual(ts.location.name, "inner")
        self.assertEqual(ts.next(), A)
        self.assertEqual(ts.next(), EOF_TOK)
        self.assertEqual(ts.depth, 0)

    def test_line_marks_are_transparent(self):
        ts = TokenSource([TokenListSource([LineMark(7), A, LineMark(9), B], name="f")])
        self.assertEqual(ts.next(), A)
        self.assertEqual(ts.location, Location("f", 7))
        self.assertEqual(ts.next(), B)
        self.assertEqual(ts.location, Location("f", 9))

    def test_pushed_back_token_keeps_its_location(self):
        ts = TokenSource([TextSource.from_string("x\n\ny", name="f")])
        self.assertEqual(ts.next(), Token("ident", "x"))
        self.assertEqual(ts.next(), Token("nl", "\n"))
        self.assertEqual(ts.next(), Token("nl", "\n"))
        self.assertEqual(ts.peek(), Token("ident", "y"))
        self.assertEqual(ts.location, Location("f", 3))
        self.assertEqual(ts.next(), Token("ident", "y"))
        self.assertEqual(ts.location, Location("f", 3))
        self.assertEqual(ts.next(), EOF_TOK)
        self.assertEqual(ts.location, Location("f", 3))

    def test_empty_input_synthesizes_eof(self):
        ts = TokenSource([TextSource.from_string("")])
        self.assertEqual(ts.next(), EOF_TOK)
        self.assertIsNone(ts.next())

    def test_wire_source(self):
        ts = TokenSource([WireSource.from_string("1\nident:'a'\n2\ninteger:'5'\n", name="w")])
        self.assertEqual(ts.next(), A)
        self.assertEqual(ts.next(), Token("integer", "5"))
        self.assertEqual(ts.location, Location("w", 2))
        self.assertEqual(ts.next(), EOF_TOK)

    def test_files_on_disk(self):
        with tempfile.TemporaryDirectory() as d:
            raw = os.path.join(d, "in.txt")
            wire = os.path.join(d, "in.tok")
            with open(raw, "w", encoding="utf-8") as f:
                f.write("a\n")
            with open(wire, "w", encoding="utf-8") as f:
                f.write("1\nident:'b'\n")
            ts = TokenSource([open_input(raw), open_input(wire, wire=True)])
            self.assertEqual(ts.next(), A)
            self.assertEqual(ts.location, Location(raw, 1))
            self.assertEqual(ts.next(), Token("nl", "\n"))
            self.assertEqual(ts.next(), EOF_TOK)
            self.assertEqual(ts.next(), B)
            self.assertEqual(ts.next(), EOF_TOK)
            self.assertIsNone(ts.next())

    def test_crlf_wire_file(self):
        with tempfile.TemporaryDirectory() as d:
            wire = os.path.join(d, "crlf.tok")
            with open(wire, "w", encoding="utf-8", newline="") as f:
                f.write("3\r\nident:'a'\r\n")
            ts = TokenSource([open_input(wire, wire=True)])
            self.assertEqual(ts.next(), A)
            self.assertEqual(ts.location, Location(wire, 3))
            self.assertEqual(ts.next(), EOF_TOK)

    def test_missing_file_is_input_error(self):
        missing = os.path.join(tempfile.gettempdir(), "lrfront-does-not-exist", "x.txt")
        for src in (TextSource(missing), WireSource(missing)):
            ts = TokenSource([src])
            with self.assertRaises(InputError) as cm:
                ts.next()
            self.assertEqual(cm.exception.path, missing)
            self.assertIn(missing, str(cm.exception))


if __name__ == '__main__':
    unittest.main()
