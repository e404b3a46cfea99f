# lrfront/lex/__init__.py
r"""lrfront 토크나이저: 원문 텍스트를 고정 어휘의 토큰 스트림으로 바꾼다.

특징
----
- 산출 토큰의 `type`은 파서 테이블의 단말 이름과 **정확히 일치**
  (예: "ident", "integer", "string_d", "semicolon", "nl")
- 공백/탭/CR, `#` 주석은 스킵. 개행은 `nl` 토큰으로 **보존**
- 분류할 수 없는 입력은 `invalid` 토큰이 된다. 토크나이저는 절대 멈추지 않고,
  오류 판단은 파서에 맡긴다.
- 문자열 토큰의 값은 **정규화된 재파싱 가능 형태**
  (같은 따옴표, 이스케이프는 `\\` `\"`/`\'` `\n` `\t` `\r` `\xHH`만 사용)


매칭 순서:
  1) 공백/주석 스킵
  2) 개행 → nl
  3) 실수 → 정수 → 식별자(키워드 `set`/`unset` 포함)
  4) "..." / '...' 문자열 (닫히지 않으면 줄 끝까지 invalid)
  5) 구두점 1글자
  6) 그 외 1글자 → invalid


API
---
- `Token(type: str, value: str)` : 토큰 단위(불변)
- `LineMark(line: int)` : 줄 번호 마커. 이벤트 스트림에만 존재하고 토큰으로는 노출되지 않는다.
- `Tokenizer`
    - `reset(text)`, `peek() -> Optional[Token]`, `next() -> Optional[Token]`
    - `events() -> Iterator[Token | LineMark]`
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union
import regex as re


# --------- Vocabulary ---------

KEYWORDS: Dict[str, str] = {
    "set": "kw_set",
    "unset": "kw_unset",
}

PUNCTUATION: Dict[str, str] = {
    "[": "bracket_open",
    "]": "bracket_close",
    "{": "brace_open",
    "}": "brace_close",
    "(": "paren_open",
    ")": "paren_close",
    "&": "ampersand",
    "*": "asterisk",
    "\\": "backslash",
    "^": "caret",
    ":": "colon",
    ",": "comma",
    "$": "dollar",
    "=": "equal",
    "-": "minus",
    ".": "period",
    "|": "vert",
    "+": "plus",
    "?": "question",
    "/": "slash",
    ";": "semicolon",
}

TERMINALS: Tuple[str, ...] = (
    "kw_set", "kw_unset", "ident", "float", "integer", "string_d", "string_s",
    *PUNCTUATION.values(),
    "nl", "eof", "invalid",
)


# --------- Public datatypes ---------

@dataclass(frozen=True)
class Token:
    type: str   # TERMINALS 중 하나
    value: str  # 정규화된 lexeme


@dataclass(frozen=True)
class LineMark:
    line: int   # 1-based


Event = Union[Token, LineMark]


# --------- Scanner tables ---------

_TOKEN_SPEC = [
    ("WS",       r"[ \t\r\f\v]+"),
    ("COMMENT",  r"#[^\n]*"),
    ("NL",       r"\n"),
    ("FLOAT",    r"\d+\.\d*(?:[eE][+-]?\d+)?|\d+[eE][+-]?\d+"),
    ("INTEGER",  r"\d+"),
    ("IDENT",    r"[A-Za-z_][A-Za-z0-9_]*"),
    ("STRING_D", r'"(?:\\.|[^"\\\n])*"'),
    ("STRING_S", r"'(?:\\.|[^'\\\n])*'"),
    ("PUNCT",    "[" + re.escape("".join(PUNCTUATION)) + "]"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC))
_REST_OF_LINE_RE = re.compile(r"[^\n]*")

_SKIP = {"WS", "COMMENT"}

_DECODE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}
_ENCODE_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


# --------- String helpers ---------

def _decode_body(body: str) -> str:
    """따옴표를 벗긴 본문의 백슬래시 이스케이프를 해석한다.
    알 수 없는 이스케이프(`\\q`)는 문자 자체(`q`)로 취급."""
    out: List[str] = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch != "\\" or i + 1 >= n:
            out.append(ch)
            i += 1
            continue
        esc = body[i + 1]
        if esc == "x" and re.fullmatch(r"[0-9A-Fa-f]{2}", body[i + 2:i + 4]):
            out.append(chr(int(body[i + 2:i + 4], 16)))
            i += 4
            continue
        out.append(_DECODE_ESCAPES.get(esc, esc))
        i += 2
    return "".join(out)


def quote_string(content: str, delim: str = '"') -> str:
    """문자열 내용을 정규형 문자열 리터럴로 만든다."""
    out = [delim]
    for ch in content:
        if ch == delim:
            out.append("\\" + ch)
        elif ch in _ENCODE_ESCAPES:
            out.append(_ENCODE_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    out.append(delim)
    return "".join(out)


def string_value(text: str) -> str:
    """string_d/string_s 토큰 값(따옴표 포함)에서 실제 문자열 내용을 복원."""
    if len(text) < 2 or text[0] not in "\"'" or text[-1] != text[0]:
        raise ValueError(f"not a string literal: {text!r}")
    return _decode_body(text[1:-1])


# --------- Core implementation ---------

class Tokenizer:
    """
    Tokenizer
    =========
    원문을 한 번에 받아 토큰을 **요청 시점에** 하나씩 만든다.
    `peek()`은 한 토큰을 캐시하고, `next()`는 캐시를 먼저 소비한다.
    """
    def __init__(self, text: str = "", *, line: int = 1):
        self.reset(text, line=line)

    # ---- Input binding ----
    def reset(self, text: str, *, line: int = 1) -> None:
        self._text = text
        self._i = 0
        self._line = line
        self._peek_cache: Optional[Tuple[Token, int]] = None

    @property
    def line(self) -> int:
        """다음에 읽을 위치의 줄 번호."""
        return self._line

    # ---- Public API ----
    def peek(self) -> Optional[Token]:
        if self._peek_cache is None:
            self._peek_cache = self._next_token()
        return self._peek_cache[0] if self._peek_cache else None

    def next(self) -> Optional[Token]:
        item = self._take()
        return item[0] if item else None

    def events(self) -> Iterator[Event]:
        """토큰 사이에 줄 번호 마커를 끼워 넣은 이벤트 스트림.
        새 줄의 첫 토큰 앞, 그리고 입력 끝에서 줄이 바뀌었으면 한 번 더 LineMark를 낸다."""
        marked = 0
        while True:
            item = self._take()
            if item is None:
                break
            tok, line = item
            if line != marked:
                yield LineMark(line)
                marked = line
            yield tok
        if self._line != marked:
            yield LineMark(self._line)

    # ---- Internals ----
    def _take(self) -> Optional[Tuple[Token, int]]:
        if self._peek_cache is not None:
            item = self._peek_cache
            self._peek_cache = None
            return item or None
        return self._next_token()

    def _next_token(self) -> Optional[Tuple[Token, int]]:
        text = self._text
        while self._i < len(text):
            line = self._line
            m = MASTER_RE.match(text, self._i)
            if m is None:
                tok = self._invalid(text[self._i])
                return tok, line
            kind = m.lastgroup
            lexeme = m.group(0)
            self._i = m.end()
            if kind in _SKIP:
                continue
            if kind == "NL":
                self._line += 1
                return Token("nl", lexeme), line
            return self._classify(kind, lexeme), line
        return None

    def _invalid(self, ch: str) -> Token:
        # 닫히지 않은 문자열은 줄 끝까지 하나의 invalid 토큰
        if ch in "\"'":
            m = _REST_OF_LINE_RE.match(self._text, self._i)
            lexeme = m.group(0)
        else:
            lexeme = ch
        self._i += len(lexeme)
        return Token("invalid", lexeme)

    @staticmethod
    def _classify(kind: str, lexeme: str) -> Token:
        if kind == "IDENT":
            return Token(KEYWORDS.get(lexeme, "ident"), lexeme)
        if kind == "FLOAT":
            return Token("float", lexeme)
        if kind == "INTEGER":
            return Token("integer", lexeme)
        if kind == "STRING_D":
            return Token("string_d", quote_string(_decode_body(lexeme[1:-1]), '"'))
        if kind == "STRING_S":
            return Token("string_s", quote_string(_decode_body(lexeme[1:-1]), "'"))
        return Token(PUNCTUATION[lexeme], lexeme)


# Convenience
def tokenize(text: str) -> List[Token]:
    tk = Tokenizer(text)
    out: List[Token] = []
    while True:
        tok = tk.next()
        if tok is None:
            return out
        out.append(tok)
