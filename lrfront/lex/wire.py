# lrfront/lex/wire.py
"""토크나이저 → 토큰 소스 사이의 줄 단위 텍스트 프로토콜.

한 줄은 다음 둘 중 하나:
- 음이 아닌 정수 하나        → 줄 번호 지시자 (LineMark)
- `<type>:<quoted-value>`   → 토큰

`<quoted-value>`는 셸 방식 작은따옴표 인용이다. 값 안의 `'`는 `'\\''`로 쓴다.
`nl` 토큰처럼 값에 실제 개행이 들어가면 인용부가 여러 물리적 줄에 걸친다.
"""

from __future__ import annotations
import shlex
from typing import Iterable, Iterator, Optional, TextIO

import regex as re

from . import TERMINALS, Event, LineMark, Token

_LINE_DIRECTIVE_RE = re.compile(r"[0-9]+")
_TOKEN_LINE_RE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*):('.*)", re.S)

_TERMINAL_SET = frozenset(TERMINALS)


def quote(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"


def unquote(payload: str) -> str:
    """`quote`의 역변환. 인용이 닫히지 않았거나 값이 하나가 아니면 ValueError."""
    parts = shlex.split(payload, posix=True)
    if len(parts) != 1:
        raise ValueError(f"expected one quoted value, got {len(parts)}")
    return parts[0]


def encode_event(ev: Event) -> str:
    if isinstance(ev, LineMark):
        return str(ev.line)
    return f"{ev.type}:{quote(ev.value)}"


def encode_events(events: Iterable[Event]) -> Iterator[str]:
    for ev in events:
        yield encode_event(ev)


def decode_line(line: str) -> Event:
    """프로토콜 한 줄(끝 개행 제외)을 이벤트로 해석한다.
    형식이 틀리거나 어휘에 없는 타입이면 원문을 담은 `invalid` 토큰."""
    if _LINE_DIRECTIVE_RE.fullmatch(line):
        return LineMark(int(line))
    m = _TOKEN_LINE_RE.fullmatch(line)
    if m is None:
        return Token("invalid", line)
    try:
        value = unquote(m.group(2))
    except ValueError:
        return Token("invalid", line)
    if m.group(1) not in _TERMINAL_SET:
        return Token("invalid", line)
    return Token(m.group(1), value)


def _quote_closed(text: str) -> bool:
    """작은따옴표 인용부가 모두 닫혔는지. 인용부 밖의 `\\x`는 한 글자로 본다."""
    inside = False
    i = 0
    while i < len(text):
        ch = text[i]
        if inside:
            if ch == "'":
                inside = False
        elif ch == "\\":
            i += 1
        elif ch == "'":
            inside = True
        i += 1
    return not inside


def _strip_eol(raw: str) -> str:
    # LF / CRLF 모두 허용
    if raw.endswith("\r\n"):
        return raw[:-2]
    if raw.endswith("\n"):
        return raw[:-1]
    return raw


class WireReader:
    """열린 텍스트 스트림에서 이벤트를 하나씩 읽는다.
    인용부가 닫힐 때까지 물리적 줄을 이어 붙인다."""

    def __init__(self, fp: TextIO):
        self._fp = fp

    def read(self) -> Optional[Event]:
        while True:
            raw = self._fp.readline()
            if not raw:
                return None
            if raw.strip() == "":
                continue
            while True:
                body = _strip_eol(raw)
                if _quote_closed(body):
                    return decode_line(body)
                more = self._fp.readline()
                if not more:
                    return decode_line(body)
                raw += more
