# lrfront/lalr/source.py
"""토큰 소스: 여러 입력을 이어 읽고, 입력마다 eof를 합성하고, pushback/peek을 지원한다.

구성
----
- 파일 스택: 대기 중인 입력 소스들. **top(가장 최근에 올린 것)부터** 읽는다.
  입력은 현재 차례가 됐을 때 비로소 연다. 다 읽은 입력은 닫고 나서 다음 입력을 연다.
- 토큰 큐(pushback 버퍼): `push_back()`된 토큰들. 새 토큰을 읽기 전에 먼저 비운다.
  LIFO: `push_back(a); push_back(b); next()` → `b`
- 줄 번호: 이벤트 스트림의 `LineMark`가 현재 입력의 줄 번호를 갱신한다(토큰으로는 노출 안 됨).

입력 하나가 끝나면 그 입력 이름으로 `eof` 토큰을 **딱 한 번** 합성하고 파일 스택에서 내린다.
남은 입력이 없으면 `next()`는 None(EndOfStream).
입출력 실패는 `InputError` (치명적).
"""

from __future__ import annotations
import io
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, TextIO, Tuple

from ..errors import InputError
from ..lex import Event, LineMark, Token, Tokenizer
from ..lex.wire import WireReader


@dataclass(frozen=True)
class Location:
    name: str
    line: int

    def __str__(self) -> str:
        return f"{self.name}:{self.line}"


# --------- Input sources ---------

class InputSource:
    """이벤트(`Token`/`LineMark`)를 내는 입력 하나. 늦게 열고, 다 읽으면 닫는다."""

    def __init__(self, name: str):
        self.name = name
        self.line = 0
        self.is_open = False

    def open(self) -> None:
        self.is_open = True

    def read(self) -> Optional[Event]:
        raise NotImplementedError

    def close(self) -> None:
        self.is_open = False


class TextSource(InputSource):
    """원문 텍스트를 `Tokenizer`로 토큰화해서 읽는 입력."""

    def __init__(self, path: Optional[str] = None, *, text: Optional[str] = None, name: Optional[str] = None):
        if path is None and text is None:
            raise ValueError("TextSource needs a path or text")
        super().__init__(name or path or "<string>")
        self.path = path
        self._text = text
        self._events: Optional[Iterator[Event]] = None

    @classmethod
    def from_string(cls, text: str, name: str = "<string>") -> "TextSource":
        return cls(text=text, name=name)

    def open(self) -> None:
        text = self._text
        if text is None:
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise InputError(f"cannot read '{self.path}': {_reason(e)}", self.path) from e
        self._events = Tokenizer(text).events()
        super().open()

    def read(self) -> Optional[Event]:
        return next(self._events, None)

    def close(self) -> None:
        self._events = None
        super().close()


class WireSource(InputSource):
    """토크나이저 프로토콜(`<type>:'<value>'` / 줄 번호) 스트림을 읽는 입력."""

    def __init__(self, path: Optional[str] = None, *, fp: Optional[TextIO] = None, name: Optional[str] = None):
        if path is None and fp is None:
            raise ValueError("WireSource needs a path or a stream")
        super().__init__(name or path or "<stream>")
        self.path = path
        self._fp = fp
        self._owns_fp = fp is None
        self._reader: Optional[WireReader] = None

    @classmethod
    def from_string(cls, text: str, name: str = "<string>") -> "WireSource":
        return cls(fp=io.StringIO(text), name=name)

    def open(self) -> None:
        if self._fp is None:
            try:
                self._fp = open(self.path, "r", encoding="utf-8", newline="")
            except OSError as e:
                raise InputError(f"cannot open '{self.path}': {_reason(e)}", self.path) from e
        self._reader = WireReader(self._fp)
        super().open()

    def read(self) -> Optional[Event]:
        try:
            return self._reader.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"cannot read '{self.name}': {_reason(e)}", self.path) from e

    def close(self) -> None:
        if self._fp is not None and self._owns_fp:
            self._fp.close()
            self._fp = None
        self._reader = None
        super().close()


class TokenListSource(InputSource):
    """메모리 상의 토큰(과 LineMark) 목록을 그대로 내는 입력."""

    def __init__(self, events: Sequence[Event], name: str = "<tokens>"):
        super().__init__(name)
        self._items = list(events)
        self._i = 0

    def open(self) -> None:
        self._i = 0
        super().open()

    def read(self) -> Optional[Event]:
        if self._i >= len(self._items):
            return None
        ev = self._items[self._i]
        self._i += 1
        return ev


def _reason(e: Exception) -> str:
    if isinstance(e, OSError) and e.strerror:
        return e.strerror
    return str(e)


def open_input(path: str, *, wire: bool = False) -> InputSource:
    """경로로부터 입력 소스를 만든다(실제로 여는 건 읽을 차례가 됐을 때)."""
    return WireSource(path) if wire else TextSource(path)


# --------- Token source ---------

class TokenSource:
    """
    TokenSource
    ===========
    파서가 기대하는 토큰 공급자.

    - `next() -> Optional[Token]`  : 토큰 하나를 소비
    - `peek() -> Optional[Token]`  : `next()` 후 `push_back()`, 위치는 그대로
    - `push_back(tok)`             : 다음 `next()`/`peek()`이 tok을 돌려주게 한다
    - `push_source(src)`           : 입력을 파일 스택 top에 올린다(다음에 바로 읽힘)
    - `location`                   : 마지막으로 돌려준 토큰의 (입력 이름, 줄 번호)
    """

    def __init__(self, sources: Iterable[InputSource] = ()):
        self._files: List[InputSource] = list(sources)[::-1]
        self._queue: List[Tuple[Token, Location]] = []
        self._location = Location("<input>", 0)

    # ---- file stack ----
    def push_source(self, src: InputSource) -> None:
        self._files.append(src)

    @property
    def depth(self) -> int:
        """파일 스택에 남은 입력 수."""
        return len(self._files)

    @property
    def location(self) -> Location:
        return self._location

    # ---- token stream ----
    def next(self) -> Optional[Token]:
        if self._queue:
            tok, self._location = self._queue.pop()
            return tok
        if self._files:
            cur = self._files[-1]
            if not cur.is_open:
                cur.open()
            ev = cur.read()
            while isinstance(ev, LineMark):
                cur.line = ev.line
                ev = cur.read()
            if ev is not None:
                self._location = Location(cur.name, cur.line)
                return ev
            # 현재 입력 소진 → eof 합성 후 닫고 내린다
            self._location = Location(cur.name, cur.line)
            cur.close()
            self._files.pop()
            return Token("eof", "")
        return None

    def peek(self) -> Optional[Token]:
        tok = self.next()
        if tok is not None:
            self.push_back(tok)
        return tok

    def push_back(self, tok: Token, location: Optional[Location] = None) -> None:
        self._queue.append((tok, location or self._location))

    def close(self) -> None:
        """남은 입력을 모두 닫고 버린다."""
        for src in self._files:
            if src.is_open:
                src.close()
        self._files.clear()
        self._queue.clear()
