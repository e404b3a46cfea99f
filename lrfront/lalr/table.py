# table.py
"""미리 계산된 LR 파서 테이블(ACTION/GOTO)과 그 텍스트 형식 로더.

테이블은 **입력**이다. 이 패키지는 문법으로부터 테이블을 만들지 않는다.

텍스트 형식 (한 줄에 엔트리 하나, `#` 이후는 주석)::

    # state  symbol   entry
    0        ident    s2       # shift → 상태 2
    0        eof      r1       # reduce by rule 1
    0        S        1        # goto → 상태 1
    1        eof      acc      # accept
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple, Union

import regex as re

from ..errors import ConfigError


@dataclass(frozen=True)
class Shift:
    target: int

    def __str__(self) -> str:
        return f"s{self.target}"


@dataclass(frozen=True)
class Reduce:
    rule: int

    def __str__(self) -> str:
        return f"r{self.rule}"


class _Accept:
    __slots__ = ()

    def __repr__(self) -> str:
        return "ACCEPT"

    def __str__(self) -> str:
        return "acc"


ACCEPT = _Accept()

Action = Union[Shift, Reduce, _Accept]


@dataclass
class ParseTable:
    """
    ParseTable
    ==========
    LR 파서 테이블. 로드 후에는 읽기 전용으로 조회만 합니다.

    필드
    ----
    - action: (state, terminal_name) -> Shift | Reduce | ACCEPT
    - goto  : (state, nonterminal_name) -> next_state
    - start_state: 시작 상태 번호 (보통 0)
    - name  : 진단 메시지용 테이블 출처(파일 경로 등)

    키 하나에 엔트리는 최대 하나. 충돌이 있는 테이블은 로드 단계에서 거부합니다.
    """
    action: Dict[Tuple[int, str], Action]
    goto: Dict[Tuple[int, str], int]
    start_state: int = 0
    name: str = "<table>"
    _expected: Dict[int, List[str]] = field(default_factory=dict, init=False, repr=False)

    def action_of(self, state: int, terminal: str) -> Optional[Action]:
        return self.action.get((state, terminal))

    def goto_of(self, state: int, nonterminal: str) -> Optional[int]:
        return self.goto.get((state, nonterminal))

    def expected(self, state: int) -> List[str]:
        """state에서 ACTION이 정의된 단말 이름(정렬). 에러 메시지용."""
        got = self._expected.get(state)
        if got is None:
            got = sorted({t for (st, t) in self.action if st == state})
            self._expected[state] = got
        return got

    def rules(self) -> Set[int]:
        """테이블이 참조하는 리덕션 규칙 번호 집합."""
        return {a.rule for a in self.action.values() if isinstance(a, Reduce)}

    @property
    def n_states(self) -> int:
        states = {st for (st, _) in self.action} | {st for (st, _) in self.goto}
        states |= set(self.goto.values())
        states |= {a.target for a in self.action.values() if isinstance(a, Shift)}
        states.add(self.start_state)
        return len(states)

    def summary(self) -> str:
        lines = [
            f"States: {self.n_states}",
            f"Actions: {len(self.action)}",
            f"Gotos: {len(self.goto)}",
            f"Rules: {', '.join(str(r) for r in sorted(self.rules())) or '(none)'}",
        ]
        return "\n".join(lines)


_ENTRY_RE = re.compile(r"(?:(?P<shift>s)(?P<starget>[0-9]+)|(?P<reduce>r)(?P<rule>[0-9]+)|(?P<acc>acc)|(?P<goto>[0-9]+))")
_SYMBOL_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def parse_table_text(text: str, name: str = "<table>", *, start_state: int = 0) -> ParseTable:
    """테이블 텍스트를 **한 번** 해석해 ParseTable을 만든다. 형식 오류/중복 키는 ConfigError."""
    action: Dict[Tuple[int, str], Action] = {}
    goto: Dict[Tuple[int, str], int] = {}

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        parts = line.split()
        if len(parts) != 3:
            raise ConfigError(f"{name}:{lineno}: expected '<state> <symbol> <entry>', got {raw.strip()!r}")
        st_txt, symbol, entry = parts
        if not st_txt.isdigit():
            raise ConfigError(f"{name}:{lineno}: bad state number {st_txt!r}")
        if not _SYMBOL_RE.fullmatch(symbol):
            raise ConfigError(f"{name}:{lineno}: bad symbol name {symbol!r}")
        m = _ENTRY_RE.fullmatch(entry)
        if m is None:
            raise ConfigError(f"{name}:{lineno}: bad table entry {entry!r}")
        key = (int(st_txt), symbol)
        if key in action or key in goto:
            raise ConfigError(f"{name}:{lineno}: conflicting entries for state {key[0]} on {symbol}")

        if m.group("shift"):
            action[key] = Shift(int(m.group("starget")))
        elif m.group("reduce"):
            action[key] = Reduce(int(m.group("rule")))
        elif m.group("acc"):
            action[key] = ACCEPT
        else:
            goto[key] = int(m.group("goto"))

    return ParseTable(action=action, goto=goto, start_state=start_state, name=name)
