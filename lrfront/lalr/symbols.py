"""값 스택에 올라가는 문법 심볼(단말/비단말)."""
from __future__     import annotations
from dataclasses    import dataclass
from enum           import Enum
from typing         import Any, Optional

from ..lex import Token


class SymbolKind(Enum):
    TERMINAL = "terminal"
    NONTERMINAL = "nonterminal"


@dataclass(frozen=True)
class Symbol:
    """
    Symbol
    ======
    값 스택의 한 칸. 종류 태그가 붙은 값입니다.

    - 단말(TERMINAL): shift로 올라온 토큰. `name`은 토큰 타입, `value`는 토큰 원문.
    - 비단말(NONTERMINAL): 리덕션이 만든 값. `name`은 좌변 비단말 이름이고,
      `value`는 리덕션 함수가 돌려준 **임의의** 응용 값입니다.

    런타임은 리덕션 직후 값 스택 top의 `name`으로 GOTO를 조회합니다.
    """
    kind: SymbolKind
    name: str
    value: Any
    token: Optional[Token] = None

    @classmethod
    def terminal(cls, tok: Token) -> "Symbol":
        return cls(SymbolKind.TERMINAL, tok.type, tok.value, tok)

    @classmethod
    def nonterminal(cls, name: str, value: Any) -> "Symbol":
        return cls(SymbolKind.NONTERMINAL, name, value)

    @property
    def is_terminal(self) -> bool:
        return self.kind is SymbolKind.TERMINAL

    def __repr__(self) -> str:
        return f"{self.name}({self.value!r})"
