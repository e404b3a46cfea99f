# lrfront/lalr/runtime.py
"""LR 파서 런타임(스택 머신).

- `ParseTable`(ACTION/GOTO), `ReductionRegistry`, `TokenSource`를 받아
  shift/reduce/accept를 수행하고 리덕션이 만든 **의미 값**을 돌려준다.
- 파서 상태는 전역이 아니라 `ParserContext` 하나에 모두 담긴다.
- 구문 오류는 예외가 아니라 `ParseError`로 보고(report 콜백)하고 루프를 멈춘다.
  스택은 건드리지 않는다.
- 테이블/레지스트리 불일치(규칙 누락, GOTO 누락, 스택 부족)는 `ConfigError`.
- 리덕션 함수의 값 변환 실패는 lookahead 위치를 붙인 `ReductionError`.
"""

from __future__ import annotations
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Optional

from ..errors import ConfigError, ParseError, ReductionError, format_error
from ..lex import Token
from .registry import ReductionRegistry
from .source import TokenSource
from .stack import EMPTY, Stack
from .symbols import Symbol
from .table import ACCEPT, ParseTable, Reduce, Shift


def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def report_to_stderr(err: ParseError) -> None:
    _eprint(str(err))


def _debug_trace(msg: str) -> None:
    _eprint(f"[DEBUG] {msg}")


@dataclass
class ParseResult:
    accepted: bool
    value: Any = None
    error: Optional[ParseError] = None


@dataclass
class ParserContext:
    """
    ParserContext
    =============
    한 번의 파싱 실행에 필요한 모든 상태.

    필드
    ----
    - table / registry / source : 테이블, 리덕션 레지스트리, 토큰 공급자
    - value_stack : `Symbol` 스택
    - state_stack : 상태 번호 스택 (top = 현재 상태)
    - skip        : 제어 흐름에 무의미한 단말. lookahead에서 만나면 소비하고 넘어간다.
    - debug/trace : 단계별 추적 출력
    - report      : 구문 오류 보고 콜백 (기본: stderr)
    - accepted / error : 실행 결과

    불변식: 단계 사이에는 항상 `len(state_stack) == len(value_stack) + 1`.
    """
    table: ParseTable
    registry: ReductionRegistry
    source: TokenSource
    value_stack: Stack = field(default_factory=Stack)
    state_stack: Stack = field(default_factory=Stack)
    skip: FrozenSet[str] = frozenset({"nl"})
    debug: bool = False
    trace: Callable[[str], None] = _debug_trace
    report: Callable[[ParseError], None] = report_to_stderr
    accepted: bool = False
    error: Optional[ParseError] = None

    def __post_init__(self) -> None:
        if self.state_stack.size() == 0:
            self.state_stack.push(self.table.start_state)


class LRParser:
    def __init__(self, ctx: ParserContext):
        self.ctx = ctx

    def step(self) -> bool:
        """한 번 반복. 루프를 계속해야 하면 True (accept/오류면 False)."""
        ctx = self.ctx
        state = ctx.state_stack.peek()
        look = ctx.source.peek()

        if look is not None and look.type in ctx.skip:
            ctx.source.next()
            return True

        act = ctx.table.action_of(state, look.type) if look is not None else None
        if ctx.debug:
            ctx.trace(f"state={state} lookahead={look.type if look else '<end>'} action={act or '-'}")

        if act is None:
            self._syntax_error(state, look)
            return False

        if isinstance(act, Shift):
            tok = ctx.source.next()  # consume
            ctx.value_stack.push(Symbol.terminal(tok))
            ctx.state_stack.push(act.target)
            return True

        if isinstance(act, Reduce):
            self._reduce(act.rule)
            return True

        if act is ACCEPT:
            ctx.accepted = True
            return False

        raise ConfigError(f"unknown table action: {act!r}")

    def run(self) -> ParseResult:
        while self.step():
            pass
        ctx = self.ctx
        if not ctx.accepted:
            return ParseResult(False, error=ctx.error)
        if ctx.value_stack.size() != 1:
            raise ConfigError(f"accepted with {ctx.value_stack.size()} values on the stack")
        return ParseResult(True, value=ctx.value_stack.peek().value)

    # ---- Internals ----
    def _reduce(self, rule: int) -> None:
        ctx = self.ctx
        fn = ctx.registry.lookup(rule)
        if fn is None:
            raise ConfigError(f"{ctx.table.name}: no reduction registered for r{rule}")
        try:
            exposed = fn(ctx.value_stack, ctx.state_stack)
        except ReductionError as e:
            loc = ctx.source.location
            raise ReductionError(format_error(loc.name, loc.line, str(e))) from e
        if exposed is EMPTY:
            raise ConfigError(f"r{rule}: parse stack underflow")
        lhs = ctx.value_stack.peek().name
        target = ctx.table.goto_of(exposed, lhs)
        if target is None:
            # 구조적 오류(테이블 일관성 문제)
            raise ConfigError(f"{ctx.table.name}: GOTO missing for state={exposed}, lhs={lhs}")
        if ctx.debug:
            ctx.trace(f"reduce r{rule} -> {lhs}, goto {target}")
        ctx.state_stack.push(target)

    def _syntax_error(self, state: int, look: Optional[Token]) -> None:
        ctx = self.ctx
        loc = ctx.source.location
        err = ParseError(
            file=loc.name,
            line=loc.line,
            token_type=look.type if look is not None else None,
            token_value=look.value if look is not None else None,
            expected=ctx.table.expected(state),
        )
        ctx.error = err
        ctx.report(err)


def parse(source: TokenSource, table: ParseTable, registry: ReductionRegistry, **options: Any) -> ParseResult:
    """레지스트리를 검증한 뒤 한 번 파싱한다. options는 `ParserContext` 필드."""
    registry.validate(table)
    ctx = ParserContext(table=table, registry=registry, source=source, **options)
    return LRParser(ctx).run()
