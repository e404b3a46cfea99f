# lrfront/lalr/registry.py
"""리덕션 레지스트리: 규칙 번호 → 리덕션 함수.

리덕션 함수 규약::

    fn(value_stack, state_stack) -> exposed_state

- 자기 규칙의 길이만큼 두 스택에서 **짝을 맞춰** pop 하고
- 비단말 `Symbol` 하나를 값 스택에 push 한 뒤
- pop 후 드러난 상태 번호를 돌려준다. (스택이 모자라면 `EMPTY`)

오토마톤은 규칙 길이를 모른다. 규칙 모양은 각 함수가 스스로 안다.
`rule()` 데코레이터를 쓰면 `fn(*values) -> value` 형태의 평범한 함수로 규칙을 쓸 수 있다.
값 변환 중 `ValueError`/`TypeError`가 나면 스택을 건드리기 전에 `ReductionError`로 바뀐다.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Union

from ..errors import ConfigError, ReductionError
from .stack import EMPTY, Stack, _Empty
from .symbols import Symbol
from .table import ParseTable

ReduceFn = Callable[[Stack, Stack], Union[int, _Empty]]


class ReductionRegistry:
    def __init__(self) -> None:
        self._rules: Dict[int, ReduceFn] = {}
        self._names: Dict[int, str] = {}

    def register(self, rule_id: int, fn: ReduceFn, *, lhs: Optional[str] = None) -> None:
        if rule_id in self._rules:
            raise ConfigError(f"reduction rule {rule_id} registered twice")
        self._rules[rule_id] = fn
        if lhs is not None:
            self._names[rule_id] = lhs

    def lookup(self, rule_id: int) -> Optional[ReduceFn]:
        return self._rules.get(rule_id)

    def lhs_of(self, rule_id: int) -> Optional[str]:
        return self._names.get(rule_id)

    def rule(self, rule_id: int, lhs: str, arity: int) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """
        `fn(*values) -> value`를 스택 규약 함수로 감싸 등록하는 데코레이터.

        values는 우변 심볼들의 값(왼쪽→오른쪽 순서)이다. ε 규칙은 arity=0.

            @reg.rule(2, "S", 3)
            def _(first, second, third):
                return f"({first},{third}) -> {second}"
        """
        if arity < 0:
            raise ConfigError(f"rule {rule_id}: negative arity {arity}")

        def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
            def reduce(values: Stack, states: Stack) -> Union[int, _Empty]:
                if values.size() < arity or states.size() < arity + 1:
                    return EMPTY
                args: List[Any] = [sym.value for sym in values.top(arity)]
                # 함수가 실패해도 스택은 그대로 남아야 한다
                try:
                    result = fn(*args)
                except (ValueError, TypeError) as e:
                    raise ReductionError(f"r{rule_id} ({lhs}): {e}") from e
                for _ in range(arity):
                    values.pop()
                    states.pop()
                values.push(Symbol.nonterminal(lhs, result))
                return states.peek()

            self.register(rule_id, reduce, lhs=lhs)
            return fn
        return deco

    def validate(self, table: ParseTable) -> None:
        """테이블이 참조하는 규칙이 모두 등록됐는지 시작 시점에 검사."""
        missing = sorted(table.rules() - set(self._rules))
        if missing:
            listed = ", ".join(f"r{r}" for r in missing)
            raise ConfigError(f"{table.name}: no reduction registered for {listed}")

    def __contains__(self, rule_id: int) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)
