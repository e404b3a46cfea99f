"""S -> ε | ident S integer

리덕션 값은 문자열이다. ε는 `()`, 규칙 2는 `(<first>,<third>) -> <second>`.
"""
from __future__ import annotations
from pathlib import Path

from ..lalr.registry import ReductionRegistry

TABLE = str(Path(__file__).with_name("demo.tbl"))


def build_registry() -> ReductionRegistry:
    reg = ReductionRegistry()

    @reg.rule(1, "S", 0)
    def _empty() -> str:
        return "()"

    @reg.rule(2, "S", 3)
    def _nest(first: str, second: str, third: str) -> str:
        return f"({first},{third}) -> {second}"

    return reg


def render(value: str) -> str:
    return value
