# lrfront/grammars/assign.py
"""설정 언어: `set NAME = VALUE ;` / `unset NAME ;` 문장의 나열.

    L     -> ε | L stmt
    stmt  -> kw_set ident equal value semicolon
           | kw_unset ident semicolon
    value -> integer | float | string_d | string_s | ident

최종 값은 설정 이름 → 값의 (삽입 순서) dict.
값 자리의 `ident`는 앞서 설정된 이름이면 그 값을, 아니면 이름 문자열 자체를 뜻한다.
없는 이름의 `unset`은 아무 일도 하지 않는다.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from ..lalr.registry import ReductionRegistry
from ..lex import quote_string, string_value

TABLE = str(Path(__file__).with_name("assign.tbl"))

Settings = Dict[str, Any]


@dataclass(frozen=True)
class Ref:
    name: str


def _apply(settings: Settings, stmt: Tuple[Any, ...]) -> Settings:
    # settings는 왼쪽 L 리덕션이 만든 dict이므로 제자리에서 고친다
    if stmt[0] == "set":
        _, name, value = stmt
        if isinstance(value, Ref):
            value = settings.get(value.name, value.name)
        settings[name] = value
    else:
        settings.pop(stmt[1], None)
    return settings


def build_registry() -> ReductionRegistry:
    reg = ReductionRegistry()

    @reg.rule(1, "L", 0)
    def _empty() -> Settings:
        return {}

    @reg.rule(2, "L", 2)
    def _append(settings: Settings, stmt: Tuple[Any, ...]) -> Settings:
        return _apply(settings, stmt)

    @reg.rule(3, "stmt", 5)
    def _set(_kw, name, _eq, value, _semi):
        return ("set", name, value)

    @reg.rule(4, "stmt", 3)
    def _unset(_kw, name, _semi):
        return ("unset", name)

    reg.rule(5, "value", 1)(int)
    reg.rule(6, "value", 1)(float)
    reg.rule(7, "value", 1)(string_value)
    reg.rule(8, "value", 1)(string_value)
    reg.rule(9, "value", 1)(Ref)
    return reg


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return quote_string(value, '"')
    return repr(value)


def render(settings: Settings) -> str:
    return "\n".join(f"{name} = {_format_value(value)}" for name, value in settings.items())
