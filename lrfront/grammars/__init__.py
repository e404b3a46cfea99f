# lrfront/grammars/__init__.py
"""번들 문법 모음.

각 문법 모듈은 다음을 제공한다.
- `TABLE`            : 미리 계산된 LR 테이블 파일 경로
- `build_registry()` : 테이블의 리덕션 규칙을 등록한 `ReductionRegistry`
- `render(value)`    : 최종 의미 값을 출력용 문자열로
"""

from __future__ import annotations
from types import ModuleType
from typing import Dict

from . import assign, demo

GRAMMARS: Dict[str, ModuleType] = {
    "demo": demo,
    "assign": assign,
}


def get_grammar(name: str) -> ModuleType:
    try:
        return GRAMMARS[name]
    except KeyError:
        raise KeyError(f"unknown grammar {name!r} (choose from {', '.join(sorted(GRAMMARS))})") from None
