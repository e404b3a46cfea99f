# lrfront/errors.py
"""lrfront 오류 분류.

- `FatalError` 계열은 **프로세스 종료** 대상(예외로 전파, CLI에서 exit 1).
    * `ConfigError` : 테이블 형식 오류, 미등록 리덕션 규칙, GOTO 누락 등
    * `InputError`  : 입력 파일 열기/읽기 실패 (경로 포함)
    * `ReductionError` : 리덕션 함수가 값 변환에 실패 (위치 포함)
- 구문 오류는 예외가 아니라 `ParseError` 레코드로 보고된다.
  (파서 루프는 토큰마다 돌기 때문에 분기 기반으로 유지)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional


class FatalError(Exception):
    """복구 불가능한 오류의 공통 부모."""


class ConfigError(FatalError):
    pass


class InputError(FatalError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ReductionError(FatalError):
    """리덕션 함수가 토큰 값을 받아들이지 못함 (예: `integer:'abc'`)."""


@dataclass(frozen=True)
class ParseError:
    """
    ParseError
    ==========
    파서가 진행할 ACTION을 찾지 못했을 때 만들어지는 보고 레코드.

    - file/line : 문제 토큰이 읽힌 입력 이름과 줄 번호
    - token_type/token_value : 문제 토큰 (입력이 완전히 끝났으면 None)
    - expected : 해당 상태에서 ACTION이 정의된 단말 목록
    """
    file: str
    line: int
    token_type: Optional[str]
    token_value: Optional[str]
    expected: List[str]

    @property
    def message(self) -> str:
        if self.token_type is None:
            what = "unexpected end of input"
        elif self.token_type == "eof":
            what = "unexpected eof"
        else:
            what = f"unexpected {self.token_type} {self.token_value!r}"
        if self.expected:
            return f"syntax error, {what}, expected one of {{{', '.join(self.expected)}}}"
        return f"syntax error, {what}"

    def __str__(self) -> str:
        return format_error(self.file, self.line, self.message)


def format_error(file: str, line: int, message: str) -> str:
    return f"{file}:{line}: error: {message}"


def format_fatal(message: str) -> str:
    return f"fatal: {message}"
