# lrfront/lrfc.py
"""lrfc – lrfront CLI

사용 예)
    $ python -m lrfront.lrfc input.txt
    $ python -m lrfront.lrfc -g assign settings.conf -D
    $ python -m lrfront.lrfc -T settings.conf > settings.tok
    $ python -m lrfront.lrfc -g assign --wire settings.tok
    $ python -m lrfront.lrfc -g assign --check

기능
----
- (기본) 입력 파일을 토큰화 → LR 테이블로 파싱 → 최종 값을 표준출력
- -T/--dump-tokens : 토크나이저 프로토콜 스트림만 출력
- --wire           : 입력 파일이 이미 토큰화된 프로토콜 스트림
- --check          : 테이블을 읽고 리덕션 레지스트리와 대조 검증

종료 코드: accept 0, 그 외(인자 오류/입출력 오류/설정 오류/구문 오류) 1.
디버그 모드(-D/--debug)를 켜면 테이블 요약과 오토마톤 단계 추적을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import NoReturn, Optional, Tuple

from .errors import FatalError, format_fatal
from .grammar.loader import load_table
from .grammars import GRAMMARS, get_grammar
from .lalr.registry import ReductionRegistry
from .lalr.runtime import parse
from .lalr.source import TokenSource, open_input
from .lalr.table import ParseTable
from .lex.wire import encode_event

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


class _ArgumentParser(argparse.ArgumentParser):
    """인자 오류도 다른 치명적 오류와 같은 형식/종료 코드(1)로."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, format_fatal(message) + "\n")

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_pipeline(grammar_name: str, table_path: Optional[str], debug: bool) -> Tuple[ParseTable, ReductionRegistry]:
    """문법 모듈에서 테이블/레지스트리를 읽고, 시작 시점에 서로 대조 검증한다."""
    grammar = get_grammar(grammar_name)
    path = table_path or grammar.TABLE
    tbl = load_table(path)
    if debug: _eprint(f"[DEBUG] table loaded | {path} states={tbl.n_states} actions={len(tbl.action)}")

    reg = grammar.build_registry()
    reg.validate(tbl)
    if debug: _eprint(f"[DEBUG] registry validated | grammar={grammar_name} rules={len(reg)}")
    return tbl, reg

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    tbl, reg = _load_pipeline(args.grammar, args.table, args.debug)
    if args.debug:
        _eprint("\n[Parsing Table]")
        _eprint(tbl.summary())
    print(f"[CHECK OK] grammar={args.grammar} states={tbl.n_states} rules={len(tbl.rules())}")
    return 0


def cmd_dump_tokens(args) -> int:
    src = open_input(args.file, wire=args.wire)
    src.open()
    try:
        while True:
            ev = src.read()
            if ev is None:
                break
            print(encode_event(ev))
    finally:
        src.close()
    return 0


def cmd_parse(args) -> int:
    tbl, reg = _load_pipeline(args.grammar, args.table, args.debug)
    if args.debug:
        _eprint("\n[Parsing Table]")
        _eprint(tbl.summary())

    source = TokenSource([open_input(args.file, wire=args.wire)])
    try:
        result = parse(source, tbl, reg, debug=args.debug)
    finally:
        source.close()

    if not result.accepted:
        return 1
    print(get_grammar(args.grammar).render(result.value))
    return 0

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = _ArgumentParser(prog="lrfc", description="lrfront tokenizer + LR parser driver")
    ap.add_argument("file", nargs="?", help="입력 파일 ('-'(stdin)은 지원하지 않음)")
    ap.add_argument("-g", "--grammar", choices=sorted(GRAMMARS), default="demo", help="사용할 번들 문법")
    ap.add_argument("-t", "--table", help="LR 테이블 파일 (미지정시 문법의 기본 테이블)")
    ap.add_argument("--wire", action="store_true", help="입력이 토크나이저 프로토콜 스트림")
    ap.add_argument("-T", "--dump-tokens", action="store_true", help="토크나이저 프로토콜 스트림을 출력하고 종료")
    ap.add_argument("--check", action="store_true", help="테이블과 리덕션 규칙을 검증하고 종료")
    ap.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    args = ap.parse_args(argv)

    if args.file == "-":
        ap.error("reading from standard input is not supported")
    if args.file is None and not args.check:
        ap.error("the following arguments are required: file")

    try:
        if args.check:
            return cmd_check(args)
        if args.dump_tokens:
            return cmd_dump_tokens(args)
        return cmd_parse(args)
    except FatalError as e:
        _eprint(format_fatal(str(e)))
        return 1

if __name__ == "__main__":
    sys.exit(main())
