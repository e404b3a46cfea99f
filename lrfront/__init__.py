"""lrfront: 작은 언어용 프런트엔드: 토크나이저 + 테이블 구동 LR 파서.

- `lrfront.lex`          : 토큰/토크나이저, 토큰 프로토콜(`lex.wire`)
- `lrfront.lalr`         : 스택, 토큰 소스, 파서 테이블, 리덕션 레지스트리, 런타임
- `lrfront.grammar`      : 테이블 파일 로더
- `lrfront.grammars`     : 번들 문법(demo, assign)
- `lrfront.lrfc`         : CLI
"""

__version__ = "0.1.0"
