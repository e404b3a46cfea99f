"""LR 테이블 파일 로더"""

from __future__ import annotations
from pathlib    import Path

from ..errors      import InputError
from ..lalr.table  import ParseTable, parse_table_text


def load_table_text(path: str) -> str:
    """
    Load Table Text
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise InputError(f"cannot read table '{path}': {reason}", str(path)) from e
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_table(path: str) -> ParseTable:
    return parse_table_text(load_table_text(path), name=str(path))
