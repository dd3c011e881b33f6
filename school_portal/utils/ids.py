"""文档标识符工具：生成与校验 24 位十六进制 ID。"""

import re
import secrets
from typing import Any

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def new_object_id() -> str:
    """生成新的记录 ID（12 字节随机数的十六进制表示）。"""

    return secrets.token_hex(12)


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and bool(_OBJECT_ID_RE.match(value))


def normalize_object_id(value: str) -> str:
    return value.lower()
