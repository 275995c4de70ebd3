from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def _default(obj: Any) -> Any:
    if isinstance(obj, Path):
        return obj.as_posix()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    return repr(obj)


def dumps(obj: Any) -> str:
    """
    JSON для ответов CLI: без prettify, ensure_ascii=False.
    Пути выводятся в posix-форме, прочие несериализуемые значения - через repr.
    """
    return json.dumps(obj, ensure_ascii=False, default=_default)


__all__ = ["dumps"]
