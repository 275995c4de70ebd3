from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .cache.fs_cache import FileCache
from .config import CONFIG_FILE_NAME, load_config
from .errors import StencilUserError
from .expression.parser import BooleanParser
from .jsonic import dumps as jdumps
from .variables.provider import PathContext, VariableProvider
from .version import tool_version


def _setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("STENCIL_DEBUG") else logging.WARNING
    root = logging.getLogger("stencil")
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stencil",
        description="Template expression evaluator and compiler",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_eval = sub.add_parser("eval", help="Вычислить булево выражение (JSON)")
    sp_eval.add_argument("expression", help="выражение, например \"{count} > 1 && {name} == 'x'\"")
    sp_eval.add_argument(
        "--var",
        action="append",
        metavar="NAME=VALUE",
        help="переменная контекста; VALUE разбирается как JSON, иначе берётся строкой",
    )

    sp_compile = sub.add_parser("compile", help="Показать Python-код для выражения")
    sp_compile.add_argument("expression")
    sp_compile.add_argument("--context-name", default="context", help="имя переменной контекста в коде")

    sp_cache = sub.add_parser("cache", help="Обслуживание файлового кэша (JSON)")
    sp_cache.add_argument("action", choices=["stats", "purge"])
    sp_cache.add_argument("--root", type=Path, default=None, help="корень проекта (по умолчанию - текущий каталог)")

    return p


def _parse_vars(specs: Optional[List[str]]) -> Dict[str, Any]:
    """Разбирает список 'name=value' в словарь переменных."""
    result: Dict[str, Any] = {}
    for spec in specs or []:
        if "=" not in spec:
            raise ValueError(f"Invalid variable format '{spec}'. Expected 'name=value'")
        name, raw = spec.split("=", 1)
        try:
            value = json.loads(raw)
        except ValueError:
            value = raw
        result[name.strip()] = value
    return result


def _cache_for(root: Path) -> FileCache:
    config = load_config(root / CONFIG_FILE_NAME)
    return FileCache(
        root,
        enabled=config.cache.enabled,
        directory=config.cache.directory,
        tool_version=tool_version(),
    )


def main(argv: list[str] | None = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "eval":
            context = PathContext(VariableProvider(_parse_vars(ns.var)))
            result = BooleanParser().evaluate(ns.expression, context)
            sys.stdout.write(jdumps({"expression": ns.expression, "result": result}))
            return 0

        if ns.cmd == "compile":
            sys.stdout.write(BooleanParser().compile(ns.expression, ns.context_name) + "\n")
            return 0

        if ns.cmd == "cache":
            cache = _cache_for(ns.root or Path.cwd())
            snapshot = cache.rebuild() if ns.action == "purge" else cache.snapshot()
            sys.stdout.write(jdumps({
                "enabled": snapshot.enabled,
                "path": snapshot.path,
                "exists": snapshot.exists,
                "sizeBytes": snapshot.size_bytes,
                "entries": snapshot.entries,
            }))
            return 0

    except StencilUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
