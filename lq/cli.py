from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import parse, tokenize
from .config import DEFAULT_CFG_FILE, ConfigLoadError, load_data, load_engine_config, parse_scalar
from .context import Context
from .errors import TemplateError
from .lexer import ElementType
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lq",
        description="Рендеринг шаблонов в стиле Liquid",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="отладочный лог в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="отрендерить шаблон в stdout")
    sp_render.add_argument("template", help="файл шаблона или - для чтения из stdin")
    sp_render.add_argument(
        "--data",
        action="append",
        metavar="FILE",
        help="YAML/JSON-отображение с переменными (можно указать несколько, побеждают более поздние)",
    )
    sp_render.add_argument(
        "--set",
        action="append",
        metavar="NAME=VALUE",
        help="одна переменная, VALUE читается как скаляр YAML (можно указать несколько)",
    )
    sp_render.add_argument(
        "--config",
        metavar="FILE",
        help=f"конфиг движка (по умолчанию ./{DEFAULT_CFG_FILE}, если есть)",
    )

    sp_check = sub.add_parser("check", help="разобрать шаблон и вывести JSON-сводку")
    sp_check.add_argument("template", help="файл шаблона или - для чтения из stdin")

    return p


def _setup_logging(verbose: bool) -> None:
    log = logging.getLogger("lq")
    log.setLevel(logging.DEBUG if verbose or os.environ.get("LQ_DEBUG") else logging.WARNING)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)


def _read_template(arg: str) -> str:
    if arg == "-":
        return sys.stdin.read()
    return Path(arg).read_text(encoding="utf-8")


def _parse_assignments(items: Optional[List[str]]) -> Dict[str, Any]:
    """Разбирает пары NAME=VALUE."""
    result: Dict[str, Any] = {}
    for item in items or []:
        if "=" not in item:
            raise ValueError(f"Invalid --set '{item}'. Expected 'NAME=VALUE'")
        name, value = item.split("=", 1)
        result[name.strip()] = parse_scalar(value)
    return result


def _render(ns: argparse.Namespace) -> str:
    cfg_path = Path(ns.config) if ns.config else Path.cwd() / DEFAULT_CFG_FILE
    cfg = load_engine_config(cfg_path)

    context = Context()
    for data_path in cfg.data + [Path(item) for item in ns.data or []]:
        context.update(load_data(data_path))
    context.update(_parse_assignments(ns.set))

    template = parse(_read_template(ns.template), cfg.build_registry())
    return template.render(context) or ""


def _check(ns: argparse.Namespace) -> Dict[str, Any]:
    text = _read_template(ns.template)
    template = parse(text)
    tags = [
        {"name": element.name, "line": element.line, "column": element.column}
        for element in tokenize(text)
        if element.type is ElementType.TAG
    ]
    return {"nodes": len(template.nodes), "tags": tags}


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "render":
            sys.stdout.write(_render(ns))
            return 0

        if ns.cmd == "check":
            sys.stdout.write(json.dumps(_check(ns), ensure_ascii=False))
            return 0

    except (TemplateError, ConfigLoadError, ValueError, TypeError, OSError) as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
