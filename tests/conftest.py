from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

import lq
from lq import Context, TemplateRegistry

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def registry() -> TemplateRegistry:
    return TemplateRegistry()


@pytest.fixture
def render() -> Callable[..., str]:
    """Parses and renders a template in one go."""
    def _render(text: str, data: Optional[dict] = None, registry: Optional[TemplateRegistry] = None) -> str:
        return lq.parse(text, registry).render(Context(data or {}))
    return _render


@pytest.fixture
def run_cli() -> Callable[..., subprocess.CompletedProcess]:
    def _run(cwd: Path, *args: str, stdin: Optional[str] = None) -> subprocess.CompletedProcess:
        env = os.environ.copy()
        env.pop("LQ_DEBUG", None)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
        return subprocess.run(
            [sys.executable, "-m", "lq.cli", *args],
            cwd=cwd, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
        )
    return _run
