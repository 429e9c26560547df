from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relnotes.core.config import Config, config_path, load_config_or_default
from relnotes.core.errors import ErrorCode
from relnotes.core.result import Err
from relnotes.output.console import ConsoleProtocol, RichConsole
from relnotes.output.errors import print_config_error

DEBUG_ENV_VAR = "RELEASE_NOTES_DEBUG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole(debug=bool(os.environ.get(DEBUG_ENV_VAR)))
    cwd = Path.cwd()

    path = config_path(cwd)
    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        print_config_error(config_result.error, console)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    console.debug(f"config: {path}")

    return CLIContext(cwd=cwd, config=config_result.value, console=console)
