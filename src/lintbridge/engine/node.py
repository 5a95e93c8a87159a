# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ESLint engine backed by the installation's command-line entry point.

Each coroutine spawns ``node <install>/bin/eslint.js --format json`` as an
asyncio subprocess so that a slow engine never blocks the event loop.
"""

from __future__ import annotations

import asyncio
import json
import os
import shutil
import tempfile
import weakref
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from packaging.version import InvalidVersion, Version

from ..errors import EngineError, EngineTimeoutError
from ..logging import get_logger
from ..models import LintReport, LintResult
from .base import EngineOptions

LOGGER = get_logger(__name__)

ESLINT_BIN: Final[Path] = Path("bin") / "eslint.js"
NODE_EXECUTABLE: Final[str] = "node"
# Exit status 2 signals a configuration problem or internal error rather than lint findings.
FATAL_EXIT_CODE: Final[int] = 2
IGNORED_FILE_PREFIX: Final[str] = "File ignored"
FLAT_CONFIG_MAJOR: Final[int] = 9
# First release accepting --report-unused-disable-directives-severity.
DIRECTIVE_SEVERITY_VERSION: Final[Version] = Version("8.56.0")


def major_version(version: str) -> int | None:
    """Return the major component of ``version`` or ``None`` if unparsable."""

    try:
        return Version(version).major
    except InvalidVersion:
        return None


def _at_least(version: str, minimum: Version) -> bool:
    try:
        return Version(version) >= minimum
    except InvalidVersion:
        return False


def _remove_tree(path: str) -> None:
    shutil.rmtree(path, ignore_errors=True)


class NodeESLint:
    """Engine instance running one ESLint installation through Node."""

    def __init__(self, install_dir: Path, version: str, options: EngineOptions) -> None:
        self.install_dir = install_dir
        self.version = version
        self.options = options
        self._flat_config = (major_version(version) or 0) >= FLAT_CONFIG_MAJOR
        self._base_config: Path | None = None
        self._directive_severity = _at_least(version, DIRECTIVE_SEVERITY_VERSION)
        self._ignored: dict[str, bool] = {}

    @property
    def entry_point(self) -> Path:
        """Return the CLI script of the installation."""

        return self.install_dir / ESLINT_BIN

    async def lint_text(self, text: str, *, file_path: str | None = None) -> list[LintResult]:
        args = ["--stdin"]
        if file_path:
            args.extend(["--stdin-filename", file_path])
        return await self._run(args, stdin=text)

    async def lint_files(self, *patterns: str) -> list[LintResult]:
        targets = list(patterns) or ["."]
        return await self._run(["--no-error-on-unmatched-pattern", *targets])

    async def is_path_ignored(self, file_path: str) -> bool:
        """Return whether ESLint ignores ``file_path``.

        The answer is memoised for the lifetime of this instance; settings
        or workspace changes rebuild the engine and start afresh.
        """

        cached = self._ignored.get(file_path)
        if cached is not None:
            return cached
        results = await self.lint_text("", file_path=file_path)
        ignored = any(
            message.message.startswith(IGNORED_FILE_PREFIX) for result in results for message in result.messages
        )
        self._ignored[file_path] = ignored
        return ignored

    def build_args(self) -> list[str]:
        """Return the option flags derived from :class:`EngineOptions`.

        Returns:
            list[str]: Flags placed after the entry point on every invocation.
        """

        options = self.options
        args = ["--format", "json"]
        if not options.use_eslintrc:
            args.append("--no-config-lookup" if self._flat_config else "--no-eslintrc")
        if options.override_config_file:
            args.extend(["--config", options.override_config_file])
        elif options.extends and not self._flat_config:
            args.extend(["--config", str(self._write_base_config())])
        elif options.extends:
            LOGGER.debug("Ignoring 'extends' for flat-config engine v%s", self.version)
        if not options.allow_inline_config:
            args.append("--no-inline-config")
        level = options.report_unused_disable_directives
        if level and self._directive_severity:
            args.extend(["--report-unused-disable-directives-severity", level])
        elif level and level != "off":
            # Older releases only know the boolean flag, which reports at error level.
            args.append("--report-unused-disable-directives")
        if not self._flat_config:
            for rule_path in options.rule_paths:
                args.extend(["--rulesdir", rule_path])
        return args

    def _write_base_config(self) -> Path:
        if self._base_config is None:
            directory = tempfile.mkdtemp(prefix="lintbridge-")
            weakref.finalize(self, _remove_tree, directory)
            target = Path(directory) / "base-config.json"
            target.write_text(json.dumps({"extends": list(self.options.extends)}), encoding="utf-8")
            self._base_config = target
        return self._base_config

    async def _run(self, args: Sequence[str], *, stdin: str | None = None) -> list[LintResult]:
        node = shutil.which(NODE_EXECUTABLE)
        if node is None:
            raise EngineError(f"Executable '{NODE_EXECUTABLE}' was not found on PATH")
        command = [node, str(self.entry_point), *self.build_args(), *args]
        LOGGER.debug("Running %s", " ".join(command))
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=self.options.cwd if self.options.cwd and os.path.isdir(self.options.cwd) else None,
            stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        payload = stdin.encode("utf-8") if stdin is not None else None
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(payload), timeout=self.options.timeout)
        except TimeoutError as exc:
            process.kill()
            await process.wait()
            raise EngineTimeoutError(
                f"ESLint did not finish within {self.options.timeout:.1f}s",
                command=command,
            ) from exc
        out = stdout.decode("utf-8", errors="replace")
        err = stderr.decode("utf-8", errors="replace").strip()
        if process.returncode == FATAL_EXIT_CODE or not out.strip():
            raise EngineError(
                err or out.strip() or "ESLint exited without output",
                command=command,
                returncode=process.returncode,
                stderr=err,
            )
        try:
            decoded = json.loads(out)
        except json.JSONDecodeError as exc:
            raise EngineError(
                f"ESLint produced invalid JSON: {exc}",
                command=command,
                returncode=process.returncode,
                stderr=err,
            ) from exc
        return list(LintReport.from_payload(decoded).results)


@dataclass(frozen=True, slots=True)
class NodeEngineFactory:
    """Constructor bound to one ESLint installation directory."""

    install_dir: Path
    version: str

    def __call__(self, options: EngineOptions) -> NodeESLint:
        return NodeESLint(self.install_dir, self.version, options)


__all__ = ["NodeESLint", "NodeEngineFactory", "major_version"]
