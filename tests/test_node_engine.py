# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the Node-backed ESLint engine."""

from __future__ import annotations

import asyncio
import json
import os
import stat
from pathlib import Path

import pytest

from lintbridge.engine import EngineOptions, FailureKind, NodeEngineFactory, NodeESLint, classify_failure
from lintbridge.engine.node import major_version
from lintbridge.errors import EngineError, EngineTimeoutError

FAKE_NODE = """#!/bin/sh
printf '%s\\n' "$@" > "$FAKE_ESLINT_ARGS"
if [ -n "$FAKE_ESLINT_SLEEP" ]; then exec sleep "$FAKE_ESLINT_SLEEP"; fi
cat > "$FAKE_ESLINT_STDIN"
printf '%s' "$FAKE_ESLINT_STDERR" >&2
cat "$FAKE_ESLINT_OUTPUT"
exit "${FAKE_ESLINT_STATUS:-0}"
"""


def _engine(version: str = "8.57.0", **options: object) -> NodeESLint:
    return NodeESLint(Path("/opt/eslint"), version, EngineOptions(**options))


@pytest.fixture
def fake_node(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, Path]:
    """Install a shell script standing in for ``node`` that replays canned output."""

    script = tmp_path / "bin" / "node"
    script.parent.mkdir()
    script.write_text(FAKE_NODE, encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    paths = {
        "args": tmp_path / "args.txt",
        "stdin": tmp_path / "stdin.txt",
        "output": tmp_path / "output.json",
    }
    paths["output"].write_text("[]", encoding="utf-8")
    monkeypatch.setattr("lintbridge.engine.node.shutil.which", lambda name: str(script))
    monkeypatch.setenv("FAKE_ESLINT_ARGS", str(paths["args"]))
    monkeypatch.setenv("FAKE_ESLINT_STDIN", str(paths["stdin"]))
    monkeypatch.setenv("FAKE_ESLINT_OUTPUT", str(paths["output"]))
    return paths


posix_only = pytest.mark.skipif(os.name != "posix", reason="fake node is a POSIX shell script")


def test_major_version() -> None:
    assert major_version("9.4.0") == 9
    assert major_version("garbage") is None


def test_build_args_for_legacy_config() -> None:
    engine = _engine(
        use_eslintrc=False,
        allow_inline_config=False,
        report_unused_disable_directives="warn",
        rule_paths=("/rules",),
        override_config_file="/cfg/eslint.json",
    )

    assert engine.build_args() == [
        "--format",
        "json",
        "--no-eslintrc",
        "--config",
        "/cfg/eslint.json",
        "--no-inline-config",
        "--report-unused-disable-directives-severity",
        "warn",
        "--rulesdir",
        "/rules",
    ]


def test_build_args_for_release_without_directive_severity() -> None:
    assert _engine("8.40.0", report_unused_disable_directives="warn").build_args() == [
        "--format",
        "json",
        "--report-unused-disable-directives",
    ]
    assert _engine("8.40.0", report_unused_disable_directives="off").build_args() == ["--format", "json"]


def test_build_args_for_flat_config() -> None:
    engine = _engine("9.4.0", use_eslintrc=False, rule_paths=("/rules",), extends=("eslint:recommended",))

    assert engine.build_args() == ["--format", "json", "--no-config-lookup"]


def test_extends_written_to_base_config() -> None:
    engine = _engine(extends=("eslint:recommended", "prettier"))

    args = engine.build_args()

    config_path = Path(args[args.index("--config") + 1])
    assert json.loads(config_path.read_text(encoding="utf-8")) == {"extends": ["eslint:recommended", "prettier"]}
    assert engine.build_args() == args


def test_factory_builds_engine_with_options() -> None:
    factory = NodeEngineFactory(Path("/opt/eslint"), "8.57.0")

    engine = factory(EngineOptions(cwd="/project"))

    assert isinstance(engine, NodeESLint)
    assert engine.entry_point == Path("/opt/eslint/bin/eslint.js")
    assert engine.options.cwd == "/project"


def test_missing_node_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("lintbridge.engine.node.shutil.which", lambda name: None)

    with pytest.raises(EngineError, match="not found"):
        asyncio.run(_engine().lint_text("let a;"))


@posix_only
def test_lint_text_parses_results(fake_node: dict[str, Path]) -> None:
    fake_node["output"].write_text(
        json.dumps(
            [
                {
                    "filePath": "/project/app.js",
                    "messages": [
                        {"ruleId": "semi", "severity": 2, "message": "Missing semicolon.", "line": 1, "column": 6},
                    ],
                    "errorCount": 1,
                },
            ],
        ),
        encoding="utf-8",
    )

    results = asyncio.run(_engine().lint_text("let a", file_path="/project/app.js"))

    assert results[0].file_path == "/project/app.js"
    assert results[0].messages[0].rule_id == "semi"
    args = fake_node["args"].read_text(encoding="utf-8").splitlines()
    assert args[0] == "/opt/eslint/bin/eslint.js"
    assert args[-3:] == ["--stdin", "--stdin-filename", "/project/app.js"]
    assert fake_node["stdin"].read_text(encoding="utf-8") == "let a"


@posix_only
def test_lint_files_passes_patterns(fake_node: dict[str, Path]) -> None:
    asyncio.run(_engine().lint_files("/project"))

    args = fake_node["args"].read_text(encoding="utf-8").splitlines()
    assert args[-2:] == ["--no-error-on-unmatched-pattern", "/project"]


@posix_only
def test_is_path_ignored_reads_warning(fake_node: dict[str, Path]) -> None:
    fake_node["output"].write_text(
        json.dumps(
            [
                {
                    "filePath": "/project/dist/app.js",
                    "messages": [
                        {
                            "fatal": False,
                            "severity": 1,
                            "message": 'File ignored because of a matching ignore pattern. Use "--no-ignore" to override.',
                        },
                    ],
                },
            ],
        ),
        encoding="utf-8",
    )

    assert asyncio.run(_engine().is_path_ignored("/project/dist/app.js")) is True


@posix_only
def test_is_path_ignored_remembers_answer_per_path(fake_node: dict[str, Path]) -> None:
    engine = _engine()

    async def check_twice() -> tuple[bool, bool]:
        first = await engine.is_path_ignored("/project/src/app.js")
        fake_node["args"].unlink()
        second = await engine.is_path_ignored("/project/src/app.js")
        return first, second

    assert asyncio.run(check_twice()) == (False, False)
    assert not fake_node["args"].exists()

    asyncio.run(engine.is_path_ignored("/project/src/other.js"))
    assert "/project/src/other.js" in fake_node["args"].read_text(encoding="utf-8").splitlines()


@posix_only
def test_fatal_exit_raises_with_stderr(fake_node: dict[str, Path], monkeypatch: pytest.MonkeyPatch) -> None:
    fake_node["output"].write_text("", encoding="utf-8")
    monkeypatch.setenv("FAKE_ESLINT_STATUS", "2")
    monkeypatch.setenv("FAKE_ESLINT_STDERR", "ESLint couldn't find a configuration file.")

    with pytest.raises(EngineError) as excinfo:
        asyncio.run(_engine().lint_text("let a;"))

    assert excinfo.value.returncode == 2
    assert classify_failure(excinfo.value) is FailureKind.NO_CONFIG


@posix_only
def test_invalid_json_raises(fake_node: dict[str, Path]) -> None:
    fake_node["output"].write_text("not json", encoding="utf-8")

    with pytest.raises(EngineError, match="invalid JSON"):
        asyncio.run(_engine().lint_text("let a;"))


@posix_only
def test_timeout_raises(fake_node: dict[str, Path], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FAKE_ESLINT_SLEEP", "5")

    with pytest.raises(EngineTimeoutError):
        asyncio.run(_engine(timeout=0.2).lint_text("let a;"))
