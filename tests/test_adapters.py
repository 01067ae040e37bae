"""
Tests for adapter protocol, mock and shell adapters.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from xtask.adapters.base import ExecutionContext
from xtask.adapters.mock import MockAdapter
from xtask.adapters.shell.command import ShellCommandAdapter
from xtask.core.engine.pipeline import PipelineOrchestrator
from xtask.core.engine.steps import STEPS, execute_step
from xtask.core.models.config import XtaskConfig
from xtask.core.models.step import PipelineStep, StepKind
from xtask.core.models.toolchain import ToolchainSpec

STABLE = ToolchainSpec(channel="stable", version="1.73")
NIGHTLY = ToolchainSpec(channel="nightly", version="nightly-2023-10-14")
TEST_STEP = PipelineStep(kind=StepKind.TEST, name="test", args=("test",))


def _context(step: PipelineStep = TEST_STEP, toolchain: ToolchainSpec = STABLE, root: Path = Path(".")):
    return ExecutionContext(step=step, toolchain=toolchain, project_root=root)


# ── Protocol Tests ───────────────────────────────────────────────────


class TestExecutionContext:
    def test_argv_includes_toolchain(self):
        assert _context().argv == ["cargo", "+1.73", "test"]

    def test_command_line(self):
        assert _context(toolchain=NIGHTLY).command_line == "cargo +nightly-2023-10-14 test"


# ── Mock Adapter Tests ───────────────────────────────────────────────


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter()
        result = mock.execute(_context())
        assert result.ok
        assert mock.call_count == 1

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("test", diagnostic="2 tests failed", exit_code=101)
        result = mock.execute(_context())
        assert result.failed
        assert result.exit_code == 101
        assert "2 tests failed" in result.diagnostic
        assert result.command == "cargo +1.73 test"

    def test_failure_for_one_toolchain(self):
        mock = MockAdapter()
        mock.set_failure("test", toolchain="1.73")
        assert mock.execute(_context(toolchain=STABLE)).failed
        assert mock.execute(_context(toolchain=NIGHTLY)).ok

    def test_probe(self):
        mock = MockAdapter()
        mock.set_probe_failure("1.73")
        assert mock.probe(STABLE, Path(".")).failed
        assert mock.probe(NIGHTLY, Path(".")).ok
        assert mock.probe_log == [STABLE, NIGHTLY]

    def test_executed_steps_and_reset(self):
        mock = MockAdapter()
        mock.execute(_context())
        assert mock.executed_steps() == ["test"]
        mock.reset()
        assert mock.call_count == 0

    def test_is_available(self):
        assert MockAdapter(available=True).is_available()
        assert not MockAdapter(available=False).is_available()


# ── Shell Adapter Tests ──────────────────────────────────────────────


class TestShellCommandAdapter:
    def test_name(self):
        assert ShellCommandAdapter().name == "shell"

    def test_passed(self, tmp_path: Path, monkeypatch):
        calls = []

        def fake_run(argv, **kwargs):
            calls.append((argv, kwargs))
            return subprocess.CompletedProcess(argv, 0, stdout="ok\n", stderr="")

        monkeypatch.setattr("xtask.adapters.shell.command.subprocess.run", fake_run)
        result = ShellCommandAdapter().execute(_context(root=tmp_path))

        assert result.ok
        assert result.output == "ok"
        assert calls[0][0] == ["cargo", "+1.73", "test"]
        assert calls[0][1]["cwd"] == tmp_path

    def test_nonzero_exit(self, tmp_path: Path, monkeypatch):
        def fake_run(argv, **kwargs):
            return subprocess.CompletedProcess(argv, 101, stdout="", stderr="error[E0308]: mismatched types\n")

        monkeypatch.setattr("xtask.adapters.shell.command.subprocess.run", fake_run)
        result = ShellCommandAdapter().execute(_context(root=tmp_path))

        assert result.failed
        assert result.exit_code == 101
        assert "mismatched types" in result.diagnostic
        assert "exit code 101" in result.diagnostic
        assert not result.launch_error

    def test_missing_binary(self, tmp_path: Path):
        step = PipelineStep(kind=StepKind.BUILD, name="build", program="xtask-no-such-binary-9f3c")
        result = ShellCommandAdapter().execute(_context(step=step, root=tmp_path))
        assert result.failed
        assert result.launch_error
        assert "xtask-no-such-binary-9f3c" in result.diagnostic

    def test_timeout(self, tmp_path: Path, monkeypatch):
        def fake_run(argv, **kwargs):
            raise subprocess.TimeoutExpired(argv, kwargs["timeout"])

        monkeypatch.setattr("xtask.adapters.shell.command.subprocess.run", fake_run)
        result = ShellCommandAdapter(timeout=5).execute(_context(root=tmp_path))
        assert result.failed
        assert "timed out" in result.diagnostic

    def test_missing_working_directory(self, tmp_path: Path):
        result = ShellCommandAdapter().execute(_context(root=tmp_path / "absent"))
        assert result.failed
        assert "does not exist" in result.diagnostic

    def test_probe_runs_rustc(self, tmp_path: Path, monkeypatch):
        calls = []

        def fake_run(argv, **kwargs):
            calls.append(argv)
            return subprocess.CompletedProcess(argv, 0, stdout="rustc 1.73.0\n", stderr="")

        monkeypatch.setattr("xtask.adapters.shell.command.subprocess.run", fake_run)
        assert ShellCommandAdapter().probe(STABLE, tmp_path).ok
        assert calls == [["rustc", "+1.73", "--version"]]


# ── Non-UTF-8 Tool Output ────────────────────────────────────────────


@pytest.fixture
def fake_bin(tmp_path: Path, monkeypatch):
    """Directory prepended to PATH; returns a factory for fake tools."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def make(name: str, body: str) -> None:
        script = bin_dir / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)

    return make


@pytest.mark.skipif(sys.platform == "win32", reason="uses /bin/sh scripts")
class TestUndecodableOutput:
    def test_zero_exit_with_invalid_utf8_passes(self, tmp_path: Path, fake_bin):
        fake_bin("cargo", "printf '\\377ok\\n'; exit 0")
        result = execute_step(STEPS[StepKind.TEST], STABLE, False, ShellCommandAdapter(), tmp_path)
        assert result.status == "passed"
        assert result.output.endswith("ok")

    def test_nonzero_exit_with_invalid_utf8_stderr(self, tmp_path: Path, fake_bin):
        fake_bin("cargo", "printf 'error \\377\\n' >&2; exit 101")
        result = execute_step(STEPS[StepKind.TEST], STABLE, False, ShellCommandAdapter(), tmp_path)
        assert result.failed
        assert result.exit_code == 101
        assert not result.launch_error
        assert "error" in result.diagnostic

    def test_probe_with_invalid_utf8_aborts_run(self, tmp_path: Path, fake_bin):
        fake_bin("rustc", "printf '\\377\\n' >&2; exit 1")
        orchestrator = PipelineOrchestrator(
            config=XtaskConfig(),
            project_root=tmp_path,
            adapter=ShellCommandAdapter(),
            codegen_check=lambda: [],
        )

        report = orchestrator.run(selection="stable")

        assert report.aborted
        assert "cannot launch stable (1.73) toolchain" in report.abort_reason
        assert report.entries == []
