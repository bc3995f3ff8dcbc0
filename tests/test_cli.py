"""Tests for the git-hooks command line."""

import pytest
from click.testing import CliRunner

from git_hooks.cli import cli
from git_hooks.installer import is_managed

LINT = {
    "name": "lint",
    "on_event": ["pre-commit"],
    "on_file_regex": [r".*\.txt$"],
    "action": "echo {changed_files}",
}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(repo, make_source, config_file, run_git):
    """A repository whose .hooks.yml activates ``lint`` from a local source."""
    source = make_source("shared", [LINT])
    config_file(repo, [{"origin": str(source)}], [{"name": "lint"}])
    (repo / "a.txt").write_text("a\n")
    run_git("add", "a.txt", cwd=repo)
    return repo


def _invoke(runner, repo, *args):
    return runner.invoke(cli, ["-C", str(repo), *args])


def test_run_reports_hooks(runner, project):
    result = _invoke(runner, project, "run", "pre-commit")
    assert result.exit_code == 0, result.output
    assert "✓ lint" in result.output


def test_run_nothing_to_do(runner, project):
    result = _invoke(runner, project, "run", "post-commit")
    assert result.exit_code == 0, result.output
    assert "Nothing to do." in result.output


def test_run_accepts_git_arguments(runner, project):
    result = _invoke(runner, project, "run", "commit-msg", ".git/COMMIT_EDITMSG")
    assert result.exit_code == 0, result.output


def test_run_failure_exits_non_zero(runner, repo, make_source, config_file):
    source = make_source(
        "shared", [{"name": "boom", "action": "sh -c 'echo broken >&2; exit 3'"}]
    )
    config_file(repo, [{"origin": str(source)}], [{"name": "boom"}])
    result = _invoke(runner, repo, "run", "pre-commit")
    assert result.exit_code == 1
    assert "exit code 3" in result.output
    assert "broken" in result.output
    assert "1 hook(s) failed on pre-commit" in result.output


def test_run_unknown_event(runner, project):
    result = _invoke(runner, project, "run", "pre_commit")
    assert result.exit_code == 2


def test_run_missing_config(runner, repo):
    result = _invoke(runner, repo, "run", "pre-commit")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_run_with_explicit_config(runner, project):
    moved = project / "hooks-config.yml"
    (project / ".hooks.yml").rename(moved)
    result = _invoke(runner, project, "--config", str(moved), "run", "pre-commit")
    assert result.exit_code == 0, result.output
    assert "✓ lint" in result.output


def test_init_installs_events_in_use(runner, project):
    result = _invoke(runner, project, "init")
    assert result.exit_code == 0, result.output
    assert "installed:" in result.output
    hooks = project / ".git" / "hooks"
    assert is_managed(hooks / "pre-commit")
    assert not (hooks / "pre-push").exists()


def test_init_explicit_events_without_config(runner, repo):
    result = _invoke(runner, repo, "init", "--event", "pre-push", "-e", "commit-msg")
    assert result.exit_code == 0, result.output
    assert is_managed(repo / ".git" / "hooks" / "pre-push")
    assert is_managed(repo / ".git" / "hooks" / "commit-msg")


def test_init_refuses_foreign_hook(runner, repo):
    hooks = repo / ".git" / "hooks"
    hooks.mkdir(exist_ok=True)
    (hooks / "pre-commit").write_text("#!/bin/sh\nmake lint\n")
    result = _invoke(runner, repo, "init", "-e", "pre-commit")
    assert result.exit_code == 1
    assert "--force" in result.output

    result = _invoke(runner, repo, "init", "-e", "pre-commit", "--force")
    assert result.exit_code == 0, result.output
    assert is_managed(hooks / "pre-commit")


def test_uninstall(runner, project):
    _invoke(runner, project, "init")
    result = _invoke(runner, project, "uninstall")
    assert result.exit_code == 0, result.output
    assert "removed:" in result.output
    assert not (project / ".git" / "hooks" / "pre-commit").exists()


def test_validate_ok(runner, project):
    result = _invoke(runner, project, "validate")
    assert result.exit_code == 0, result.output
    assert "ok" in result.output


def test_validate_reports_errors(runner, repo, config_file):
    config_file(repo, [{"origin": "https://example.com/x"}], [{"name": "a", "on_event": ["oops"]}])
    result = _invoke(runner, repo, "validate")
    assert result.exit_code == 1
    assert "hooks[0].on_event[0]" in result.output
    assert "1 error(s)" in result.output


def test_validate_warns_on_unused_override(runner, project, config_file):
    source = project.parent / "sources" / "shared"
    config_file(project, [{"origin": str(source)}], [{"name": "lint"}, {"name": "typo"}])
    result = _invoke(runner, project, "validate")
    assert result.exit_code == 0, result.output
    assert "warning" in result.output
    assert "typo" in result.output


def test_list_active_hooks(runner, project):
    result = _invoke(runner, project, "list")
    assert result.exit_code == 0, result.output
    (line,) = [ln for ln in result.output.splitlines() if ln.strip()]
    assert line.split()[:3] == ["lint", "shared", "pre-commit"]
    assert "echo {changed_files}" in line


def test_list_filters_by_event(runner, project):
    result = _invoke(runner, project, "list", "pre-push")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == ""


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "git-hooks" in result.output
