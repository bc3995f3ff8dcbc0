import subprocess
from pathlib import Path

import pytest
import yaml


def git(*args: str, cwd: Path) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout


def init_repo(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    git("init", "-q", cwd=path)
    git("config", "user.email", "t@t.com", cwd=path)
    git("config", "user.name", "T", cwd=path)
    git("config", "commit.gpgsign", "false", cwd=path)
    return path.resolve()


def commit_all(path: Path, message: str = "init") -> str:
    git("add", ".", cwd=path)
    git("commit", "-q", "-m", message, cwd=path)
    return git("rev-parse", "HEAD", cwd=path).strip()


@pytest.fixture(autouse=True)
def _isolate_git(tmp_path_factory, monkeypatch):
    """Keep git from finding a repository above the test directories."""
    base = tmp_path_factory.getbasetemp()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(base.parent))
    for var in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def repo(tmp_path, monkeypatch) -> Path:
    """A project repository with one commit, used as the current directory."""
    path = init_repo(tmp_path / "project")
    (path / "README.md").write_text("hello\n")
    commit_all(path)
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def make_source(tmp_path):
    """Factory for external source repositories carrying a hooks.yml.

    ``scripts`` are written executable next to the manifest.
    """

    def _make(
        name: str,
        hooks: list[dict],
        scripts: dict[str, str] | None = None,
    ) -> Path:
        path = init_repo(tmp_path / "sources" / name)
        (path / "hooks.yml").write_text(yaml.safe_dump({"hooks": hooks}))
        for filename, content in (scripts or {}).items():
            script = path / filename
            script.write_text(content)
            script.chmod(0o755)
        commit_all(path)
        return path

    return _make


def write_config(repo: Path, sources: list[dict], hooks: list[dict]) -> Path:
    path = repo / ".hooks.yml"
    path.write_text(yaml.safe_dump({"sources": sources, "hooks": hooks}))
    return path


@pytest.fixture
def run_git():
    return git


@pytest.fixture
def commit():
    return commit_all


@pytest.fixture
def new_repo():
    return init_repo


@pytest.fixture
def config_file():
    return write_config
