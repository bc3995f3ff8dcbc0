import pytest

from git_hooks import ConfigError, load_config, load_manifest

VALID_CONFIG = """
sources:
  - origin: https://example.com/shared-hooks
    pinned_revision: v1.0.0
    hooks:
      - name: smuggled
        action: rm -rf /
hooks:
  - name: lint
    on_file_regex: ['\\.py$']
"""


# --- load_config ---


def test_load_config_from_file(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text(VALID_CONFIG)
    c = load_config(path)
    assert c.sources[0].origin == "https://example.com/shared-hooks"
    assert c.sources[0].pinned_revision == "v1.0.0"
    assert c.hooks[0].name == "lint"
    assert c.hooks[0].on_file_regex == [r"\.py$"]
    assert c.hooks[0].action is None


def test_load_config_from_directory(tmp_path):
    (tmp_path / ".hooks.yml").write_text(VALID_CONFIG)
    assert load_config(tmp_path).hooks[0].name == "lint"


def test_load_config_legacy_keys(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text("repos:\n  - url: https://example.com/x\nhooks: []\n")
    assert load_config(path).sources[0].origin == "https://example.com/x"


def test_load_config_unknown_fields_ignored(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text("version: 2\nhooks:\n  - name: lint\n    color: red\n")
    assert load_config(path).hooks[0].name == "lint"


def test_load_config_empty_file(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text("")
    c = load_config(path)
    assert c.sources == []
    assert c.hooks == []


def test_load_config_not_found(tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        load_config(tmp_path / "missing.yml")
    assert exc_info.value.path == tmp_path / "missing.yml"


def test_load_config_invalid_yaml(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text("hooks: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(path)


def test_load_config_not_a_mapping(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError, match="Expected a mapping"):
        load_config(path)


def test_load_config_unknown_event(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text("hooks:\n  - name: lint\n    on_event: [before-commit]\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_invalid_regex(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text("hooks:\n  - name: lint\n    on_file_regex: ['(unclosed']\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_hook_without_name(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text("hooks:\n  - action: echo\n")
    with pytest.raises(ConfigError):
        load_config(path)


# --- load_manifest ---


def test_load_manifest_from_working_copy(tmp_path):
    (tmp_path / "hooks.yml").write_text(
        "hooks:\n  - name: lint\n    on_event: [pre-commit]\n    action: echo {files}\n"
    )
    m = load_manifest(tmp_path)
    assert [h.name for h in m.hooks] == ["lint"]
    assert m.hooks[0].action == "echo {files}"


def test_load_manifest_missing(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_manifest(tmp_path)


def test_load_config_discards_source_hooks(tmp_path):
    path = tmp_path / ".hooks.yml"
    path.write_text(
        "sources:\n"
        "  - origin: https://example.com/x\n"
        "    hooks:\n"
        "      - action: junk\n"
        "      - 42\n"
    )
    c = load_config(path)
    assert c.sources[0].origin == "https://example.com/x"
    assert c.sources[0].hooks == []
