from pathlib import Path

from git_hooks import ExternalHookSource, Hook, merge_hooks
from git_hooks.engine import OVERRIDABLE_FIELDS, override_fields


def _source(hooks: list[Hook], origin: str = "https://example.com/shared-hooks") -> ExternalHookSource:
    source = ExternalHookSource(origin=origin)
    source.attach(Path("/tmp/hook-repos") / source.name, hooks)
    return source


def _lint() -> Hook:
    return Hook(
        name="lint",
        on_event=["pre-commit"],
        on_file_regex=[r"\.py$"],
        action="ruff check {changed_files}",
        setup_script="pip install ruff",
    )


def _dump(sources: list[ExternalHookSource]) -> list[list[dict]]:
    return [[h.model_dump() for h in s.hooks] for s in sources]


def test_override_only_action_keeps_other_fields():
    source = _source([_lint()])
    merge_hooks([Hook(name="lint", action="ruff format {changed_files}")], [source])
    hook = source.hooks[0]
    assert hook.action == "ruff format {changed_files}"
    assert hook.on_event == ["pre-commit"]
    assert hook.on_file_regex == [r"\.py$"]
    assert hook.setup_script == "pip install ruff"


def test_override_every_field():
    source = _source([_lint()])
    override = Hook(
        name="lint",
        on_event=["pre-push"],
        on_file_regex=[r"\.pyi$"],
        action="mypy {files}",
        setup_script="pip install mypy",
    )
    merge_hooks([override], [source])
    assert source.hooks[0].model_dump() == override.model_dump()


def test_name_only_override_changes_nothing():
    source = _source([_lint()])
    before = _dump([source])
    merge_hooks([Hook(name="lint")], [source])
    assert _dump([source]) == before


def test_unrelated_override_is_noop():
    source = _source([_lint()])
    before = _dump([source])
    merge_hooks([Hook(name="fmt", action="black .")], [source])
    assert _dump([source]) == before


def test_merge_is_idempotent():
    overrides = [Hook(name="lint", on_event=["pre-push"]), Hook(name="fmt", action="black {files}")]
    once = [_source([_lint(), Hook(name="fmt", action="yapf")])]
    twice = [_source([_lint(), Hook(name="fmt", action="yapf")])]
    merge_hooks(overrides, once)
    merge_hooks(overrides, twice)
    merge_hooks(overrides, twice)
    assert _dump(once) == _dump(twice)


def test_merge_applies_to_every_source():
    first = _source([_lint()], origin="https://example.com/a")
    second = _source([_lint()], origin="https://example.com/b")
    merge_hooks([Hook(name="lint", action="flake8")], [first, second])
    assert first.hooks[0].action == "flake8"
    assert second.hooks[0].action == "flake8"


def test_duplicate_override_last_wins():
    source = _source([_lint()])
    merge_hooks(
        [Hook(name="lint", action="first"), Hook(name="lint", action="second")],
        [source],
    )
    assert source.hooks[0].action == "second"


def test_merged_lists_are_not_shared_with_override():
    source = _source([_lint()])
    override = Hook(name="lint", on_file_regex=[r"\.md$"])
    merge_hooks([override], [source])
    override.on_file_regex.append(r"\.rst$")
    assert source.hooks[0].on_file_regex == [r"\.md$"]


def test_override_fields_reports_replaced():
    target = _lint()
    replaced = override_fields(target, Hook(name="lint", action="x", on_event=["update"]))
    assert replaced == ["on_event", "action"]
    assert set(replaced) <= set(OVERRIDABLE_FIELDS)
