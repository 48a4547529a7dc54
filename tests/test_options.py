import pytest

from koban.options import CompletionShell, ListOptions, OutputFormat, SkillTarget


def test_output_format_values():
    assert OutputFormat("table") is OutputFormat.TABLE
    assert OutputFormat("json") is OutputFormat.JSON
    assert OutputFormat.choices() == ["table", "json"]


def test_output_format_rejects_unknown():
    with pytest.raises(ValueError):
        OutputFormat("yaml")


def test_skill_target_openclaw_alias():
    assert SkillTarget("openclaw") is SkillTarget.OPEN_CLAW
    assert SkillTarget("open-claw") is SkillTarget.OPEN_CLAW


def test_skill_target_kebab_names():
    assert SkillTarget("claude-code") is SkillTarget.CLAUDE_CODE
    assert SkillTarget("agents-md") is SkillTarget.AGENTS_MD
    assert SkillTarget("claude-desktop") is SkillTarget.CLAUDE_DESKTOP
    assert SkillTarget("all") is SkillTarget.ALL


def test_skill_target_round_trip_and_descriptions():
    for target in SkillTarget:
        assert SkillTarget(str(target)) is target
        assert target.description


def test_skill_target_rejects_unknown():
    with pytest.raises(ValueError):
        SkillTarget("vim")


@pytest.mark.parametrize(
    "shell", ["bash", "elvish", "fish", "nushell", "powershell", "zsh"]
)
def test_completion_shell_display_round_trip(shell):
    assert str(CompletionShell(shell)) == shell


def test_completion_shell_power_shell_alias():
    assert CompletionShell("power-shell") is CompletionShell.POWERSHELL


def test_list_options_defaults():
    options = ListOptions()
    assert options.page == 1
    assert options.per_page == 20
    assert options.include == []
    assert options.filters == []
    assert options.sort is None
    assert options.all is False
    assert options.limit is None


def test_list_options_splits_include():
    options = ListOptions(include=["client,documents", "payments"])
    assert options.include == ["client", "documents", "payments"]


@pytest.mark.parametrize(
    "kwargs",
    [{"page": 0}, {"per_page": 0}, {"per_page": 101}, {"limit": 0}],
)
def test_list_options_rejects_out_of_range(kwargs):
    with pytest.raises(ValueError):
        ListOptions(**kwargs)


def test_list_options_accepts_bounds():
    options = ListOptions(page=1, per_page=100, limit=1)
    assert (options.page, options.per_page, options.limit) == (1, 100, 1)