"""Option values shared by the command-line interface."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

MAX_PER_PAGE = 100
DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20


class _ChoiceEnum(str, enum.Enum):
    """String enum whose value is the command-line spelling."""

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def _missing_(cls, value: object) -> _ChoiceEnum | None:
        if isinstance(value, str):
            target = cls._aliases().get(value.lower())
            if target is not None:
                return cls(target)
            for member in cls:
                if member.value == value.lower():
                    return member
        return None

    @classmethod
    def choices(cls) -> list[str]:
        """Command-line spellings of every member, in declaration order."""
        return [member.value for member in cls]

    def __str__(self) -> str:
        return self.value


class OutputFormat(_ChoiceEnum):
    """Output format for commands that return data."""

    TABLE = "table"
    JSON = "json"


class SkillTarget(_ChoiceEnum):
    """AI harness targets the skill generator knows how to emit."""

    CLAUDE_CODE = "claude-code"
    CODEX = "codex"
    PI = "pi"
    AGENTS_MD = "agents-md"
    CLAUDE_DESKTOP = "claude-desktop"
    CURSOR = "cursor"
    OPEN_CLAW = "openclaw"
    PLUGIN = "plugin"
    ALL = "all"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"open-claw": "openclaw"}

    @property
    def description(self) -> str:
        return _SKILL_DESCRIPTIONS[self]


_SKILL_DESCRIPTIONS = {
    SkillTarget.CLAUDE_CODE: "Claude Code (.claude/skills/koban/SKILL.md)",
    SkillTarget.CODEX: "OpenAI Codex CLI / pi (.agents/skills/koban/SKILL.md)",
    SkillTarget.PI: "pi coding agent (.pi/skills/koban/SKILL.md)",
    SkillTarget.AGENTS_MD: "AGENTS.md block (Cursor, Windsurf, Gemini, Aider, Copilot, Zed, ...)",
    SkillTarget.CLAUDE_DESKTOP: "Claude Desktop upload bundle (koban.zip)",
    SkillTarget.CURSOR: "Cursor project rule (.cursor/rules/koban.mdc)",
    SkillTarget.OPEN_CLAW: "OpenClaw skill (skills/koban/SKILL.md, or ~/.openclaw/skills/...)",
    SkillTarget.PLUGIN: "Claude Code plugin (.claude-plugin/plugin.json + skill)",
    SkillTarget.ALL: "claude-code + codex + agents-md (the practical default bundle)",
}


class CompletionShell(_ChoiceEnum):
    """Shells that completion scripts can be printed for."""

    BASH = "bash"
    ELVISH = "elvish"
    FISH = "fish"
    NUSHELL = "nushell"
    POWERSHELL = "powershell"
    ZSH = "zsh"

    @classmethod
    def _aliases(cls) -> dict[str, str]:
        return {"power-shell": "powershell"}


def _split_include(include: list[str]) -> list[str]:
    return [part for item in include for part in item.split(",")]


@dataclass
class ListOptions:
    """Pagination, filter and sort options for a list request."""

    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    include: list[str] = field(default_factory=list)
    filters: list[str] = field(default_factory=list)
    sort: str | None = None
    all: bool = False
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be at least 1, got {self.page}")
        if not 1 <= self.per_page <= MAX_PER_PAGE:
            raise ValueError(
                f"per_page must be between 1 and {MAX_PER_PAGE}, got {self.per_page}"
            )
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")
        self.include = _split_include(list(self.include))
        self.filters = list(self.filters)