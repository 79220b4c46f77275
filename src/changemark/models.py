"""Pydantic models for Changemark configuration data."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DEFAULT_PRIORITY_KEYS: tuple[str, ...] = ("Bug", "Issue", "Test")
DEFAULT_SKIP_BRANCHES: tuple[str, ...] = ("upstream", "upstream/*", "pristine-tar")


class HookConfig(BaseModel):
    """Settings for one ``commit-msg`` hook run.

    Attributes:
        enabled: When false the hook never touches the message.
        comment_char: Leading character of comment lines.
        priority_keys: Trailer keys placed before ``Change-Id``.
        skip_branches: fnmatch patterns for packaging branches to skip.
        title_warn_length: Subject length that triggers a warning.
        title_max_length: Subject length that rejects the commit.

    Example:
        >>> HookConfig(comment_char="auto").comment_char
        '#'
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    comment_char: str = "#"
    priority_keys: tuple[str, ...] = DEFAULT_PRIORITY_KEYS
    skip_branches: tuple[str, ...] = DEFAULT_SKIP_BRANCHES
    title_warn_length: int = 80
    title_max_length: int = 100

    @field_validator("comment_char", mode="before")
    @classmethod
    def normalize_comment_char(cls, value: object) -> object:
        if value is None:
            return "#"
        if isinstance(value, str):
            normalized = value.strip()
            if not normalized or normalized == "auto":
                return "#"
            if len(normalized) != 1:
                raise ValueError("comment_char must be a single character")
            return normalized
        return value

    @field_validator("priority_keys", mode="before")
    @classmethod
    def normalize_priority_keys(cls, value: object) -> object:
        if value is None:
            return DEFAULT_PRIORITY_KEYS
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            seen: set[str] = set()
            keys: list[str] = []
            for item in value:
                key = str(item).strip()
                if not key or key.lower() in seen:
                    continue
                seen.add(key.lower())
                keys.append(key)
            return tuple(keys)
        return value

    @field_validator("skip_branches", mode="before")
    @classmethod
    def normalize_skip_branches(cls, value: object) -> object:
        if value is None:
            return DEFAULT_SKIP_BRANCHES
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            return tuple(str(item).strip() for item in value if str(item).strip())
        return value

    @field_validator("title_warn_length", "title_max_length")
    @classmethod
    def require_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("title length limits must be positive")
        return value

    @model_validator(mode="after")
    def check_title_limits(self) -> HookConfig:
        if self.title_max_length < self.title_warn_length:
            raise ValueError("title_max_length must not be below title_warn_length")
        return self
