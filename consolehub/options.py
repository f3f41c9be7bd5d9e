"""CONSOLEHUB FILE PURPOSE
Purpose: validated options bag for loggers and hub-wide defaults.
Hot path: yes (options are resolved on every emitted call).
Feature flags: none.
Failure mode: unknown option names => pydantic ValidationError; bad level values pass through.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Options(BaseModel):
    # snake_case or camelCase names (fileLine, timeDiff, defaultLevel, rootPath)
    model_config = ConfigDict(
        extra="forbid",
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    buffer: bool = False
    compact: bool = True
    console: Any = None
    # level names are not validated here: unknown ones fail open through level_index
    default_level: Any = "info"
    file_line: bool = True
    icons: Union[bool, str, list[str]] = True
    include_log: bool = False
    # explicit level; pins the logger against later rule changes
    level: Any = None
    # absolute directory whose files the root logger attributes to this namespace
    root: str | None = Field(default=None, validation_alias=AliasChoices("root", "rootPath"))
    time_diff: bool = True

    @field_validator("root")
    @classmethod
    def _absolute_root(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return os.path.abspath(os.path.expanduser(v.strip()))

    def explicit(self) -> dict[str, Any]:
        """Only the fields a caller actually set."""

        return {k: getattr(self, k) for k in self.model_fields_set}

    def over(self, defaults: "Options") -> "Options":
        return defaults.model_copy(update=self.explicit())


def coerce_options(value: Options | Mapping[str, Any] | None) -> Options:
    if value is None:
        return Options()
    if isinstance(value, Options):
        return value
    return Options.model_validate(dict(value))


def merge_options(base: Options, update: Options | Mapping[str, Any] | None) -> Options:
    if update is None:
        return base
    return Options.model_validate({**base.explicit(), **coerce_options(update).explicit()})
