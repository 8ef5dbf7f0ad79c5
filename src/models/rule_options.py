"""Options accepted by every script rule.

The field aliases match the option names used in lint configuration files
(``includeComment``, ``excludeArgsForFunctions`` ...) so an options object
can be loaded straight from JSON. Snake-case names work too.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RuleOptions(BaseModel):
    """Immutable per-run configuration for a script rule.

    - include_comment: also check comment text
    - include_identifier: also check identifier names
    - exclude_args_for_functions: dotted call targets (``i18n.t``) whose
      argument literals are exempt
    - exclude_module_imports: exempt import/require specifiers
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    include_comment: bool = Field(default=False, alias="includeComment")
    include_identifier: bool = Field(default=False, alias="includeIdentifier")
    exclude_args_for_functions: FrozenSet[str] = Field(
        default_factory=frozenset, alias="excludeArgsForFunctions"
    )
    exclude_module_imports: bool = Field(default=False, alias="excludeModuleImports")

    @field_validator("exclude_args_for_functions", mode="before")
    def _normalise_functions(cls, value: object) -> FrozenSet[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError("excludeArgsForFunctions must be a list of strings")
        names: set[str] = set()
        for item in value:
            if not isinstance(item, str):
                raise ValueError(
                    f"excludeArgsForFunctions entries must be strings, got {item!r}"
                )
            cleaned = item.strip()
            if cleaned:
                names.add(cleaned)
        return frozenset(names)

    def merged(self, **overrides: Any) -> "RuleOptions":
        """Return a copy with ``overrides`` applied (``None`` values are ignored)."""
        data = self.model_dump()
        for key, value in overrides.items():
            if value is None:
                continue
            if key == "exclude_args_for_functions":
                value = set(data[key]) | set(value)
            data[key] = value
        return RuleOptions(**data)


def load_options(path: Path) -> RuleOptions:
    """Read rule options from a JSON file.

    The file holds a single JSON object. A one-element list (the shape used
    by lint configuration files, ``[{...}]``) is accepted as well.
    """

    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, list):
        if len(raw) != 1:
            raise ValueError(f"{path}: expected a single options object, got {len(raw)}")
        raw = raw[0]
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: options must be a JSON object")
    return RuleOptions.model_validate(raw)
