"""${ENV_VAR} and ${ENV_VAR:-default} substitution over raw YAML data."""

import os
import re
from collections.abc import Iterator

_ENV_VAR_PATTERN = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}")

type RawValue = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def collect_missing_vars(data: RawValue) -> list[str]:
    """Return unset env var names that have no default, in first-seen order."""
    missing: list[str] = []
    for text in _strings(data):
        for match in _ENV_VAR_PATTERN.finditer(text):
            name = match["name"]
            if match["default"] is None and name not in os.environ and name not in missing:
                missing.append(name)
    return missing


def interpolate(data: RawValue) -> RawValue:
    """Substitute env var references, falling back to the inline default.

    Call `collect_missing_vars` first; an unset variable without a default
    raises KeyError here.
    """
    match data:
        case str():
            return _ENV_VAR_PATTERN.sub(_lookup, data)
        case list():
            return [interpolate(item) for item in data]
        case dict():
            return {key: interpolate(value) for key, value in data.items()}
        case _:
            return data


def _lookup(match: re.Match[str]) -> str:
    default = match["default"]
    if default is None:
        return os.environ[match["name"]]
    return os.environ.get(match["name"], default)


def _strings(data: RawValue) -> Iterator[str]:
    match data:
        case str():
            yield data
        case list():
            for item in data:
                yield from _strings(item)
        case dict():
            for value in data.values():
                yield from _strings(value)
