"""Validation helpers shared by the config domain loaders.

Every error names the full dotted key (``index.put_limit``) so a bad YAML file
can be fixed without reading code. Type mismatches raise ``TypeError``; missing
keys and out-of-range values raise ``ValueError``.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

_MISSING = object()

# expected kind -> (accepted types, rejected types, message noun)
_KINDS: dict[str, tuple[tuple[type, ...], tuple[type, ...], str]] = {
    "str": ((str,), (), "a string"),
    "bool": ((bool,), (), "a boolean"),
    "int": ((int,), (bool,), "an integer"),
    "number": ((int, float), (bool,), "a number"),
}


def _check(value: Any, kind: str, config_key: str) -> Any:
    accepted, rejected, noun = _KINDS[kind]
    if isinstance(value, rejected) or not isinstance(value, accepted):
        raise TypeError(f"{config_key} must be {noun}")
    return value


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return the top-level section ``key``.

    A missing optional section reads as an empty mapping.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is present but not a mapping.
    """
    section = raw.get(key)
    if section is None and required:
        raise ValueError(f"Missing required config: {key}")
    if section is None:
        return {}
    if isinstance(section, Mapping):
        return section
    raise TypeError(f"{key} must be an object")


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    value = section.get(field, _MISSING)
    if value is _MISSING:
        raise ValueError(f"Missing required config: {config_key}")
    return value


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    return section.get(field, default)


def expect_str(value: Any, config_key: str) -> str:
    return _check(value, "str", config_key)


def expect_bool(value: Any, config_key: str) -> bool:
    return _check(value, "bool", config_key)


def expect_int(value: Any, config_key: str) -> int:
    """Integers only; YAML ``true``/``false`` are rejected."""
    return _check(value, "int", config_key)


def expect_float(value: Any, config_key: str) -> float:
    return float(_check(value, "number", config_key))


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Return a list of strings; a bare string counts as a one-item list."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    return [_check(item, "str", f"{config_key}[{idx}]") for idx, item in enumerate(value)]


def expect_choice(value: Any, choices: Iterable[str], config_key: str) -> str:
    """Match ``value`` case-insensitively against ``choices``; returns it uppercased."""
    allowed = sorted(choices)
    choice = expect_str(value, config_key).strip().upper()
    if choice in allowed:
        return choice
    raise ValueError(f"{config_key} must be one of {allowed}")
