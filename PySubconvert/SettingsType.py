from __future__ import annotations
from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

import regex

SettingType: TypeAlias = str | int | float | bool | None

_TRUE_VALUES = ('true', 'yes', 'on', '1')
_FALSE_VALUES = ('false', 'no', 'off', '0', '')

_SIZE_PATTERN = regex.compile(r'^\s*(\d+(?:\.\d+)?)\s*(KB|MB|GB)?\s*$', regex.IGNORECASE)
_SIZE_FACTORS = { 'KB': 1 / 1024, 'MB': 1.0, 'GB': 1024.0 }

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

def _parse_bool(value : Any) -> bool|None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
    return None

def _parse_int(value : Any) -> int|None:
    if isinstance(value, (bool, int, float)):
        return int(value)
    if isinstance(value, str) and regex.fullmatch(r'\s*[-+]?\d+\s*', value):
        return int(value)
    return None

def _parse_size_mb(value : Any) -> float|None:
    """ Sizes from the configuration file look like '10MB' or '512KB', a bare number is megabytes """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    match = _SIZE_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        return None

    return float(match.group(1)) * _SIZE_FACTORS[(match.group(2) or 'MB').upper()]

class SettingsType(dict[str, SettingType]):
    """
    Settings dictionary with type-safe getters.

    Values read from a configuration file arrive as strings, so every getter
    accepts a string form of its type as well as the native type. A value that
    cannot be interpreted raises SettingsError rather than being guessed at.
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def _coerce(self, key : str, default : Any, parser : Callable[[Any], Any], type_name : str) -> Any:
        value = self.get(key, default)
        if value is None:
            return None

        result = parser(value)
        if result is None:
            raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to {type_name}")

        return result

    def get_bool(self, key: str, default: bool|None = False) -> bool:
        return bool(self._coerce(key, default, _parse_bool, "bool"))

    def get_int(self, key: str, default: int|None = None) -> int|None:
        return self._coerce(key, default, _parse_int, "int")

    def get_size_mb(self, key: str, default: float|None = None) -> float|None:
        """Get a size in megabytes, accepting values like '10MB' or '512KB'"""
        return self._coerce(key, default, _parse_size_mb, "size")

    def get_str(self, key: str, default: str|None = None) -> str|None:
        value = self.get(key, default)
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def update(self, other=(), /, **kwds) -> None:
        """Update settings, ignoring None values so that unset options keep their current value"""
        items = dict(other.items()) if hasattr(other, 'items') else dict(other)
        items.update(kwds)
        super().update({ key: value for key, value in items.items() if value is not None })
