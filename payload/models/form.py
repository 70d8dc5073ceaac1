"""Multi-valued form fields shared by urlencoded and multipart bodies."""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any
from urllib.parse import urlencode

from payload.core.exceptions import UnsupportedFormShape


class FormValues:
    """Form field name to an ordered list of values.

    Keys iterate in sorted order, values keep insertion order per key so
    repeated fields (checkbox-style multi-select) survive.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str | Iterable[str]] | None = None) -> None:
        self._data: dict[str, list[str]] = {}
        for key, values in (data or {}).items():
            if isinstance(values, str):
                self.add(key, values)
            else:
                self.extend(key, values)

    @staticmethod
    def _check(key: object, values: list) -> None:
        """Keys and values must be strings."""
        if not isinstance(key, str):
            raise UnsupportedFormShape(key)
        for value in values:
            if not isinstance(value, str):
                raise UnsupportedFormShape(value)

    def add(self, key: str, value: str) -> None:
        """Append a value to the key."""
        self._check(key, [value])
        self._data.setdefault(key, []).append(value)

    def extend(self, key: str, values: Iterable[str]) -> None:
        """Append several values to the key, keeping their order."""
        values = list(values)
        self._check(key, values)
        self._data.setdefault(key, []).extend(values)

    def set(self, key: str, value: str) -> None:
        """Replace all values of the key with a single value."""
        self._check(key, [value])
        self._data[key] = [value]

    def get(self, key: str, default: str | None = None) -> str | None:
        """First value of the key."""
        values = self._data.get(key)
        return values[0] if values else default

    def getlist(self, key: str) -> list[str]:
        return list(self._data.get(key, []))

    def keys(self) -> list[str]:
        return sorted(self._data)

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for key in self.keys():
            yield key, list(self._data[key])

    def encode(self) -> str:
        """Percent-encode as ``key=value`` pairs joined by ``&``."""
        pairs = [(key, value) for key, values in self.items() for value in values]
        return urlencode(pairs)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormValues):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"FormValues({dict(self.items())})"


def _is_value_list(value: Any) -> bool:
    return isinstance(value, list | tuple) and all(isinstance(item, str) for item in value)


def is_form_shape(value: Any) -> bool:
    """Whether the value is one of the accepted form shapes."""
    match value:
        case FormValues():
            return True
        case Mapping():
            return all(
                isinstance(key, str) and (isinstance(item, str) or _is_value_list(item))
                for key, item in value.items()
            )
        case _:
            return False


def to_form_values(form: Any) -> FormValues:
    """Normalize a string map, a multi-value string map or FormValues."""
    if not is_form_shape(form):
        raise UnsupportedFormShape(form)

    if isinstance(form, FormValues):
        return form

    values = FormValues()
    for key, item in form.items():
        match item:
            case str():
                values.set(key, item)
            case _:
                values.extend(key, item)
    return values
