"""Built-in transforms applied to pulled JSON values before deserialization."""

from typing import Any

from courier.errors import MissingAttributeError, UnexpectedValueError, UnknownVersionError
from courier.models.response import ReceivedMessage

TYPE_KEY = "type"
VERSION_KEY = "version"
DEFAULT_VERSION = "v1"

_MISSING = object()


class Identity:
    """Returns the value unchanged; for payloads that already match the target type."""

    def apply(self, envelope: ReceivedMessage, value: Any) -> Any:
        return value


class InsertAttribute:
    """
    Copies one attribute into the JSON object as a string field.

    Recovers a discriminant that the publisher put into the attributes instead of
    the payload, so a discriminated union can dispatch on it.
    """

    def __init__(self, key: str):
        self.key = key

    def apply(self, envelope: ReceivedMessage, value: Any) -> Any:
        attributes = envelope.message.attributes
        if self.key not in attributes:
            raise MissingAttributeError(self.key)
        if not isinstance(value, dict):
            raise UnexpectedValueError(value)
        return {**value, self.key: attributes[self.key]}

    def __repr__(self) -> str:
        return f"InsertAttribute({self.key!r})"


class VersionedTypeTag:
    """
    Synthesizes externally tagged wrappers from ``type`` attributes.

    The ``version`` attribute selects the behavior, ``v1`` when absent:

    - ``v1``: every attribute ``type`` or ``type.<path>`` wraps the sub-value at
      ``<path>`` (the whole value for ``type``) into ``{<attribute value>: sub-value}``.
      Deeper paths are applied first so shallower wrappers enclose them. Paths that
      do not resolve are skipped.
    - ``v2``: the payload carries its own tags, the value is returned unchanged.
    - anything else fails with UnknownVersionError.

    Path segments select object fields; a segment of digits also indexes arrays.
    Keys of equal depth cannot lie on each other's path, so their relative order
    does not affect the result.
    """

    def apply(self, envelope: ReceivedMessage, value: Any) -> Any:
        attributes = envelope.message.attributes
        version = attributes.get(VERSION_KEY, DEFAULT_VERSION)
        if version == "v2":
            return value
        if version != "v1":
            raise UnknownVersionError(version)

        tagged_paths = [
            (key.split(".")[1:], tag)
            for key, tag in attributes.items()
            if key == TYPE_KEY or key.startswith(TYPE_KEY + ".")
        ]
        tagged_paths.sort(key=lambda item: len(item[0]), reverse=True)

        for path, tag in tagged_paths:
            wrapped = _wrap_at(value, path, tag)
            if wrapped is not _MISSING:
                value = wrapped
        return value


def _wrap_at(value: Any, path: list[str], tag: str) -> Any:
    """Return a copy of value with the sub-value at path wrapped in ``{tag: ...}``."""
    if not path:
        return {tag: value}

    segment, rest = path[0], path[1:]
    if isinstance(value, dict):
        if segment not in value:
            return _MISSING
        child = _wrap_at(value[segment], rest, tag)
        if child is _MISSING:
            return _MISSING
        return {**value, segment: child}

    if isinstance(value, list) and segment.isascii() and segment.isdigit() and int(segment) < len(value):
        index = int(segment)
        child = _wrap_at(value[index], rest, tag)
        if child is _MISSING:
            return _MISSING
        return value[:index] + [child] + value[index + 1 :]

    return _MISSING
