"""Payload Codecs — built-in JSON and XML body decoders plus codec resolution.

Invariants:
    - decode() either returns an instance of payload_type or raises; it never
      returns a partially-filled payload
    - Codecs are stateless and safe to share across concurrent requests
    - Codec.JSON and Codec.XML are the closed built-in set; any object with a
      decode(body, payload_type) method is accepted as a custom codec

Design Decisions:
    - pydantic TypeAdapter does the typed construction: dataclasses, pydantic
      models and TypedDicts all work as payload types without extra glue
    - JSON body must be exactly one document: trailing data after the first
      value is rejected as an extraction failure
    - XML parsed with the stdlib ElementTree into plain dicts, then validated
      through the same TypeAdapter path as JSON
    - XML mapping is guided by the payload's type hints: the root is always a
      dict (empty root -> {}), sequence fields always get a list, scalar fields
      get the element text even when it carries attributes; otherwise text
      next to attributes is kept under "#text"
"""

import types
import xml.etree.ElementTree as ET
from collections import abc
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import TypeAdapter

from cleanflow.core.contracts import PayloadCodec

P = TypeVar("P")


@lru_cache(maxsize=256)
def _adapter_for(payload_type: Any) -> TypeAdapter:
    return TypeAdapter(payload_type)


class JSONCodec:
    """Structured-text codec: request body is a JSON document."""

    name = "json"

    def decode(self, body: bytes, payload_type: type[P]) -> P:
        return _adapter_for(payload_type).validate_json(body)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


_SCALAR_TYPES = (str, bytes, int, float, bool, Enum)
_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, abc.Sequence, abc.Set)


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_scalar(annotation: Any) -> bool:
    annotation = _unwrap_optional(annotation)
    return isinstance(annotation, type) and issubclass(annotation, _SCALAR_TYPES)


def _sequence_item(annotation: Any) -> tuple[bool, Any]:
    """(is_sequence, item annotation) for list[X], tuple[X, ...], set[X] fields."""
    annotation = _unwrap_optional(annotation)
    if get_origin(annotation) in _SEQUENCE_ORIGINS:
        args = get_args(annotation)
        return True, args[0] if args else None
    return False, None


def _field_hints(annotation: Any) -> dict[str, Any]:
    annotation = _unwrap_optional(annotation)
    if not isinstance(annotation, type):
        return {}
    try:
        return get_type_hints(annotation)
    except (NameError, TypeError):
        return {}


def _child_to_value(element: ET.Element, annotation: Any) -> Any:
    if len(element):
        return _element_to_value(element, annotation)
    text = element.text or ""
    if not element.attrib or _is_scalar(annotation):
        return text
    value = _element_to_value(element, annotation)
    if text.strip():
        value.setdefault("#text", text)
    return value


def _element_to_value(element: ET.Element, annotation: Any = None) -> dict[str, Any]:
    """Map an element's children and attributes to a dict, guided by field hints.

    The element itself always maps to a dict, even when it is empty; leaf
    children map to their text, or to a list for sequence-typed fields.
    """
    hints = _field_hints(annotation)
    grouped: dict[str, list[ET.Element]] = {}
    for child in element:
        grouped.setdefault(_local_name(child.tag), []).append(child)

    value: dict[str, Any] = {}
    for name, children in grouped.items():
        is_sequence, item = _sequence_item(hints.get(name))
        if is_sequence:
            value[name] = [_child_to_value(child, item) for child in children]
        elif len(children) > 1:
            value[name] = [_child_to_value(child, None) for child in children]
        else:
            value[name] = _child_to_value(children[0], hints.get(name))
    for name, attr in element.attrib.items():
        value.setdefault(_local_name(name), attr)
    return value


class XMLCodec:
    """Markup codec: child elements of the root map to payload fields.

    A payload type may pin its root element with an `xml_root_tag` class
    attribute; a document with a different root is rejected.
    """

    name = "xml"

    def decode(self, body: bytes, payload_type: type[P]) -> P:
        root = ET.fromstring(body)
        expected = getattr(payload_type, "xml_root_tag", None)
        if expected is not None and _local_name(root.tag) != expected:
            raise ValueError(
                f"expected element <{expected}> but have <{_local_name(root.tag)}>",
            )
        return _adapter_for(payload_type).validate_python(
            _element_to_value(root, payload_type),
        )


class Codec(str, Enum):
    """Built-in codecs, selectable by name."""
    JSON = "json"
    XML = "xml"


_BUILTIN_CODECS: dict[Codec, PayloadCodec] = {
    Codec.JSON: JSONCodec(),
    Codec.XML: XMLCodec(),
}


def resolve_codec(codec: "Codec | str | PayloadCodec") -> PayloadCodec:
    """Map a built-in codec name to its instance; pass custom codecs through."""
    if isinstance(codec, str):
        return _BUILTIN_CODECS[Codec(codec)]
    if not callable(getattr(codec, "decode", None)):
        raise TypeError(
            f"{type(codec).__name__} is not a codec: missing decode(body, payload_type)",
        )
    return codec


def codec_name(codec: PayloadCodec) -> str:
    return getattr(codec, "name", type(codec).__name__)
