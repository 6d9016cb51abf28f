# Qlik Cloud Provider
# File: schema.py
# Version: v1

"""Attribute schemas for resources, data sources and the provider itself.

A schema declares which attributes a model may carry and how the host must
treat them (required, optional, computed, sensitive). Models are plain dicts
keyed by attribute name; nested objects are dicts and nested lists are lists
of dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .diagnostics import Diagnostics

STRING = "string"
BOOL = "bool"
OBJECT = "object"
LIST = "list"

_PYTHON_TYPES = {
    STRING: str,
    BOOL: bool,
    OBJECT: dict,
    LIST: list,
}

REDACTED = "(sensitive value)"


@dataclass(frozen=True)
class Attribute:
    """Declaration of one attribute.

    OBJECT and LIST attributes carry their element attributes in
    ``attributes``; a LIST is a list of such objects.
    """

    name: str
    kind: str = STRING
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    default: Any = None
    description: str = ""
    attributes: tuple = ()

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": self.kind,
            "required": self.required,
            "optional": self.optional,
            "computed": self.computed,
            "sensitive": self.sensitive,
        }
        if self.default is not None:
            out["default"] = self.default
        if self.description:
            out["description"] = self.description
        if self.attributes:
            out["attributes"] = {a.name: a.to_dict() for a in self.attributes}
        return out


@dataclass(frozen=True)
class Schema:
    attributes: tuple = field(default_factory=tuple)
    description: str = ""

    def __getitem__(self, name: str) -> Attribute:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        raise KeyError(name)

    @property
    def names(self) -> List[str]:
        return [a.name for a in self.attributes]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "attributes": {a.name: a.to_dict() for a in self.attributes},
        }

    def validate(self, model: Dict[str, Any]) -> Diagnostics:
        diags = Diagnostics()
        _validate_block(self.attributes, model, "", diags)
        return diags

    def apply_defaults(self, model: Dict[str, Any]) -> Dict[str, Any]:
        """Fill unset attributes that declare a default. Mutates ``model``."""
        for attr in self.attributes:
            if model.get(attr.name) is None and attr.default is not None:
                model[attr.name] = attr.default
        return model

    def redact(self, model: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Copy of ``model`` with sensitive values masked for display."""
        if model is None:
            return None
        return _redact_block(self.attributes, model)


def _validate_block(
    attributes: tuple,
    model: Any,
    prefix: str,
    diags: Diagnostics,
) -> None:
    if not isinstance(model, dict):
        diags.add_attribute_error(
            prefix or "<root>",
            "Incorrect attribute value type",
            f"Expected an object, got {type(model).__name__}.",
        )
        return

    known = {a.name for a in attributes}
    for key in model:
        if key not in known:
            diags.add_attribute_error(
                f"{prefix}{key}",
                "Unsupported argument",
                f'An argument named "{key}" is not expected here.',
            )

    for attr in attributes:
        path = f"{prefix}{attr.name}"
        value = model.get(attr.name)

        if value is None or value == "":
            if attr.required:
                diags.add_attribute_error(
                    path,
                    "Missing required argument",
                    f'The argument "{path}" is required, but no definition was found.',
                )
            continue

        expected = _PYTHON_TYPES[attr.kind]
        if not isinstance(value, expected):
            diags.add_attribute_error(
                path,
                "Incorrect attribute value type",
                f'Attribute "{path}" must be of type {attr.kind}, got {type(value).__name__}.',
            )
            continue

        # Tool results mask sensitive values; the mask is never a real value.
        if attr.sensitive and value == REDACTED:
            diags.add_attribute_error(
                path,
                "Masked sensitive value",
                f'Attribute "{path}" holds the placeholder {REDACTED!r}. '
                "Supply the real value.",
            )
            continue

        if attr.kind == OBJECT:
            _validate_block(attr.attributes, value, f"{path}.", diags)
        elif attr.kind == LIST:
            for index, item in enumerate(value):
                _validate_block(attr.attributes, item, f"{path}[{index}].", diags)


def _redact_block(attributes: tuple, model: Dict[str, Any]) -> Dict[str, Any]:
    by_name = {a.name: a for a in attributes}
    out: Dict[str, Any] = {}
    for key, value in model.items():
        attr = by_name.get(key)
        if attr is None or value is None:
            out[key] = value
        elif attr.sensitive:
            out[key] = REDACTED
        elif attr.kind == OBJECT and isinstance(value, dict):
            out[key] = _redact_block(attr.attributes, value)
        elif attr.kind == LIST and isinstance(value, list):
            out[key] = [
                _redact_block(attr.attributes, item) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            out[key] = value
    return out
