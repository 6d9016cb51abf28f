# Qlik Cloud Provider
# File: diagnostics.py
# Version: v1

"""Accumulating error/warning reports returned by every lifecycle operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


@dataclass
class Diagnostic:
    """A single summary/detail pair, optionally tied to an attribute path."""

    severity: str
    summary: str
    detail: str = ""
    attribute: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "severity": self.severity,
            "summary": self.summary,
            "detail": self.detail,
        }
        if self.attribute is not None:
            out["attribute"] = self.attribute
        return out


@dataclass
class Diagnostics:
    """Ordered collection of diagnostics.

    Operations keep appending and only check ``has_error()`` at the points
    where they must stop, so several problems can be reported at once.
    """

    items: List[Diagnostic] = field(default_factory=list)

    def add_error(self, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(SEVERITY_ERROR, summary, detail))

    def add_attribute_error(self, attribute: str, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(SEVERITY_ERROR, summary, detail, attribute))

    def add_warning(self, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(SEVERITY_WARNING, summary, detail))

    def extend(self, other: Iterable[Diagnostic]) -> None:
        self.items.extend(other)

    def has_error(self) -> bool:
        return any(d.severity == SEVERITY_ERROR for d in self.items)

    def errors(self) -> List[Diagnostic]:
        return [d for d in self.items if d.severity == SEVERITY_ERROR]

    def to_list(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self.items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class LifecycleResponse:
    """State container handed back to the host after an operation.

    ``state`` is None when the operation failed or the entity was removed.
    """

    state: Optional[Dict[str, Any]]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def ok(self) -> bool:
        return not self.diagnostics.has_error()
