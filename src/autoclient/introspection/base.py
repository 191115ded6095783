"""Introspection interface used by the descriptor builders.

An introspector lists the public methods of a class together with their
raw documentation blocks and declared parameters.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class IntrospectionError(Exception):
    """Raised when a class cannot be resolved or inspected."""


class ParameterInfo(BaseModel):
    """A declared method parameter."""

    name: str
    has_default: bool = False
    default: Any = None


class MethodInfo(BaseModel):
    """A public method as reported by an introspector."""

    name: str
    doc: str | None = None
    is_static: bool = False
    parameters: list[ParameterInfo] = []


class Introspector(ABC):
    """Source of class metadata for the descriptor builders."""

    @abstractmethod
    def list_public_methods(self, class_name: str) -> list[MethodInfo]:
        """Return the public methods of a class in declaration order."""

    @abstractmethod
    def class_doc(self, class_name: str) -> str | None:
        """Return the raw documentation block of a class, if any."""
