"""Runtime introspection of Python classes."""

import importlib
import inspect

from .base import IntrospectionError, Introspector, MethodInfo, ParameterInfo

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class PythonIntrospector(Introspector):
    """Introspects classes referenced as ``package.module:Class`` or ``package.module.Class``."""

    def resolve(self, class_name: str) -> type:
        module_name, sep, attr = class_name.partition(":")
        if not sep:
            module_name, _, attr = class_name.rpartition(".")
        if not module_name or not attr:
            raise IntrospectionError(f"Invalid class reference: {class_name!r}")

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise IntrospectionError(f"Cannot import module {module_name!r}: {e}") from e

        cls = module
        for part in attr.split("."):
            cls = getattr(cls, part, None)
            if cls is None:
                raise IntrospectionError(f"Class {class_name!r} does not exist")
        if not inspect.isclass(cls):
            raise IntrospectionError(f"{class_name!r} is not a class")
        return cls

    def class_doc(self, class_name: str) -> str | None:
        cls = self.resolve(class_name)
        # Read the class's own __dict__ so docs are never inherited
        return _clean(cls.__dict__.get("__doc__"))

    def list_public_methods(self, class_name: str) -> list[MethodInfo]:
        cls = self.resolve(class_name)
        methods: list[MethodInfo] = []
        seen: set[str] = set()

        for klass in cls.__mro__:
            if klass is object:
                continue
            for name, attr in klass.__dict__.items():
                if name.startswith("_") or name in seen:
                    continue
                info = _method_info(name, attr)
                if info is not None:
                    seen.add(name)
                    methods.append(info)
        return methods


def _method_info(name: str, attr) -> MethodInfo | None:
    is_static = isinstance(attr, (staticmethod, classmethod))
    func = attr.__func__ if is_static else attr
    if not inspect.isfunction(func):
        return None

    params = list(inspect.signature(func).parameters.values())
    if not isinstance(attr, staticmethod):
        params = params[1:]  # self / cls

    return MethodInfo(
        name=name,
        doc=_clean(func.__doc__),
        is_static=is_static,
        parameters=[
            ParameterInfo(
                name=p.name,
                has_default=p.default is not inspect.Parameter.empty,
                default=None if p.default is inspect.Parameter.empty else p.default,
            )
            for p in params
            if p.kind not in _SKIPPED_KINDS
        ],
    )


def _clean(doc: str | None) -> str | None:
    return inspect.cleandoc(doc) if doc else None
