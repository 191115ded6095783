"""Descriptor builders.

Combine documentation tags with introspection data into the parse tree
consumed by the service renderer.
"""

import re
from enum import Enum
from typing import Any

from autoclient.introspection.base import Introspector, MethodInfo, ParameterInfo

from .base import ClassDescriptor, MethodDescriptor, ParameterDescriptor, QueryParameterDescriptor, TagMap
from .docblock import get_tag, parse_block, tag_values

DEFAULT_SERVICE_DESCRIPTION = "A service that provides access to a remote API via HTTP."

HTTP_VERBS = ("get", "post", "put", "delete")
DEFAULT_VERB = "get"

EXPOSE_TAG = "api"
ALIAS_TAG = "alias"
PARAM_TAG = "param"
QUERY_TAG = "query"

PARAM_SIGIL = "$"

_LEADING_WORD_RE = re.compile(r"^[a-z]+")


def split_tag_fields(body: str) -> tuple[str, str, str]:
    """Split a ``type name [description]`` tag body on its first two whitespace runs."""
    parts = re.split(r"\s+", body.strip(), maxsplit=2) + ["", "", ""]
    return parts[0], parts[1], parts[2]


def split_verb(method_name: str) -> tuple[str | None, str]:
    """Split a method name into (HTTP verb, remainder).

    The verb is the leading lowercase word of the name, when it is one of
    ``HTTP_VERBS``; otherwise it is None and the name is returned whole.
    """
    match = _LEADING_WORD_RE.match(method_name)
    if match and match.group(0) in HTTP_VERBS:
        return match.group(0), method_name[match.end():]
    return None, method_name


def http_verb(method_name: str) -> str:
    verb, _ = split_verb(method_name)
    return verb or DEFAULT_VERB


def render_default(value: Any) -> str:
    """Render a default value as source-literal text.

    Collections always render as an empty array: only empty array defaults
    are supported. Enum members render as their value, and any other object
    without a literal form renders as ``null``.
    """
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return render_default(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return "[]"
    if isinstance(value, str):
        escaped = (
            value.replace("\\", "\\\\")
            .replace("'", "\\'")
            .replace("\n", "\\n")
            .replace("\r", "\\r")
        )
        return f"'{escaped}'"
    if isinstance(value, (int, float)):
        return repr(value)
    return "null"


def build_parameter_descriptors(params: list[ParameterInfo], tags: TagMap) -> list[ParameterDescriptor]:
    """Merge @param tags with the introspected parameters, keeping declaration order."""
    types: dict[str, str] = {}
    descriptions: dict[str, str] = {}
    for body in tag_values(tags, PARAM_TAG):
        type_, name, desc = split_tag_fields(body)
        if name.startswith(PARAM_SIGIL):
            name = name[len(PARAM_SIGIL):]
        types[name] = type_
        descriptions[name] = desc

    return [
        ParameterDescriptor(
            name=p.name,
            type=types.get(p.name, ""),
            required=not p.has_default,
            default=render_default(p.default) if p.has_default else None,
            description=descriptions.get(p.name, ""),
        )
        for p in params
    ]


def build_query_parameter_descriptors(tags: TagMap) -> list[QueryParameterDescriptor]:
    """One descriptor per @query tag, in source order."""
    result = []
    for body in tag_values(tags, QUERY_TAG):
        type_, name, desc = split_tag_fields(body)
        result.append(QueryParameterDescriptor(name=name, type=type_, description=desc))
    return result


def build_method_descriptor(method: MethodInfo, tags: TagMap) -> MethodDescriptor:
    aliases = tag_values(tags, ALIAS_TAG)
    alias = aliases[0] if aliases else ""

    return MethodDescriptor(
        server_side_name=method.name,
        client_side_name=alias or method.name,
        http_verb=http_verb(method.name),
        parameters=build_parameter_descriptors(method.parameters, tags),
        query_parameters=build_query_parameter_descriptors(tags),
        tags=tags,
    )


def build_class_descriptor(class_name: str, introspector: Introspector) -> ClassDescriptor:
    """Scan a class for exposable API methods and build its parse tree.

    Only non-static methods marked with ``@api`` are kept, in the order the
    introspector reports them.
    """
    if not class_name:
        raise ValueError("A class name is required")

    methods = [
        m
        for m in introspector.list_public_methods(class_name)
        if not m.is_static and get_tag(EXPOSE_TAG, m.doc) is not None
    ]
    class_tags = parse_block(introspector.class_doc(class_name))
    description = "\n\n".join(d for d in tag_values(class_tags, "description") if d)

    return ClassDescriptor(
        description=description or DEFAULT_SERVICE_DESCRIPTION,
        methods=[build_method_descriptor(m, parse_block(m.doc)) for m in methods],
    )
