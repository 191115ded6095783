"""JSDoc comment rendering for generated service methods."""

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

from autoclient.generator.template import render_template
from autoclient.parser.base import MethodDescriptor, ParameterDescriptor, TagMap
from autoclient.parser.descriptors import split_tag_fields
from autoclient.parser.docblock import tag_values

TRANSLATE_TYPES: Mapping[str, str] = MappingProxyType({
    "int": "number",
    "integer": "number",
    "double": "number",
    "float": "number",
    "bool": "boolean",
})

PAYLOAD_TAG = "payload"
INPUT_TAG = "in"
OUTPUT_TAG = "out"
RETURN_TAG = "returns"

PAYLOAD_PARAM = "payload"
PAYLOAD_DESCRIPTION = "The data payload to be sent with the request"
QUERY_PARAM = "queryParams"
QUERY_PARAM_DESCRIPTION = "URL query string parameters"
GENERIC_PROMISE = "GenericPromise"

COMMENT_OPEN = "    /**"
COMMENT_LINE = "     * "
COMMENT_CLOSE = "     */"

TYPE_BLOCK_TEMPLATE = """\
    /**
     * @typedef {Object} ___UCNAME___Type
___OUT_TYPE___
     */
    /**
     * @class
     * @name ___UCNAME___Promise
     * @extends {GenericPromise}
     */
    /**
     * @name ___UCNAME___Promise~then
     * @method
     * @param {function(value:___UCNAME___Type___ARRAY___):*} onFulfilled
     * @param {function(reason:*):*} [onRejected]
     * @returns ___UCNAME___Promise
     */"""

PROPERTY_TEMPLATE = "     * @property {___TYPE___} ___NAME___ ___DESCRIPTION___"


class RenderedDoc(NamedTuple):
    comment: str
    typecast: str  # inline type assertion for the call site, "" when untyped
    type_block: str | None  # typedef + promise declarations for @out fields


class DocCommentRenderer:
    """Renders the doc comment of one generated method."""

    def __init__(
        self,
        translate_types: Mapping[str, str] = TRANSLATE_TYPES,
        type_block_template: str = TYPE_BLOCK_TEMPLATE,
        property_template: str = PROPERTY_TEMPLATE,
    ):
        self.translate_types = MappingProxyType(dict(translate_types))
        self.type_block_template = type_block_template
        self.property_template = property_template

    def translate(self, type_name: str | None) -> str:
        type_name = type_name or ""
        return self.translate_types.get(type_name, type_name)

    def render(self, method: MethodDescriptor, uc_name: str) -> RenderedDoc:
        tags = method.tags
        lines: list[str] = []

        description = "\n\n".join(d for d in tag_values(tags, "description") if d)
        if description:
            lines.extend([description, ""])

        params = list(method.parameters)
        if PAYLOAD_TAG in tags:
            params.insert(0, ParameterDescriptor(
                name=PAYLOAD_PARAM,
                type=self.payload_type(tags),
                description=PAYLOAD_DESCRIPTION,
            ))
        for param in params:
            lines.append(f"@param {{{self.translate(param.type)}}} {_param_label(param)} {param.description}")

        fields = tag_values(tags, INPUT_TAG)
        if fields:
            lines.append("")
            for field in fields:
                type_, name, desc = split_tag_fields(field)
                lines.append(f"@param {{{self.translate(type_)}}} {PAYLOAD_PARAM}.{name} {desc}")

        if method.query_parameters:
            lines.append(f"@param {{object}} {QUERY_PARAM} {QUERY_PARAM_DESCRIPTION}")
            for query in method.query_parameters:
                lines.append(
                    f"@param {{{self.translate(query.type)}}} {QUERY_PARAM}.{query.name} {query.description}"
                )

        returns = tag_values(tags, RETURN_TAG)
        parts = re.split(r"\s+", returns[0], maxsplit=1) if returns else []
        declared_type, return_desc = (parts + ["", ""])[:2]
        properties = self.render_properties(tags)

        if properties:
            return_type = f"{uc_name}Promise"
            typecast = f"/**@type {{{return_type}}}*/ "
            type_block = render_template(self.type_block_template, {
                "UCNAME": uc_name,
                "OUT_TYPE": "\n".join(properties),
                "ARRAY": "[]" if declared_type.endswith("[]") else "",
            })
        else:
            return_type = GENERIC_PROMISE
            typecast = ""
            type_block = None
        lines.append(f"@returns {{{return_type}}} {return_desc}")

        return RenderedDoc(render_comment(lines), typecast, type_block)

    def payload_type(self, tags: TagMap) -> str:
        """Client-side type of the payload declared by the @payload tag."""
        values = tag_values(tags, PAYLOAD_TAG)
        declared = values[0] if values else ""
        payload_type = (declared[:1].upper() + declared[1:]) or "Object"
        if payload_type == "Array":
            return "Object"
        if payload_type == "Array[]":
            return "Object[]"
        return payload_type

    def render_properties(self, tags: TagMap) -> list[str]:
        """One @property line per @out field; nameless fields are dropped."""
        properties = []
        for field in tag_values(tags, OUTPUT_TAG):
            type_, name, desc = split_tag_fields(field)
            if not name:
                continue
            line = render_template(self.property_template, {
                "TYPE": self.translate(type_),
                "NAME": name,
                "DESCRIPTION": " ".join(desc.split()),
            })
            properties.append(line.rstrip())
        return properties


def render_comment(lines: list[str]) -> str:
    """Wrap lines into an indented ``/** ... */`` block."""
    body = [
        (COMMENT_LINE + part).rstrip()
        for line in lines
        for part in line.split("\n")
    ]
    return "\n".join([COMMENT_OPEN, *body, COMMENT_CLOSE])


def _param_label(param: ParameterDescriptor) -> str:
    if param.required:
        return param.name
    if param.default is not None:
        return f"[{param.name}={param.default}]"
    return f"[{param.name}]"
