"""Descriptor models for parsed API classes.

The descriptor builders convert documentation tags and introspection data
into these models for downstream rendering.
"""

from pydantic import BaseModel, ConfigDict

# tag name -> body, or list of bodies when the tag repeats
TagMap = dict[str, str | list[str]]


class ParameterDescriptor(BaseModel):
    """A route parameter, one per declared method argument."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str | None = ""
    required: bool = True
    default: str | None = None  # source-literal text, only when not required
    description: str = ""


class QueryParameterDescriptor(BaseModel):
    """A query string parameter declared with @query."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = ""
    description: str = ""


class MethodDescriptor(BaseModel):
    """An exposable API method with all its metadata."""

    model_config = ConfigDict(frozen=True)

    server_side_name: str
    client_side_name: str
    http_verb: str  # get / post / put / delete
    parameters: list[ParameterDescriptor] = []
    query_parameters: list[QueryParameterDescriptor] = []
    tags: TagMap = {}


class ClassDescriptor(BaseModel):
    """The parse tree of one API class."""

    model_config = ConfigDict(frozen=True)

    description: str
    methods: list[MethodDescriptor] = []
