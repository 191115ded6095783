"""Service renderer: turns a parse tree into an AngularJS remote service."""

import re
from urllib.parse import quote_plus

from autoclient.generator.doc import PAYLOAD_PARAM, PAYLOAD_TAG, QUERY_PARAM, DocCommentRenderer
from autoclient.generator.template import render_template, strip_empty_lines
from autoclient.parser.base import ClassDescriptor, MethodDescriptor
from autoclient.parser.descriptors import split_verb

DEFAULT_MODULE = "App"
CLASS_SUFFIX = "Controller"
SERVICE_SUFFIX = "Remote"
CONSTRUCTOR_SUFFIX = "Service"

SERVICE_TEMPLATE = """\
/*
 * !!! DO NOT MODIFY THIS FILE !!!
 *
 * This script is automatically generated from the ___SOURCE_CLASS___ class.
 * Your changes WILL BE LOST!
 */

(function () {
  angular.module ('___MODULE___').service ('___SERVICE___', ___CLASS___);

  /**
   * ___CLASS_DESCRIPTION___
   * @name ___CLASS___
   * @class
   */
  /**
   * @constructor
   * @param {RemoteService} remote
   */
  function ___CLASS___ (remote) {

___METHODS___
  }

}) ();
"""

METHOD_TEMPLATE = """\
___DOC___
    this.___NAME___ = function (___ARGS___) {
      return ___TYPECAST___remote.___VERB___ ('___URL___'___CALL_ARGS___);
    };
"""


def ucfirst(name: str) -> str:
    return name[:1].upper() + name[1:]


def lcfirst(name: str) -> str:
    return name[:1].lower() + name[1:]


def kebab_case(name: str) -> str:
    """``UserProfile`` and ``_user_profile`` both become ``user-profile``."""
    name = re.sub(r"(.)(?=[A-Z])", r"\1-", name)
    name = re.sub(r"[\s_\-]+", "-", name)
    return name.strip("-").lower()


def short_class_name(class_name: str) -> str:
    """``app.controllers:UsersController`` -> ``UsersController``."""
    return re.split(r"[:.]", class_name)[-1]


def base_name(class_name: str) -> str:
    """Short class name without its ``Controller`` suffix."""
    short = short_class_name(class_name)
    if short.endswith(CLASS_SUFFIX) and short != CLASS_SUFFIX:
        short = short[:-len(CLASS_SUFFIX)]
    return short


def service_name(class_name: str) -> str:
    return base_name(class_name) + SERVICE_SUFFIX


def output_filename(class_name: str) -> str:
    """File name of the generated service, e.g. ``users.js`` for ``UsersController``."""
    return f"{lcfirst(base_name(class_name))}.js"


class ServiceRenderer:
    """Renders client-side service code from a ClassDescriptor."""

    def __init__(
        self,
        doc_renderer: DocCommentRenderer | None = None,
        service_template: str = SERVICE_TEMPLATE,
        method_template: str = METHOD_TEMPLATE,
    ):
        self.doc_renderer = doc_renderer or DocCommentRenderer()
        self.service_template = service_template
        self.method_template = method_template

    def render(
        self,
        class_name: str,
        endpoint_url: str,
        descriptor: ClassDescriptor,
        module: str = DEFAULT_MODULE,
    ) -> str:
        """Render the whole service file for one class."""
        name = service_name(class_name)
        methods = "\n".join(self.render_method(m, endpoint_url) for m in descriptor.methods)
        return render_template(self.service_template, {
            "SOURCE_CLASS": class_name,
            "MODULE": module,
            "SERVICE": lcfirst(name),
            "CLASS": ucfirst(name) + CONSTRUCTOR_SUFFIX,
            "CLASS_DESCRIPTION": "\n   * ".join(descriptor.description.split("\n")),
            "METHODS": methods,
        })

    def render_method(self, method: MethodDescriptor, endpoint_url: str) -> str:
        """Render one client-side method stub, including its doc comment."""
        has_payload = PAYLOAD_TAG in method.tags
        payload = PAYLOAD_PARAM if has_payload else ""
        arg_names = [p.name for p in method.parameters]

        route = "".join(f"/:{name}" for name in arg_names)
        remote_query_args = []
        if method.query_parameters:
            # Query placeholders continue numbering after the route parameters
            pairs = []
            for index, query in enumerate(method.query_parameters, start=len(arg_names)):
                pairs.append(f"{quote_plus(query.name)}=:{index}")
                remote_query_args.append(f"{QUERY_PARAM}.{query.name}")
            route += "?" + "&".join(pairs)

        positional = ", ".join(arg_names + remote_query_args)
        if positional:
            call_args = f", [{positional}]" + (f", {payload}" if payload else "")
        elif payload:
            call_args = f", null, {payload}"
        else:
            call_args = ""

        formal_args = [payload, ", ".join(arg_names), QUERY_PARAM if method.query_parameters else ""]

        _, path_name = split_verb(method.server_side_name)
        url = f"{endpoint_url.rstrip('/')}/{kebab_case(path_name)}{route}"

        doc = self.doc_renderer.render(method, ucfirst(method.client_side_name))
        doc_text = f"{doc.type_block}\n{doc.comment}" if doc.type_block else doc.comment

        rendered = render_template(self.method_template, {
            "DOC": doc_text,
            "NAME": method.client_side_name,
            "ARGS": ", ".join(a for a in formal_args if a),
            "TYPECAST": doc.typecast,
            "VERB": method.http_verb,
            "URL": url,
            "CALL_ARGS": call_args,
        })
        return strip_empty_lines(rendered)
