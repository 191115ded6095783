"""Static introspection from a YAML metadata manifest.

The manifest is produced by a pre-pass over the server sources, so classes
can be described without importing them::

    classes:
      UsersController:
        doc: |
          /** Manages users. */
        methods:
          - name: getUser
            doc: |
              /**
               * @api
               * @param int $id
               */
            parameters:
              - name: id
          - name: getUsers
            static: false
            parameters:
              - name: page
                default: 1
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .base import IntrospectionError, Introspector, MethodInfo, ParameterInfo


class ManifestIntrospector(Introspector):
    """Introspects classes described in a YAML manifest."""

    def __init__(self, classes: dict):
        self.classes = classes

    @classmethod
    def from_file(cls, file_path: Path) -> "ManifestIntrospector":
        try:
            data = yaml.safe_load(Path(file_path).read_text(encoding="utf-8"))
        except OSError as e:
            raise IntrospectionError(f"Cannot read manifest {file_path}: {e}") from e
        except yaml.YAMLError as e:
            raise IntrospectionError(f"Invalid manifest {file_path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("classes"), dict):
            raise IntrospectionError(f"Manifest {file_path} has no 'classes' mapping")
        return cls(data["classes"])

    def _class_entry(self, class_name: str) -> dict:
        entry = self.classes.get(class_name)
        if entry is None:
            raise IntrospectionError(f"Class {class_name!r} is not described in the manifest")
        if not isinstance(entry, dict):
            raise IntrospectionError(f"Class {class_name!r} entry must be a mapping, got {entry!r}")
        return entry

    def class_doc(self, class_name: str) -> str | None:
        doc = self._class_entry(class_name).get("doc")
        if doc is not None and not isinstance(doc, str):
            raise IntrospectionError(f"Class {class_name!r} doc must be a string")
        return doc

    def list_public_methods(self, class_name: str) -> list[MethodInfo]:
        entries = self._class_entry(class_name).get("methods") or []
        if not isinstance(entries, list):
            raise IntrospectionError(f"Methods of {class_name!r} must be a list, got {entries!r}")

        methods = []
        for m in entries:
            if not isinstance(m, dict) or "name" not in m:
                raise IntrospectionError(f"Method entry without a name in {class_name!r}: {m!r}")
            parameters = m.get("parameters") or []
            if not isinstance(parameters, list):
                raise IntrospectionError(f"Parameters of {class_name}.{m['name']} must be a list")
            try:
                methods.append(
                    MethodInfo(
                        name=m["name"],
                        doc=m.get("doc"),
                        is_static=m.get("static", False),
                        parameters=[_parse_parameter(p) for p in parameters],
                    )
                )
            except ValidationError as e:
                raise IntrospectionError(f"Invalid method entry in {class_name!r}: {e}") from e
        return methods


def _parse_parameter(param: dict | str) -> ParameterInfo:
    if isinstance(param, str):
        return ParameterInfo(name=param)
    if not isinstance(param, dict) or "name" not in param:
        raise IntrospectionError(f"Parameter entry without a name: {param!r}")
    return ParameterInfo(
        name=param["name"],
        has_default="default" in param,
        default=param.get("default"),
    )
