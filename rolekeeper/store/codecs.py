"""Structured-file formats for role data.

The XML layout is the one written by the legacy role provider's serializer,
so existing ``Roles.xml`` files load unchanged. YAML and JSON share the
``roles: [{name, users}]`` shape and are validated through pydantic.
"""

from __future__ import annotations

import abc
import json
import xml.etree.ElementTree as ET
from pathlib import Path

import yaml
from pydantic import ValidationError

from rolekeeper.errors import StoreCorruptError
from rolekeeper.store.models import Role, RoleDocument

_XML_ROOT = "ArrayOfXmlRole"
_XML_ROLE = "XmlRole"
_XML_NAME = "Name"
_XML_USERS = "Users"
_XML_USER = "string"


class RoleCodec(abc.ABC):
    """Encode a role list to text and back."""

    suffixes: tuple[str, ...] = ()

    @abc.abstractmethod
    def encode(self, roles: list[Role]) -> str: ...

    @abc.abstractmethod
    def decode(self, text: str) -> list[Role]: ...


def _local(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


class XmlRoleCodec(RoleCodec):
    suffixes = (".xml",)

    def encode(self, roles: list[Role]) -> str:
        root = ET.Element(_XML_ROOT)
        for role in roles:
            node = ET.SubElement(root, _XML_ROLE)
            ET.SubElement(node, _XML_NAME).text = role.name
            users = ET.SubElement(node, _XML_USERS)
            for user in role.users:
                ET.SubElement(users, _XML_USER).text = user
        ET.indent(root, space="  ")
        body = ET.tostring(root, encoding="unicode", short_empty_elements=True)
        return f'<?xml version="1.0" encoding="utf-8"?>\n{body}\n'

    def decode(self, text: str) -> list[Role]:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise StoreCorruptError(f"Invalid XML: {e}") from e

        if _local(root.tag) != _XML_ROOT:
            raise StoreCorruptError(
                f"Expected <{_XML_ROOT}> root element, got <{_local(root.tag)}>"
            )

        roles: list[Role] = []
        for node in root:
            if _local(node.tag) != _XML_ROLE:
                continue
            name: str | None = None
            users: list[str] = []
            for child in node:
                tag = _local(child.tag)
                if tag == _XML_NAME:
                    name = child.text or ""
                elif tag == _XML_USERS:
                    users = [u.text or "" for u in child if _local(u.tag) == _XML_USER]
            if name is None:
                raise StoreCorruptError(f"<{_XML_ROLE}> #{len(roles) + 1} has no <{_XML_NAME}>")
            roles.append(Role(name=name, users=users))
        return roles


class YamlRoleCodec(RoleCodec):
    suffixes = (".yaml", ".yml")

    def encode(self, roles: list[Role]) -> str:
        data = RoleDocument(roles=roles).model_dump()
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    def decode(self, text: str) -> list[Role]:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise StoreCorruptError(f"Invalid YAML: {e}") from e
        return _validate_document(data)


class JsonRoleCodec(RoleCodec):
    suffixes = (".json",)

    def encode(self, roles: list[Role]) -> str:
        return RoleDocument(roles=roles).model_dump_json(indent=2) + "\n"

    def decode(self, text: str) -> list[Role]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreCorruptError(f"Invalid JSON: {e}") from e
        return _validate_document(data)


def _validate_document(data: object) -> list[Role]:
    if not isinstance(data, dict):
        raise StoreCorruptError(f"Expected a mapping with 'roles', got {type(data).__name__}")
    try:
        return RoleDocument.model_validate(data).roles
    except ValidationError as e:
        raise StoreCorruptError(f"Validation failed:\n{e}") from e


_CODECS: tuple[type[RoleCodec], ...] = (XmlRoleCodec, YamlRoleCodec, JsonRoleCodec)


def codec_for_path(path: Path) -> RoleCodec:
    """Pick a codec from the file suffix; unknown suffixes use the XML layout."""
    suffix = path.suffix.lower()
    for codec_cls in _CODECS:
        if suffix in codec_cls.suffixes:
            return codec_cls()
    return XmlRoleCodec()
