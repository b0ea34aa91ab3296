"""Role persistence: models, file codecs, and the file-backed store."""

from rolekeeper.store.codecs import (
    JsonRoleCodec,
    RoleCodec,
    XmlRoleCodec,
    YamlRoleCodec,
    codec_for_path,
)
from rolekeeper.store.models import Role, RoleDocument
from rolekeeper.store.store import RoleStore

__all__ = [
    "JsonRoleCodec",
    "Role",
    "RoleCodec",
    "RoleDocument",
    "RoleStore",
    "XmlRoleCodec",
    "YamlRoleCodec",
    "codec_for_path",
]
