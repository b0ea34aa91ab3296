"""Tests for role file codecs."""

import textwrap
from pathlib import Path

import pytest

from rolekeeper.errors import StoreCorruptError
from rolekeeper.store.codecs import (
    JsonRoleCodec,
    XmlRoleCodec,
    YamlRoleCodec,
    codec_for_path,
)
from rolekeeper.store.models import Role

LEGACY_XML = textwrap.dedent("""\
    <?xml version="1.0" encoding="utf-8"?>
    <ArrayOfXmlRole xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" \
xmlns:xsd="http://www.w3.org/2001/XMLSchema">
      <XmlRole>
        <Name>Administrators</Name>
        <Users>
          <string>alice</string>
          <string>bob</string>
        </Users>
      </XmlRole>
      <XmlRole>
        <Name>Guests</Name>
        <Users />
      </XmlRole>
    </ArrayOfXmlRole>
""")

CANONICAL_XML = textwrap.dedent("""\
    <?xml version="1.0" encoding="utf-8"?>
    <ArrayOfXmlRole>
      <XmlRole>
        <Name>Administrators</Name>
        <Users>
          <string>alice</string>
          <string>bob</string>
        </Users>
      </XmlRole>
      <XmlRole>
        <Name>Guests</Name>
        <Users />
      </XmlRole>
    </ArrayOfXmlRole>
""")

ROLES = [
    Role(name="Administrators", users=["alice", "bob"]),
    Role(name="Guests", users=[]),
]


class TestXmlRoleCodec:
    def test_decodes_legacy_file_with_namespaces(self):
        assert XmlRoleCodec().decode(LEGACY_XML) == ROLES

    def test_encodes_canonical_layout(self):
        assert XmlRoleCodec().encode(ROLES) == CANONICAL_XML

    def test_canonical_text_is_stable(self):
        codec = XmlRoleCodec()
        assert codec.encode(codec.decode(CANONICAL_XML)) == CANONICAL_XML

    def test_missing_users_means_empty(self):
        text = "<ArrayOfXmlRole><XmlRole><Name>r</Name></XmlRole></ArrayOfXmlRole>"
        assert XmlRoleCodec().decode(text) == [Role(name="r", users=[])]

    def test_escapes_markup_in_names(self):
        codec = XmlRoleCodec()
        roles = [Role(name="R&D <core>", users=["o'neil"])]
        assert codec.decode(codec.encode(roles)) == roles

    def test_malformed_xml(self):
        with pytest.raises(StoreCorruptError, match="Invalid XML"):
            XmlRoleCodec().decode("<ArrayOfXmlRole><XmlRole>")

    def test_wrong_root(self):
        with pytest.raises(StoreCorruptError, match="root element"):
            XmlRoleCodec().decode("<Roles />")

    def test_role_without_name(self):
        with pytest.raises(StoreCorruptError, match="has no <Name>"):
            XmlRoleCodec().decode("<ArrayOfXmlRole><XmlRole><Users /></XmlRole></ArrayOfXmlRole>")


class TestYamlRoleCodec:
    def test_decode(self):
        text = textwrap.dedent("""\
            roles:
              - name: Administrators
                users: [alice, bob]
              - name: Guests
        """)
        assert YamlRoleCodec().decode(text) == ROLES

    def test_encode_keeps_order(self):
        codec = YamlRoleCodec()
        text = codec.encode(ROLES)
        assert text.index("Administrators") < text.index("Guests")
        assert codec.decode(text) == ROLES

    def test_not_a_mapping(self):
        with pytest.raises(StoreCorruptError, match="Expected a mapping"):
            YamlRoleCodec().decode("- just\n- a list\n")

    def test_invalid_yaml(self):
        with pytest.raises(StoreCorruptError, match="Invalid YAML"):
            YamlRoleCodec().decode("roles: [unclosed\n")

    def test_validation_error(self):
        with pytest.raises(StoreCorruptError, match="Validation failed"):
            YamlRoleCodec().decode("roles:\n  - users: [alice]\n")


class TestJsonRoleCodec:
    def test_roundtrip(self):
        codec = JsonRoleCodec()
        assert codec.decode(codec.encode(ROLES)) == ROLES

    def test_invalid_json(self):
        with pytest.raises(StoreCorruptError, match="Invalid JSON"):
            JsonRoleCodec().decode("{roles: ")


class TestCodecForPath:
    @pytest.mark.parametrize(
        ("name", "codec_cls"),
        [
            ("Roles.xml", XmlRoleCodec),
            ("roles.YAML", YamlRoleCodec),
            ("roles.yml", YamlRoleCodec),
            ("roles.json", JsonRoleCodec),
            ("roles.dat", XmlRoleCodec),
            ("roles", XmlRoleCodec),
        ],
    )
    def test_suffix(self, name, codec_cls):
        assert isinstance(codec_for_path(Path(name)), codec_cls)
