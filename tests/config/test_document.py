import pytest

from gemini_cli.config.document import (
    ConfigDocument,
    SettingScope,
    get_dotted,
    has_dotted,
    iter_leaves,
    set_dotted,
)


def test_scope_order_is_ascending_precedence():
    assert sorted(SettingScope) == [
        SettingScope.SCHEMA_DEFAULTS,
        SettingScope.SYSTEM_DEFAULTS,
        SettingScope.USER,
        SettingScope.WORKSPACE,
        SettingScope.SYSTEM_OVERRIDES,
    ]


@pytest.mark.parametrize("label,expected", [
    ("user", SettingScope.USER),
    ("Workspace", SettingScope.WORKSPACE),
    ("system-overrides", SettingScope.SYSTEM_OVERRIDES),
])
def test_scope_from_label(label, expected):
    assert SettingScope.from_label(label) == expected
    assert SettingScope.from_label(expected.label) == expected


def test_scope_from_label_unknown():
    with pytest.raises(ValueError, match="Unknown settings scope"):
        SettingScope.from_label("global")


def test_get_dotted_and_has_dotted():
    data = {"security": {"auth": {"selectedType": None}}}

    assert get_dotted(data, "security.auth.selectedType", "x") is None
    assert has_dotted(data, "security.auth.selectedType")
    assert not has_dotted(data, "security.auth.enforcedType")
    assert get_dotted(data, "security.auth.selectedType.deeper", "dflt") == "dflt"


def test_set_dotted_replaces_non_mapping_parents():
    data = {"tools": {"sandbox": False}}

    set_dotted(data, "tools.sandbox.image", "img")

    assert data == {"tools": {"sandbox": {"image": "img"}}}


def test_set_dotted_rejects_empty_key():
    with pytest.raises(ValueError):
        set_dotted({}, "", 1)


def test_iter_leaves_yields_dotted_keys():
    leaves = dict(iter_leaves({"a": {"b": 1, "c": {}}, "d": [1]}))

    assert leaves == {"a.b": 1, "a.c": {}, "d": [1]}


def test_config_document_equality_includes_scope():
    a = ConfigDocument({"x": 1}, scope=SettingScope.USER)
    b = ConfigDocument({"x": 1}, scope=SettingScope.USER)
    c = ConfigDocument({"x": 1}, scope=SettingScope.WORKSPACE)

    assert a == b
    assert a != c
    assert "x" in a
