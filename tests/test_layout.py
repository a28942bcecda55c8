"""Tests for softkeys.core.layout — key descriptors, glyph rules, payload loading."""

from __future__ import annotations

import json

import pytest

from softkeys.core.default_layout import DEFAULT_LAYOUT, DEFAULT_PAYLOAD, ICONS
from softkeys.core.layout import (
    KeyDescriptor,
    Layout,
    LayoutError,
    alt_glyph,
    display_glyph,
    key_from_dict,
    load_layout,
)
from softkeys.core.states import KeyRole, LayoutMode


# ------------------------------------------------------------------
# Glyph rules
# ------------------------------------------------------------------

class TestDisplayGlyph:
    def test_lowercase_uses_text(self):
        key = KeyDescriptor(text="a", cap_text="A")
        assert display_glyph(key, False) == "a"

    def test_caps_uses_cap_text(self):
        key = KeyDescriptor(text="a", cap_text="A")
        assert display_glyph(key, True) == "A"

    def test_caps_without_cap_text_falls_back(self):
        key = KeyDescriptor(text="1")
        assert display_glyph(key, True) == "1"

    def test_icon_key_has_no_glyph(self):
        key = KeyDescriptor(icon="enter", role=KeyRole.ENTER)
        assert display_glyph(key, False) is None
        assert display_glyph(key, True) is None

    @pytest.mark.parametrize("mode", list(LayoutMode))
    def test_every_default_key_follows_rule(self, mode):
        for key in DEFAULT_LAYOUT.keys(mode):
            assert display_glyph(key, False) == key.text
            expected = key.cap_text if key.cap_text else key.text
            assert display_glyph(key, True) == expected


class TestAltGlyph:
    def test_no_alt(self):
        assert alt_glyph(KeyDescriptor(text="a"), False) is None

    def test_alt_cap_preferred_when_caps(self):
        key = KeyDescriptor(text="q", alt_text="1", alt_cap_text="!")
        assert alt_glyph(key, False) == "1"
        assert alt_glyph(key, True) == "!"

    def test_caps_without_alt_cap_uses_alt(self):
        key = KeyDescriptor(text="s", cap_text="S", alt_text="ß")
        assert alt_glyph(key, True) == "ß"


class TestKeyDescriptor:
    def test_defaults(self):
        key = KeyDescriptor()
        assert key.role is KeyRole.NONE
        assert key.disabled is False

    def test_frozen(self):
        key = KeyDescriptor(text="a")
        with pytest.raises(AttributeError):
            key.text = "b"  # type: ignore[misc]

    def test_label_prefers_text_then_icon_then_role(self):
        assert KeyDescriptor(text="x", icon="i").label == "x"
        assert KeyDescriptor(icon="enter", role=KeyRole.ENTER).label == "enter"
        assert KeyDescriptor(role=KeyRole.SPACE).label == "space"


# ------------------------------------------------------------------
# Payload parsing
# ------------------------------------------------------------------

class TestKeyFromDict:
    def test_camel_case_fields(self):
        key = key_from_dict({"text": "s", "capText": "S", "altText": "ß", "altCapText": "ẞ"})
        assert key == KeyDescriptor(text="s", cap_text="S", alt_text="ß", alt_cap_text="ẞ")

    def test_snake_case_fields(self):
        key = key_from_dict({"text": "a", "cap_text": "A", "alt_text": "@"})
        assert key.cap_text == "A"
        assert key.alt_text == "@"

    def test_role_and_disabled(self):
        key = key_from_dict({"role": "caps-lock", "icon": "capslock", "disabled": True})
        assert key.role is KeyRole.CAPS_LOCK
        assert key.disabled is True

    def test_is_disabled_alias(self):
        assert key_from_dict({"text": "x", "isDisabled": True}).disabled is True

    def test_null_glyph_ignored(self):
        assert key_from_dict({"text": "x", "capText": None}).cap_text is None

    def test_unknown_role(self):
        with pytest.raises(LayoutError, match="unknown role"):
            key_from_dict({"role": "shift"})

    def test_unknown_field(self):
        with pytest.raises(LayoutError, match="unknown field"):
            key_from_dict({"text": "a", "colour": "red"})

    def test_non_string_glyph(self):
        with pytest.raises(LayoutError, match="text"):
            key_from_dict({"text": 5})

    def test_non_bool_disabled(self):
        with pytest.raises(LayoutError, match="disabled"):
            key_from_dict({"text": "a", "disabled": "yes"})

    def test_not_a_mapping(self):
        with pytest.raises(LayoutError, match="expected an object"):
            key_from_dict(["a"])

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            key_from_dict({"role": "nope"})


class TestLayoutFromDict:
    def test_builds_both_modes(self):
        layout = Layout.from_dict({
            "alphameric": [[{"text": "a"}]],
            "punctuation": [[{"text": "1"}], [{"role": "space"}]],
        })
        assert len(layout.rows(LayoutMode.ALPHAMERIC)) == 1
        assert len(layout(LayoutMode.PUNCTUATION)) == 2
        assert layout.rows(LayoutMode.PUNCTUATION)[1][0].role is KeyRole.SPACE

    def test_missing_mode(self):
        with pytest.raises(LayoutError, match="punctuation"):
            Layout.from_dict({"alphameric": []})

    def test_unknown_mode(self):
        with pytest.raises(LayoutError, match="Unknown layout mode"):
            Layout.from_dict({"alphameric": [], "punctuation": [], "emoji": []})

    def test_row_must_be_list(self):
        with pytest.raises(LayoutError, match=r"alphameric\[0\]"):
            Layout.from_dict({"alphameric": ["abc"], "punctuation": []})

    def test_error_names_key_position(self):
        with pytest.raises(LayoutError, match=r"punctuation\[0\]\[1\]"):
            Layout.from_dict({
                "alphameric": [],
                "punctuation": [[{"text": "1"}, {"role": "bogus"}]],
            })

    def test_rows_are_immutable(self):
        layout = Layout.from_dict({"alphameric": [[{"text": "a"}]], "punctuation": []})
        assert isinstance(layout.rows(LayoutMode.ALPHAMERIC), tuple)
        assert isinstance(layout.rows(LayoutMode.ALPHAMERIC)[0], tuple)

    def test_equality(self):
        assert Layout.from_dict(DEFAULT_PAYLOAD) == DEFAULT_LAYOUT


class TestLoadLayout:
    def test_loads_file_with_comments(self, tmp_path):
        path = tmp_path / "layout.json"
        path.write_text(
            '{\n'
            '  // two tiny layouts\n'
            '  "alphameric": [[{"text": "a", "capText": "A"},]],\n'
            '  "punctuation": [[{"text": "1"}]],\n'
            '}\n',
            encoding="utf-8",
        )
        layout = load_layout(str(path))
        assert layout.rows(LayoutMode.ALPHAMERIC)[0][0].cap_text == "A"

    def test_round_trips_default_payload(self, tmp_path):
        path = tmp_path / "default.json"
        path.write_text(json.dumps(DEFAULT_PAYLOAD), encoding="utf-8")
        assert load_layout(str(path)) == DEFAULT_LAYOUT

    def test_missing_file(self, tmp_path):
        with pytest.raises(LayoutError, match="Cannot read layout"):
            load_layout(str(tmp_path / "nope.json"))

    def test_broken_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")
        with pytest.raises(LayoutError, match="JSON parse error"):
            load_layout(str(path))


# ------------------------------------------------------------------
# Built-in layout
# ------------------------------------------------------------------

class TestDefaultLayout:
    def test_four_rows_per_mode(self):
        for mode in LayoutMode:
            assert len(DEFAULT_LAYOUT.rows(mode)) == 4

    def test_top_row_carries_digits_on_long_press(self):
        top = DEFAULT_LAYOUT.rows(LayoutMode.ALPHAMERIC)[0]
        assert [k.alt_text for k in top[:10]] == list("1234567890")
        assert top[-1].role is KeyRole.BACKSPACE

    def test_each_mode_has_the_function_keys(self):
        for mode in LayoutMode:
            roles = {k.role for k in DEFAULT_LAYOUT.keys(mode)}
            assert {KeyRole.BACKSPACE, KeyRole.ENTER, KeyRole.CAPS_LOCK,
                    KeyRole.MODE_SWITCH, KeyRole.SPACE, KeyRole.DONE} <= roles

    def test_caps_lock_disabled_only_on_punctuation(self):
        caps = {
            mode: next(k for k in DEFAULT_LAYOUT.keys(mode) if k.role is KeyRole.CAPS_LOCK)
            for mode in LayoutMode
        }
        assert caps[LayoutMode.ALPHAMERIC].disabled is False
        assert caps[LayoutMode.PUNCTUATION].disabled is True

    def test_icon_names_resolve(self):
        for mode in LayoutMode:
            for key in DEFAULT_LAYOUT.keys(mode):
                if key.icon:
                    assert key.icon in ICONS
                    assert ICONS[key.icon].startswith("<svg")
