"""Built-in layout payload and icon sources.

German QWERTZ letters on the alphameric layout (digits on long press of the
top row), symbols on the punctuation layout (brackets on long press of 7-0).
"""

from __future__ import annotations

from softkeys.core.layout import Layout

ICONS: dict[str, str] = {
    "backspace": (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 576 512">'
        '<path d="M544 128c0-17.7-14.3-32-32-32H205.3c-8.5 0-16.6 3.4-22.6 9.4L32 256 182.6 406.6c6 6 '
        '14.1 9.4 22.6 9.4H512c17.7 0 32-14.3 32-32V128zM512 64c35.3 0 64 28.7 64 64V384c0 35.3-28.7 '
        '64-64 64H205.3c-17 0-33.3-6.7-45.3-18.7L9.4 278.6c-6-6-9.4-14.1-9.4-22.6s3.4-16.6 9.4-22.6L160 '
        '82.7c12-12 28.3-18.7 45.3-18.7H512zM427.3 180.7c6.2 6.2 6.2 16.4 0 22.6L374.6 256l52.7 52.7c6.2 '
        '6.2 6.2 16.4 0 22.6s-16.4 6.2-22.6 0L352 278.6l-52.7 52.7c-6.2 6.2-16.4 6.2-22.6 0s-6.2-16.4 '
        '0-22.6L329.4 256l-52.7-52.7c-6.2-6.2-6.2-16.4 0-22.6s16.4-6.2 22.6 0L352 233.4l52.7-52.7c6.2-6.2 '
        '16.4-6.2 22.6 0z"/></svg>'
    ),
    "capslock": (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 384 512">'
        '<path d="M169.4 41.4c12.5-12.5 32.8-12.5 45.3 0l160 160c9.2 9.2 11.9 22.9 6.9 34.9s-16.6 '
        '19.8-29.6 19.8H256V440c0 22.1-17.9 40-40 40H168c-22.1 0-40-17.9-40-40V256H32c-12.9 '
        '0-24.6-7.8-29.6-19.8s-2.2-25.7 6.9-34.9l160-160z"/></svg>'
    ),
    "enter": (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 512 512">'
        '<path d="M480 48c0-8.8 7.2-16 16-16s16 7.2 16 16V224c0 44.2-35.8 80-80 80H54.6L155.3 '
        '404.7c6.2 6.2 6.2 16.4 0 22.6s-16.4 6.2-22.6 0l-128-128c-6.2-6.2-6.2-16.4 0-22.6l128-128c6.2-6.2 '
        '16.4-6.2 22.6 0s6.2 16.4 0 22.6L54.6 272H432c26.5 0 48-21.5 48-48V48z"/></svg>'
    ),
    "done": (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 512 512">'
        '<path d="M267.3 395.3c-6.2 6.2-16.4 6.2-22.6 0l-192-192c-6.2-6.2-6.2-16.4 0-22.6s16.4-6.2 '
        '22.6 0L256 361.4 436.7 180.7c6.2-6.2 16.4-6.2 22.6 0s6.2 16.4 0 22.6l-192 192z"/></svg>'
    ),
}


def _letter(lower: str, upper: str, alt: str | None = None, alt_cap: str | None = None) -> dict:
    key = {"text": lower, "capText": upper}
    if alt is not None:
        key["altText"] = alt
    if alt_cap is not None:
        key["altCapText"] = alt_cap
    return key


def _same(ch: str, alt: str | None = None) -> dict:
    """Key whose shifted glyph equals its primary one."""
    return _letter(ch, ch, alt, alt)


DEFAULT_PAYLOAD: dict = {
    "alphameric": [
        [
            *(_letter(c, c.upper(), d, d) for c, d in zip("qwertzuiop", "1234567890")),
            _letter("ü", "Ü"),
            {"role": "backspace", "icon": "backspace"},
        ], [
            _letter("a", "A"),
            _letter("s", "S", "ß"),
            *(_letter(c, c.upper()) for c in "dfghjklöä"),
            {"role": "enter", "icon": "enter"},
        ], [
            {"role": "caps-lock", "icon": "capslock"},
            *(_letter(c, c.upper()) for c in "yxcvbnm"),
            _letter(",", ";"),
            _letter(".", ":"),
            _letter("-", "_"),
            _letter("?", "ß"),
            _letter("!", "§"),
        ], [
            {"text": "1#?", "capText": "1#?", "role": "mode-switch"},
            {"role": "space"},
            {"role": "done", "icon": "done"},
        ],
    ],
    "punctuation": [
        [
            *(_same(c) for c in "123456"),
            _same("7", "{"),
            _same("8", "["),
            _same("9", "]"),
            _same("0", "}"),
            _same("^"),
            {"role": "backspace", "icon": "backspace"},
        ], [
            *(_same(c) for c in '.,:;!?"§$%&'),
            {"role": "enter", "icon": "enter"},
        ], [
            {"role": "caps-lock", "icon": "capslock", "disabled": True},
            *(_same(c) for c in "/()=\\+*#.@€°"),
        ], [
            {"text": "abc", "capText": "ABC", "role": "mode-switch"},
            {"role": "space"},
            {"role": "done", "icon": "done"},
        ],
    ],
}

DEFAULT_LAYOUT: Layout = Layout.from_dict(DEFAULT_PAYLOAD)
