"""Starter source, markup and stylesheet text used by the project templates."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

_INDENT = "    "


def _indent(text: str, prefix: str = _INDENT) -> str:
    return "\n".join(prefix + line if line else "" for line in text.split("\n"))


def _block(header: str, statements: Sequence[str]) -> str:
    body = "\n".join(_indent(statement) for statement in statements)
    return f"{header} {{\n{body}\n}}"


def _say(message: str) -> str:
    return f'v::vshell::line("{message}");'


def _function(header: str, *statements: str) -> str:
    return _block(header, statements) + "\n"


def _wire_events(message: str) -> str:
    return _function("pub fn wire_main_window()", _say(message))


def _open(tag: str, **attrs: str) -> str:
    parts = [tag]
    parts.extend(
        f'{key.rstrip("_").replace("_", "-")}="{value}"' for key, value in attrs.items()
    )
    return f"<{' '.join(parts)}>"


def _leaf(tag: str, text: str = "", **attrs: str) -> str:
    return f"{_open(tag, **attrs)}{text}</{tag}>"


def _nest(tag: str, children: Iterable[str], **attrs: str) -> str:
    lines = [_open(tag, **attrs)]
    lines.extend(_indent(child, "  ") for child in children)
    lines.append(f"</{tag}>")
    return "\n".join(lines)


def _page(*content: str) -> str:
    head = _nest(
        "head",
        [
            _open("meta", charset="utf-8"),
            _open("meta", name="viewport", content="width=device-width, initial-scale=1"),
            _leaf("title", "{{APP_DISPLAY_NAME}}"),
            _open("link", rel="stylesheet", href="styles.css"),
        ],
    )
    body = _nest("body", content)
    return "\n".join(["<!doctype html>", _open("html", lang="en"), head, body, "</html>"]) + "\n"


def _rule(selectors: Sequence[str], declarations: Sequence[tuple[str, str]]) -> str:
    lines = "".join(f"  {name}: {value};\n" for name, value in declarations)
    return f"{',' + chr(10)}".join(selectors) + " {\n" + lines + "}\n"


def _stylesheet(*rules: str) -> str:
    return "\n".join(rules)


def _page_base(background: str, color: str) -> str:
    return _rule(
        ("html", "body"),
        [
            ("margin", "0"),
            ("min-height", "100%"),
            ("font-family", "system-ui, sans-serif"),
            ("background", background),
            ("color", color),
        ],
    )


_APP_ATTRS = {"data_app_id": "{{APP_ID}}", "data_template": "{{TEMPLATE_ID}}"}
_TITLE = _leaf("h1", "{{APP_DISPLAY_NAME}}")


def _button(name: str, text: str) -> str:
    return _leaf("button", text, name=name, type="button")


COMMON_MAIN_RS = (
    "mod events;\nmod ui;\n\n"
    + _function(
        "fn main()",
        "let windows = ui::create_all_windows();",
        _block("if windows.is_empty()", [_say("failed to create UI2 windows"), "return;"]),
        "",
        "events::wire_main_window();",
        _say("started {{WINDOW_CAPTION}}"),
        "",
        "let _windows = windows;",
    )
)

BLANK_EVENTS_RS = _wire_events("blank UI2 window ready")
FORM_EVENTS_RS = _wire_events("UI2 event stubs registered")
CANVAS_EVENTS_RS = _wire_events("canvas app event stubs registered")
TOOL_EVENTS_RS = _wire_events("tool window event stubs registered")

NO_UI_HTML = ""
NO_UI_CSS = ""

SERVICE_MAIN_RS = _function(
    "fn main()",
    _say("service {{APP_DISPLAY_NAME}} starting"),
    _say("background service loop is ready to wire to TRUEOS tasks"),
)

SERVICE_EVENTS_RS = _function(
    "pub fn register_service_handlers()", _say("service handlers registered")
)

SHELL_MAIN_RS = _function(
    "fn main()",
    _say("{{APP_DISPLAY_NAME}} shell ready"),
    _say("wire commands here as the shell surface grows"),
)

SHELL_EVENTS_RS = _function(
    "pub fn register_shell_commands()", _say("shell command table registered")
)

BLANK_HTML = _page(_leaf("main", "", id="app", **_APP_ATTRS))

BLANK_CSS = _stylesheet(
    _page_base("#f7f8fa", "#1e242c"),
    _rule(("#app",), [("min-height", "100vh")]),
)

FORM_HTML = _page(
    _nest(
        "main",
        [
            _TITLE,
            _nest("label", ["Input", _open("input", name="inputText", placeholder="Type here")]),
            _button("runButton", "Click me"),
        ],
        class_="form-shell",
        **_APP_ATTRS,
    )
)

FORM_CSS = _stylesheet(
    _page_base("#f3f6f8", "#20262e"),
    _rule(
        (".form-shell",),
        [("display", "grid"), ("gap", "16px"), ("max-width", "360px"), ("padding", "32px")],
    ),
    _rule(("label",), [("display", "grid"), ("gap", "8px")]),
    _rule(("input", "button"), [("font", "inherit")]),
)

CANVAS_HTML = _page(
    _nest(
        "main",
        [
            _nest("header", [_TITLE, _button("clearButton", "Clear")]),
            _leaf("canvas", "", name="drawingCanvas", width="720", height="420"),
        ],
        class_="canvas-shell",
        **_APP_ATTRS,
    )
)

CANVAS_CSS = _stylesheet(
    _page_base("#eef2f5", "#17202a"),
    _rule((".canvas-shell",), [("display", "grid"), ("gap", "14px"), ("padding", "24px")]),
    _rule(
        (".canvas-shell header",),
        [("align-items", "center"), ("display", "flex"), ("justify-content", "space-between")],
    ),
    _rule(("canvas",), [("background", "#ffffff"), ("border", "1px solid #9aa8b5")]),
)

TOOL_HTML = _page(
    _nest(
        "main",
        [
            _nest(
                "nav",
                [_button("newButton", "New"), _button("runButton", "Run")],
                aria_label="Tools",
            ),
            _nest(
                "section",
                [
                    _TITLE,
                    _nest(
                        "ul",
                        [_leaf("li", item) for item in ("Project", "Assets", "Build")],
                        name="itemList",
                    ),
                ],
            ),
        ],
        class_="tool-shell",
        **_APP_ATTRS,
    )
)

TOOL_CSS = _stylesheet(
    _page_base("#f5f5f2", "#222623"),
    _rule(
        (".tool-shell",),
        [("display", "grid"), ("grid-template-columns", "112px 1fr"), ("min-height", "100vh")],
    ),
    _rule(
        ("nav",),
        [
            ("align-content", "start"),
            ("background", "#2f463d"),
            ("display", "grid"),
            ("gap", "8px"),
            ("padding", "12px"),
        ],
    ),
    _rule(("section",), [("padding", "20px")]),
)