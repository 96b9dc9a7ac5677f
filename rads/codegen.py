"""Generation of the source, layout, markup and manifest files of a project."""

from __future__ import annotations

import json
import unicodedata
from pathlib import Path
from typing import Callable

from rads.model import ControlKind, RadsProject, Ui2Control, Ui2Window, slugify
from rads.project_templates import ProjectTemplate, default_project_template_for_kind

_FALLBACK_V_DEPENDENCY = "../../TRUEOS/crates/trueos-v"

_CONTROL_KIND_NAMES = {
    ControlKind.BUTTON: "button",
    ControlKind.LABEL: "label",
    ControlKind.TEXT_BOX: "textbox",
    ControlKind.CHECK_BOX: "checkbox",
    ControlKind.PANEL: "panel",
    ControlKind.LIST_BOX: "listbox",
    ControlKind.CANVAS: "canvas",
    ControlKind.MENU: "menu",
    ControlKind.TOOLBAR: "toolbar",
}

_EMPTY_UI_RS = """\
use v::vui2;

pub const APP_ID: &str = "";
pub const APP_DISPLAY_NAME: &str = "";

pub fn create_main_window() -> Option<vui2::OwnedWindow> {
    None
}

pub fn create_all_windows() -> Vec<vui2::OwnedWindow> {
    Vec::new()
}
"""

_UI_FILES_README = """\
- `ui/main.ui2`: readable UI2 layout with serialized decorations and event bindings.
- `ui/main.ui2.json`: JSON copy of the main window model.
- `ui/windows/`: per-window JSON, HTML, and CSS files for secondary UI2 windows.
- `ui/index.html`: starter markup for the main window.
- `ui/styles.css`: starter stylesheet for the main window.
- `src/ui.rs`: UI2 window creation helper.
"""


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _escape_rust_string(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


_escape_toml_string = _escape_rust_string


def _escape_html(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


_SIMPLE_ESCAPES = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}


def _needs_unicode_escape(ch: str) -> bool:
    category = unicodedata.category(ch)
    return category[0] == "C" or category in ("Zl", "Zp") or (category == "Zs" and ch != " ")


def _quoted(value: str) -> str:
    """Double-quoted string literal with debug-style escapes."""
    parts = []
    for ch in value:
        if ch in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[ch])
        elif _needs_unicode_escape(ch):
            parts.append(f"\\u{{{ord(ch):x}}}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


def _trueos_v_dependency_path() -> str:
    candidate = Path(__file__).resolve().parent.parent.parent / "TRUEOS" / "crates" / "trueos-v"
    if candidate.exists():
        return str(candidate)
    return _FALLBACK_V_DEPENDENCY


def _render_project_tokens(
    source: str,
    project: RadsProject,
    template: ProjectTemplate,
    escape: Callable[[str], str],
) -> str:
    window_caption = project.windows[0].caption if project.windows else project.name
    replacements = (
        ("{{APP_DISPLAY_NAME}}", project.blueprint.display_name),
        ("{{APP_ID}}", project.blueprint.app_id),
        ("{{PROJECT_SLUG}}", project.slug),
        ("{{TEMPLATE_ID}}", template.id),
        ("{{TEMPLATE_NAME}}", template.name),
        ("{{WINDOW_CAPTION}}", window_caption),
    )
    for token, value in replacements:
        source = source.replace(token, escape(value))
    return source


def cargo_toml(project: RadsProject) -> str:
    """Cargo manifest of the generated app."""
    return (
        "[package]\n"
        f'name = "{project.slug}"\n'
        f'version = "{project.blueprint.version}"\n'
        'edition = "2024"\n'
        f'description = "{_escape_toml_string(project.blueprint.description)}"\n'
        f'license = "{_escape_toml_string(project.blueprint.license)}"\n'
        "\n"
        "[dependencies]\n"
        f'v = {{ path = "{_escape_toml_string(_trueos_v_dependency_path())}" }}\n'
    )


def main_rs(project: RadsProject) -> str:
    """Entrypoint source from the default template of the project's kind."""
    return main_rs_for_template(project, default_project_template_for_kind(project.app_kind))


def main_rs_for_template(project: RadsProject, template: ProjectTemplate) -> str:
    """Entrypoint source from the given template."""
    return _render_project_tokens(template.starter_main_rs, project, template, _escape_rust_string)


def window_file_stem(window: Ui2Window, index: int) -> str:
    """File stem used for a window's files: "main" for the first window."""
    if index == 0:
        return "main"
    return slugify(window.name) or f"window-{index + 1}"


def _window_constants(index: int, window: Ui2Window) -> str:
    decorations = _escape_rust_string(window.decorations.to_ui2_literal())
    if index == 0:
        model, markup, style = "../ui/main.ui2.json", "../ui/index.html", "../ui/styles.css"
    else:
        stem = window_file_stem(window, index)
        model = f"../ui/windows/{stem}.ui2.json"
        markup = f"../ui/windows/{stem}.html"
        style = f"../ui/windows/{stem}.css"
    return (
        f'pub const WINDOW_{index}_MODEL: &str = include_str!("{model}");\n'
        f'pub const WINDOW_{index}_HTML: &str = include_str!("{markup}");\n'
        f'pub const WINDOW_{index}_CSS: &str = include_str!("{style}");\n'
        f'pub const WINDOW_{index}_DECORATIONS: &str = "{decorations}";\n'
    )


def _window_decoration_options_literal(window: Ui2Window) -> str:
    d = window.decorations
    o = window.options
    return (
        "vui2::WindowDecorationOptions {\n"
        f"            mode: vui2::WindowDecorationMode::{d.mode.vui2_variant()},\n"
        f"            titlebar_visible: {_bool(d.titlebar)},\n"
        f"            bottom_bar_visible: {_bool(d.bottom_bar)},\n"
        f"            title_icon_visible: {_bool(d.title_icon)},\n"
        "            buttons: vui2::WindowDecorationButtons {\n"
        f"                toggle_composition: {_bool(d.toggle_composition)},\n"
        f"                fork: {_bool(d.fork)},\n"
        f"                minimize: {_bool(d.minimize)},\n"
        f"                restore: {_bool(d.restore)},\n"
        f"                toggle_maximize: {_bool(d.maximize)},\n"
        f"                preserve_vm: {_bool(d.preserve_vm)},\n"
        f"                close: {_bool(d.close)},\n"
        "            },\n"
        f"            resize_button_visible: {_bool(d.resizable and d.resize_button)},\n"
        f"            rotate_buttons_visible: {_bool(d.rotate_buttons)},\n"
        f"            vertical_scrollbar_visible: {_bool(o.scrollbars.vertical_visible())},\n"
        f"            horizontal_scrollbar_visible: {_bool(o.scrollbars.horizontal_visible())},\n"
        "            vertical_scrollbar_side: vui2::VerticalScrollbarSide::"
        f"{o.vertical_scrollbar_side.vui2_variant()},\n"
        "            horizontal_scrollbar_side: vui2::HorizontalScrollbarSide::"
        f"{o.horizontal_scrollbar_side.vui2_variant()},\n"
        "            resize_mode: vui2::WindowResizeMode::Auto,\n"
        "            resize_maintain_aspect: false,\n"
        f"            content_preserve_scale: {_bool(o.preserve_scale)},\n"
        "        }"
    )


def _window_create_function(index: int, window: Ui2Window) -> str:
    geometry = window.geometry
    caption = _escape_rust_string(window.caption)
    return (
        f"pub fn create_window_{index}() -> Option<vui2::OwnedWindow> {{\n"
        "    let rect = vui2::Rect {\n"
        f"        x: {geometry.x},\n"
        f"        y: {geometry.y},\n"
        f"        width: {geometry.w},\n"
        f"        height: {geometry.h},\n"
        "    };\n"
        "    let options = vui2::CreateOptions {\n"
        f"        decorations: {_window_decoration_options_literal(window)},\n"
        "        ..vui2::CreateOptions::default()\n"
        "    };\n"
        f'    let window = vui2::OwnedWindow::create_with_options("{caption}", rect, options)?;\n'
        "    let id = window.id();\n"
        f'    id.set_title("{caption}");\n'
        "    Some(window)\n"
        "}\n"
    )


def ui_rs(project: RadsProject) -> str:
    """UI2 window creation module of the generated app."""
    if not project.windows:
        return _EMPTY_UI_RS
    constants = "".join(
        _window_constants(index, window) for index, window in enumerate(project.windows)
    )
    functions = "\n".join(
        _window_create_function(index, window) for index, window in enumerate(project.windows)
    )
    pushes = "".join(
        f"    if let Some(window) = create_window_{index}() {{\n"
        "        windows.push(window);\n"
        "    }\n"
        for index in range(len(project.windows))
    )
    return (
        "use v::vui2;\n"
        "\n"
        f'pub const APP_ID: &str = "{_escape_rust_string(project.blueprint.app_id)}";\n'
        "pub const APP_DISPLAY_NAME: &str = "
        f'"{_escape_rust_string(project.blueprint.display_name)}";\n'
        'pub const MAIN_LAYOUT: &str = include_str!("../ui/main.ui2");\n'
        "pub const MAIN_HTML: &str = WINDOW_0_HTML;\n"
        "pub const MAIN_CSS: &str = WINDOW_0_CSS;\n"
        "pub const MAIN_WINDOW_DECORATIONS: &str = WINDOW_0_DECORATIONS;\n"
        f"{constants}\n"
        "\n"
        "pub fn create_main_window() -> Option<vui2::OwnedWindow> {\n"
        "    create_window_0()\n"
        "}\n"
        "\n"
        f"{functions}\n"
        "\n"
        "pub fn create_all_windows() -> Vec<vui2::OwnedWindow> {\n"
        "    let mut windows = Vec::new();\n"
        f"{pushes}    windows\n"
        "}\n"
    )


def events_rs(project: RadsProject) -> str:
    """Event stub module from the default template of the project's kind."""
    return events_rs_for_template(project, default_project_template_for_kind(project.app_kind))


def events_rs_for_template(project: RadsProject, template: ProjectTemplate) -> str:
    """Event stub module: template starter plus one stub per distinct handler."""
    body = _render_project_tokens(
        template.starter_events_rs, project, template, _escape_rust_string
    )
    if not body.endswith("\n"):
        body += "\n"
    seen: set[str] = set()
    stubs = []
    for window in project.windows:
        for control in window.controls:
            for event in control.events:
                if event.handler in seen:
                    continue
                seen.add(event.handler)
                stubs.append(
                    f"\npub fn {event.handler}() {{\n"
                    f'    v::vshell::line("{_escape_rust_string(event.event)} fired on '
                    f'{_escape_rust_string(control.name)}");\n'
                    "}\n"
                )
    return body + "".join(stubs)


def html_for_window(project: RadsProject, template: ProjectTemplate, window: Ui2Window) -> str:
    """Markup of a window: its own description, or the template's starter markup."""
    if window.ui_description.html.strip():
        return window.ui_description.html
    return _render_project_tokens(template.initial_html, project, template, _escape_html)


def css_for_window(project: RadsProject, template: ProjectTemplate, window: Ui2Window) -> str:
    """Stylesheet of a window: its own description, or the template's starter CSS."""
    if window.ui_description.css.strip():
        return window.ui_description.css
    return _render_project_tokens(template.initial_css, project, template, lambda value: value)


def html(project: RadsProject, template: ProjectTemplate) -> str:
    """Markup of the main window, or an empty string without windows."""
    if not project.windows:
        return ""
    return html_for_window(project, template, project.windows[0])


def css(project: RadsProject, template: ProjectTemplate) -> str:
    """Stylesheet of the main window, or an empty string without windows."""
    if not project.windows:
        return ""
    return css_for_window(project, template, project.windows[0])


def package_manifest(project: RadsProject) -> str:
    """Pretty-printed JSON package manifest."""
    blueprints = {"app": "app.blueprint.json", "package": "package/package.blueprint.json"}
    if project.app_kind.has_ui2() and project.windows:
        blueprints.update(
            layout="ui/main.ui2", html="ui/index.html", styles="ui/styles.css"
        )
    manifest = {
        "schema": "trueos.package.manifest/v1",
        "app_id": project.blueprint.app_id,
        "package_id": project.package.package_id,
        "display_name": project.blueprint.display_name,
        "version": project.blueprint.version,
        "app_kind": project.app_kind.value,
        "entrypoint": project.package.entrypoint,
        "artifacts": [artifact.to_dict() for artifact in project.package.artifacts],
        "blueprints": blueprints,
        "metadata": project.package.metadata.to_dict(),
    }
    return json.dumps(manifest, indent=2, sort_keys=True, ensure_ascii=False)


def readme(project: RadsProject) -> str:
    """README from the default template of the project's kind."""
    return readme_for_template(project, default_project_template_for_kind(project.app_kind))


def readme_for_template(project: RadsProject, template: ProjectTemplate) -> str:
    """README describing the generated files and how to check the app."""
    ui_files = _UI_FILES_README if project.app_kind.has_ui2() and project.windows else ""
    return (
        f"# {project.name}\n"
        "\n"
        "Generated with TRUEOS RADS.\n"
        "\n"
        f"Template: {template.name} (`{template.id}`)\n"
        f"App kind: {project.app_kind.label()}\n"
        "\n"
        "## Files\n"
        "\n"
        "- `app.blueprint.json`: app metadata and capabilities.\n"
        "- `package/package.blueprint.json`: package metadata and output artifacts.\n"
        f"{ui_files}- `src/main.rs`: app entrypoint.\n"
        "- `src/events.rs`: generated event stubs.\n"
        "\n"
        "## Run\n"
        "\n"
        "```sh\n"
        "cargo check\n"
        "```\n"
    )


def ui2_layout(project: RadsProject) -> str:
    """Readable UI2 layout of every window of the project."""
    bp = project.blueprint
    parts = [f"app {_quoted(bp.display_name)} id {_quoted(bp.app_id)} version {_quoted(bp.version)}\n"]
    for window in project.windows:
        parts.append("\n")
        parts.append(window_to_ui2_snippet(window))
    return "".join(parts)


def window_to_ui2_snippet(window: Ui2Window) -> str:
    """UI2 layout block for one window."""
    g = window.geometry
    o = window.options
    lines = [
        f"window {window.name} caption {_quoted(window.caption)} "
        f"at {g.x},{g.y} size {g.w}x{g.h} {{\n",
        f"  decorations {window.decorations.to_ui2_literal()}\n",
        f"  window-options {{ resize_mode: {o.resize_mode.value}, "
        f"scrollbars: {o.scrollbars.value}, "
        f"vertical_scrollbar_side: {o.vertical_scrollbar_side.value}, "
        f"horizontal_scrollbar_side: {o.horizontal_scrollbar_side.value}, "
        f"preserve_scale: {_bool(o.preserve_scale)} }}\n",
    ]
    if window.title_twemoji:
        lines.append(f"  title-twemoji {_quoted(window.title_twemoji)}\n")
    lines.append(f"  decoration-flags [{', '.join(window.decorations.to_flags())}]\n")
    lines.append("  layout absolute grid 8\n")
    lines.extend(f"  {control_to_ui2_snippet(control)}\n" for control in window.controls)
    lines.append("}\n")
    return "".join(lines)


def control_to_ui2_snippet(control: Ui2Control) -> str:
    """One-line UI2 layout description of a control."""
    g = control.geometry
    properties = ", ".join(f"{prop.key}={_quoted(prop.value)}" for prop in control.properties)
    events = ", ".join(f"{event.event} -> {event.handler}" for event in control.events)
    return (
        f"{_CONTROL_KIND_NAMES[ControlKind(control.kind)]} {control.name} "
        f"at {g.x},{g.y} size {g.w}x{g.h} caption {_quoted(control.caption)} "
        f"props [{properties}] events [{events}]"
    )