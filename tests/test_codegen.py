import json
from pathlib import Path

import pytest

from rads import codegen
from rads.model import (
    ControlKind,
    Property,
    RadsProject,
    Ui2Control,
    Ui2Window,
    validate_project_name,
)
from rads.project_templates import (
    BLANK_UI2_TEMPLATE_ID,
    CANVAS_APP_TEMPLATE_ID,
    FORM_APP_TEMPLATE_ID,
    SERVICE_APP_TEMPLATE_ID,
    SHELL_APP_TEMPLATE_ID,
    default_project_template,
    find_project_template,
)

ROOT = Path("/tmp/rads-codegen-test")


def _project(name, template_id=FORM_APP_TEMPLATE_ID):
    template = find_project_template(template_id)
    return template.build_project(validate_project_name(name), ROOT)


def test_starter_layout_serializes_decorations_and_controls():
    project = RadsProject.starter("Featurecheck Layout", ROOT)
    layout = codegen.ui2_layout(project)
    assert layout.startswith('app "Featurecheck Layout" id "dev.trueos.featurecheck-layout"')
    assert "window MainWindow" in layout
    assert "decoration-flags [titlebar, bottom-bar, title-icon" in layout
    assert "close, minimize, restore, maximize" in layout
    assert "textbox inputText" in layout


def test_layout_serializes_decorations_events_and_glyph():
    project = _project("Decor Test")
    run_button = next(c for c in project.windows[0].controls if c.name == "runButton")
    run_button.properties.append(Property("glyph", "💾"))
    layout = codegen.ui2_layout(project)
    assert "decorations { mode: system, titlebar: true" in layout
    assert "window-options { resize_mode: both, scrollbars: none" in layout
    assert "button runButton" in layout
    assert 'glyph="💾"' in layout
    assert "click -> on_run_button_click" in layout
    assert "change -> on_input_text_change" in layout


def test_control_snippet_for_canvas():
    control = Ui2Control.create(ControlKind.CANVAS, "canvas1", "Drawing", 100, 100, 200, 150)
    snippet = codegen.control_to_ui2_snippet(control)
    assert "canvas canvas1 at 100,100" in snippet
    assert "draw -> on_canvas1_draw" in snippet
    assert 'caption "Drawing"' in snippet


def test_control_snippet_escapes_caption():
    control = Ui2Control.create(ControlKind.TEXT_BOX, "textbox1", 'Say "hi"', 56, 160, 180, 32)
    snippet = codegen.control_to_ui2_snippet(control)
    assert snippet == (
        'textbox textbox1 at 56,160 size 180x32 caption "Say \\"hi\\"" '
        'props [placeholder="Type here"] events [change -> on_textbox1_change]'
    )


def test_ui_rs_and_events_rs_for_form_project():
    project = _project("Stub Test")
    main = codegen.main_rs(project)
    ui = codegen.ui_rs(project)
    events = codegen.events_rs(project)
    assert "mod events;" in main
    assert "mod ui;" in main
    assert 'v::vshell::line("started Stub Test");' in main
    assert "pub const MAIN_LAYOUT" in ui
    assert "pub const MAIN_WINDOW_DECORATIONS" in ui
    assert "vui2::WindowDecorationOptions" in ui
    assert "bottom_bar_visible: true" in ui
    assert 'pub const APP_ID: &str = "dev.trueos.stub-test";' in ui
    assert "pub fn wire_main_window()" in events
    assert "UI2 event stubs registered" in events
    assert "pub fn on_run_button_click()" in events
    assert "pub fn on_input_text_change()" in events


def test_multiple_windows_in_layout_and_ui_rs():
    project = _project("Many Windows")
    second = Ui2Window.named_window("SettingsWindow", "Settings", 140, 140, 520, 360)
    second.title_twemoji = "⚡"
    project.windows.append(second)
    layout = codegen.ui2_layout(project)
    ui = codegen.ui_rs(project)
    assert "window MainWindow" in layout
    assert "window SettingsWindow" in layout
    assert 'title-twemoji "⚡"' in layout
    assert "pub fn create_window_0()" in ui
    assert "pub fn create_window_1()" in ui
    assert "pub fn create_all_windows()" in ui
    assert 'include_str!("../ui/windows/settingswindow.ui2.json")' in ui
    assert codegen.window_file_stem(second, 1) == "settingswindow"


def test_window_file_stem_rules():
    window = Ui2Window.named_window("!!!", "x", 0, 0, 1, 1)
    assert codegen.window_file_stem(window, 0) == "main"
    assert codegen.window_file_stem(window, 2) == "window-3"


def test_events_rs_deduplicates_handlers():
    project = _project("Dupes")
    copy_window = Ui2Window.main_window("Other")
    project.windows.append(copy_window)
    events = codegen.events_rs(project)
    assert events.count("pub fn on_run_button_click()") == 1


def test_package_manifest_for_ui2_project():
    project = _project("Meta Test")
    manifest = json.loads(codegen.package_manifest(project))
    assert manifest["schema"] == "trueos.package.manifest/v1"
    assert manifest["package_id"] == "dev.trueos.meta-test.package"
    assert manifest["app_kind"] == "ui2"
    assert manifest["blueprints"]["app"] == "app.blueprint.json"
    assert manifest["blueprints"]["package"] == "package/package.blueprint.json"
    assert manifest["blueprints"]["layout"] == "ui/main.ui2"
    paths = [artifact["path"] for artifact in manifest["artifacts"]]
    assert "ui/index.html" in paths
    assert '"layout": "ui/main.ui2"' in codegen.package_manifest(project)


def test_package_manifest_for_service_has_no_layout():
    project = _project("Index Service", SERVICE_APP_TEMPLATE_ID)
    manifest = json.loads(codegen.package_manifest(project))
    assert manifest["app_kind"] == "service"
    assert "layout" not in manifest["blueprints"]


def test_service_and_shell_main_rs():
    service = _project("Index Service", SERVICE_APP_TEMPLATE_ID)
    shell = _project("Ops Shell", SHELL_APP_TEMPLATE_ID)
    assert "service Index Service starting" in codegen.main_rs(service)
    assert "Ops Shell shell ready" in codegen.main_rs(shell)
    assert "create_all_windows" in codegen.ui_rs(service)
    assert "Vec::new()" in codegen.ui_rs(service)


def test_canvas_template_outputs():
    template = find_project_template(CANVAS_APP_TEMPLATE_ID)
    project = _project("Canvas Pad", CANVAS_APP_TEMPLATE_ID)
    layout = codegen.ui2_layout(project)
    markup = codegen.html(project, template)
    style = codegen.css(project, template)
    events = codegen.events_rs_for_template(project, template)
    assert "canvas drawingCanvas" in layout
    assert '<canvas name="drawingCanvas"' in markup
    assert 'data-template="canvas-app"' in markup
    assert ".canvas-shell" in style
    assert "canvas app event stubs registered" in events
    assert "pub fn on_drawing_canvas_draw()" in events


def test_blank_template_has_no_handler_stubs():
    template = find_project_template(BLANK_UI2_TEMPLATE_ID)
    project = _project("Blank Slate", BLANK_UI2_TEMPLATE_ID)
    events = codegen.events_rs_for_template(project, template)
    assert "blank UI2 window ready" in events
    assert "pub fn on_" not in events


def test_html_falls_back_to_escaped_template_markup():
    project = RadsProject.starter("Bob's App", ROOT)
    project.windows[0].ui_description.html = "   "
    project.windows[0].ui_description.css = ""
    template = default_project_template()
    markup = codegen.html(project, template)
    assert "<title>Bob&#39;s App</title>" in markup
    assert 'data-app-id="dev.trueos.bob-s-app"' in markup
    assert "font-family" in codegen.css(project, template)


def test_html_empty_without_windows():
    project = _project("Ops Shell", SHELL_APP_TEMPLATE_ID)
    template = find_project_template(SHELL_APP_TEMPLATE_ID)
    assert codegen.html(project, template) == ""
    assert codegen.css(project, template) == ""


def test_html_uses_window_description_when_present():
    project = _project("Featurecheck Template")
    markup = codegen.html(project, default_project_template())
    assert 'data-app-id="dev.trueos.featurecheck-template"' in markup
    assert "styles.css" in markup
    assert markup == project.windows[0].ui_description.html


@pytest.mark.parametrize(
    "template_id, has_ui_files",
    [(FORM_APP_TEMPLATE_ID, True), (SERVICE_APP_TEMPLATE_ID, False)],
)
def test_readme_lists_ui_files_only_for_ui2(template_id, has_ui_files):
    project = _project("Readme App", template_id)
    text = codegen.readme(project)
    assert text.startswith("# Readme App\n")
    assert "cargo check" in text
    assert ("`ui/main.ui2`" in text) is has_ui_files


def test_readme_for_template_names_template():
    project = _project("Readme App")
    text = codegen.readme_for_template(project, default_project_template())
    assert "Template: Form App (`form-app`)" in text
    assert "App kind: UI2 App" in text


def test_cargo_toml_escapes_description():
    project = _project("Hello UI2")
    project.blueprint.description = 'A "quoted" app'
    toml_text = codegen.cargo_toml(project)
    assert 'name = "hello-ui2"' in toml_text
    assert 'version = "0.1.0"' in toml_text
    assert 'description = "A \\"quoted\\" app"' in toml_text
    assert "[dependencies]" in toml_text
    assert 'license = "MIT OR Apache-2.0"' in toml_text


def test_ui_rs_decoration_options_reflect_window_options():
    project = _project("Tooly", "tool-window")
    ui = codegen.ui_rs(project)
    assert "resize_button_visible: false" in ui
    assert "vertical_scrollbar_visible: true" in ui
    assert "horizontal_scrollbar_visible: true" in ui
    assert "vertical_scrollbar_side: vui2::VerticalScrollbarSide::Left" in ui
    assert "mode: vui2::WindowDecorationMode::System" in ui