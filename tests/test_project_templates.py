from pathlib import Path

from rads.model import AppKind, ControlKind, validate_project_name
from rads.project_templates import (
    BLANK_UI2_TEMPLATE_ID,
    CANVAS_APP_TEMPLATE_ID,
    DEFAULT_PROJECT_TEMPLATE_ID,
    FORM_APP_TEMPLATE_ID,
    SERVICE_APP_TEMPLATE_ID,
    SHELL_APP_TEMPLATE_ID,
    TOOL_WINDOW_TEMPLATE_ID,
    TemplateCapability,
    TemplateControl,
    TemplateProperty,
    available_project_templates,
    default_project_template,
    default_project_template_for_kind,
    find_project_template,
)
from rads.model import Rect


def build(template_id, name):
    template = find_project_template(template_id)
    return template.build_project(validate_project_name(name), Path("/tmp/rads-test") / name)


def test_template_catalog_exposes_expected_starters():
    templates = available_project_templates()
    assert [t.id for t in templates] == [
        BLANK_UI2_TEMPLATE_ID,
        FORM_APP_TEMPLATE_ID,
        CANVAS_APP_TEMPLATE_ID,
        TOOL_WINDOW_TEMPLATE_ID,
        SERVICE_APP_TEMPLATE_ID,
        SHELL_APP_TEMPLATE_ID,
    ]
    assert default_project_template().id == DEFAULT_PROJECT_TEMPLATE_ID

    for template in templates:
        assert template.description
        assert "fn main()" in template.starter_main_rs
        assert template.capabilities
        if template.app_kind.has_ui2():
            assert "<!doctype html>" in template.initial_html
            assert "body" in template.initial_css
            assert "wire_main_window" in template.starter_events_rs
            assert template.window.geometry.w > 0
            assert template.window.geometry.h > 0
        else:
            assert template.window is None


def test_default_template_for_kind():
    assert default_project_template_for_kind(AppKind.UI2).id == FORM_APP_TEMPLATE_ID
    assert default_project_template_for_kind(AppKind.SERVICE).id == SERVICE_APP_TEMPLATE_ID
    assert default_project_template_for_kind(AppKind.SHELL).id == SHELL_APP_TEMPLATE_ID


def test_unknown_template_id_is_not_found():
    assert find_project_template("missing-template") is None


def test_form_template_keeps_starter_contract():
    project = build(FORM_APP_TEMPLATE_ID, "Hello UI2")
    window = project.windows[0]
    assert len(window.controls) == 3
    assert project.app_kind is AppKind.UI2
    assert window.geometry.w == 720
    assert window.caption == "Hello UI2"
    assert 'class="form-shell"' in window.ui_description.html
    handlers = {event.handler for control in window.controls for event in control.events}
    assert "on_run_button_click" in handlers
    assert "on_input_text_change" in handlers
    assert project.blueprint.ui_layout == "ui/main.ui2"
    assert project.blueprint.description == (
        "Hello UI2 generated from the UI2 App Form App template."
    )
    assert project.package.package_id == "dev.trueos.hello-ui2.package"
    paths = [artifact.path for artifact in project.package.artifacts]
    for path in ["ui/main.ui2", "ui/index.html", "ui/styles.css"]:
        assert path in paths


def test_canvas_template_is_used():
    project = build(CANVAS_APP_TEMPLATE_ID, "Canvas Pad")
    window = project.windows[0]
    assert window.geometry.w == 960
    assert window.geometry.h == 640
    assert window.options.preserve_scale is True
    assert any(c.key == "ui2.canvas" and c.enabled for c in project.blueprint.capabilities)
    canvas = next(c for c in window.controls if c.name == "drawingCanvas")
    assert canvas.kind is ControlKind.CANVAS
    assert [p.key for p in canvas.properties] == ["surface", "background"]
    assert canvas.events[0].handler == "on_drawing_canvas_draw"
    clear = next(c for c in window.controls if c.name == "clearButton")
    assert clear.properties[0].value == "secondary"
    assert '<canvas name="drawingCanvas"' in window.ui_description.html
    assert 'data-template="canvas-app"' in window.ui_description.html
    assert ".canvas-shell" in window.ui_description.css
    template = find_project_template(CANVAS_APP_TEMPLATE_ID)
    assert "canvas app event stubs registered" in template.starter_events_rs


def test_blank_template_generates_empty_window():
    project = build(BLANK_UI2_TEMPLATE_ID, "Blank Slate")
    assert project.windows[0].controls == []
    assert any(
        c.key == "ui2.events" and not c.enabled for c in project.blueprint.capabilities
    )
    template = find_project_template(BLANK_UI2_TEMPLATE_ID)
    assert "blank UI2 window ready" in template.starter_events_rs
    assert "pub fn on_" not in template.starter_events_rs


def test_service_and_shell_templates_have_no_ui2_surface():
    service = build(SERVICE_APP_TEMPLATE_ID, "Index Service")
    shell = build(SHELL_APP_TEMPLATE_ID, "Ops Shell")
    assert service.app_kind is AppKind.SERVICE
    assert shell.app_kind is AppKind.SHELL
    assert service.windows == []
    assert shell.windows == []
    assert service.blueprint.ui_layout == ""
    assert shell.blueprint.ui_layout == ""
    assert [a.target for a in service.package.artifacts] == ["trueos-service"]
    assert [a.target for a in shell.package.artifacts] == ["trueos-shell"]
    assert service.blueprint.metadata.ui_runtime == "TRUEOS/service"


def test_tool_window_decorations_are_copied_not_shared():
    first = build(TOOL_WINDOW_TEMPLATE_ID, "Tool One")
    second = build(TOOL_WINDOW_TEMPLATE_ID, "Tool Two")
    assert first.windows[0].decorations.always_on_top is True
    assert first.windows[0].decorations.resizable is False
    first.windows[0].decorations.close = False
    assert second.windows[0].decorations.close is True
    assert find_project_template(TOOL_WINDOW_TEMPLATE_ID).window.decorations.close is True


def test_html_placeholders_are_escaped_but_caption_is_not():
    project = build(FORM_APP_TEMPLATE_ID, "Tom & Jerry's")
    window = project.windows[0]
    assert window.caption == "Tom & Jerry's"
    assert "Tom &amp; Jerry&#039;s" in window.ui_description.html
    assert f'data-app-id="dev.trueos.{project.slug}"' in window.ui_description.html


def test_template_capability_and_control_conversion():
    capability = TemplateCapability("fs.user", False, "note").to_capability()
    assert (capability.key, capability.enabled, capability.note) == ("fs.user", False, "note")

    template = find_project_template(FORM_APP_TEMPLATE_ID)
    name = validate_project_name("Demo App")
    control = TemplateControl(
        ControlKind.LABEL,
        "titleLabel",
        "{{APP_DISPLAY_NAME}}",
        Rect(1, 2, 3, 4),
        properties=(TemplateProperty("text", "{{PROJECT_SLUG}}"),),
    ).to_control(name, "dev.trueos.demo-app", template)
    assert control.caption == "Demo App"
    assert control.properties[0].value == "demo-app"
    assert control.events[0].handler == "on_title_label_ready"
    assert (control.geometry.x, control.geometry.h) == (1, 4)