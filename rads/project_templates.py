"""Catalogue of starter project templates and how a project is built from one."""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rads import starter_text as text
from rads.model import (
    AppBlueprint,
    AppKind,
    BlueprintMetadata,
    Capability,
    ControlKind,
    EventBinding,
    PackageArtifact,
    PackageBlueprint,
    Property,
    RadsProject,
    Rect,
    Ui2Control,
    Ui2Window,
    ValidProjectName,
    WindowDecorations,
)
from rads.ui2_options import (
    Ui2HtmlCssDescription,
    Ui2ResizeMode,
    Ui2ScrollbarMode,
    Ui2Size,
    Ui2WindowOptions,
)

BLANK_UI2_TEMPLATE_ID = "blank-ui2"
FORM_APP_TEMPLATE_ID = "form-app"
CANVAS_APP_TEMPLATE_ID = "canvas-app"
TOOL_WINDOW_TEMPLATE_ID = "tool-window"
SERVICE_APP_TEMPLATE_ID = "service-app"
SHELL_APP_TEMPLATE_ID = "shell-app"
DEFAULT_PROJECT_TEMPLATE_ID = FORM_APP_TEMPLATE_ID


@dataclass(frozen=True)
class TemplateProperty:
    """A control property given by a template; the value may hold placeholders."""

    key: str
    value: str


@dataclass(frozen=True)
class TemplateEvent:
    """An event binding given by a template; the handler may hold placeholders."""

    event: str
    handler: str


@dataclass(frozen=True)
class TemplateCapability:
    """A capability a template requests."""

    key: str
    enabled: bool
    note: str

    def to_capability(self) -> Capability:
        return Capability(key=self.key, enabled=self.enabled, note=self.note)


@dataclass(frozen=True)
class TemplateControl:
    """A control placed on the window of a template."""

    kind: ControlKind
    name: str
    caption: str
    geometry: Rect
    properties: tuple[TemplateProperty, ...] = ()
    events: tuple[TemplateEvent, ...] = ()

    def to_control(
        self, name: ValidProjectName, app_id: str, template: "ProjectTemplate"
    ) -> Ui2Control:
        """Build a model control, filling in the template placeholders."""
        control = Ui2Control.create(
            self.kind,
            self.name,
            _render_text(self.caption, name, app_id, template),
            self.geometry.x,
            self.geometry.y,
            self.geometry.w,
            self.geometry.h,
        )
        if self.properties:
            control.properties = [
                Property(prop.key, _render_text(prop.value, name, app_id, template))
                for prop in self.properties
            ]
        if self.events:
            control.events = [
                EventBinding(event.event, _render_text(event.handler, name, app_id, template))
                for event in self.events
            ]
        return control


@dataclass(frozen=True)
class TemplateWindow:
    """The main window a UI2 template starts with."""

    name: str
    caption: str
    geometry: Rect
    decorations: WindowDecorations
    options: Ui2WindowOptions
    controls: tuple[TemplateControl, ...] = ()


@dataclass(frozen=True)
class ProjectTemplate:
    """A starter template: kind of app, starter files, window and capabilities."""

    id: str
    name: str
    description: str
    app_kind: AppKind
    initial_html: str
    initial_css: str
    starter_main_rs: str
    starter_events_rs: str
    window: Optional[TemplateWindow]
    capabilities: tuple[TemplateCapability, ...]

    def build_project(self, name: ValidProjectName, root: Path | str) -> RadsProject:
        """Create a new project model from this template."""
        app_id = f"dev.trueos.{name.slug}"
        windows = (
            [self._build_window(self.window, name, app_id)] if self.window is not None else []
        )
        has_ui = self.app_kind.has_ui2() and bool(windows)
        blueprint = AppBlueprint(
            schema="trueos.app.blueprint/v1",
            app_id=app_id,
            slug=name.slug,
            display_name=name.display,
            version="0.1.0",
            entrypoint="src/main.rs",
            ui_layout="ui/main.ui2" if has_ui else "",
            description=(
                f"{name.display} generated from the {self.app_kind.label()} "
                f"{self.name} template."
            ),
            license="MIT OR Apache-2.0",
            authors=["TRUEOS RADS"],
            capabilities=[capability.to_capability() for capability in self.capabilities],
            metadata=BlueprintMetadata.default(self.app_kind),
        )
        package = PackageBlueprint(
            schema="trueos.package.blueprint/v1",
            package_id=f"{app_id}.package",
            app_id=app_id,
            name=name.slug,
            version="0.1.0",
            entrypoint="src/main.rs",
            artifacts=_package_artifacts(self.app_kind, has_ui),
            metadata=BlueprintMetadata.default(self.app_kind),
        )
        return RadsProject(
            id=uuid.uuid4(),
            name=name.display,
            slug=name.slug,
            root=Path(root),
            app_kind=self.app_kind,
            blueprint=blueprint,
            package=package,
            windows=windows,
        )

    def _build_window(
        self, template_window: TemplateWindow, name: ValidProjectName, app_id: str
    ) -> Ui2Window:
        geometry = template_window.geometry
        return Ui2Window(
            id=uuid.uuid4(),
            name=template_window.name,
            caption=_render_text(template_window.caption, name, app_id, self),
            title_twemoji=None,
            geometry=Rect(geometry.x, geometry.y, geometry.w, geometry.h),
            decorations=copy.deepcopy(template_window.decorations),
            options=copy.deepcopy(template_window.options),
            ui_description=Ui2HtmlCssDescription(
                html=_render_html(self.initial_html, name, app_id, self),
                css=_render_text(self.initial_css, name, app_id, self),
            ),
            controls=[
                control.to_control(name, app_id, self) for control in template_window.controls
            ],
        )


def _package_artifacts(app_kind: AppKind, has_ui: bool) -> list[PackageArtifact]:
    artifacts = [PackageArtifact("binary", "target/trueos/app.tapp", app_kind.package_target())]
    if has_ui:
        artifacts += [
            PackageArtifact("layout", "ui/main.ui2", "ui2-layout"),
            PackageArtifact("html", "ui/index.html", "ui2-markup"),
            PackageArtifact("stylesheet", "ui/styles.css", "ui2-style"),
        ]
    return artifacts


def _escape_html(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def _substitute(source, name, app_id, template, escape) -> str:
    replacements = (
        ("{{APP_DISPLAY_NAME}}", name.display),
        ("{{APP_ID}}", app_id),
        ("{{PROJECT_SLUG}}", name.slug),
        ("{{TEMPLATE_ID}}", template.id),
        ("{{TEMPLATE_NAME}}", template.name),
    )
    for token, value in replacements:
        source = source.replace(token, escape(value))
    return source


def _render_text(source: str, name: ValidProjectName, app_id: str, template) -> str:
    return _substitute(source, name, app_id, template, lambda value: value)


def _render_html(source: str, name: ValidProjectName, app_id: str, template) -> str:
    return _substitute(source, name, app_id, template, _escape_html)


_FORM_CONTROLS = (
    TemplateControl(ControlKind.LABEL, "titleLabel", "TRUEOS UI2 app", Rect(32, 34, 220, 28)),
    TemplateControl(ControlKind.BUTTON, "runButton", "Click me", Rect(32, 86, 128, 38)),
    TemplateControl(ControlKind.TEXT_BOX, "inputText", "Type here", Rect(32, 144, 260, 34)),
)

_CANVAS_CONTROLS = (
    TemplateControl(ControlKind.LABEL, "titleLabel", "Canvas workspace", Rect(24, 24, 220, 28)),
    TemplateControl(
        ControlKind.BUTTON,
        "clearButton",
        "Clear",
        Rect(812, 22, 96, 34),
        properties=(TemplateProperty("variant", "secondary"),),
    ),
    TemplateControl(
        ControlKind.CANVAS,
        "drawingCanvas",
        "",
        Rect(24, 72, 884, 520),
        properties=(
            TemplateProperty("surface", "software"),
            TemplateProperty("background", "#ffffff"),
        ),
    ),
)

_TOOL_CONTROLS = (
    TemplateControl(
        ControlKind.TOOLBAR,
        "mainToolbar",
        "Tools",
        Rect(0, 0, 560, 38),
        properties=(
            TemplateProperty("dock", "top"),
            TemplateProperty("items", "New,Run,Settings"),
        ),
    ),
    TemplateControl(ControlKind.LABEL, "titleLabel", "Tool window", Rect(20, 58, 180, 24)),
    TemplateControl(
        ControlKind.LIST_BOX,
        "itemList",
        "Items",
        Rect(20, 96, 180, 212),
        properties=(TemplateProperty("items", "Project,Assets,Build"),),
    ),
    TemplateControl(ControlKind.PANEL, "detailsPanel", "Details", Rect(224, 58, 316, 250)),
)

_FS_USER = TemplateCapability("fs.user", False, "Read and write user-selected files")
_NET_CLIENT = TemplateCapability("net.client", False, "Open outbound network connections")
_UI2_EVENTS = TemplateCapability("ui2.events", True, "Bind generated UI2 event handlers")

_BLANK_CAPABILITIES = (
    TemplateCapability("ui2.window", True, "Create and manage a UI2 window"),
    TemplateCapability(
        "ui2.events", False, "No starter controls require generated event handlers"
    ),
    _FS_USER,
    _NET_CLIENT,
)

_FORM_CAPABILITIES = (
    TemplateCapability("ui2.window", True, "Create and manage UI2 windows"),
    _UI2_EVENTS,
    _FS_USER,
    _NET_CLIENT,
)

_CANVAS_CAPABILITIES = (
    TemplateCapability("ui2.window", True, "Create and manage UI2 windows"),
    _UI2_EVENTS,
    TemplateCapability("ui2.canvas", True, "Draw to a UI2 canvas control"),
    _FS_USER,
    _NET_CLIENT,
)

_TOOL_CAPABILITIES = (
    TemplateCapability("ui2.window", True, "Create and manage a compact UI2 tool window"),
    _UI2_EVENTS,
    TemplateCapability("ui2.toolbar", True, "Use toolbar-style navigation controls"),
    _FS_USER,
    _NET_CLIENT,
)

_SERVICE_CAPABILITIES = (
    TemplateCapability("service.background", True, "Run as a classic background service"),
    TemplateCapability("service.events", True, "Register service lifecycle handlers"),
    _FS_USER,
    _NET_CLIENT,
)

_SHELL_CAPABILITIES = (
    TemplateCapability("shell.commands", True, "Expose command-oriented shell entry points"),
    TemplateCapability(
        "shell.streams", True, "Write text streams through TRUEOS shell surfaces"
    ),
    _FS_USER,
    _NET_CLIENT,
)

_PROJECT_TEMPLATES: tuple[ProjectTemplate, ...] = (
    ProjectTemplate(
        id=BLANK_UI2_TEMPLATE_ID,
        name="Blank UI2",
        description="An empty UI2 window with starter markup and styling.",
        app_kind=AppKind.UI2,
        initial_html=text.BLANK_HTML,
        initial_css=text.BLANK_CSS,
        starter_main_rs=text.COMMON_MAIN_RS,
        starter_events_rs=text.BLANK_EVENTS_RS,
        window=TemplateWindow(
            name="MainWindow",
            caption="{{APP_DISPLAY_NAME}}",
            geometry=Rect(80, 80, 640, 420),
            decorations=WindowDecorations(),
            options=Ui2WindowOptions(),
        ),
        capabilities=_BLANK_CAPABILITIES,
    ),
    ProjectTemplate(
        id=FORM_APP_TEMPLATE_ID,
        name="Form App",
        description="A small event-driven form with a label, button, and text input.",
        app_kind=AppKind.UI2,
        initial_html=text.FORM_HTML,
        initial_css=text.FORM_CSS,
        starter_main_rs=text.COMMON_MAIN_RS,
        starter_events_rs=text.FORM_EVENTS_RS,
        window=TemplateWindow(
            name="MainWindow",
            caption="{{APP_DISPLAY_NAME}}",
            geometry=Rect(80, 80, 720, 460),
            decorations=WindowDecorations(),
            options=Ui2WindowOptions(),
            controls=_FORM_CONTROLS,
        ),
        capabilities=_FORM_CAPABILITIES,
    ),
    ProjectTemplate(
        id=CANVAS_APP_TEMPLATE_ID,
        name="Canvas App",
        description="A drawing-oriented starter with a large canvas and clear action.",
        app_kind=AppKind.UI2,
        initial_html=text.CANVAS_HTML,
        initial_css=text.CANVAS_CSS,
        starter_main_rs=text.COMMON_MAIN_RS,
        starter_events_rs=text.CANVAS_EVENTS_RS,
        window=TemplateWindow(
            name="MainWindow",
            caption="{{APP_DISPLAY_NAME}}",
            geometry=Rect(60, 60, 960, 640),
            decorations=WindowDecorations(),
            options=Ui2WindowOptions(min_size=Ui2Size(640, 420), preserve_scale=True),
            controls=_CANVAS_CONTROLS,
        ),
        capabilities=_CANVAS_CAPABILITIES,
    ),
    ProjectTemplate(
        id=TOOL_WINDOW_TEMPLATE_ID,
        name="Tool Window",
        description="A compact utility window with toolbar, list, and detail panel.",
        app_kind=AppKind.UI2,
        initial_html=text.TOOL_HTML,
        initial_css=text.TOOL_CSS,
        starter_main_rs=text.COMMON_MAIN_RS,
        starter_events_rs=text.TOOL_EVENTS_RS,
        window=TemplateWindow(
            name="MainWindow",
            caption="{{APP_DISPLAY_NAME}}",
            geometry=Rect(120, 120, 560, 360),
            decorations=WindowDecorations(
                minimize=False,
                restore=False,
                maximize=False,
                resizable=False,
                resize_button=False,
                always_on_top=True,
            ),
            options=Ui2WindowOptions(
                min_size=Ui2Size(560, 360),
                max_size=Ui2Size(560, 360),
                resize_mode=Ui2ResizeMode.NONE,
                scrollbars=Ui2ScrollbarMode.AUTO,
            ),
            controls=_TOOL_CONTROLS,
        ),
        capabilities=_TOOL_CAPABILITIES,
    ),
    ProjectTemplate(
        id=SERVICE_APP_TEMPLATE_ID,
        name="Service App",
        description="A classic background service app with no UI2 window surface.",
        app_kind=AppKind.SERVICE,
        initial_html=text.NO_UI_HTML,
        initial_css=text.NO_UI_CSS,
        starter_main_rs=text.SERVICE_MAIN_RS,
        starter_events_rs=text.SERVICE_EVENTS_RS,
        window=None,
        capabilities=_SERVICE_CAPABILITIES,
    ),
    ProjectTemplate(
        id=SHELL_APP_TEMPLATE_ID,
        name="Shell App",
        description="A command-oriented shell app separated from UI2 window composition.",
        app_kind=AppKind.SHELL,
        initial_html=text.NO_UI_HTML,
        initial_css=text.NO_UI_CSS,
        starter_main_rs=text.SHELL_MAIN_RS,
        starter_events_rs=text.SHELL_EVENTS_RS,
        window=None,
        capabilities=_SHELL_CAPABILITIES,
    ),
)


def available_project_templates() -> tuple[ProjectTemplate, ...]:
    """All templates, in catalogue order."""
    return _PROJECT_TEMPLATES


def find_project_template(template_id: str) -> Optional[ProjectTemplate]:
    """The template with the given id, or None."""
    return next((t for t in _PROJECT_TEMPLATES if t.id == template_id), None)


def default_project_template() -> ProjectTemplate:
    """The template used when none is chosen."""
    template = find_project_template(DEFAULT_PROJECT_TEMPLATE_ID)
    assert template is not None
    return template


def default_project_template_for_kind(app_kind: AppKind) -> ProjectTemplate:
    """The default template for a kind of app."""
    template_id = {
        AppKind.UI2: DEFAULT_PROJECT_TEMPLATE_ID,
        AppKind.SERVICE: SERVICE_APP_TEMPLATE_ID,
        AppKind.SHELL: SHELL_APP_TEMPLATE_ID,
    }[AppKind(app_kind)]
    template = find_project_template(template_id)
    assert template is not None
    return template