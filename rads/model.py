"""Project, window and control model of a RADS app project."""

from __future__ import annotations

import unicodedata
import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from rads.ui2_options import Ui2HtmlCssDescription, Ui2WindowOptions

MAX_PROJECT_NAME_LEN = 80
MAX_PROJECT_SLUG_LEN = 64
GENERATOR_NAME = "trueos-rads"
GENERATOR_VERSION = "0.1.0"
SCHEMA_VERSION = "0.1"

_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

_RESERVED_NAMES = frozenset(
    [".", "..", "con", "prn", "aux", "nul"]
    + [f"com{n}" for n in range(1, 10)]
    + [f"lpt{n}" for n in range(1, 10)]
)


class AppKind(str, Enum):
    """The kind of app a project builds."""

    UI2 = "ui2"
    SERVICE = "service"
    SHELL = "shell"

    def label(self) -> str:
        return {
            AppKind.UI2: "UI2 App",
            AppKind.SERVICE: "Background Service",
            AppKind.SHELL: "Shell App",
        }[self]

    def runtime(self) -> str:
        return {
            AppKind.UI2: "TRUEOS/UI2",
            AppKind.SERVICE: "TRUEOS/service",
            AppKind.SHELL: "TRUEOS/shell",
        }[self]

    def package_target(self) -> str:
        return {
            AppKind.UI2: "trueos-ui2",
            AppKind.SERVICE: "trueos-service",
            AppKind.SHELL: "trueos-shell",
        }[self]

    def has_ui2(self) -> bool:
        return self is AppKind.UI2


class WindowDecorationMode(str, Enum):
    """Who draws the decorations of a window."""

    SYSTEM = "system"
    CLIENT = "client"
    NONE = "none"

    def vui2_variant(self) -> str:
        return self.value.capitalize()

    @classmethod
    def options(cls) -> list[str]:
        return [member.value for member in cls]


class ControlKind(str, Enum):
    """The kinds of control that can be placed on a UI2 window."""

    BUTTON = "button"
    LABEL = "label"
    TEXT_BOX = "text-box"
    CHECK_BOX = "check-box"
    PANEL = "panel"
    LIST_BOX = "list-box"
    CANVAS = "canvas"
    MENU = "menu"
    TOOLBAR = "toolbar"


@dataclass
class Rect:
    """Position and size of a window or control."""

    x: int
    y: int
    w: int
    h: int

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Rect":
        return cls(x=int(data["x"]), y=int(data["y"]), w=int(data["w"]), h=int(data["h"]))


@dataclass
class Property:
    """A key/value property of a control."""

    key: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Property":
        return cls(key=data["key"], value=data["value"])


@dataclass
class EventBinding:
    """Binds a control event to a handler function name."""

    event: str
    handler: str

    def to_dict(self) -> dict[str, Any]:
        return {"event": self.event, "handler": self.handler}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EventBinding":
        return cls(event=data["event"], handler=data["handler"])


@dataclass
class Capability:
    """A capability an app requests, with whether it is enabled."""

    key: str
    enabled: bool
    note: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "enabled": self.enabled, "note": self.note}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Capability":
        return cls(key=data["key"], enabled=bool(data["enabled"]), note=data["note"])


@dataclass
class BlueprintMetadata:
    """Generator information recorded in blueprints."""

    generator: str
    generator_version: str
    ui_runtime: str
    schema_version: str

    @classmethod
    def default(cls, app_kind: AppKind) -> "BlueprintMetadata":
        return cls(
            generator=GENERATOR_NAME,
            generator_version=GENERATOR_VERSION,
            ui_runtime=AppKind(app_kind).runtime(),
            schema_version=SCHEMA_VERSION,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "generator": self.generator,
            "generator_version": self.generator_version,
            "ui_runtime": self.ui_runtime,
            "schema_version": self.schema_version,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BlueprintMetadata":
        return cls(
            generator=data["generator"],
            generator_version=data["generator_version"],
            ui_runtime=data["ui_runtime"],
            schema_version=data["schema_version"],
        )


@dataclass
class PackageArtifact:
    """A file produced by packaging, with its target."""

    kind: str
    path: str
    target: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "path": self.path, "target": self.target}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PackageArtifact":
        return cls(kind=data["kind"], path=data["path"], target=data["target"])


@dataclass
class AppBlueprint:
    """App metadata and capabilities."""

    schema: str
    app_id: str
    slug: str
    display_name: str
    version: str
    entrypoint: str
    ui_layout: str
    description: str
    license: str
    authors: list[str]
    capabilities: list[Capability]
    metadata: BlueprintMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema": self.schema,
            "app_id": self.app_id,
            "slug": self.slug,
            "display_name": self.display_name,
            "version": self.version,
            "entrypoint": self.entrypoint,
            "ui_layout": self.ui_layout,
            "description": self.description,
            "license": self.license,
            "authors": list(self.authors),
            "capabilities": [capability.to_dict() for capability in self.capabilities],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppBlueprint":
        return cls(
            schema=data["schema"],
            app_id=data["app_id"],
            slug=data["slug"],
            display_name=data["display_name"],
            version=data["version"],
            entrypoint=data["entrypoint"],
            ui_layout=data["ui_layout"],
            description=data["description"],
            license=data["license"],
            authors=list(data["authors"]),
            capabilities=[Capability.from_dict(item) for item in data["capabilities"]],
            metadata=BlueprintMetadata.from_dict(data["metadata"]),
        )


@dataclass
class PackageBlueprint:
    """Package metadata and output artifacts."""

    schema: str
    package_id: str
    app_id: str
    name: str
    version: str
    entrypoint: str
    artifacts: list[PackageArtifact]
    metadata: BlueprintMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema": self.schema,
            "package_id": self.package_id,
            "app_id": self.app_id,
            "name": self.name,
            "version": self.version,
            "entrypoint": self.entrypoint,
            "artifacts": [artifact.to_dict() for artifact in self.artifacts],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PackageBlueprint":
        return cls(
            schema=data["schema"],
            package_id=data["package_id"],
            app_id=data["app_id"],
            name=data["name"],
            version=data["version"],
            entrypoint=data["entrypoint"],
            artifacts=[PackageArtifact.from_dict(item) for item in data["artifacts"]],
            metadata=BlueprintMetadata.from_dict(data["metadata"]),
        )


_DECORATION_FLAG_NAMES = (
    ("titlebar", "titlebar"),
    ("bottom_bar", "bottom-bar"),
    ("title_icon", "title-icon"),
    ("toggle_composition", "toggle-composition"),
    ("fork", "fork"),
    ("close", "close"),
    ("minimize", "minimize"),
    ("restore", "restore"),
    ("maximize", "maximize"),
    ("preserve_vm", "preserve-vm"),
    ("resizable", "resizable"),
    ("resize_button", "resize-button"),
    ("rotate_buttons", "rotate-buttons"),
    ("always_on_top", "always-on-top"),
)


@dataclass
class WindowDecorations:
    """Decoration mode and the buttons and bars a window shows."""

    mode: WindowDecorationMode = WindowDecorationMode.SYSTEM
    titlebar: bool = True
    bottom_bar: bool = True
    title_icon: bool = True
    toggle_composition: bool = True
    fork: bool = True
    close: bool = True
    minimize: bool = True
    restore: bool = True
    maximize: bool = True
    preserve_vm: bool = True
    resizable: bool = True
    resize_button: bool = True
    rotate_buttons: bool = False
    always_on_top: bool = False

    def to_flags(self) -> list[str]:
        flags = [] if self.mode is WindowDecorationMode.SYSTEM else [self.mode.value]
        flags.extend(flag for attr, flag in _DECORATION_FLAG_NAMES if getattr(self, attr))
        return flags

    def to_ui2_literal(self) -> str:
        parts = [f"mode: {self.mode.value}"]
        parts.extend(
            f"{attr}: {'true' if getattr(self, attr) else 'false'}"
            for attr, _ in _DECORATION_FLAG_NAMES
        )
        return "{ " + ", ".join(parts) + " }"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"mode": self.mode.value}
        data.update((attr, getattr(self, attr)) for attr, _ in _DECORATION_FLAG_NAMES)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WindowDecorations":
        defaults = cls()
        values = {
            attr: bool(data.get(attr, getattr(defaults, attr)))
            for attr, _ in _DECORATION_FLAG_NAMES
        }
        return cls(mode=WindowDecorationMode(data.get("mode", defaults.mode.value)), **values)


_DEFAULT_PROPERTIES = {
    ControlKind.BUTTON: ("variant", "primary"),
    ControlKind.LABEL: ("role", "heading"),
    ControlKind.TEXT_BOX: ("placeholder", "Type here"),
    ControlKind.CHECK_BOX: ("checked", "false"),
    ControlKind.PANEL: ("padding", "16"),
    ControlKind.LIST_BOX: ("items", "One,Two,Three"),
    ControlKind.CANVAS: ("surface", "software"),
    ControlKind.MENU: ("items", "File,Edit,View"),
    ControlKind.TOOLBAR: ("dock", "top"),
}

_DEFAULT_EVENTS = {
    ControlKind.BUTTON: "click",
    ControlKind.CHECK_BOX: "click",
    ControlKind.TEXT_BOX: "change",
    ControlKind.LIST_BOX: "select",
    ControlKind.CANVAS: "draw",
}


@dataclass
class Ui2Control:
    """A control placed on a UI2 window."""

    id: uuid.UUID
    kind: ControlKind
    name: str
    caption: str
    geometry: Rect
    properties: list[Property]
    events: list[EventBinding]

    @classmethod
    def create(
        cls, kind: ControlKind, name: str, caption: str, x: int, y: int, w: int, h: int
    ) -> "Ui2Control":
        kind = ControlKind(kind)
        event_name = _DEFAULT_EVENTS.get(kind, "ready")
        key, value = _DEFAULT_PROPERTIES[kind]
        return cls(
            id=uuid.uuid4(),
            kind=kind,
            name=name,
            caption=caption,
            geometry=Rect(x, y, w, h),
            properties=[Property(key, value)],
            events=[EventBinding(event_name, event_handler_name(name, event_name))],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "kind": self.kind.value,
            "name": self.name,
            "caption": self.caption,
            "geometry": self.geometry.to_dict(),
            "properties": [prop.to_dict() for prop in self.properties],
            "events": [event.to_dict() for event in self.events],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ui2Control":
        return cls(
            id=uuid.UUID(str(data["id"])),
            kind=ControlKind(data["kind"]),
            name=data["name"],
            caption=data["caption"],
            geometry=Rect.from_dict(data["geometry"]),
            properties=[Property.from_dict(item) for item in data["properties"]],
            events=[EventBinding.from_dict(item) for item in data["events"]],
        )


@dataclass
class Ui2Window:
    """A UI2 window with its decorations, options, description and controls."""

    id: uuid.UUID
    name: str
    caption: str
    geometry: Rect
    decorations: WindowDecorations = field(default_factory=WindowDecorations)
    options: Ui2WindowOptions = field(default_factory=Ui2WindowOptions)
    ui_description: Ui2HtmlCssDescription = field(default_factory=Ui2HtmlCssDescription)
    controls: list[Ui2Control] = field(default_factory=list)
    title_twemoji: Optional[str] = None

    @classmethod
    def main_window(cls, app_name: str) -> "Ui2Window":
        window = cls.named_window("MainWindow", app_name, 80, 80, 720, 460)
        window.controls = [
            Ui2Control.create(ControlKind.LABEL, "titleLabel", "TRUEOS UI2 app", 32, 34, 220, 28),
            Ui2Control.create(ControlKind.BUTTON, "runButton", "Click me", 32, 86, 128, 38),
        ]
        return window

    @classmethod
    def named_window(
        cls, name: str, caption: str, x: int, y: int, w: int, h: int
    ) -> "Ui2Window":
        return cls(id=uuid.uuid4(), name=name, caption=caption, geometry=Rect(x, y, w, h))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": str(self.id), "name": self.name, "caption": self.caption}
        if self.title_twemoji is not None:
            data["title_twemoji"] = self.title_twemoji
        data.update(
            geometry=self.geometry.to_dict(),
            decorations=self.decorations.to_dict(),
            options=self.options.to_dict(),
            ui_description=self.ui_description.to_dict(),
            controls=[control.to_dict() for control in self.controls],
        )
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ui2Window":
        options = data.get("options")
        description = data.get("ui_description")
        return cls(
            id=uuid.UUID(str(data["id"])),
            name=data["name"],
            caption=data["caption"],
            title_twemoji=data.get("title_twemoji"),
            geometry=Rect.from_dict(data["geometry"]),
            decorations=WindowDecorations.from_dict(data["decorations"]),
            options=(
                Ui2WindowOptions.from_dict(options) if options is not None else Ui2WindowOptions()
            ),
            ui_description=(
                Ui2HtmlCssDescription.from_dict(description)
                if description is not None
                else Ui2HtmlCssDescription()
            ),
            controls=[Ui2Control.from_dict(item) for item in data["controls"]],
        )


@dataclass(frozen=True)
class ValidProjectName:
    """A validated display name together with its filesystem slug."""

    display: str
    slug: str


class ProjectNameErrorKind(Enum):
    """Reasons a project name is rejected."""

    EMPTY = "empty"
    TOO_LONG = "too-long"
    CONTAINS_PATH_SEPARATOR = "contains-path-separator"
    CONTAINS_CONTROL_CHARACTER = "contains-control-character"
    NO_SLUG = "no-slug"
    RESERVED_NAME = "reserved-name"


class ProjectNameError(ValueError):
    """Raised when a project name cannot be used."""

    def __init__(self, kind: ProjectNameErrorKind, max_len: Optional[int] = None) -> None:
        self.kind = kind
        self.max = max_len
        super().__init__(self._message())

    def _message(self) -> str:
        kind = ProjectNameErrorKind
        if self.kind is kind.EMPTY:
            return "project name cannot be empty"
        if self.kind is kind.TOO_LONG:
            return f"project name must be {self.max} characters or fewer"
        if self.kind is kind.CONTAINS_PATH_SEPARATOR:
            return "project name cannot contain path separators"
        if self.kind is kind.CONTAINS_CONTROL_CHARACTER:
            return "project name cannot contain control characters"
        if self.kind is kind.NO_SLUG:
            return "project name must contain at least one ASCII letter or number"
        return "project name is reserved by the filesystem"


@dataclass
class RadsProject:
    """A RADS project: blueprints, package description and windows."""

    id: uuid.UUID
    name: str
    slug: str
    root: Path
    blueprint: AppBlueprint
    package: PackageBlueprint
    windows: list[Ui2Window]
    app_kind: AppKind = AppKind.UI2

    @classmethod
    def starter(cls, name: str, root: Path | str) -> "RadsProject":
        return cls.from_valid_name(validate_project_name(name), root)

    @classmethod
    def from_valid_name(cls, name: ValidProjectName, root: Path | str) -> "RadsProject":
        metadata = BlueprintMetadata.default(AppKind.UI2)
        app_id = f"dev.trueos.{name.slug}"
        main_window = Ui2Window.main_window(name.display)
        main_window.controls.append(
            Ui2Control.create(ControlKind.TEXT_BOX, "inputText", "Type here", 32, 144, 260, 34)
        )
        blueprint = AppBlueprint(
            schema="trueos.app.blueprint/v1",
            app_id=app_id,
            slug=name.slug,
            display_name=name.display,
            version="0.1.0",
            entrypoint="src/main.rs",
            ui_layout="ui/main.ui2",
            description=f"{name.display} generated with TRUEOS RADS.",
            license="MIT OR Apache-2.0",
            authors=["TRUEOS RADS"],
            capabilities=[
                Capability("ui2.window", True, "Create and manage UI2 windows"),
                Capability("ui2.events", True, "Bind generated UI2 event handlers"),
                Capability("fs.user", False, "Read and write user-selected files"),
                Capability("net.client", False, "Open outbound network connections"),
            ],
            metadata=BlueprintMetadata(**metadata.to_dict()),
        )
        package = PackageBlueprint(
            schema="trueos.package.blueprint/v1",
            package_id=f"{app_id}.package",
            app_id=app_id,
            name=name.slug,
            version="0.1.0",
            entrypoint="src/main.rs",
            artifacts=[
                PackageArtifact("binary", "target/trueos/app.tapp", "trueos-ui2"),
                PackageArtifact("layout", "ui/main.ui2", "ui2-layout"),
            ],
            metadata=metadata,
        )
        return cls(
            id=uuid.uuid4(),
            name=name.display,
            slug=name.slug,
            root=Path(root),
            app_kind=AppKind.UI2,
            blueprint=blueprint,
            package=package,
            windows=[main_window],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "root": str(self.root),
            "app_kind": self.app_kind.value,
            "blueprint": self.blueprint.to_dict(),
            "package": self.package.to_dict(),
            "windows": [window.to_dict() for window in self.windows],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RadsProject":
        return cls(
            id=uuid.UUID(str(data["id"])),
            name=data["name"],
            slug=data["slug"],
            root=Path(data["root"]),
            app_kind=AppKind(data.get("app_kind", AppKind.UI2.value)),
            blueprint=AppBlueprint.from_dict(data["blueprint"]),
            package=PackageBlueprint.from_dict(data["package"]),
            windows=[Ui2Window.from_dict(item) for item in data["windows"]],
        )


def _is_ascii_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def validate_project_name(text: str) -> ValidProjectName:
    """Validate a project name and derive its slug; raise ProjectNameError if unusable."""
    display = text.strip(_WHITESPACE)
    if not display:
        raise ProjectNameError(ProjectNameErrorKind.EMPTY)
    if len(display) > MAX_PROJECT_NAME_LEN:
        raise ProjectNameError(ProjectNameErrorKind.TOO_LONG, MAX_PROJECT_NAME_LEN)
    if "/" in display or "\\" in display:
        raise ProjectNameError(ProjectNameErrorKind.CONTAINS_PATH_SEPARATOR)
    if any(unicodedata.category(ch) == "Cc" for ch in display):
        raise ProjectNameError(ProjectNameErrorKind.CONTAINS_CONTROL_CHARACTER)
    slug = slugify(display)
    if not slug:
        raise ProjectNameError(ProjectNameErrorKind.NO_SLUG)
    if slug in _RESERVED_NAMES:
        raise ProjectNameError(ProjectNameErrorKind.RESERVED_NAME)
    return ValidProjectName(display=display, slug=slug)


def slugify(text: str) -> str:
    """Lower-case ASCII slug with single dashes, at most MAX_PROJECT_SLUG_LEN long."""
    out: list[str] = []
    last_dash = False
    for ch in text.lower():
        if _is_ascii_alnum(ch):
            if len(out) >= MAX_PROJECT_SLUG_LEN:
                break
            out.append(ch)
            last_dash = False
        elif not last_dash and out and len(out) < MAX_PROJECT_SLUG_LEN:
            out.append("-")
            last_dash = True
    return "".join(out).strip("-")


def _identifier_fragment(text: str) -> str:
    out: list[str] = []
    previous_was_separator = False
    for ch in text:
        if _is_ascii_alnum(ch):
            if ch.isupper() and out and not previous_was_separator:
                out.append("_")
            out.append(ch.lower())
            previous_was_separator = False
        elif out and not previous_was_separator:
            out.append("_")
            previous_was_separator = True
    trimmed = "".join(out).strip("_")
    if not trimmed:
        return "control"
    if trimmed[0].isdigit():
        return f"c_{trimmed}"
    return trimmed


def event_handler_name(control_name: str, event_name: str) -> str:
    """Name of the generated handler function for a control event."""
    return f"on_{_identifier_fragment(control_name)}_{_identifier_fragment(event_name)}"