# rads

A project model, starter templates and source generation for UI2 apps,
background services and shell apps. It also has a file watcher for project
directories.

## Install

```sh
pip install .
```

To run the test suite:

```sh
pip install ".[test]"
pytest
```

## Project names

A project name is checked before a project is built. A valid name gives a
display name and a slug that is safe to use as a file name:

```python
from rads.model import validate_project_name, ProjectNameError

name = validate_project_name("  Hello, UI2 App!  ")
print(name.display)  # "Hello, UI2 App!"
print(name.slug)     # "hello-ui2-app"

try:
    validate_project_name("../escape")
except ProjectNameError as err:
    print(err.kind)  # ProjectNameErrorKind.CONTAINS_PATH_SEPARATOR
    print(err)       # project name cannot contain path separators
```

A name is rejected when it is empty, longer than 80 characters, or contains a
path separator or a control character. It is also rejected when its slug is
empty or is a reserved device name such as `con` or `lpt1`. Slugs are at most
64 characters long. `slugify` and `event_handler_name` are also available on
their own.

## Building a project from a template

```python
from rads.project_templates import available_project_templates, find_project_template

for template in available_project_templates():
    print(template.id, "-", template.description)

template = find_project_template("canvas-app")
project = template.build_project(name, "/tmp/hello-ui2-app")
print(project.blueprint.app_id)  # "dev.trueos.hello-ui2-app"
```

The templates are `blank-ui2`, `form-app` (the default, returned by
`default_project_template()`), `canvas-app`, `tool-window`, `service-app` and
`shell-app`. `default_project_template_for_kind(app_kind)` gives the default
template for an `AppKind`. The service and shell templates build projects with
no UI2 windows and an empty `ui_layout`. `find_project_template` returns
`None` for an unknown id.

`RadsProject.starter(name, root)` builds the form starter directly from a name
string. It raises `ProjectNameError` if the name is invalid.

## Generating sources

`rads.codegen` renders the text of each generated file from a project model.
It returns strings:

```python
from rads import codegen

toml = codegen.cargo_toml(project)        # Cargo.toml
main = codegen.main_rs(project)           # src/main.rs
ui = codegen.ui_rs(project)               # src/ui.rs
events = codegen.events_rs(project)       # src/events.rs, one stub per handler
layout = codegen.ui2_layout(project)      # ui/main.ui2
manifest = codegen.package_manifest(project)
readme = codegen.readme(project)
```

There are also variants that take a template: `main_rs_for_template`,
`events_rs_for_template` and `readme_for_template`. `html`, `css`,
`html_for_window` and `css_for_window` return a window's own HTML/CSS
description. When that description is blank they fall back to the template's
starter markup. `window_to_ui2_snippet`, `control_to_ui2_snippet` and
`window_file_stem` render single windows and controls.

## Serialisation

The model dataclasses (`RadsProject`, `AppBlueprint`, `PackageBlueprint`,
`Ui2Window`, `Ui2Control`, `WindowDecorations`, `Rect` and the others) and the
option classes in `rads.ui2_options` have `to_dict()` and `from_dict()`. These
convert to and from plain JSON-ready dictionaries. If window data has no
`options` or `ui_description`, or leaves out decoration fields, the defaults
are filled in.

## Watching project files

```python
from rads.watcher import watch_project_files

observer = watch_project_files("/tmp/hello-ui2-app", print)
# ... later
observer.stop()
observer.join()
```

The callback receives a `ProjectFileEvent` for each create, modify, move or
delete. Its paths are relative to the project root. Changes under `.git`,
`target`, `dist`, `package`, `node_modules` or `.DS_Store` are ignored.
`build_project_file_event` and `is_ignored_path` apply the same filtering
without a running watcher.

## What this package does not do

- It does not write a project to disk. The caller saves the strings from
  `rads.codegen` and the dictionaries from `to_dict()`.
- It has no web server, designer screen or command-line tool.
- It does not run builds, checks or packaging jobs, and the watcher only
  reports file changes.