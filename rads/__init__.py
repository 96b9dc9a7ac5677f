"""Project model, starter templates, source generation and file watching for UI2, service and shell apps."""

__version__ = "0.1.0"

__all__ = [
    "codegen",
    "model",
    "project_templates",
    "starter_text",
    "ui2_options",
    "watcher",
]