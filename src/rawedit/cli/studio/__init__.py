"""Interactive terminal applications."""

from rawedit.cli.studio.editor import EditorApp, run_editor
from rawedit.cli.studio.keys import KeyEchoApp, run_key_probe

__all__ = ["EditorApp", "run_editor", "KeyEchoApp", "run_key_probe"]
