"""The bundled editor tutorial: load it, adapt its key bindings, install it."""

from __future__ import annotations

import os
import sys
from importlib import resources

TUTORIAL_PACKAGE = "seqsort.resources"
TUTORIAL_FILE = "tutorial.py"

HOSTS = ("vscode", "jetbrains")
PLATFORMS = ("mac", "other")

# JetBrains IDEs bind Chat to J because L is taken.
_JETBRAINS_KEYS = [
    ("[Cmd + L]", "[Cmd + J]"),
    ("[Cmd + Shift + L]", "[Cmd + Shift + J]"),
]
_NON_MAC_KEYS = [
    ("[Cmd + J]", "[Ctrl + J]"),
    ("[Cmd + Shift + J]", "[Ctrl + Shift + J]"),
    # VS Code Chat and Agent bindings; JetBrains text has no L bindings left by now.
    ("[Cmd + L]", "[Ctrl + L]"),
    ("[Cmd + Shift + L]", "[Ctrl + Shift + L]"),
    ("[Cmd + I]", "[Ctrl + I]"),
    ("⌘", "⌃"),
]


def detect_platform() -> str:
    return "mac" if sys.platform == "darwin" else "other"


def load_tutorial() -> str:
    try:
        return resources.files(TUTORIAL_PACKAGE).joinpath(TUTORIAL_FILE).read_text(encoding="utf-8")
    except (FileNotFoundError, ModuleNotFoundError) as e:
        raise FileNotFoundError(f"Resource not found: {TUTORIAL_PACKAGE}/{TUTORIAL_FILE}") from e


def render_tutorial(text: str, *, platform: str, host: str = "vscode") -> str:
    if platform not in PLATFORMS:
        raise ValueError(f"unknown platform {platform!r}; expected one of {', '.join(PLATFORMS)}")
    if host not in HOSTS:
        raise ValueError(f"unknown host {host!r}; expected one of {', '.join(HOSTS)}")

    if host == "jetbrains":
        for old, new in _JETBRAINS_KEYS:
            text = text.replace(old, new)
    if platform != "mac":
        for old, new in _NON_MAC_KEYS:
            text = text.replace(old, new)
    return text


def install_tutorial(dest_dir: str, *, platform: str | None = None, host: str = "vscode") -> str:
    """Write the rendered tutorial into ``dest_dir`` and return its path.

    An existing copy is overwritten so the user always gets bindings that
    match their current editor.
    """
    text = render_tutorial(load_tutorial(), platform=platform or detect_platform(), host=host)
    os.makedirs(dest_dir, exist_ok=True)
    path = os.path.join(dest_dir, TUTORIAL_FILE)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path
