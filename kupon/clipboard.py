"""Copy coupon codes to the system clipboard using platform commands."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass

from .errors import ClipboardError
from .models import GeneratedCode

logger = logging.getLogger(__name__)


@dataclass
class ClipboardTool:
    name: str
    command: list[str]


# Tried in order; the first one found on PATH is used.
_TOOLS = [
    ClipboardTool("wl-copy", ["wl-copy"]),
    ClipboardTool("xclip", ["xclip", "-selection", "clipboard"]),
    ClipboardTool("xsel", ["xsel", "--clipboard", "--input"]),
    ClipboardTool("pbcopy", ["pbcopy"]),
    ClipboardTool("clip", ["clip"]),
]


class Clipboard:
    """Write text to the clipboard through an external command."""

    @staticmethod
    def find_tool() -> ClipboardTool | None:
        for tool in _TOOLS:
            if shutil.which(tool.name) is not None:
                return tool
        return None

    @staticmethod
    def copy(text: str) -> None:
        """Copy text to the clipboard.

        Raises:
            ClipboardError: If no clipboard command is available or it fails.
        """
        tool = Clipboard.find_tool()
        if tool is None:
            raise ClipboardError(
                "Perintah clipboard tidak ditemukan. Pasang salah satu dari: "
                + ", ".join(t.name for t in _TOOLS)
            )

        try:
            result = subprocess.run(
                tool.command,
                input=text,
                capture_output=True,
                text=True,
                timeout=5,
            )
        except subprocess.TimeoutExpired:
            raise ClipboardError(f"{tool.name} tidak merespons.") from None
        except OSError as e:
            raise ClipboardError(f"Gagal menjalankan {tool.name}: {e}") from e

        if result.returncode != 0:
            raise ClipboardError(
                f"Gagal menyalin ke clipboard: {result.stderr.strip()}"
            )


def copy_code(code: GeneratedCode) -> bool:
    """Copy the product code of an issued coupon.

    Failures are logged and reported as ``False``; they are never fatal.
    """
    try:
        Clipboard.copy(code.food_item.code)
    except ClipboardError as e:
        logger.warning("Gagal menyalin kode %s: %s", code.food_item.code, e)
        return False
    return True
