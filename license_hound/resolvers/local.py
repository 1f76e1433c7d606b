"""Local source tree access for license resolution."""
from pathlib import Path
from typing import Callable

# Directory listing primitive: path -> filenames at the top level
ListDirectory = Callable[[Path], list[str]]
# File reading primitive: path -> raw bytes
ReadFile = Callable[[Path], bytes]

# Larger files are not license documents; read only this much
MAX_LICENSE_BYTES = 512 * 1024


def list_directory(path: Path) -> list[str]:
    """List regular files directly inside a directory.

    License files live at the root of a source tree, so subdirectories
    are not descended into.

    Args:
        path: Directory to list.

    Returns:
        Sorted filenames of regular files.

    Raises:
        NotADirectoryError: If the path exists but is not a directory.
        FileNotFoundError: If the path does not exist.
        OSError: If the directory cannot be listed.
    """
    return sorted(entry.name for entry in path.iterdir() if entry.is_file())


def read_file(path: Path) -> bytes:
    """Read up to MAX_LICENSE_BYTES from a file.

    Raises:
        OSError: If the file cannot be read.
    """
    with path.open("rb") as handle:
        return handle.read(MAX_LICENSE_BYTES)
