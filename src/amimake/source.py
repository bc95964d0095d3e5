"""
Reading build files and writing converted output.

Amiga build files are ISO-8859-1 text, so both directions use latin-1,
which maps every byte and never fails to decode.
"""

from pathlib import Path

from amimake.errors import (
    DestinationExistsError,
    DestinationUnwritableError,
    SourceUnreadableError,
)

ENCODING = "latin-1"


def read_lines(path: Path) -> list[str]:
    """Read a whole text file and return its lines without line endings."""
    path = Path(path)
    try:
        content = path.read_text(encoding=ENCODING)
    except FileNotFoundError:
        raise SourceUnreadableError(path, "file not found") from None
    except IsADirectoryError:
        raise SourceUnreadableError(path, "is a directory") from None
    except OSError as e:
        raise SourceUnreadableError(path, e.strerror or str(e)) from e
    return content.splitlines()


def destination_available(path: Path, force: bool = False) -> bool:
    """Check whether output may be written to path without clobbering a file."""
    path = Path(path)
    if path.is_dir():
        return False
    return force or not path.exists()


def write_bytes(path: Path, data: bytes, force: bool = False) -> Path:
    """
    Write data to path.

    Without force the file is created exclusively, so an existing file is
    never truncated.
    """
    path = Path(path)
    mode = "wb" if force else "xb"
    try:
        with open(path, mode) as f:
            f.write(data)
    except FileExistsError:
        raise DestinationExistsError(path) from None
    except OSError as e:
        raise DestinationUnwritableError(path, e.strerror or str(e)) from e
    return path


def encode(text: str) -> bytes:
    """Encode rendered text for writing, replacing unmappable characters."""
    return text.encode(ENCODING, errors="replace")
