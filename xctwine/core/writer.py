"""Writing generated source files."""

import os
import stat
import tempfile
from pathlib import Path

from xctwine.exceptions import WriteFailureError, wrap_exception
from xctwine.utils.logging import get_logger

logger = get_logger(__name__)


def _target_mode(path: Path) -> int:
    """Mode of the existing destination, or 0o666 minus the umask for a new file."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_output(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` atomically.

    The content goes to a temporary file next to the destination which then
    replaces it, so ``path`` either keeps its previous content or holds the
    complete new file.

    Raises:
        WriteFailureError: If the file could not be written
    """
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates the file owner-only
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise wrap_exception(
            e,
            exception_class=WriteFailureError,
            path=str(path),
        ) from e
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)

    logger.info("output_written", path=str(path), size_bytes=len(data))
