"""File persistence helpers"""
import logging
import os
import tempfile

logger = logging.getLogger(__name__)


def write_text_atomic(file_path: str, text: str) -> None:
    """Write text so readers see either the old file or the complete new one.

    The target directory must already exist; a missing directory surfaces as
    ``FileNotFoundError`` and an unwritable one as ``PermissionError``.
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")

    fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".smartstay-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(temp_path, file_path)
    except Exception:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise

    logger.debug("Wrote %d characters to %s", len(text), file_path)


def read_text(file_path: str) -> str:
    with open(file_path, "r", encoding="utf-8") as handle:
        return handle.read()
