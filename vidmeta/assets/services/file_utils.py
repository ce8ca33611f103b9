import contextlib
import logging
import os


def get_size_bytes(path: str) -> int | None:
    """Size of the file at ``path``, or None if it cannot be stat'ed."""
    with contextlib.suppress(OSError):
        return os.stat(path).st_size
    logging.debug("could not stat %s, size left unset", path)
    return None
