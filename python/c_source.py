"""Helpers shared by the generators that write C source fragments."""

import os
import re
import tempfile

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def c_identifier(name):
    if not IDENTIFIER_RE.match(name):
        raise ValueError(f"not a valid C identifier: {name!r}")
    return name


def write_lines(path, lines):
    """Write lines to path, replacing it only once the full text is on disk.

    The text goes to a temporary file next to the destination first; if
    anything fails the temporary file is removed and the previous content of
    path (if any) is left as it was.
    """
    path = os.fspath(path)
    text = "\n".join(lines) + "\n"
    directory = os.path.dirname(os.path.abspath(path))

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
