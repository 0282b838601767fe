"""Path and filename utilities.

Provides the helpers used to turn file system paths into strings that can
be embedded in LaTeX documents, and the checks applied to input paths.
"""

from __future__ import annotations

from pathlib import Path


class PathEncodingFailure(Exception):
    """Path cannot be canonicalized or is not valid UTF-8."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def canonical_path_str(path: str | Path) -> str:
    """Return the canonical, UTF-8 encodable form of an existing path.

    LaTeX `\\includegraphics` and `\\input` resolve relative paths against
    the compiler's working directory, so every path written into a
    document is made absolute first.

    Args:
        path: Path to an existing file.

    Returns:
        Absolute path with symlinks resolved.

    Raises:
        PathEncodingFailure: If the path does not exist or cannot be
            encoded as UTF-8.

    Examples:
        >>> canonical_path_str("photos/../photos/a.jpg")
        '/home/me/photos/a.jpg'
    """
    path = Path(path)
    try:
        resolved = path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise PathEncodingFailure(path, f"canonicalize failed ({e})") from e

    text = str(resolved)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathEncodingFailure(path, "utf-8 failed") from e
    return text


def has_space(path: str | Path) -> bool:
    """Check whether a path contains a space anywhere.

    Examples:
        >>> has_space("holidays/day 1.jpg")
        True
        >>> has_space(Path("holidays/day_1.jpg"))
        False
    """
    return " " in str(path)
