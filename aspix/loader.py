#!/usr/bin/env python3
# aspix/loader.py
"""
Image decoding and text output for aspix.

- Decoding is delegated to Pillow (JPEG, PNG, GIF, BMP and the rest of its plugins).
- Reads are a single open/read/close of the whole file.
- Writes go to a temp file next to the real target and are moved into place,
  so a failed write never leaves partial output behind. Symlinks are followed
  and the replaced file keeps its permissions.
"""

from __future__ import annotations
import io, os, stat, tempfile, logging
from typing import Union

from PIL import Image, UnidentifiedImageError

from aspix.errors import DecodeError, IoError

__all__ = ["decode_bytes", "read_image", "write_text"]

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def decode_bytes(data: bytes) -> Image.Image:
    """
    Decode an in-memory image.
    Raises DecodeError for anything Pillow cannot fully decode.
    """
    if not data:
        raise DecodeError("no image data")
    try:
        img = Image.open(io.BytesIO(data))
        # open() is lazy; force the pixel data so truncation shows up here
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise DecodeError(f"unsupported or unsafe image data: {e}") from e
    except (OSError, SyntaxError, ValueError, EOFError) as e:
        raise DecodeError(f"corrupt image data: {e}") from e

    if img.width == 0 or img.height == 0:
        raise DecodeError(f"image has no pixels ({img.width}x{img.height})")
    log.debug("Decoded %s image %dx%d mode=%s", img.format, img.width, img.height, img.mode)
    return img


def read_image(path: PathLike) -> Image.Image:
    """Read an image file and decode it."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise IoError(f"cannot read {os.fspath(path)}: {e.strerror or e}", os.fspath(path)) from e
    log.debug("Read %d bytes from %s", len(data), os.fspath(path))
    return decode_bytes(data)


def _new_file_mode() -> int:
    # umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def write_text(text: str, path: PathLike) -> None:
    """
    Write text to path as UTF-8, replacing any existing file.
    The parent directory must already exist. An existing file must be writable.
    """
    target = os.fspath(path)
    real = os.path.realpath(target)
    try:
        st = os.stat(real)
    except FileNotFoundError:
        mode = _new_file_mode()
    except OSError as e:
        raise IoError(f"cannot write {target}: {e.strerror or e}", target) from e
    else:
        if stat.S_ISDIR(st.st_mode):
            raise IoError(f"cannot write {target}: is a directory", target)
        if not os.access(real, os.W_OK):
            raise IoError(f"cannot write {target}: permission denied", target)
        mode = stat.S_IMODE(st.st_mode)

    try:
        fd, tmp = tempfile.mkstemp(prefix=".tmp_aspix_", dir=os.path.dirname(real))
    except OSError as e:
        raise IoError(f"cannot write {target}: {e.strerror or e}", target) from e
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.chmod(tmp, mode)
        os.replace(tmp, real)
    except OSError as e:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise IoError(f"cannot write {target}: {e.strerror or e}", target) from e
    log.debug("Wrote %d characters to %s", len(text), real)
