import os
import shutil

from organizer_io.hash_stream import hash_file
from organizer_io.path_utils import ensure_parent


def copy_stream(src: str, dst: str, chunk_size: int = 1024 * 1024) -> int:
    """Copy src over dst (overwriting), keep timestamps. Returns bytes copied."""
    if os.path.exists(dst) and os.path.samefile(src, dst):
        raise shutil.SameFileError(f"{src} and {dst} are the same file")
    ensure_parent(dst)
    copied = 0
    with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
        while True:
            buf = fsrc.read(chunk_size)
            if not buf:
                break
            fdst.write(buf)
            copied += len(buf)
    shutil.copystat(src, dst, follow_symlinks=False)
    return copied


class VerifyError(Exception):
    pass


def copy_verified(src: str, dst: str, verify: bool = False) -> int:
    n = copy_stream(src, dst)
    if verify and hash_file(src) != hash_file(dst):
        raise VerifyError(f"hash mismatch after copy: {dst}")
    return n
