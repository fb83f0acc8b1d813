import os
import re
import string

from domain.constants import INVALID_PATH_CHARS, MAX_PATH_LEN, RESERVED_NAMES

_SEP_RUN = re.compile(r"[\\/]+")


def _has_drive_letter(path: str) -> bool:
    return len(path) >= 2 and path[1] == ":" and path[0] in string.ascii_letters


def is_valid_folder_path(path: str | None) -> bool:
    """Cheap syntactic check of a user-entered folder path.

    Rules:
    - blank input is invalid
    - none of : * ? " < > | may appear, except the colon of a leading
      drive letter (e.g. "C:")
    - at most 260 characters
    - the last component must not be a reserved device name (CON, NUL,
      COM1 ...), compared case-insensitively
    """
    if not path or not path.strip():
        return False

    p = path.strip()
    drive = _has_drive_letter(p)

    for i, c in enumerate(p):
        if c not in INVALID_PATH_CHARS:
            continue
        if c == ":" and i == 1 and drive:
            continue
        return False

    if len(p) > MAX_PATH_LEN:
        return False

    name = last_component(p)
    if name.upper() in RESERVED_NAMES:
        return False

    return True


def last_component(path: str) -> str:
    parts = [x for x in _SEP_RUN.split(path.strip()) if x]
    return parts[-1] if parts else ""


def fix_source_folder_path(path: str, on_error=None) -> str:
    """Trim, unify separators and resolve to an absolute path.

    on_error(msg) is called if the path can't be resolved; the
    separator-normalized string is returned in that case.
    """
    p = (path or "").strip()
    p = _SEP_RUN.sub(lambda m: os.sep, p)

    try:
        return os.path.abspath(p)
    except (ValueError, OSError):
        if on_error:
            on_error("Invalid path detected.")
        return p


def ext_of(filename: str) -> str:
    return os.path.splitext(filename)[1].lower().lstrip(".")


def is_allowed(filename: str, allowed) -> bool:
    return ext_of(filename) in allowed


def folder_for(filename: str, ext_folders: dict) -> str | None:
    """Subfolder name the organizer routes this file to, or None."""
    return ext_folders.get(ext_of(filename))


def same_or_inside(path: str, root: str) -> bool:
    p = os.path.normcase(os.path.abspath(path))
    r = os.path.normcase(os.path.abspath(root))
    if p == r:
        return True
    return p.startswith(r.rstrip(os.sep) + os.sep)


def resolve_collision(dest_folder: str, filename: str) -> tuple[str, int]:
    """Returns (new_filename, suffix_num). suffix_num 0 means no change.

    Collision policy: (1), (2)...
    """

    base, ext = os.path.splitext(filename)
    candidate = filename
    n = 0
    while os.path.exists(os.path.join(dest_folder, candidate)):
        n += 1
        candidate = f"{base} ({n}){ext}"

    return candidate, n
