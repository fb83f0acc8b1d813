import os
import stat


def ensure_parent(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def is_existing_dir(path: str | None, on_error=None) -> bool:
    """True if path names an existing directory.

    A dangling symlink is not a directory. Lookup errors are reported through
    on_error(msg) and count as "does not exist".
    """
    if not path or not path.strip():
        return False
    try:
        st = os.stat(os.path.abspath(path.strip()))
    except (FileNotFoundError, NotADirectoryError):
        return False
    except (OSError, ValueError) as e:
        if on_error:
            on_error(f"Error checking directory: {e}")
        return False
    return stat.S_ISDIR(st.st_mode)
