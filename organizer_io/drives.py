import os
import string
import sys

DRIVE_REMOVABLE = 2

LINUX_MEDIA_ROOTS = ("/media/", "/run/media/")


def _windows_removable_drives() -> list[str]:
    import ctypes
    from ctypes import wintypes

    kernel32 = ctypes.windll.kernel32
    kernel32.GetDriveTypeW.argtypes = [wintypes.LPCWSTR]
    kernel32.GetDriveTypeW.restype = wintypes.UINT

    mask = int(kernel32.GetLogicalDrives())
    out = []
    for i, letter in enumerate(string.ascii_uppercase):
        if not mask & (1 << i):
            continue
        root = f"{letter}:\\"
        if kernel32.GetDriveTypeW(root) == DRIVE_REMOVABLE and os.path.exists(root):
            out.append(root)
    return out


def _unescape_mount(s: str) -> str:
    # /proc/mounts escapes space, tab, newline and backslash as octal
    return (
        s.replace("\\040", " ")
        .replace("\\011", "\t")
        .replace("\\012", "\n")
        .replace("\\134", "\\")
    )


def parse_media_mounts(mounts_text: str) -> list[str]:
    out = []
    for line in mounts_text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        mnt = _unescape_mount(parts[1])
        if mnt.startswith(LINUX_MEDIA_ROOTS):
            out.append(mnt.rstrip("/") + "/")
    return out


def _linux_removable_drives(mounts_path: str = "/proc/mounts") -> list[str]:
    try:
        with open(mounts_path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError:
        return []
    return [m for m in parse_media_mounts(text) if os.path.isdir(m)]


def _macos_removable_drives(volumes: str = "/Volumes") -> list[str]:
    try:
        names = sorted(os.listdir(volumes))
    except OSError:
        return []
    out = []
    for n in names:
        full = os.path.join(volumes, n)
        # the boot volume shows up as a symlink to /
        if os.path.realpath(full) == "/":
            continue
        if os.path.isdir(full):
            out.append(full + "/")
    return out


def removable_drives() -> list[str]:
    """Roots of ready removable drives, in OS order."""
    if sys.platform == "win32":
        return _windows_removable_drives()
    if sys.platform == "darwin":
        return _macos_removable_drives()
    return _linux_removable_drives()


def find_removable_drive() -> str | None:
    drives = removable_drives()
    return drives[0] if drives else None
