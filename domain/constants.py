import os

# Extensions eligible for the mirrored copy (lowercase, no dot)
ALLOWED_EXTS = ("txt", "jpg", "png")

# Organizer routing: extension -> subfolder of the target root
EXT_FOLDERS = {
    "txt": "text_files",
    "png": "PNG_files",
    "jpg": "JPG_files",
}

INVALID_PATH_CHARS = frozenset(':*?"<>|')

MAX_PATH_LEN = 260

RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

DEFAULT_TARGET_ROOT = os.path.join(os.path.expanduser("~"), "Desktop", "target_folder")

MAX_EXPORT_SLOTS = 1000

END_COMMAND = "end"

MODE_ACTIVE = 1
MODE_DRY = 2

COLLISION_POLICIES = {"overwrite", "rename"}
