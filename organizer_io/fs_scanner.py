import os


def list_dir(path: str) -> tuple[list[str], list[str]]:
    """Returns (files, subdirs) directly under path, names only, sorted."""
    files = []
    dirs = []
    with os.scandir(path) as it:
        for entry in it:
            if entry.is_dir(follow_symlinks=False):
                dirs.append(entry.name)
            elif entry.is_file():
                files.append(entry.name)
    files.sort()
    dirs.sort()
    return files, dirs


def count_files(root: str, prune: str | None = None) -> int:
    """
    Fast pre-count of all files under root, for progress bars.
    No filtering beyond skipping the pruned directory.
    """
    prune_norm = os.path.normcase(os.path.abspath(prune)) if prune else None
    total = 0
    for dirpath, dirnames, files in os.walk(root):
        if prune_norm:
            dirnames[:] = [
                d for d in dirnames
                if os.path.normcase(os.path.abspath(os.path.join(dirpath, d))) != prune_norm
            ]
        total += len(files)
    return total
