import os

from tqdm import tqdm

from utils.timeutil import now_stamp


class RunLogger:
    """Timestamped console log, optionally mirrored to a file.

    Lines go through tqdm.write so an active progress bar isn't torn.
    """

    def __init__(self, path: str | None = None, echo: bool = True):
        self.path = path
        self.echo = echo
        if path:
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)

    def log(self, msg: str):
        line = f"[{now_stamp()}] {msg}"
        if self.echo:
            tqdm.write(line)
        if self.path:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")

    def error(self, msg: str):
        self.log(f"ERROR: {msg}")
