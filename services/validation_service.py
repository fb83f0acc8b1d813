from domain.models import SourceFolder
from domain.rules import fix_source_folder_path, is_valid_folder_path
from organizer_io.path_utils import is_existing_dir


class ValidationService:
    def __init__(self, logger=None):
        self.logger = logger

    def _log(self, msg: str):
        if self.logger:
            self.logger.log(msg)

    def validate(self, folder: SourceFolder) -> SourceFolder:
        """Syntax check, then normalize, then existence check.

        folder.path is only rewritten when the syntax check passes.
        """
        if not is_valid_folder_path(folder.path):
            folder.valid = False
            return folder

        folder.path = fix_source_folder_path(folder.path, on_error=self._log)
        folder.valid = is_existing_dir(folder.path, on_error=self._log)
        return folder

    def check(self, path: str) -> SourceFolder:
        return self.validate(SourceFolder(path))
