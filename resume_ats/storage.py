"""
JSON persistence for the resume being edited.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from .config import data_dir
from .models import Resume, ResumeFormatError

logger = logging.getLogger(__name__)

RESUME_FILENAME = "resume-data.json"

PathLike = Union[str, Path]


def load_resume(path: PathLike) -> Resume:
    """Load a resume from a JSON file, raising on any problem."""
    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ResumeFormatError(f"{file_path} is not UTF-8 encoded: {e}") from e
    except json.JSONDecodeError as e:
        raise ResumeFormatError(f"Invalid JSON in {file_path}: {e}") from e
    return Resume.from_dict(data)


def save_resume(path: PathLike, resume: Resume) -> Path:
    """Write a resume as pretty JSON, replacing the target atomically."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    payload = json.dumps(resume.to_dict(), indent=2, ensure_ascii=False)
    fd, tmp_name = tempfile.mkstemp(dir=str(file_path.parent), prefix=".resume-", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, file_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    return file_path


class ResumeStore:
    """Autosave store for a single resume."""

    def __init__(self, path: Optional[PathLike] = None):
        self.path = Path(path) if path is not None else self.default_path()

    @staticmethod
    def default_path() -> Path:
        return data_dir() / RESUME_FILENAME

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Resume:
        """Load the saved resume; a missing or unreadable file yields an empty one."""
        if not self.path.exists():
            logger.debug("No saved resume at %s", self.path)
            return Resume()

        try:
            resume = load_resume(self.path)
        except (OSError, ValueError) as e:
            logger.error("Failed to load saved resume from %s: %s", self.path, e)
            return Resume()

        logger.info("Loaded resume from %s", self.path)
        return resume

    def save(self, resume: Resume) -> Path:
        path = save_resume(self.path, resume)
        logger.info("Saved resume to %s", path)
        return path
