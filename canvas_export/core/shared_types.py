from dataclasses import dataclass
from pathlib import Path

@dataclass(frozen=True)
class MediaFile:
    """
    Value Object representing a media file on the filesystem.
    Encapsulates path validation and directory creation.
    """
    path: Path
    validate_exists: bool = False

    def __post_init__(self):
        if str(self.path).strip() == "." or str(self.path).strip() == "":
            raise ValueError("File path cannot be empty.")
        if self.validate_exists and not self.path.is_file():
            raise FileNotFoundError(f"Media file not found: {self.path}")

    def exists(self) -> bool:
        return self.path.exists()

    def ensure_parent_dir(self) -> None:
        """Creates the directory structure for this file if it doesn't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
