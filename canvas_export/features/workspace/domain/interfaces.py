from abc import ABC, abstractmethod
from .models import JobWorkspace

class IWorkspaceFileSystem(ABC):
    @abstractmethod
    def prepare(self, workspace: JobWorkspace) -> None:
        """Creates the job directory with its assets/ and frames/ subdirectories."""
        pass

    @abstractmethod
    def cleanup(self, workspace: JobWorkspace) -> bool:
        """
        Removes the whole job directory.
        Never raises; returns False when something was left behind.
        """
        pass
