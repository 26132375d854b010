# Services package

from gitassist.services.archive import ArchiveEntry, expand_archives, extract_archive
from gitassist.services.github import CommitOrchestrator
from gitassist.services.interpreter import DescriptionRefiner, description_refiner

__all__ = [
    # GitHub
    "CommitOrchestrator",
    # Collaborators
    "ArchiveEntry",
    "extract_archive",
    "expand_archives",
    "DescriptionRefiner",
    "description_refiner",
]
