from .folder_service import FolderService

__all__ = ["FolderService"]
