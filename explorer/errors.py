"""Exceptions raised while building or serving listings."""


class ExplorerError(Exception):
    """Base class for explorer errors."""


class ContentRootMissing(ExplorerError):
    """The content root is missing or unreadable. Fatal for a build."""

    def __init__(self, root, reason: str = "not found"):
        self.root = root
        super().__init__(f"Content root {reason}: {root}")


class FolderNotFound(ExplorerError):
    """A requested folder is not part of the content tree."""

    def __init__(self, slug):
        self.slug = slug
        super().__init__(f"Folder not found: /{slug}")


class ManifestError(ExplorerError):
    """The manifest file exists but cannot be used."""
