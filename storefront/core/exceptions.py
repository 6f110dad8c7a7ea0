class PersistenceError(RuntimeError):
    """A write to the document store did not produce the expected document."""


class StorageConfigError(RuntimeError):
    """The object-storage bucket or its public URL prefix is not configured."""


class StorageUploadError(RuntimeError):
    """The object store rejected or failed an upload."""


class AISuggestionError(RuntimeError):
    """The generative model could not produce product suggestions."""
