class DoesNotExist(Exception):  # noqa: N818
    """Exception raised when a resource does not exist."""

    def __init__(self, resource_type: str, resource_id: object):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f'{resource_type} with ID "{resource_id!s}" does not exist')


class InvalidProject(Exception):  # noqa: N818
    """Exception raised when a project fails creation-time validation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid project: {reason}")


class DecodeError(Exception):
    """Exception raised when stored data is not a valid project collection."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Could not decode projects: {detail}")


class EncodeError(Exception):
    """Exception raised when projects cannot be serialized."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Could not encode projects: {detail}")


class StorageError(Exception):
    """Exception raised when a storage backend fails to read or write."""

    def __init__(self, backend: str, key: str, detail: str):
        self.backend = backend
        self.key = key
        self.detail = detail
        super().__init__(f'{backend} storage failed for key "{key}": {detail}')
