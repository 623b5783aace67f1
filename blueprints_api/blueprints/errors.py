"""
Failure types raised by the blueprint stores.

Business-rule failures (duplicate, not found) are recoverable by the caller.
TransientStorageError wraps anything the storage engine throws on its own
(lost connection, timeout, unexpected constraint). Nothing here is retried.
"""


class BlueprintPersistenceError(Exception):
    pass


class BlueprintDuplicateError(BlueprintPersistenceError):
    def __init__(self, author: str, name: str):
        super().__init__(f"Blueprint already exists: {author}/{name}")
        self.author = author
        self.name = name


class BlueprintNotFoundError(BlueprintPersistenceError):
    @classmethod
    def for_blueprint(cls, author: str, name: str) -> "BlueprintNotFoundError":
        return cls(f"Blueprint not found: {author}/{name}")

    @classmethod
    def for_author(cls, author: str) -> "BlueprintNotFoundError":
        return cls(f"No blueprints for author: {author}")


class TransientStorageError(BlueprintPersistenceError):
    pass
