from typing import Optional


class CMSError(Exception):
    """Base class for errors raised by the content and community stores."""


class GitHubConfigError(CMSError):
    """Owner, repository or token missing from the GitHub configuration."""


class GitHubAPIError(CMSError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is None:
            return base
        return f"{base} (status {self.status_code})"


class InvalidRequestError(CMSError):
    pass


class NotFoundError(CMSError):
    pass


class PostValidationError(InvalidRequestError):
    pass


class PostNotFoundError(NotFoundError):
    def __init__(self, slug: str):
        super().__init__(f"Post not found: {slug}")
        self.slug = slug


class PostConflictError(CMSError):
    def __init__(self, slug: str):
        super().__init__(f"Post already exists: {slug}")
        self.slug = slug


class CommentNotFoundError(NotFoundError):
    pass


class SubscriberNotFoundError(NotFoundError):
    pass


class SubscriberExistsError(CMSError):
    pass
