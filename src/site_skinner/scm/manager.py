"""Map SCM connection strings to repository handles and providers."""

from __future__ import annotations

from site_skinner.core.protocols import ScmProvider
from site_skinner.scm.git import GitScmProvider
from site_skinner.scm.types import ScmRepository

__all__ = ["ScmError", "NoSuchScmProvider", "DefaultScmManager"]

SCM_PREFIX = "scm"


class ScmError(Exception):
    """Malformed connection string or provider failure."""


class NoSuchScmProvider(ScmError):
    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"No such provider: '{provider}'.")


class DefaultScmManager:
    """Provider registry keyed by the provider segment of the connection string."""

    def __init__(self, providers: dict[str, ScmProvider] | None = None):
        if providers is None:
            providers = {"git": GitScmProvider()}
        self.providers = dict(providers)

    def make_repository(self, connection: str) -> ScmRepository:
        """Split ``scm:<provider>:<url>`` (``|`` is accepted as delimiter)."""
        if connection is None or not connection.strip():
            raise ScmError("The scm url cannot be empty.")
        connection = connection.strip()
        if not connection.startswith(SCM_PREFIX) or len(connection) <= len(SCM_PREFIX) + 1:
            raise ScmError(f"The scm url must start with '{SCM_PREFIX}': {connection}")

        delimiter = connection[len(SCM_PREFIX)]
        if delimiter not in ":|":
            raise ScmError(f"The scm url does not contain a valid delimiter: {connection}")

        remainder = connection[len(SCM_PREFIX) + 1 :]
        provider, found, url = remainder.partition(delimiter)
        if not found or not provider or not url:
            raise ScmError(f"The scm url does not contain a provider and a url: {connection}")
        if provider not in self.providers:
            raise NoSuchScmProvider(provider)
        return ScmRepository(provider=provider, url=url, connection=connection)

    def get_provider(self, repository: ScmRepository) -> ScmProvider:
        try:
            return self.providers[repository.provider]
        except KeyError:
            raise NoSuchScmProvider(repository.provider) from None
