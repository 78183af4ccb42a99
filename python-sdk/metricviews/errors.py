"""Errors raised by the view registry."""


class ViewRegistryError(Exception):
    """Base error for namespace registration and lookup failures."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(self._message())

    def _message(self) -> str:
        return f"view registry error for Namespace {self.namespace}"


class UnregisteredNamespaceError(ViewRegistryError, LookupError):
    """Lookup of a namespace that has no registered views."""

    def _message(self) -> str:
        return f"no views found registered under Namespace {self.namespace}"


class DuplicateNamespaceRegistrationError(ViewRegistryError, ValueError):
    """A namespace has already registered its views."""

    def _message(self) -> str:
        return f"duplicate registration of views by Namespace {self.namespace}"
