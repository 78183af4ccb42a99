"""View provider capability."""

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ViewProvider(Protocol):
    """Something that can make a batch of views live in the process.

    Views are opaque to the registry. Only the provider knows what they are
    and how to activate them. ``activate`` raises on failure and must not
    leave any of the batch active when it does.
    """

    def activate(self, views: Sequence[Any]) -> None:
        ...
