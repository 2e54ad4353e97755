from typing import Callable, Protocol

from .model import ListCandidate

# Receives the list path of a tapped hashtag span. Span boundaries never
# depend on whether one is attached; rendering and focus stay with the host.
HashtagTapHandler = Callable[[str], None]


class ListSource(Protocol):
    """
    Supplies the task lists offered as hashtag suggestions. How they are
    fetched or ordered is up to the implementation.
    """

    def lists(self) -> list[ListCandidate]:
        pass
