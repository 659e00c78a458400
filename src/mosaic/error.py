from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import List, Optional


def _as_messages(message: Optional[str | List[str]]) -> List[str]:
    if message is None:
        return []
    if isinstance(message, str):
        return [message]
    return list(message)


class MosaicError(Exception):
    """Base class of the exceptions raised by mosaic."""

    def __init__(
        self, message: Optional[str | List[str]], origin: Optional[str] = None
    ):
        """Initialize a MosaicError.

        Several messages can be stored, the last one is the one displayed.

        :param message: a message or a list of messages
        :param origin: the name of the function, class, or module having raised
            the exception
        """
        super().__init__(message, origin)
        self.origin = origin
        self.messages = _as_messages(message)

    def __iadd__(self, other: str | List[str] | MosaicError) -> MosaicError:
        """Add messages to the current instance.

        :param other: messages, or a MosaicError whose messages are added
        """
        if isinstance(other, MosaicError):
            self.messages.extend(other.messages)
        else:
            self.messages.extend(_as_messages(other))
        return self

    def __str__(self) -> str:
        error_msg = self.messages[-1] if self.messages else self.__class__.__name__
        if self.origin:
            return f"{self.origin}: {error_msg}"
        return error_msg
