"""
Result of a pool operation.

The core never moves funds itself. Operations hand back the transfer
instructions the host must execute, plus audit attributes describing what
was committed.
"""
from typing import Iterable, List, Tuple

from pairpool.asset import TransferInstruction


class Response:
    def __init__(self):
        self.messages: List[TransferInstruction] = []
        self.attributes: List[Tuple[str, str]] = []

    def add_message(self, message: TransferInstruction) -> 'Response':
        self.messages.append(message)
        return self

    def add_attribute(self, key: str, value) -> 'Response':
        self.attributes.append((key, str(value)))
        return self

    def add_attributes(self, attributes: Iterable[Tuple[str, object]]) -> 'Response':
        for key, value in attributes:
            self.add_attribute(key, value)
        return self

    def attribute(self, key: str) -> str:
        """Value of the first attribute named ``key``."""
        for k, v in self.attributes:
            if k == key:
                return v
        raise KeyError(key)

    def to_dict(self) -> dict:
        return {
            'messages': [m.to_dict() for m in self.messages],
            'attributes': [{'key': k, 'value': v} for k, v in self.attributes],
        }

    def __repr__(self) -> str:
        return f"Response(messages={self.messages!r}, attributes={self.attributes!r})"
