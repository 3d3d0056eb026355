from dataclasses import dataclass
from enum import Enum

TAG_WIDTH = 3


class MessageKind(Enum):
    ERROR = "ERR"
    WARNING = "WRN"
    LOG = "LOG"
    INFO = "INF"
    FINISHED = "FIN"
    UNKNOWN = ""


TERMINAL_KINDS: frozenset[MessageKind] = frozenset({MessageKind.ERROR, MessageKind.FINISHED})

_KINDS_BY_TAG: dict[str, MessageKind] = {
    kind.value: kind for kind in MessageKind if kind is not MessageKind.UNKNOWN
}


@dataclass(frozen=True)
class Message:
    kind: MessageKind
    tag: str
    payload: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS


def decode(raw: str) -> Message:
    """Split a response body into its 3-character tag and payload.

    Unrecognized tags decode to ``MessageKind.UNKNOWN`` with the same split,
    so ``tag + payload`` always reproduces the body.
    """
    tag = raw[:TAG_WIDTH]
    kind = _KINDS_BY_TAG.get(tag, MessageKind.UNKNOWN)
    return Message(kind=kind, tag=tag, payload=raw[TAG_WIDTH:])


def encode(kind: MessageKind, payload: str = "") -> str:
    if kind is MessageKind.UNKNOWN:
        raise ValueError("UNKNOWN has no wire tag")
    return kind.value + payload
