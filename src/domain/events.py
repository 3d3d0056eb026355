from dataclasses import dataclass, field
from enum import Enum
from time import time


class LogStyle(Enum):
    WARNING = "warning"
    MESSAGE = "message"
    INFORMATION = "information"


@dataclass(frozen=True)
class DomainEvent:
    timestamp: float = field(default_factory=time)


@dataclass(frozen=True)
class CommandStarted(DomainEvent):
    target: str = ""


@dataclass(frozen=True)
class LogLine(DomainEvent):
    text: str = ""
    style: LogStyle = LogStyle.MESSAGE


@dataclass(frozen=True)
class FatalError(DomainEvent):
    text: str = ""


@dataclass(frozen=True)
class CommandFinished(DomainEvent):
    target: str = ""
    payload: str = ""


@dataclass(frozen=True)
class UnknownMessage(DomainEvent):
    tag: str = ""
    payload: str = ""


@dataclass(frozen=True)
class TransportFailed(DomainEvent):
    target: str = ""
    detail: str = ""
