import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple, Union


@dataclass(frozen=True)
class Body:
    """Search the response body."""


@dataclass(frozen=True)
class Header:
    """Search the value of a single response header."""
    name: str

    @property
    def key(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class FilePresence:
    """Probe the technology's candidate paths for reachability."""


EvidenceChannel = Union[Body, Header, FilePresence]


@dataclass(frozen=True)
class Check:
    """A (pattern, channel) pair. FilePresence checks carry no pattern."""
    pattern: Optional[Pattern[str]]
    channel: EvidenceChannel

    def __post_init__(self):
        if self.pattern is None and not isinstance(self.channel, FilePresence):
            raise ValueError(f"{type(self.channel).__name__} check requires a pattern")

    @classmethod
    def body(cls, pattern: str) -> "Check":
        return cls(re.compile(pattern, re.IGNORECASE), Body())

    @classmethod
    def header(cls, name: str, pattern: str) -> "Check":
        return cls(re.compile(pattern, re.IGNORECASE), Header(name))

    @classmethod
    def files(cls) -> "Check":
        return cls(None, FilePresence())


@dataclass(frozen=True)
class TechnologyRule:
    """A technology and the ordered checks that detect it."""
    name: str
    checks: Tuple[Check, ...] = ()
    file_paths: Tuple[str, ...] = () # Candidate paths for a FilePresence check
