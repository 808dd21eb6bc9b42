from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class Evidence:
    """Observable signals from a single fetch of the target."""
    base_url: str
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=dict) # lower-cased name -> value

    def __post_init__(self):
        normalized = {}
        for name, value in self.headers.items():
            normalized[name.lower()] = value
        object.__setattr__(self, "headers", MappingProxyType(normalized))

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup; None when the header was not sent."""
        return self.headers.get(name.lower())

    def resolve(self, path: str) -> str:
        """Derive a probe URL for a path relative to the base URL."""
        return self.base_url.rstrip("/") + path
