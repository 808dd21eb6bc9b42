from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class DetectionResult:
    """Outcome of matching one technology against the evidence."""
    name: str
    detected: bool
    location: Optional[str] = None # "body", "header:<name>" or "file:<path>"

    @classmethod
    def not_detected(cls, name: str) -> "DetectionResult":
        return cls(name=name, detected=False)
