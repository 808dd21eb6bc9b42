from typing import Dict, List
from models.detection import DetectionResult

NO_DETECTIONS = "no technologies detected"


def render_report(results: List[DetectionResult]) -> List[str]:
    """One line per detected technology, in the order the results were given."""
    lines = [f"{r.name} (found in {r.location})" for r in results if r.detected]
    return lines or [NO_DETECTIONS]


def results_by_name(results: List[DetectionResult]) -> Dict[str, DetectionResult]:
    return {r.name: r for r in results}
