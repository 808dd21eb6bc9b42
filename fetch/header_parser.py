from typing import Dict


def parse_headers(raw: str) -> Dict[str, str]:
    """
    Parses a raw header block into a lower-cased name -> value mapping.

    One "Name: Value" pair per line; lines without a colon (status lines,
    blank separators) are skipped. A repeated header keeps its last value.
    """
    headers: Dict[str, str] = {}
    for line in raw.splitlines():
        if not line.strip():
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        name = name.strip()
        if not name:
            continue
        headers[name.lower()] = value.strip()
    return headers
