from typing import Optional


def find_payload_start(line: str) -> Optional[int]:
    """
    Locate where a structured payload could begin in a line.

    Platform log routers prefix lines with tags like `[APP/0] OUT `, so the
    payload starts at the first `{`, wherever it is.

    It should NEVER throw.
    """
    if not line:
        return None

    idx = line.find("{")
    if idx == -1:
        return None

    return idx
