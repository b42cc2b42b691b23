import re
from typing import Any

_INITIAL = re.compile(r"^[A-Z]\.$")


def _collapse_ws(text: str) -> str:
    return re.sub(r"\s+", " ", (text or "").strip())


def split_name(full_name: Any) -> dict[str, str]:
    """
    Split a handwritten full name into first and last name.

    Rules, in order:
      - empty or non-string input gives two empty parts;
      - a single token is the first name;
      - "Harry S." keeps the trailing initial as the last name;
      - otherwise the last token is the last name and the rest the first name.
    """
    if not isinstance(full_name, str):
        return {"firstName": "", "lastName": ""}

    clean = _collapse_ws(full_name)
    if not clean:
        return {"firstName": "", "lastName": ""}

    if " " not in clean:
        return {"firstName": clean, "lastName": ""}

    tokens = clean.split(" ")
    if len(tokens) == 2 and _INITIAL.match(tokens[1]):
        return {"firstName": tokens[0], "lastName": tokens[1]}

    return {"firstName": " ".join(tokens[:-1]), "lastName": tokens[-1]}
