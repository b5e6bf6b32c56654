from __future__ import annotations

import re
from functools import lru_cache

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def placeholders(template: str) -> list[str]:
    return _PLACEHOLDER_RE.findall(template)


def _literal(segment: str) -> str:
    # Any run of whitespace in the template matches any run in the input
    parts = re.split(r"\s+", segment)
    return r"\s+".join(re.escape(p) for p in parts)


@lru_cache(maxsize=256)
def compile_template(template: str) -> re.Pattern[str]:
    pattern: list[str] = []
    seen: set[str] = set()
    pos = 0
    for match in _PLACEHOLDER_RE.finditer(template):
        pattern.append(_literal(template[pos : match.start()]))
        name = match.group(1)
        if name in seen:
            pattern.append(f"(?P={name})")
        else:
            seen.add(name)
            pattern.append(f"(?P<{name}>.+?)")
        pos = match.end()
    pattern.append(_literal(template[pos:]))
    return re.compile("".join(pattern), re.I | re.S)


def extract_values(text: str, template: str) -> dict[str, str] | None:
    """
    Align ``text`` against ``template`` and return the placeholder values.

    ``extract_values("convert 10 km to miles", "convert {amount} {unitFrom} to {unitTo}")``
    gives ``{"amount": "10", "unitFrom": "km", "unitTo": "miles"}``. Returns
    None when the text does not have the template's shape.
    """
    match = compile_template(template).fullmatch(text.strip())
    if match is None:
        return None
    return {name: value.strip() for name, value in match.groupdict().items()}
