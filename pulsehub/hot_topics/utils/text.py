from typing import Any, Iterable, List, Optional
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_query(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def fill_template(template: str, query: str) -> str:
    return template.replace("{query}", encode_query(query), 1)


def title_key(title: str) -> str:
    return title.strip().lower()


def first_present(item: dict, fields: Iterable[str]) -> Optional[Any]:
    for name in fields:
        value = item.get(name)
        if value:
            return value
    return None


def unique_append(values: List[str], value: str) -> None:
    if value not in values:
        values.append(value)
