# dot_gen/dot_fmt.py
from __future__ import annotations

import html
import re
from typing import Iterable, Mapping

# DOT bare identifiers: letters/digits/underscore not starting with a digit,
# or a numeral.
DOT_ID_RE = re.compile(r"^(?:[A-Za-z_][A-Za-z0-9_]*|-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?))$")

# Keywords cannot be used as bare ids (DOT keywords are case-insensitive).
DOT_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})


def is_dot_id(value: str) -> bool:
    return bool(DOT_ID_RE.match(value)) and value.lower() not in DOT_KEYWORDS


def dot_text(text: object) -> str:
    """Escape text for use inside a double-quoted DOT string."""
    s = str(text).replace("\\", "\\\\").replace('"', '\\"')
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    return s.replace("\n", "\\n")


def dot_id(value: object) -> str:
    """Return `value` as a DOT id, quoting it when it is not a bare identifier."""
    s = str(value)
    if is_dot_id(s):
        return s
    return f'"{dot_text(s)}"'


def html_text(text: object) -> str:
    """Escape text for HTML-like labels (`label=< ... >`)."""
    s = html.escape(str(text), quote=True)
    return re.sub(r"\r\n|\r|\n", "<BR/>", s)


def dot_attrs(attrs: Mapping[str, object]) -> str:
    """`{"shape": "box"}` -> `[shape="box"]`; an empty mapping renders as ""."""
    if not attrs:
        return ""
    body = ", ".join(f'{dot_id(k)}="{dot_text(v)}"' for k, v in attrs.items())
    return f"[{body}]"


def dot_comment(text: object) -> str:
    t = re.sub(r"\s+", " ", str(text)).strip()
    return f"// {t}" if t else "//"


def graph_name(title: object) -> str:
    """Graph id derived from the diagram title: lower-case, whitespace and
    hyphens replaced by underscores."""
    name = re.sub(r"[\s-]", "_", str(title).lower())
    if not name:
        return "diagram"
    return dot_id(name)


def rank_same(entity_ids: Iterable[str]) -> str:
    """`{rank=same; a; b;}`."""
    members = "; ".join(dot_id(e) for e in entity_ids)
    if not members:
        return "{rank=same;}"
    return f"{{rank=same; {members};}}"


def dot_filters() -> dict[str, object]:
    """Filters registered on the template environment."""
    return {
        "dot_id": dot_id,
        "dot_text": dot_text,
        "dot_attrs": dot_attrs,
        "dot_comment": dot_comment,
        "html_text": html_text,
        "graph_name": graph_name,
        "rank_same": rank_same,
    }
