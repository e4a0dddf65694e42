"""Parsing primitives for keys, search output and HTML-safe key forms.

Everything here is pure string handling. The search and replace pipelines
build on these helpers; nothing in this module touches files or processes.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable

import structlog

from html_safe_keys.errors import IgnoredKeysParseError
from html_safe_keys.models import Usage

log = structlog.get_logger()

HTML_SUFFIX = "_html"
LEGACY_HTML_SUFFIX = ".html"

# Call sites for `git grep -P`
LAZY_CALL_PATTERN = r"""\btt?[ (]['"]\.\w+"""
DYNAMIC_CALL_PATTERN = r"""\btt?[ (]['"][\w.-]*[#$]"""

# Every dot-leading quoted literal on a lazy call line, left to right
LAZY_LITERAL_RE = re.compile(r"""['"](\.[^'"]+)""")

HTML_KEY_RE = re.compile(r"[_.]html$")
HTML_ENTITY_RE = re.compile(r"&#\d+;|&\w+;")


def unique(items: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


def parse_candidate_keys(text: str) -> list[str]:
    """Parse ``<locale>.<key>`` lines into sorted, de-duplicated keys.

    >>> parse_candidate_keys("ja.sample.hello\\nen.sample.hello\\n")
    ['sample.hello']
    """
    keys = set()
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        keys.add(line.split(".", 1)[-1])
    return sorted(keys)


def parse_ignored_keys(text: str) -> list[str]:
    """Parse the ignored-keys dump, a JSON array of strings.

    Empty output means nothing is ignored.

    Raises:
        IgnoredKeysParseError: If the output is not a JSON array of strings.
    """
    text = text.strip()
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise IgnoredKeysParseError(
            f"Ignored keys output is not valid JSON: {e.msg}",
            details={"output": text[:200]},
        ) from e
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise IgnoredKeysParseError(
            "Ignored keys output must be a JSON array of strings",
            details={"output": text[:200]},
        )
    return unique(data)


def parse_search_line(line: str) -> Usage | None:
    """Parse one ``path:line_number:code`` search line.

    Returns None for lines that do not have that shape.
    """
    parts = line.rstrip("\r\n").split(":", 2)
    if len(parts) != 3 or not parts[1].strip().isdigit():
        return None
    file, number, code = parts
    return Usage(file=file, line=int(number), code=code.strip())


def parse_search_output(text: str) -> list[Usage]:
    """Parse multi-line search output, skipping blank and malformed lines."""
    usages = []
    for raw in text.splitlines():
        if not raw.strip():
            continue
        usage = parse_search_line(raw)
        if usage is None:
            log.warning("Skipping unparseable search line", line=raw)
            continue
        usages.append(usage)
    return usages


def extract_lazy_suffixes(code: str) -> list[str]:
    """Dot-prefixed literals in ``code``, in left-to-right order."""
    return LAZY_LITERAL_RE.findall(code)


def view_path(file: str, views_root: str = "app/views/") -> str:
    """Dotted logical path of a view file.

    The views root and the file extensions are dropped and a partial's
    leading underscore is removed:

    >>> view_path("app/views/users/_form.html.erb")
    'users.form'
    """
    path = file.removeprefix(views_root)
    *dirs, name = path.split("/")
    name = name.split(".", 1)[0].removeprefix("_")
    return ".".join([*dirs, name])


def derive_lazy_key(file: str, lazy_suffix: str, views_root: str = "app/views/") -> str:
    """Full key for a lazy usage.

    >>> derive_lazy_key("app/views/users/show.html.erb", ".description")
    'users.show.description'
    """
    return view_path(file, views_root) + lazy_suffix


def lazy_literal(key: str, file: str, views_root: str = "app/views/") -> str:
    """Recover the dot-prefixed literal written in ``file`` for full ``key``."""
    path = view_path(file, views_root)
    if key.startswith(path + "."):
        return key[len(path) :]
    return "." + key.rsplit(".", 1)[-1]


def underscore_html_key(key: str) -> str:
    return key + HTML_SUFFIX


def dot_html_key(key: str) -> str:
    return key + LEGACY_HTML_SUFFIX


def is_html_key(key: str) -> bool:
    """True if ``key`` already carries an HTML-safe suffix."""
    return bool(HTML_KEY_RE.search(key))


def contains_html_entity(text: str) -> bool:
    """True if ``text`` holds a numeric (&#187;) or named (&laquo;) entity."""
    return bool(HTML_ENTITY_RE.search(text))
