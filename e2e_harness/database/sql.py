"""SQL text helpers shared by every backend.

- split_sql_statements: break a fixture script into executable statements
- prepare_query_and_params: rewrite positional placeholders ($1 / ?) into
  the named binds SQLAlchemy's text() expects

Both work on the same scan of the text so quoted literals, identifiers,
comments and dollar-quoted bodies are never touched.
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

_DOLLAR_DELIM = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")
_NUMBERED_PARAM = re.compile(r"\$(\d+)")

# (text, is_code) pairs
Segment = Tuple[str, bool]


def scan_segments(sql: str) -> List[Segment]:
    """Split SQL into code and non-code (literal/comment) segments.

    Non-code covers single-quoted strings, double-quoted and backtick
    identifiers, -- and /* */ comments, and PostgreSQL dollar-quoted bodies.
    Concatenating the segment texts always reproduces the input.
    """
    segments: List[Segment] = []
    code: List[str] = []
    i = 0
    n = len(sql)

    def flush_code() -> None:
        if code:
            segments.append(("".join(code), True))
            code.clear()

    while i < n:
        ch = sql[i]
        nxt = sql[i + 1] if i + 1 < n else ""

        end: Optional[int] = None

        if ch == "-" and nxt == "-":
            newline = sql.find("\n", i + 2)
            end = n if newline == -1 else newline + 1
        elif ch == "/" and nxt == "*":
            close = sql.find("*/", i + 2)
            end = n if close == -1 else close + 2
        elif ch in ("'", '"', "`"):
            # Doubled quote char is an escaped quote inside the literal
            j = i + 1
            while j < n:
                if sql[j] == ch:
                    if j + 1 < n and sql[j + 1] == ch:
                        j += 2
                        continue
                    break
                j += 1
            end = min(j + 1, n)
        elif ch == "$":
            match = _DOLLAR_DELIM.match(sql, i)
            if match:
                delim = match.group(0)
                close = sql.find(delim, match.end())
                end = n if close == -1 else close + len(delim)

        if end is None:
            code.append(ch)
            i += 1
            continue

        flush_code()
        segments.append((sql[i:end], False))
        i = end

    flush_code()
    return segments


def split_sql_statements(sql: str) -> List[str]:
    """Split a script into statements on semicolons outside literals and comments."""
    statements: List[str] = []
    current: List[str] = []

    for text, is_code in scan_segments(sql):
        if not is_code:
            current.append(text)
            continue
        parts = text.split(";")
        for part in parts[:-1]:
            current.append(part)
            statement = "".join(current).strip()
            if statement and not _is_comment_only(statement):
                statements.append(statement)
            current = []
        current.append(parts[-1])

    tail = "".join(current).strip()
    if tail and not _is_comment_only(tail):
        statements.append(tail)

    return statements


def _is_comment_only(statement: str) -> bool:
    for text, is_code in scan_segments(statement):
        if is_code:
            if text.strip():
                return False
        elif not text.startswith(("--", "/*")):
            return False
    return True


def _escape_colons(text: str) -> str:
    # text() would read ":name" inside a literal as a bind parameter
    return text.replace(":", "\\:")


def prepare_statement(statement: str) -> str:
    """Escape colons in literals and comments so text() leaves them alone."""
    return "".join(
        text if is_code else _escape_colons(text)
        for text, is_code in scan_segments(statement)
    )


def prepare_query_and_params(
    query: str,
    parameters: Optional[Sequence[Any]],
) -> Tuple[str, Dict[str, Any]]:
    """Convert positional placeholders to named parameters for SQLAlchemy.

    Supports PostgreSQL-style $1, $2 ... (may repeat, any order) and
    MySQL-style ? (sequential). When the query contains any $N placeholder,
    ? is left alone so PostgreSQL's jsonb ? operators keep working.

    Args:
        query: SQL text with positional placeholders
        parameters: Values in placeholder order (None or empty for none)

    Returns:
        (query with :p0/:p1/... binds, {"p0": ..., "p1": ...})
    """
    values = list(parameters or ())
    segments = scan_segments(query)
    numbered = any(is_code and _NUMBERED_PARAM.search(text) for text, is_code in segments)

    counter = 0
    out: List[str] = []

    def repl_question(_match: re.Match) -> str:
        nonlocal counter
        key = f":p{counter}"
        counter += 1
        return key

    def repl_numbered(match: re.Match) -> str:
        index = int(match.group(1)) - 1
        if index < 0:
            raise ValueError(f"Invalid placeholder: {match.group(0)}")
        return f":p{index}"

    for text, is_code in segments:
        if not is_code:
            out.append(_escape_colons(text))
        elif numbered:
            out.append(_NUMBERED_PARAM.sub(repl_numbered, text))
        else:
            out.append(re.sub(r"\?", repl_question, text))

    params = {f"p{idx}": val for idx, val in enumerate(values)}
    return "".join(out), params


__all__ = [
    "scan_segments",
    "split_sql_statements",
    "prepare_statement",
    "prepare_query_and_params",
]
