"""Split an assignment statement into its keys, operator and values."""

from __future__ import annotations

from shellvars.types import OPERATOR_PREFIXES, Operator

# Longest prefixes first so '//=' is not read as '/='
_PREFIXES = sorted((p for p in OPERATOR_PREFIXES if p), key=len, reverse=True)

FILTER_TOKEN = Operator.FILTER.value


def assignment_lexer(statement: str) -> tuple[str | None, Operator | None, str | None]:
    """Split ``statement`` on its first assignment operator.

    The operator is the first ``=`` outside quotes and brackets together
    with the operator characters directly before it. Returns the stripped
    key text, the operator and the stripped value text; when there is no
    operator, returns ``(keys or None, None, None)``.
    """
    depth = 0
    quote: str | None = None
    i = 0

    while i < len(statement):
        ch = statement[i]

        if quote is not None:
            if ch == "\\" and quote == '"':
                i += 1
            elif ch == quote:
                quote = None
            i += 1
            continue

        if ch in "'\"":
            quote = ch
        elif ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth = max(0, depth - 1)
        elif ch == "\\":
            if statement.startswith(FILTER_TOKEN, i) and depth == 0:
                i += len(FILTER_TOKEN) - 1
                continue
            # Escaped character
            i += 1
        elif ch == "=" and depth == 0:
            head = statement[:i]
            operator = Operator.EQUAL
            for prefix in _PREFIXES:
                if head.endswith(prefix):
                    operator = OPERATOR_PREFIXES[prefix]
                    head = head[: -len(prefix)]
                    break
            return head.strip(), operator, statement[i + 1:].strip()
        i += 1

    return statement.strip() or None, None, None
