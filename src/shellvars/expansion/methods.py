"""String methods: ``$name(reference pattern)`` expansions."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from shellvars.assignments import is_array
from shellvars.expansion.codec import EscapeError, escape, unescape
from shellvars.expansion.expander import Expander, MethodArgs, expand_string, is_expression
from shellvars.expansion.select import ALL, Select, graphemes, slice_text

log = logging.getLogger(__name__)

_COUNT = re.compile(r"\+?[0-9]+")


def parse_count(text: str) -> int | None:
    """Parse a non-negative decimal integer, or return ``None``."""
    if _COUNT.fullmatch(text):
        return int(text)
    return None


def path_component(method: str, text: str) -> str:
    """Return one part of the path ``text``, or ``text`` itself if it has none."""
    path = PurePosixPath(text)
    if method == "basename":
        component = path.name if path.name not in ("", "..") else None
    elif method == "extension":
        component = path.suffix[1:] if path.suffix else None
    elif method == "filename":
        component = path.stem if path.name not in ("", "..") else None
    elif method == "parent":
        if path.parent == path:
            component = None
        elif len(path.parts) == 1 and not text.startswith("./"):
            # A bare relative name has an empty parent
            component = ""
        else:
            component = str(path.parent)
    else:
        raise ValueError(f"Unknown path method: {method}")
    return text if component is None else component


@dataclass
class StringMethod:
    """A method call that operates on, and produces, a string."""

    # Name of this method
    method: str
    # Variable name or expression the method operates on
    variable: str
    # Unexpanded pattern text
    pattern: str = ""
    selection: Select = field(default=ALL)

    def resolve(self, expander: Expander) -> str | None:
        """Return the text of the reference, or ``None`` if it has none."""
        value = expander.string(self.variable)
        if value is not None:
            return value
        if is_expression(self.variable):
            return " ".join(expand_string(self.variable, expander))
        return None

    def handle(self, output: list[str], expander: Expander) -> None:
        """Run the method and append its result to ``output``.

        Failures are logged as warnings and leave ``output`` untouched.
        """
        method = self.method
        variable = self.variable
        pattern = MethodArgs(self.pattern, expander)

        if method in ("ends_with", "contains", "starts_with"):
            needle = pattern.join(" ")
            value = self.resolve(expander)
            if value is None:
                is_true = False
            elif method == "ends_with":
                is_true = value.endswith(needle)
            elif method == "starts_with":
                is_true = value.startswith(needle)
            else:
                is_true = needle in value
            output.append("1" if is_true else "0")
        elif method in ("basename", "extension", "filename", "parent"):
            value = self.resolve(expander)
            if value is not None:
                output.append(path_component(method, value))
        elif method in ("to_lowercase", "to_uppercase"):
            value = self.resolve(expander)
            if value is not None:
                output.append(value.lower() if method == "to_lowercase" else value.upper())
        elif method == "trim":
            output.append((self.resolve(expander) or "").strip())
        elif method == "trim_left":
            output.append((self.resolve(expander) or "").lstrip())
        elif method == "trim_right":
            output.append((self.resolve(expander) or "").rstrip())
        elif method == "repeat":
            count = parse_count(pattern.join(" "))
            if count is None:
                log.warning("repeat: value supplied is not a valid positive integer")
                return
            output.append((self.resolve(expander) or "") * count)
        elif method == "replace":
            args = list(pattern.array())
            if len(args) != 2:
                log.warning("replace: two arguments are required")
                return
            old, new = args
            output.append((self.resolve(expander) or "").replace(old, new))
        elif method == "replacen":
            args = list(pattern.array())
            if len(args) != 3:
                log.warning("replacen: three arguments required")
                return
            old, new, nth = args
            count = parse_count(nth)
            if count is None:
                log.warning("replacen: third argument isn't a valid integer")
                return
            output.append((self.resolve(expander) or "").replace(old, new, count))
        elif method == "regex_replace":
            args = list(pattern.array())
            if len(args) != 2:
                log.warning("regex_replace: two arguments required")
                return
            expression, replacement = args
            try:
                compiled = re.compile(expression)
            except re.error:
                log.warning("regex_replace: error in regular expression %s", expression)
                return
            try:
                result = compiled.sub(replacement, self.resolve(expander) or "")
            except (re.error, IndexError) as e:
                # IndexError: the template names a group the pattern lacks
                log.warning("regex_replace: error in replacement %s: %s", replacement, e)
                return
            output.append(result)
        elif method == "join":
            separator = pattern.join(" ")
            array = expander.array(variable, ALL)
            if array is not None:
                slice_text(output, separator.join(array), self.selection)
            elif is_expression(variable):
                slice_text(output, separator.join(expand_string(variable, expander)), self.selection)
        elif method == "len":
            if variable.startswith("@") or is_array(variable):
                output.append(str(len(expand_string(variable, expander))))
            else:
                value = self.resolve(expander)
                if value is not None:
                    output.append(str(len(graphemes(value))))
        elif method == "len_bytes":
            value = self.resolve(expander)
            if value is not None:
                output.append(str(len(value.encode("utf-8"))))
        elif method == "reverse":
            value = self.resolve(expander)
            if value is not None:
                output.append("".join(reversed(graphemes(value))))
        elif method == "find":
            value = self.resolve(expander)
            index = -1
            if value is not None:
                index = value.find(pattern.join(" "))
                if index > 0:
                    # Report a byte offset, not a character offset
                    index = len(value[:index].encode("utf-8"))
            output.append(str(index))
        elif method in ("unescape", "escape"):
            value = self.resolve(expander)
            if value is None:
                return
            codec = unescape if method == "unescape" else escape
            try:
                output.append(codec(value))
            except EscapeError as e:
                log.warning("%s: %s", method, e)
        elif method == "or":
            value = self.resolve(expander) or ""
            if value:
                output.append(value)
                return
            for alternative in pattern.array():
                # Alternatives are split as words, so the separating commas
                # stay attached to them and are stripped here
                if alternative in ("", ","):
                    continue
                if alternative.endswith(","):
                    alternative = alternative[:-1]
                output.append(alternative)
                return
        else:
            log.warning("method namespace not found: %s", method)
