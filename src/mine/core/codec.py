"""Decoder and encoder for the ``config.toml`` format.

The format is a deliberately small subset of TOML where every value is
a string::

    commands_folder = "/home/me/.config/mine/commands"

    [executors]
    py = "python3 {{path}}"
    sh = "sh {{path}}"

    [commands.deploy]
    path = "$HOME/bin/deploy.sh"
    description = "Run deployment"

Rules
-----
* A blank line closes the current section; later pairs are scalars.
* ``#`` starts a comment line.
* Only ``[executors]`` and ``[commands.<alias>]`` sections exist.
* Quoted values use backslash escapes; unquoted values are taken
  verbatim.  Arrays, numbers and booleans are not recognised: ``x = 1``
  is the string ``"1"``.
* :func:`encode` output is sorted and always quoted, so
  ``decode(encode(model)) == model`` for any model the program builds.

Pure functions — no I/O.
"""

from __future__ import annotations

import dataclasses
import re

from mine.core.models import CommandDefinition, ConfigModel
from mine.exceptions import ConfigDecodeError

EXECUTORS_SECTION: str = "executors"
COMMANDS_SECTION_PREFIX: str = "commands."
_COMMANDS_SECTION: str = "commands"
_COMMAND_FIELDS: tuple[str, ...] = ("path", "description")

_ESCAPE = r"\\(?:[abfnrtv\\'\"]|x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|[0-7]{3})"
_ESCAPE_RE = re.compile(_ESCAPE)
_QUOTED_BODY_RE: dict[str, re.Pattern[str]] = {
    quote: re.compile(r"(?:[^\\%s]|%s)*" % (quote, _ESCAPE)) for quote in "\"'"
}

_SIMPLE_ESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
_QUOTE_ESCAPES: dict[str, str] = {
    char: "\\" + name for name, char in _SIMPLE_ESCAPES.items() if name != "'"
}


# ---------------------------------------------------------------------------
# Value quoting
# ---------------------------------------------------------------------------

def _unescape(match: re.Match[str]) -> str:
    escape = match.group(0)[1:]
    kind = escape[0]
    if kind in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[kind]
    if kind in "xuU":
        code_point = int(escape[1:], 16)
    else:
        code_point = int(escape, 8)
        if code_point > 0xFF:
            raise ValueError("invalid syntax")
    # Surrogates are allowed: undecodable file names arrive as U+DC80..U+DCFF.
    if code_point > 0x10FFFF:
        raise ValueError("invalid syntax")
    return chr(code_point)


def unquote(text: str) -> str:
    """Strip matching quotes from *text* and resolve backslash escapes.

    Raises
    ------
    ValueError
        When the closing quote is missing, an unescaped quote appears
        inside the value, or an escape sequence is malformed.
    """
    # Single quotes delimit whole strings with the same escapes as double
    # quotes, and either quote character may be escaped inside both.
    mark = text[:1]
    if mark not in _QUOTED_BODY_RE:
        raise ValueError("invalid syntax")
    if len(text) < 2 or text[-1] != mark:
        raise ValueError("missing closing quote")
    body = text[1:-1]
    if _QUOTED_BODY_RE[mark].fullmatch(body) is None:
        raise ValueError("invalid syntax")
    return _ESCAPE_RE.sub(_unescape, body)


def quote(value: str) -> str:
    """Return *value* as a double-quoted literal that :func:`unquote` reverses."""
    parts = ['"']
    for char in value:
        if char in _QUOTE_ESCAPES:
            parts.append(_QUOTE_ESCAPES[char])
        elif char.isprintable():
            parts.append(char)
        elif ord(char) <= 0xFF:
            parts.append(f"\\x{ord(char):02x}")
        elif ord(char) <= 0xFFFF:
            parts.append(f"\\u{ord(char):04x}")
        else:
            parts.append(f"\\U{ord(char):08x}")
    parts.append('"')
    return "".join(parts)


def is_valid_key(key: str) -> bool:
    """Return ``True`` when *key* decodes back unchanged from ``key = value``."""
    return (
        key != ""
        and key == key.strip()
        and key.isprintable()
        and "=" not in key
        and not key.startswith(("#", "["))
    )


def is_valid_alias(alias: str) -> bool:
    """Return ``True`` when *alias* decodes back unchanged from its section header."""
    return alias != "" and alias == alias.strip() and alias.isprintable()


def _decode_value(text: str) -> str:
    if text == "":
        raise ValueError("empty value")
    if text[0] in "\"'":
        return unquote(text)
    return text


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode(text: str) -> ConfigModel:
    """Parse config *text* into a :class:`ConfigModel`.

    Missing built-in executors are merged into the result; executors
    present in *text* are never overwritten.

    Raises
    ------
    ConfigDecodeError
        On the first malformed line.  Nothing is partially applied.
    """
    model = ConfigModel()
    section: str | None = None
    alias = ""

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if line == "":
            section = None
            continue
        if line.startswith("#"):
            continue

        if line.startswith("[") and line.endswith("]"):
            name = line[1:-1].strip()
            if name == EXECUTORS_SECTION:
                section = EXECUTORS_SECTION
            elif name.startswith(COMMANDS_SECTION_PREFIX):
                alias = name[len(COMMANDS_SECTION_PREFIX):].strip()
                if alias == "":
                    raise ConfigDecodeError(
                        "command section name is empty",
                        line_number=line_number,
                        line=line,
                    )
                section = _COMMANDS_SECTION
                model.commands.setdefault(alias, CommandDefinition(path=""))
            else:
                raise ConfigDecodeError(
                    f'unknown section "{name}"', line_number=line_number, line=line
                )
            continue

        key, separator, value_text = line.partition("=")
        key = key.strip()
        if not separator:
            raise ConfigDecodeError(
                f'invalid config line: "{line}"', line_number=line_number, line=line
            )
        if key == "":
            raise ConfigDecodeError(
                f'invalid config key in line: "{line}"', line_number=line_number, line=line
            )
        try:
            value = _decode_value(value_text.strip())
        except ValueError as exc:
            raise ConfigDecodeError(
                f'invalid value for "{key}": {exc}', line_number=line_number, line=line
            ) from exc

        if section == EXECUTORS_SECTION:
            model.executors[key.lower()] = value
        elif section == _COMMANDS_SECTION:
            if key not in _COMMAND_FIELDS:
                raise ConfigDecodeError(
                    f'unknown key "{key}" in commands.{alias}',
                    line_number=line_number,
                    line=line,
                )
            model.commands[alias] = dataclasses.replace(
                model.commands[alias], **{key: value}
            )
        else:
            model.scalars[key] = value

    model.merge_default_executors()
    return model


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode(model: ConfigModel) -> str:
    """Render *model* as deterministic config text.

    Scalars come first, then ``[executors]``, then one
    ``[commands.<alias>]`` block per command, each group sorted by key.
    """
    lines: list[str] = [
        f"{key} = {quote(model.scalars[key])}" for key in sorted(model.scalars)
    ]

    if model.executors:
        if lines:
            lines.append("")
        lines.append(f"[{EXECUTORS_SECTION}]")
        lines.extend(
            f"{key} = {quote(model.executors[key])}" for key in sorted(model.executors)
        )

    if model.commands:
        if lines:
            lines.append("")
        for index, alias in enumerate(sorted(model.commands)):
            if index:
                lines.append("")
            command = model.commands[alias]
            lines.append(f"[{COMMANDS_SECTION_PREFIX}{alias}]")
            lines.append(f"path = {quote(command.path)}")
            lines.append(f"description = {quote(command.description)}")

    return "".join(f"{line}\n" for line in lines)
