"""
Atom and variable name normalization.

Dialyzer prints atoms the way Erlang reads them back: quoted (``'ok'``),
module atoms with the ``Elixir.`` prefix, and pattern variables with a
version suffix (``Opts@1``, ``VX@2``). The helpers here turn those tokens
into the spelling Elixir's ``inspect/1`` would use.
"""

import re
from typing import FrozenSet

from ..utils.config import ATOM_QUOTE_CHAR, ELIXIR_MODULE_PREFIX, UNUSED_NAME_PREFIX

_VERSIONED_V = re.compile(r"^V(.+)@\d+$")
_VERSIONED = re.compile(r"^(.+)@\d+$")
_UNUSED_VERSIONED = re.compile(r"^_+@\d+$")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_@]*[?!]?$")
_ALIAS_SEGMENT = re.compile(r"^[A-Z][A-Za-z0-9_]*$")

_BARE_ATOMS: FrozenSet[str] = frozenset({"nil", "true", "false"})

# Atoms that inspect without quotes after the colon
_OPERATOR_ATOMS: FrozenSet[str] = frozenset({
    "+", "-", "*", "/", "++", "--", "**", "..", "...", "<>", "!", "^", "^^^",
    "~~~", "&&", "&&&", "||", "|||", "==", "!=", "===", "!==", "=~", "<", ">",
    "<=", ">=", "<<<", ">>>", "|>", "<|>", "<~", "~>", "<~>", "<-", "\\\\",
    "::", "=", "&", "@", "|", ".", "%", "%{}", "{}", "<<>>", "[]",
    "and", "or", "not", "in", "when",
})

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\f": "\\f",
    "\v": "\\v",
    "\b": "\\b",
    "\a": "\\a",
    "\x1b": "\\e",
    "\x00": "\\0",
}


def inspect_string(text: str) -> str:
    """Double-quoted string literal as Elixir's ``inspect/1`` prints it."""
    escaped = []
    for ch in text:
        if ch in _STRING_ESCAPES:
            escaped.append(_STRING_ESCAPES[ch])
        elif not ch.isprintable():
            escaped.append(f"\\x{ord(ch):02X}" if ord(ch) < 0x100 else f"\\x{{{ord(ch):X}}}")
        else:
            escaped.append(ch)
    return '"' + "".join(escaped) + '"'


def inspect_atom(name: str) -> str:
    """
    Render an atom name the way Elixir's ``inspect/1`` does.

    >>> inspect_atom("ok")
    ':ok'
    >>> inspect_atom("Elixir.Plug.Conn")
    'Plug.Conn'
    >>> inspect_atom("hello world")
    ':"hello world"'
    """
    if name in _BARE_ATOMS:
        return name
    if name == "Elixir":
        return name
    if name.startswith(ELIXIR_MODULE_PREFIX):
        segments = name[len(ELIXIR_MODULE_PREFIX):].split(".")
        if all(_ALIAS_SEGMENT.match(segment) for segment in segments):
            return ".".join(segments)
    if name in _OPERATOR_ATOMS or _IDENTIFIER.match(name):
        return ":" + name
    return ":" + inspect_string(name)


def strip_var_version(name: str) -> str:
    """``VOpts@1`` → ``Opts``, ``Opts@1`` → ``Opts``; anything else unchanged."""
    name = _VERSIONED_V.sub(r"\1", name)
    return _VERSIONED.sub(r"\1", name)


def normalize_name(raw: str) -> str:
    """Display form of a pattern variable or label (quotes kept)."""
    if _UNUSED_VERSIONED.match(raw):
        return UNUSED_NAME_PREFIX
    return strip_var_version(raw)


def atomize(raw: str) -> str:
    """
    Display form of a raw atom token.

    Bare ``Elixir.`` names become aliases, versioned variables lose their
    suffix, underscore-prefixed names and single characters are left alone,
    and everything else is inspected as an atom.
    """
    if raw.startswith(ELIXIR_MODULE_PREFIX):
        return raw[len(ELIXIR_MODULE_PREFIX):].strip(ATOM_QUOTE_CHAR)
    if len(raw) == 1:
        return raw
    if _UNUSED_VERSIONED.match(raw):
        return UNUSED_NAME_PREFIX
    stripped = strip_var_version(raw)
    if stripped != raw:
        return stripped
    if raw.startswith(UNUSED_NAME_PREFIX):
        return raw
    return inspect_atom(raw.strip(ATOM_QUOTE_CHAR))


def struct_name(tag: str) -> str:
    """Name printed between ``%`` and ``{`` for a struct tagged ``tag``."""
    return atomize(ATOM_QUOTE_CHAR + tag + ATOM_QUOTE_CHAR).strip('"')


def downcase_first(text: str) -> str:
    return text[:1].lower() + text[1:]
