"""
Configuration constants to replace magic strings throughout erltype
"""

import os
import tempfile

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "erltype_parser.cache")
DEFAULT_SOURCE_NAME = "<input>"

# Atom and name constants
ATOM_QUOTE_CHAR = "'"
ELIXIR_MODULE_PREFIX = "Elixir."
STRUCT_KEY = "__struct__"
EXCEPTION_KEY = "__exception__"
UNUSED_NAME_PREFIX = "_"

# Public entry point constants
PATTERN_PREFIX = "pattern "
CONTRACT_CLAUSE_SEPARATOR = ";"
CONTRACT_HEAD_LABEL = "Contract head:\n"
CONTRACT_HEAD_JOINER = "\n\n"

# Formatting constants (Elixir formatter default line length)
DEFAULT_LINE_WIDTH = 98
SPEC_ARG_INDENT = " " * 8
SPEC_CLOSE_INDENT = " " * 6
TEMPLATE_REINDENT = "\n      "

# Templates handed to the formatter; the printed text replaces {pretty}
TEMPLATE_BODY = "def a() do\n  :ok\nend\n"
TYPE_TEMPLATE = "@spec a({pretty}) :: :ok\n" + TEMPLATE_BODY
TYPE_PREFIX = "@spec a("
TYPE_SUFFIX = ") :: :ok\ndef a() do\n  :ok\nend"
TYPE_INDENTED_SUFFIX = ") ::\n        :ok\ndef a() do\n  :ok\nend"
ARGS_TEMPLATE = "@spec a{pretty} :: :ok\n" + TEMPLATE_BODY
ARGS_PREFIX = "@spec a"
ARGS_SUFFIX = " :: :ok\ndef a() do\n  :ok\nend"
CONTRACT_TEMPLATE = "@spec a{pretty}\n" + TEMPLATE_BODY
CONTRACT_PREFIX = "@spec a"
CONTRACT_SUFFIX = "\ndef a() do\n  :ok\nend"

# Diff report constants
MISMATCH_HEADER = "Mismatched fields:"
