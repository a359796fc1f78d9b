"""
MIME allow-list deciding whether a Drive file may be read and edited as text.

Source-code types show up under both the text/x-* and application/x-*
conventions depending on how the file was uploaded, so each language subtype is
registered under both. Anything under text/ is accepted by prefix.
"""

# Registered under both text/x-<name> and application/x-<name>
_LANGUAGE_SUBTYPES = (
    "abap", "aes", "apex", "azcli", "bat", "bicep", "cameligo", "css", "csp",
    "cypher", "dart", "dockerfile", "ecl", "elixir", "flow9", "freemarker2",
    "fsharp", "go", "graphql", "handlebars", "hcl", "html", "ini", "java",
    "julia", "kotlin", "less", "lexon", "liquid", "lua", "m3", "mdx", "mips",
    "msdax", "mysql", "objective-c", "pascal", "pascaligo", "perl", "pgsql",
    "pla", "postiats", "powerquery", "powershell", "protobuf", "pug", "python",
    "qsharp", "r", "razor", "redis", "redshift", "rst", "ruby", "rust", "sass",
    "sb", "scala", "scheme", "scss", "shellscript", "sol", "sparql", "sql", "st",
    "swift", "systemverilog", "tcl", "toml", "twig", "typescript", "vb",
    "verilog", "wgsl", "xml", "yaml",
)

_TEXT_ONLY_SUBTYPES = ("c", "c++", "clojure", "coffeescript", "javascript", "markdown", "php")
_APPLICATION_ONLY_SUBTYPES = ("csharp", "ld+json")

TEXT_MIME_TYPES = frozenset(
    {
        "text/plain",
        "text/markdown",
        "application/javascript",
        "application/json",
        "application/xml",
        "application/x-httpd-php",
    }
    | {f"text/x-{name}" for name in _LANGUAGE_SUBTYPES + _TEXT_ONLY_SUBTYPES}
    | {f"application/x-{name}" for name in _LANGUAGE_SUBTYPES + _APPLICATION_ONLY_SUBTYPES}
)


def is_text_like(mime_type: str | None) -> bool:
    """True if mime_type is allow-listed or any text/* type."""
    if not mime_type:
        return False
    return mime_type in TEXT_MIME_TYPES or mime_type.startswith("text/")


def supported_types() -> list[str]:
    """Sorted allow-list, returned to clients alongside a rejection."""
    return sorted(TEXT_MIME_TYPES)
