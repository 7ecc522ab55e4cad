"""
Identifier and type-name helpers shared by the resolver and code generator
"""

import re

from .constants import GO_KEYWORDS


_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def underscore(name: str) -> str:
    """Convert a Go MixedCaps identifier to Ruby snake_case

    ReadLine -> read_line, HTTPServer -> http_server, ID -> id
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def capitalize(name: str) -> str:
    """Upper-case the first character (Go exported form)"""
    if not name:
        return name
    return name[0].upper() + name[1:]


def escape_keyword(name: str) -> str:
    """Escape Go keywords by appending an underscore"""
    if name in GO_KEYWORDS:
        return f"{name}_"
    return name


def indirection(type_name: str) -> int:
    """Number of leading pointer markers on a Go type"""
    return len(type_name) - len(type_name.lstrip("*"))


def strip_pointers(type_name: str) -> str:
    return type_name.lstrip("*")


def package_name(type_name: str) -> str:
    """Package qualifier of `pkg.Type`, or an empty string"""
    base = strip_pointers(type_name)
    if "." not in base:
        return ""
    return base.split(".", 1)[0]


def insert_pkg(type_name: str, pkg: str) -> str:
    """Qualify the base name with a package, keeping the pointer prefix"""
    base = strip_pointers(type_name)
    if not pkg or "." in base:
        return type_name
    return "*" * indirection(type_name) + f"{pkg}.{base}"


def is_exported(type_name: str) -> bool:
    """True for unqualified Go identifiers starting with an upper-case letter"""
    base = strip_pointers(type_name)
    return bool(base) and "." not in base and base[0].isupper()


def is_external(type_name: str) -> bool:
    """True for package-qualified type names such as `time.Time`"""
    base = strip_pointers(type_name)
    if "." not in base or base.startswith("[]"):
        return False
    pkg, name = base.split(".", 1)
    return bool(pkg) and bool(name) and name[0].isupper()
