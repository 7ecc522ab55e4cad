"""
Type resolution logic for marshaling Go types to and from Ruby values
"""

from dataclasses import dataclass

from .constants import RUBY_CONVERSION_MAP, STRUCT_CONVERSION, STRUCT_MARKER
from .descriptor import ClassInfo
from .naming import (
    capitalize, indirection, insert_pkg, is_exported, is_external,
    package_name, strip_pointers,
)


class TypeResolutionError(ValueError):
    """A type could not be resolved to a marshaling strategy"""


@dataclass(frozen=True)
class OwnedClass:
    """Type defined in the package being bound"""
    type_name: str
    class_info: ClassInfo | None


@dataclass(frozen=True)
class ExternalClass:
    """Type defined in another Go package, looked up by Ruby path at runtime"""
    type_name: str
    module_path: str
    import_path: str


@dataclass(frozen=True)
class Primitive:
    """Builtin type converted by a pair of gorb routines"""
    type_name: str
    to_ruby: str
    to_go: str


class TypeResolver:
    """Maps Go types to gorb marshaling strategies"""

    def __init__(self, package: str, classes=None, aliases=None, imports=None):
        self.package = package
        self.classes: dict[str, ClassInfo] = {}
        self.aliases: dict[str, str] = dict(aliases or {})
        self.imports: dict[str, str] = dict(imports or {})
        self.conversion_map = RUBY_CONVERSION_MAP.copy()
        for class_info in classes or []:
            self.add_class(class_info)

    def add_class(self, class_info: ClassInfo):
        self.classes[class_info.name] = class_info

    def add_alias(self, name: str, target: str):
        self.aliases[name] = target

    def add_import(self, name: str, path: str):
        self.imports[name] = path

    def add_conversion(self, type_name: str, to_ruby: str, to_go: str):
        self.conversion_map[type_name] = (to_ruby, to_go)

    def find_class(self, name: str) -> ClassInfo | None:
        return self.classes.get(strip_pointers(name))

    def resolve_alias(self, type_name: str) -> str:
        """Follow the alias chain of the base name, keeping the pointer prefix"""
        stars = "*" * indirection(type_name)
        base = strip_pointers(type_name)
        seen = {base}
        while base in self.aliases:
            target = self.aliases[base]
            if not target:
                break
            stars += "*" * indirection(target)
            base = strip_pointers(target)
            if base in seen:
                raise TypeResolutionError(f"Type alias cycle involving '{base}'")
            seen.add(base)
        return stars + base

    def resolved_type(self, type_name: str) -> str:
        """Alias-resolved type with pointer markers removed"""
        if not type_name:
            return ""
        return strip_pointers(self.resolve_alias(type_name))

    def import_for(self, type_name: str) -> str:
        pkg = package_name(type_name)
        if pkg not in self.imports:
            raise TypeResolutionError(
                f"Type '{type_name}' refers to package '{pkg}' which is not imported"
            )
        return self.imports[pkg]

    def qualified_module_path(self, type_name: str) -> str:
        """Ruby constant path of an external type (e.g. Time::Time)"""
        base = strip_pointers(type_name)
        pkg, name = base.split(".", 1)
        return f"{capitalize(pkg)}::{name}"

    def classify(self, type_name: str):
        """Resolve a type to OwnedClass, ExternalClass or Primitive"""
        resolved = self.resolved_type(type_name)
        if is_exported(resolved):
            return OwnedClass(resolved, self.find_class(resolved))
        if is_external(resolved):
            return ExternalClass(
                resolved, self.qualified_module_path(resolved), self.import_for(resolved)
            )
        if resolved in self.conversion_map:
            to_ruby, to_go = self.conversion_map[resolved]
            return Primitive(resolved, to_ruby, to_go)
        raise TypeResolutionError(f"No conversion known for type '{type_name}'")

    def conversion_pair(self, type_name: str) -> tuple[str, str]:
        """Go->Ruby and Ruby->Go routine names for a type"""
        kind = self.classify(type_name)
        if isinstance(kind, Primitive):
            return kind.to_ruby, kind.to_go
        return STRUCT_CONVERSION

    def native_type_name(self, type_name: str) -> str:
        """Go spelling of a type as seen from the generated package"""
        resolved = self.resolve_alias(type_name) if is_exported(type_name) else type_name
        if is_exported(resolved):
            return insert_pkg(resolved, self.package)
        return resolved

    def is_value_type(self, type_name: str) -> bool:
        """True for struct types passed by value"""
        resolved = self.resolve_alias(type_name)
        return indirection(resolved) == 0 and self.conversion_pair(type_name)[1] == STRUCT_MARKER

    def required_imports(self, type_name: str) -> set[str]:
        """Import paths a generated expression mentioning this type needs"""
        kind = self.classify(type_name)
        if isinstance(kind, ExternalClass):
            return {kind.import_path}
        return set()
