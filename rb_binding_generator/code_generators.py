"""
Code generation functions for Ruby bindings of Go packages
"""

from dataclasses import dataclass, field

from .constants import (
    BASE_OBJECT_HANDLE, BLOCK_PREFIX, FAILURE_TYPE, GLUE_PREFIX, GORB_IMPORT, MODULE_HANDLE,
    NIL_VALUE, PREDICATE_MARKER, STRING_CONVERSION_NAME, STRUCT_MARKER,
)
from .descriptor import BindingDescriptor, Scope
from .naming import capitalize, escape_keyword, indirection, underscore
from .type_mapper import ExternalClass, OwnedClass, Primitive, TypeResolver


class RenderError(RuntimeError):
    """Internal inconsistency while rendering glue code"""


@dataclass
class OutputSink:
    """Append-only buffers shared by every binding of one generation run"""
    methods: list[str] = field(default_factory=list)
    init: list[str] = field(default_factory=list)
    preamble: list[str] = field(default_factory=list)
    used_imports: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class Fragment:
    """Rendered text plus the imports it relies on"""
    text: str
    imports: frozenset = frozenset()


class BindingSynthesizer:
    """Generates cgo glue code exposing Go members to Ruby"""

    def __init__(self, type_resolver: TypeResolver):
        self.type_resolver = type_resolver

    # -- naming -------------------------------------------------------------

    def resolved_return_type(self, desc: BindingDescriptor) -> str:
        if not desc.return_types:
            return ""
        return self.type_resolver.resolved_type(desc.return_types[0])

    def ruby_name(self, desc: BindingDescriptor) -> str:
        """Ruby method name derived from the Go name"""
        name = underscore(desc.native_name)
        if name == "string":
            return STRING_CONVERSION_NAME
        if self.resolved_return_type(desc) == "bool":
            name += PREDICATE_MARKER
        return name

    def export_name(self, desc: BindingDescriptor) -> str:
        if desc.export_name:
            return desc.export_name
        return self.ruby_name(desc)

    def registered_name(self, desc: BindingDescriptor) -> str:
        if desc.is_module_function:
            return self.ruby_name(desc)
        return self.export_name(desc)

    def go_name(self, desc: BindingDescriptor) -> str:
        return capitalize(desc.native_name)

    def func_name(self, desc: BindingDescriptor) -> str:
        """Exported cgo symbol, unique per (scope, owner, name)"""
        marker = "c" if desc.scope == Scope.CLASS else "i"
        owner = desc.owner.name if desc.owner else ""
        return f"{GLUE_PREFIX}{marker}method_{owner}_{desc.native_name}"

    def block_func_name(self, desc: BindingDescriptor) -> str:
        return BLOCK_PREFIX + self.func_name(desc)

    def fn_receiver(self, desc: BindingDescriptor) -> str:
        if desc.scope == Scope.CLASS:
            return self.type_resolver.package
        return "go_obj"

    # -- marshaling ---------------------------------------------------------

    def _conversion_pair(self, type_name: str) -> tuple[str, str]:
        pair = self.type_resolver.conversion_pair(type_name)
        if len(pair) != 2 or not all(pair):
            raise RenderError(f"Incomplete conversion routines for type '{type_name}': {pair!r}")
        return pair

    def arg_to_go(self, desc: BindingDescriptor, type_name: str, val: str, imports: set) -> str:
        """Expression converting a Ruby VALUE into the Go type"""
        to_go = self._conversion_pair(type_name)[1]
        imports.update(self.type_resolver.required_imports(type_name))
        out = f"gorb.{to_go}({val})"
        go_type = self.type_resolver.native_type_name(type_name)

        if to_go == STRUCT_MARKER and indirection(go_type) == 0:
            go_type = "*" + go_type
        if indirection(go_type) > 0:
            out = f"({go_type})({out})"
        else:
            out = f"{go_type}({out})"
        return "&" * max(desc.indirection - 1, 0) + out

    def block_return_to_go(self, desc: BindingDescriptor, type_name: str, imports: set) -> str:
        """Expression converting the block's result into the Go return type"""
        value = self.arg_to_go(desc, type_name, "ret", imports)
        if self.type_resolver.is_value_type(type_name):
            value = "*" + value
        return value

    def value_to_ruby(self, desc: BindingDescriptor, type_name: str, val: str, imports: set) -> str:
        """Expression converting a Go value into a Ruby VALUE"""
        kind = self.type_resolver.classify(type_name)
        if isinstance(kind, Primitive):
            if not kind.to_ruby:
                raise RenderError(f"No Go->Ruby routine for type '{type_name}'")
            return f"gorb.{kind.to_ruby}({val})"

        if isinstance(kind, OwnedClass):
            handle = kind.class_info.var_name if kind.class_info else BASE_OBJECT_HANDLE
        elif isinstance(kind, ExternalClass):
            handle = f'gorb.ObjAtPath("{kind.module_path}")'
            imports.add(kind.import_path)
        else:
            raise RenderError(f"Unhandled type classification {kind!r}")

        imports.add("unsafe")
        if desc.indirection == 0:
            val = "&" + val
        return f"gorb.StructValue({handle}, unsafe.Pointer({val}))"

    def return_to_ruby(self, desc: BindingDescriptor, imports: set) -> str:
        if not desc.has_return:
            return NIL_VALUE
        return self.value_to_ruby(desc, desc.effective_return_class, "ret", imports)

    def receiver_vars(self, return_types) -> str:
        """Variables capturing the results of a call"""
        if not return_types:
            return ""
        fallible = return_types[-1] == FAILURE_TYPE
        if len(return_types) == 1:
            return "err" if fallible else "ret"
        return "ret, err" if fallible else "ret, _"

    def _go_type_list(self, types) -> str:
        names = [self.type_resolver.native_type_name(t) for t in types]
        if not names:
            return ""
        if len(names) == 1:
            return " " + names[0]
        return " (" + ", ".join(names) + ")"

    # -- rendering ----------------------------------------------------------

    def render_glue(self, desc: BindingDescriptor) -> Fragment:
        """The //export function Ruby calls through cgo"""
        imports = set()
        func_name = self.func_name(desc)
        ruby_args = ["self"] + [escape_keyword(p.name) for p in desc.parameters]
        receiver = self.fn_receiver(desc)

        lines = [
            f"//export {func_name}",
            f"func {func_name}({', '.join(ruby_args)} uintptr) uintptr {{",
        ]

        if desc.has_callback:
            enum_args = ["self", f'gorb.StringValue("{self.registered_name(desc)}")'] + ruby_args[1:]
            lines += [
                f"\tif e := gorb.EnumFor({', '.join(enum_args)}); e != {NIL_VALUE} {{",
                "\t\treturn e",
                "\t}",
                "",
            ]

        if desc.scope != Scope.CLASS:
            lines.append(f"\t{receiver} := {desc.owner.receiver_helper}(self)")

        go_args = []
        for param, ruby_arg in zip(desc.parameters, ruby_args[1:]):
            lines.append(f"\tgo_{param.name} := {self.arg_to_go(desc, param.type, ruby_arg, imports)}")
            prefix = "*" if self.type_resolver.is_value_type(param.type) else ""
            go_args.append(f"{prefix}go_{param.name}")
        if desc.has_callback:
            go_args.append(self.block_func_name(desc))

        call = f"{receiver}.{self.go_name(desc)}({', '.join(go_args)})"
        receiver_vars = self.receiver_vars(desc.return_types)
        if receiver_vars:
            lines.append(f"\t{receiver_vars} := {call}")
        else:
            lines.append(f"\t{call}")
        if desc.is_fallible:
            lines.append("\tgorb.RaiseError(err)")

        if desc.has_return and receiver_vars != "err":
            lines.append(f"\treturn {self.return_to_ruby(desc, imports)}")
        else:
            lines.append(f"\treturn {NIL_VALUE}")
        lines.append("}")
        return Fragment("\n".join(lines) + "\n", frozenset(imports))

    def render_trampoline(self, desc: BindingDescriptor) -> Fragment | None:
        """Go function handed to the native call that yields to the Ruby block"""
        block = desc.callback
        if block is None:
            return None

        imports = set()
        params = []
        for param in block.parameters:
            go_type = self.type_resolver.native_type_name(param.type)
            imports.update(self.type_resolver.required_imports(param.type))
            params.append(f"{escape_keyword(param.name)} {go_type}")
        for type_name in block.return_types:
            imports.update(self.type_resolver.required_imports(type_name))

        lines = [
            f"func {self.block_func_name(desc)}({', '.join(params)}){self._go_type_list(block.return_types)} {{"
        ]
        rb_args = []
        for param in block.parameters:
            value = self.value_to_ruby(desc, param.type, escape_keyword(param.name), imports)
            lines.append(f"\trb_{param.name} := {value}")
            rb_args.append(f"rb_{param.name}")
        yield_args = ", ".join(rb_args)

        if block.is_fallible:
            if len(block.return_types) == 1:
                lines.append(f"\t_, err := gorb.ProtectedYield({yield_args})")
                lines.append("\treturn err")
            else:
                value = self.block_return_to_go(desc, block.return_types[0], imports)
                lines.append(f"\tret, err := gorb.ProtectedYield({yield_args})")
                lines.append(f"\treturn {value}, err")
        elif block.has_return:
            lines.append(f"\tret := gorb.Yield({yield_args})")
            lines.append(f"\treturn {self.block_return_to_go(desc, block.return_types[0], imports)}")
        else:
            lines.append(f"\tgorb.Yield({yield_args})")
        lines.append("}")
        return Fragment("\n".join(lines) + "\n", frozenset(imports))

    def render_registration(self, desc: BindingDescriptor) -> str:
        """Line of the Init function that defines the Ruby method"""
        func_name = self.func_name(desc)
        if desc.is_module_function:
            return (f'\tgorb.DefineModuleFunction({MODULE_HANDLE}, "{self.ruby_name(desc)}", '
                    f"C.{func_name}, {desc.arity})")
        scope = "Class" if desc.scope == Scope.CLASS else ""
        return (f'\tgorb.Define{scope}Method({desc.owner.var_name}, "{self.export_name(desc)}", '
                f"C.{func_name}, {desc.arity})")

    def render_preamble(self, desc: BindingDescriptor) -> str:
        """C declaration of the exported glue function for the cgo preamble"""
        args = ", ".join(["uintptr_t"] * (desc.arity + 1))
        return f"extern uintptr_t {self.func_name(desc)}({args});"

    def write(self, desc: BindingDescriptor, sink: OutputSink):
        """Render one binding and append it to the shared buffers

        Nothing is appended unless every fragment renders.
        """
        glue = self.render_glue(desc)
        trampoline = self.render_trampoline(desc)
        registration = self.render_registration(desc)
        preamble = self.render_preamble(desc)

        text = glue.text
        imports = set(glue.imports)
        if trampoline is not None:
            text += "\n" + trampoline.text
            imports |= trampoline.imports

        sink.methods.append(text)
        sink.init.append(registration)
        sink.preamble.append(preamble)
        sink.used_imports |= imports


class OutputBuilder:
    """Builds the final Go output file"""

    @staticmethod
    def build(package: str, import_path: str, module_name: str, sink: OutputSink,
              classes=()) -> str:
        """Build the final cgo source"""
        parts = ["// Code generated by rb-binding-generator. DO NOT EDIT.", "", "package main", ""]

        # cgo preamble
        parts.append("/*")
        parts.append("#include <stdint.h>")
        parts.append("#include <ruby.h>")
        if sink.preamble:
            parts.append("")
            parts.extend(sink.preamble)
        parts.append("*/")
        parts.append('import "C"')
        parts.append("")

        # Imports
        std_imports = sorted(p for p in sink.used_imports if "." not in p.split("/")[0])
        other_imports = sorted(p for p in sink.used_imports if "." in p.split("/")[0])
        package_import = f'"{import_path}"'
        if import_path.rstrip("/").split("/")[-1] != package:
            package_import = f"{package} {package_import}"
        needs_package = bool(classes) or bool(sink.methods)
        parts.append("import (")
        for path in std_imports:
            parts.append(f'\t"{path}"')
        if std_imports:
            parts.append("")
        parts.append(f'\t"{GORB_IMPORT}"')
        if needs_package and import_path not in sink.used_imports:
            parts.append(f"\t{package_import}")
        for path in other_imports:
            if path != GORB_IMPORT:
                parts.append(f'\t"{path}"')
        parts.append(")")
        parts.append("")

        # Module and class handles
        parts.append(f"var {MODULE_HANDLE} uintptr")
        for class_info in classes:
            parts.append(f"var {class_info.var_name} uintptr")
        parts.append("")

        for class_info in classes:
            go_type = f"*{package}.{class_info.name}"
            parts.append(f"func {class_info.receiver_helper}(obj uintptr) {go_type} {{")
            parts.append(f"\treturn ({go_type})(gorb.GoStruct(obj))")
            parts.append("}")
            parts.append("")

        # Glue functions and trampolines
        for method in sink.methods:
            parts.append(method)

        # Init function
        parts.append(f"//export Init_{package}")
        parts.append(f"func Init_{package}() {{")
        parts.append(f'\t{MODULE_HANDLE} = gorb.DefineModule("{module_name}")')
        for class_info in classes:
            parts.append(f'\t{class_info.var_name} = gorb.DefineClass({MODULE_HANDLE}, "{class_info.name}")')
        parts.extend(sink.init)
        parts.append("}")
        parts.append("")
        parts.append("func main() {}")
        parts.append("")

        return "\n".join(parts)
