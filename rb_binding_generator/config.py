"""
XML configuration file parsing for Ruby bindings generator
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .descriptor import BindingDescriptor, CallbackDescriptor, ClassInfo, Parameter, Scope
from .naming import capitalize


@dataclass
class BindingConfig:
    """Metadata for one Go package to expose to Ruby"""
    package: str = ""
    import_path: str = ""
    module_name: str = ""
    imports: dict[str, str] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)
    conversions: list[tuple[str, str, str]] = field(default_factory=list)
    classes: list[ClassInfo] = field(default_factory=list)
    descriptors: list[BindingDescriptor] = field(default_factory=list)


def _parse_bool(element, attribute: str) -> bool:
    return element.get(attribute, "false").strip().lower() == "true"


def _parse_parameters(element, where: str) -> list[Parameter]:
    parameters = []
    for param in element.findall("param"):
        name = param.get("name")
        type_name = param.get("type")
        if not name or not type_name:
            raise ValueError(f"Param element in {where} missing 'name' or 'type' attribute")
        parameters.append(Parameter(name.strip(), type_name.strip()))
    return parameters


def _parse_return_types(element, where: str) -> list[str]:
    return_types = []
    for ret in element.findall("return"):
        type_name = ret.get("type")
        if not type_name:
            raise ValueError(f"Return element in {where} missing 'type' attribute")
        return_types.append(type_name.strip())
    return return_types


def _parse_method(element, owner: ClassInfo | None) -> BindingDescriptor:
    name = element.get("name")
    if not name:
        raise ValueError(f"{capitalize(element.tag)} element missing 'name' attribute")
    name = name.strip()
    where = f"{element.tag} '{name}'"

    scope_name = element.get("scope", "instance" if owner else "class").strip().lower()
    try:
        scope = Scope(scope_name)
    except ValueError:
        raise ValueError(f"Invalid scope '{scope_name}' in {where}. Must be 'instance' or 'class'.")

    try:
        indirection = int(element.get("indirection", "0"))
    except ValueError:
        raise ValueError(f"Invalid indirection '{element.get('indirection')}' in {where}")

    callback = None
    block = element.find("block")
    if block is not None:
        callback = CallbackDescriptor(
            _parse_parameters(block, f"block of {where}"),
            _parse_return_types(block, f"block of {where}"),
        )

    export_name = element.get("export")
    return_class = element.get("return_class")
    return BindingDescriptor(
        native_name=name,
        owner=owner,
        scope=scope,
        is_constructor=_parse_bool(element, "constructor"),
        export_name=export_name.strip() if export_name else None,
        indirection=indirection,
        parameters=_parse_parameters(element, where),
        return_types=_parse_return_types(element, where),
        return_class=return_class.strip() if return_class else None,
        callback=callback,
    )


def parse_config_file(config_path):
    """Parse XML configuration file and return BindingConfig object"""
    try:
        tree = ET.parse(config_path)
        root = tree.getroot()

        if root.tag != "bindings":
            raise ValueError(f"Expected root element 'bindings', got '{root.tag}'")

        config = BindingConfig()
        package = root.get("package")
        if not package:
            raise ValueError("Bindings element missing 'package' attribute")
        config.package = package.strip()
        config.import_path = root.get("import", config.package).strip()
        config.module_name = root.get("module", capitalize(config.package)).strip()

        # Walk children in document order so bindings keep their declaration order
        for element in root:
            if element.tag == "import":
                name = element.get("name")
                path = element.get("path")
                if not path:
                    raise ValueError("Import element missing 'path' attribute")
                path = path.strip()
                name = name.strip() if name else path.rstrip("/").split("/")[-1]
                config.imports[name] = path

            elif element.tag == "alias":
                name = element.get("name")
                target = element.get("type")
                if not name or not target:
                    raise ValueError("Alias element missing 'name' or 'type' attribute")
                config.aliases[name.strip()] = target.strip()

            elif element.tag == "conversion":
                type_name = element.get("type")
                to_ruby = element.get("to_ruby")
                to_go = element.get("to_go")
                if not type_name or not to_ruby or not to_go:
                    raise ValueError("Conversion element missing 'type', 'to_ruby' or 'to_go' attribute")
                config.conversions.append((type_name.strip(), to_ruby.strip(), to_go.strip()))

            elif element.tag == "class":
                class_name = element.get("name")
                if not class_name:
                    raise ValueError("Class element missing 'name' attribute")
                class_info = ClassInfo(class_name.strip())
                config.classes.append(class_info)
                for method in element.findall("method"):
                    config.descriptors.append(_parse_method(method, class_info))

            elif element.tag == "function":
                config.descriptors.append(_parse_method(element, None))

        return config

    except ET.ParseError as e:
        raise ValueError(f"XML parsing error: {e}")
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
