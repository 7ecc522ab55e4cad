"""
Ruby Bindings Generator - Generate cgo glue exposing Go packages to Ruby
"""

from .generator import RubyBindingsGenerator
from .type_mapper import TypeResolver, TypeResolutionError, OwnedClass, ExternalClass, Primitive
from .code_generators import BindingSynthesizer, OutputBuilder, OutputSink, RenderError
from .descriptor import (
    BindingDescriptor,
    CallbackDescriptor,
    ClassInfo,
    DescriptorError,
    Parameter,
    Scope,
)
from .config import BindingConfig, parse_config_file
from .constants import (
    RUBY_CONVERSION_MAP,
    FAILURE_TYPE,
    NIL_VALUE,
    GORB_IMPORT,
)

__version__ = "0.1.0"

__all__ = [
    "RubyBindingsGenerator",
    "TypeResolver",
    "TypeResolutionError",
    "OwnedClass",
    "ExternalClass",
    "Primitive",
    "BindingSynthesizer",
    "OutputBuilder",
    "OutputSink",
    "RenderError",
    "BindingDescriptor",
    "CallbackDescriptor",
    "ClassInfo",
    "DescriptorError",
    "Parameter",
    "Scope",
    "BindingConfig",
    "parse_config_file",
    "RUBY_CONVERSION_MAP",
    "FAILURE_TYPE",
    "NIL_VALUE",
    "GORB_IMPORT",
]
