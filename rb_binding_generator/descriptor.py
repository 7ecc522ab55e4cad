"""
Data model describing one Go callable member to be bound to Ruby
"""

from dataclasses import dataclass
from enum import Enum

from .constants import CLASS_VAR_PREFIX, FAILURE_TYPE, RECEIVER_HELPER_PREFIX, RESERVED_NAMES


class DescriptorError(ValueError):
    """Malformed binding metadata"""


class Scope(Enum):
    INSTANCE = "instance"
    CLASS = "class"


@dataclass(frozen=True)
class ClassInfo:
    """A Go type exposed as a Ruby class"""
    name: str

    @property
    def var_name(self) -> str:
        return f"{CLASS_VAR_PREFIX}{self.name}"

    @property
    def receiver_helper(self) -> str:
        return f"{RECEIVER_HELPER_PREFIX}{self.name}"


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str


def _check_parameters(parameters, what: str):
    seen = set()
    for param in parameters:
        if not param.name:
            raise DescriptorError(f"{what} has a parameter without a name")
        if not param.type:
            raise DescriptorError(f"{what} parameter '{param.name}' has no type")
        if param.name in RESERVED_NAMES:
            raise DescriptorError(
                f"{what} parameter '{param.name}' clashes with a name used by the generated glue"
            )
        if param.name in seen:
            raise DescriptorError(f"{what} has duplicate parameter '{param.name}'")
        seen.add(param.name)


def _pair_parameters(names, types, what: str) -> tuple[Parameter, ...]:
    names = list(names)
    types = list(types)
    if len(names) != len(types):
        raise DescriptorError(
            f"{what} has {len(names)} parameter names but {len(types)} parameter types"
        )
    return tuple(Parameter(n, t) for n, t in zip(names, types))


@dataclass(frozen=True)
class CallbackDescriptor:
    """Signature of the block a Go function calls back into"""
    parameters: tuple[Parameter, ...] = ()
    return_types: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "return_types", tuple(self.return_types))
        if not self.parameters and not self.return_types:
            raise DescriptorError("Callback must declare parameters or return types")
        if len(self.return_types) > 2:
            raise DescriptorError(
                f"Callback declares {len(self.return_types)} return types, at most 2 allowed"
            )
        _check_parameters(self.parameters, "Callback")

    @classmethod
    def from_lists(cls, names, types, return_types=()) -> "CallbackDescriptor":
        return cls(_pair_parameters(names, types, "Callback"), tuple(return_types))

    @property
    def is_fallible(self) -> bool:
        return bool(self.return_types) and self.return_types[-1] == FAILURE_TYPE

    @property
    def has_return(self) -> bool:
        return bool(self.return_types)


@dataclass(frozen=True)
class BindingDescriptor:
    """One Go method or package function to expose to Ruby

    Instances are built once from metadata and never modified afterwards.
    """
    native_name: str
    owner: ClassInfo | None = None
    scope: Scope = Scope.INSTANCE
    is_constructor: bool = False
    export_name: str | None = None
    indirection: int = 0
    parameters: tuple[Parameter, ...] = ()
    return_types: tuple[str, ...] = ()
    return_class: str | None = None
    callback: CallbackDescriptor | None = None

    def __post_init__(self):
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "return_types", tuple(self.return_types))
        what = f"Method '{self.native_name}'"

        if not self.native_name:
            raise DescriptorError("Method is missing a native name")
        if self.indirection < 0:
            raise DescriptorError(f"{what} has negative indirection {self.indirection}")
        if len(self.return_types) > 2:
            raise DescriptorError(
                f"{what} declares {len(self.return_types)} return types, at most 2 allowed"
            )
        if self.scope == Scope.INSTANCE and self.owner is None:
            raise DescriptorError(f"{what} is an instance method without an owning class")
        if self.is_constructor and self.owner is None:
            raise DescriptorError(f"{what} is a constructor without an owning class")
        _check_parameters(self.parameters, what)

    @classmethod
    def from_lists(cls, native_name: str, names, types, **kwargs) -> "BindingDescriptor":
        """Build a descriptor from parallel parameter name and type lists"""
        parameters = _pair_parameters(names, types, f"Method '{native_name}'")
        return cls(native_name, parameters=parameters, **kwargs)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def has_return(self) -> bool:
        return bool(self.return_types)

    @property
    def has_callback(self) -> bool:
        return self.callback is not None

    @property
    def is_fallible(self) -> bool:
        return bool(self.return_types) and self.return_types[-1] == FAILURE_TYPE

    @property
    def is_module_function(self) -> bool:
        return self.scope == Scope.CLASS and not self.is_constructor

    @property
    def effective_return_class(self) -> str | None:
        """Type whose class boxes the return value"""
        if self.return_class:
            return self.return_class
        if self.return_types:
            return self.return_types[0]
        return None
