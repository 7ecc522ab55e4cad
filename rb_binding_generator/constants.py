"""
Constants and mappings for Ruby bindings generation
"""


# Mapping from Go builtin types to gorb conversion routines
# (Go -> Ruby routine, Ruby -> Go routine)
RUBY_CONVERSION_MAP = {
    "string": ("StringValue", "GoString"),
    "bool": ("BoolValue", "GoBool"),
    "int": ("IntValue", "GoInt"),
    "int8": ("IntValue", "GoInt"),
    "int16": ("IntValue", "GoInt"),
    "int32": ("IntValue", "GoInt"),
    "int64": ("Int64Value", "GoInt64"),
    "uint": ("UintValue", "GoUint"),
    "uint8": ("UintValue", "GoUint"),
    "uint16": ("UintValue", "GoUint"),
    "uint32": ("UintValue", "GoUint"),
    "uint64": ("Uint64Value", "GoUint64"),
    "uintptr": ("UintValue", "GoUint"),
    "byte": ("UintValue", "GoUint"),
    "rune": ("IntValue", "GoInt"),
    "float32": ("FloatValue", "GoFloat32"),
    "float64": ("FloatValue", "GoFloat64"),
    "error": ("ErrorValue", "GoError"),
    "[]byte": ("BytesValue", "GoBytes"),
    "[]string": ("StringSliceValue", "GoStringSlice"),
}

# Conversion pair used for every owned or external class type
STRUCT_CONVERSION = ("StructValue", "GoStruct")
STRUCT_MARKER = STRUCT_CONVERSION[1]

# Return type marking a fallible call
FAILURE_TYPE = "error"

# Ruby nil as seen from cgo
NIL_VALUE = "C.Qnil"

# Class handle used when an owned type has no registered class
BASE_OBJECT_HANDLE = "rb_cObject"

# Module handle variable in the generated Init function
MODULE_HANDLE = "g_pkg"

# Ruby's conventional string conversion method
STRING_CONVERSION_NAME = "to_s"

# Suffix for methods returning bool
PREDICATE_MARKER = "?"

GLUE_PREFIX = "g_"
BLOCK_PREFIX = "block__"
CLASS_VAR_PREFIX = "g_class_"
RECEIVER_HELPER_PREFIX = "g_val2ptr_"

# Import path of the Go <-> Ruby bridge
GORB_IMPORT = "github.com/lsegal/gorb"

# Go reserved words that cannot be used as parameter names
GO_KEYWORDS = {
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
}

# Identifiers the generated glue declares itself
RESERVED_NAMES = {"self", "ret", "err", "e", "go_obj"}
