"""
Pytest configuration and fixtures
"""

import pytest

from rb_binding_generator.descriptor import ClassInfo
from rb_binding_generator.type_mapper import TypeResolver


SHAPES_CONFIG = """
<bindings package="shapes" import="github.com/acme/shapes">
    <import name="time" path="time"/>
    <alias name="Radius" type="float64"/>
    <class name="Circle">
        <method name="Area">
            <return type="float64"/>
        </method>
        <method name="NewCircle" scope="class" constructor="true" export="new" indirection="1">
            <param name="r" type="Radius"/>
            <return type="*Circle"/>
        </method>
        <method name="String">
            <return type="string"/>
        </method>
    </class>
    <class name="File">
        <method name="EachLine">
            <block>
                <param name="line" type="string"/>
            </block>
        </method>
        <method name="ModTime">
            <return type="time.Time"/>
        </method>
    </class>
    <function name="Open" indirection="1">
        <param name="path" type="string"/>
        <return type="*File"/>
        <return type="error"/>
    </function>
</bindings>
"""


@pytest.fixture
def shapes_config_file(tmp_path):
    """Write a representative bindings config and return its path"""
    path = tmp_path / "bindings.xml"
    path.write_text(SHAPES_CONFIG)
    return path


@pytest.fixture
def circle():
    return ClassInfo("Circle")


@pytest.fixture
def file_class():
    return ClassInfo("File")


@pytest.fixture
def resolver(circle, file_class):
    """Resolver for a small `shapes` package"""
    return TypeResolver(
        "shapes",
        classes=[circle, file_class],
        aliases={"Radius": "float64", "Flag": "bool", "Handle": "*File"},
        imports={"time": "time"},
    )
