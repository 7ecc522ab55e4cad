"""
CLI integration tests
"""

import subprocess
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "rb_binding_generator.main", *args],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
    )


def test_cli_writes_output_file(shapes_config_file, tmp_path):
    """Test generating a Go file from a config"""
    output_file = tmp_path / "bindings.go"
    result = run_cli("-C", str(shapes_config_file), "-o", str(output_file))

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert output_file.exists(), "Output file not created"
    content = output_file.read_text()
    assert "//export Init_shapes" in content
    assert f"Generated bindings: {output_file}" in result.stdout


def test_cli_prints_to_stdout(shapes_config_file):
    """Test that output goes to stdout without -o"""
    result = run_cli("--config", str(shapes_config_file))

    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert "func Init_shapes() {" in result.stdout


def test_cli_missing_config_file(tmp_path):
    """Test error for a config file that does not exist"""
    result = run_cli("-C", str(tmp_path / "missing.xml"))

    assert result.returncode == 1
    assert "Error reading config file" in result.stderr


def test_cli_requires_config():
    """Test that --config is required"""
    result = run_cli()
    assert result.returncode != 0
    assert "--config" in result.stderr


def test_cli_config_without_bindings(tmp_path):
    """Test error when the config declares nothing to bind"""
    config = tmp_path / "empty.xml"
    config.write_text('<bindings package="geo"/>')
    result = run_cli("-C", str(config))

    assert result.returncode == 1
    assert "No methods or functions found" in result.stderr


def test_cli_unresolvable_type(tmp_path):
    """Test that a resolution failure aborts with an error"""
    config = tmp_path / "bad.xml"
    config.write_text("""
    <bindings package="geo">
        <function name="Phase"><return type="complex128"/></function>
    </bindings>
    """)
    output_file = tmp_path / "bindings.go"
    result = run_cli("-C", str(config), "-o", str(output_file))

    assert result.returncode == 1
    assert "Error: No conversion known for type 'complex128'" in result.stderr
    assert not output_file.exists()
