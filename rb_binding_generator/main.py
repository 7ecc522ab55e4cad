#!/usr/bin/env python3
"""
CLI entry point for Ruby bindings generator
Generates cgo glue exposing a Go package to Ruby through gorb
"""

import argparse
import sys
import os

# Add parent directory to sys.path for direct execution
if __name__ == '__main__' and __package__ is None:
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rb_binding_generator.config import parse_config_file
from rb_binding_generator.generator import RubyBindingsGenerator


def main():
    parser = argparse.ArgumentParser(
        description="Generate Ruby bindings (cgo glue) for a Go package",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --config bindings.xml --output ext/shapes/bindings.go
  %(prog)s -C bindings.xml > bindings.go
        """
    )

    parser.add_argument(
        "-C", "--config",
        metavar="CONFIG_FILE",
        required=True,
        help="XML configuration file describing the classes and methods to bind"
    )

    parser.add_argument(
        "-o", "--output",
        metavar="FILE",
        help="Output Go file (prints to stdout if not specified)"
    )

    args = parser.parse_args()

    try:
        config = parse_config_file(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error reading config file: {e}", file=sys.stderr)
        sys.exit(1)

    if not config.descriptors:
        print("Error: No methods or functions found in config file", file=sys.stderr)
        sys.exit(1)

    try:
        generator = RubyBindingsGenerator()
        generator.generate(config, output=args.output)
    except Exception as e:
        import traceback
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
