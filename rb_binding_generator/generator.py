"""
Main Ruby bindings generator orchestration
"""

from pathlib import Path

from .code_generators import BindingSynthesizer, OutputBuilder, OutputSink
from .config import BindingConfig
from .type_mapper import TypeResolver


class RubyBindingsGenerator:
    """Main orchestrator for generating Ruby bindings of a Go package"""

    def __init__(self):
        self.type_resolver = None
        self.synthesizer = None
        self.sink = OutputSink()

    def _clear_state(self):
        """Clear all accumulated state for a new generation run"""
        self.sink = OutputSink()

    def _build_resolver(self, config: BindingConfig) -> TypeResolver:
        resolver = TypeResolver(
            config.package,
            classes=config.classes,
            aliases=config.aliases,
            imports=config.imports,
        )
        for type_name, to_ruby, to_go in config.conversions:
            resolver.add_conversion(type_name, to_ruby, to_go)
        return resolver

    def generate(self, config: BindingConfig, output: str = None) -> str:
        """Generate the cgo glue source for every binding in the config

        Args:
            config: Package metadata and the bindings to generate
            output: Optional output file path (prints to stdout if not specified)
        """
        self._clear_state()
        self.type_resolver = self._build_resolver(config)
        self.synthesizer = BindingSynthesizer(self.type_resolver)

        print(f"Processing: {len(config.descriptors)} binding(s) for package {config.package}")

        # Any failure aborts the run; partially emitted glue would not compile
        for descriptor in config.descriptors:
            self.synthesizer.write(descriptor, self.sink)

        result = OutputBuilder.build(
            package=config.package,
            import_path=config.import_path,
            module_name=config.module_name or config.package,
            sink=self.sink,
            classes=config.classes,
        )

        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result)
            print(f"Generated bindings: {output}")
        else:
            print(result)

        return result
