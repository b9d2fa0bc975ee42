"""Command-line interface for the JSON type codec."""

import logging
import pprint
import click
from pathlib import Path
from typing import Any, Callable, Optional
from . import __version__
from .builtin_types import default_registry, extended_registry
from .codec import TypeCodec
from .data_type_detector import DataTypeDetector
from .error_handler import ErrorHandler
from .parser import JSONParser
from .profiler import PerformanceProfiler
from .registry import Registry
from .types import CodecError
from .utils.validation import ValidationUtils


def _select_registry(extended: bool) -> Registry:
    return extended_registry if extended else default_registry


def _run(ctx: click.Context, operation: Callable[[], Any]) -> Any:
    """Run an operation, reporting codec errors and exiting non-zero."""
    try:
        return operation()
    except CodecError as e:
        response = ErrorHandler().handle_codec_error(e)
        click.echo(f"❌ Error: {e}", err=True)
        click.echo(f"   {response.suggested_action}", err=True)
        ctx.exit(1)


def _read(input_file: Path) -> Any:
    return JSONParser().parse(input_file.read_text(encoding='utf-8'))


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose: bool):
    """JSON type codec - encode typed values into plain JSON and back."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


@main.command()
@click.option('--extended', '-e', is_flag=True, help='Include the extended type mappings')
def tags(extended: bool):
    """List the tags of the registry in precedence order."""
    for mapping in _select_registry(extended):
        click.echo(f"{mapping.tag}\t{mapping.name}")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--extended', '-e', is_flag=True, help='Decode with the extended type mappings')
@click.option('--output', '-o', help='Write the decoded value to this file')
@click.option('--profile', '-p', is_flag=True, help='Report timing and memory usage')
@click.pass_context
def decode(ctx: click.Context, input_file: Path, extended: bool, output: Optional[str], profile: bool):
    """Decode a portable JSON file and print the typed value."""
    codec = TypeCodec(_select_registry(extended))
    profiler = PerformanceProfiler()

    def operation():
        data = _read(input_file)
        with profiler.profile_operation("decode", input_file.stat().st_size):
            value = codec.decode(data)
            # Input and decoded value are both resident here
            profiler.sample_performance()
            rendered = pprint.pformat(value)
            profiler.stop_profiling(output_size=len(rendered.encode("utf-8")))
        return rendered

    rendered = _run(ctx, operation)

    if output:
        output_path = Path(output)
        output_path.write_text(rendered + "\n", encoding='utf-8')
        click.echo(f"✅ Successfully wrote decoded value to {output_path}")
    else:
        click.echo(rendered)

    if profile:
        metrics = profiler.metrics_history[-1]
        click.echo(f"⏱  {metrics.duration * 1000:.2f}ms, {metrics.output_size} bytes out, "
                   f"peak memory {metrics.memory_peak_mb:.1f}MB")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--extended', '-e', is_flag=True, help='Resolve tags with the extended type mappings')
@click.pass_context
def inspect(ctx: click.Context, input_file: Path, extended: bool):
    """Count the tagged wrappers in a portable JSON file."""
    data = _run(ctx, lambda: _read(input_file))
    analysis = DataTypeDetector().analyze_tags(data, _select_registry(extended))

    click.echo(f"📊 {analysis['wrapper_count']} tagged values, max depth {analysis['max_depth']}")
    for tag, count in sorted(analysis["resolved"].items()):
        click.echo(f"   • {tag}: {count}")
    for tag, count in sorted(analysis["unresolved"].items()):
        click.echo(f"   ⚠ {tag}: {count} (not in registry)")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def check(ctx: click.Context, input_file: Path):
    """Check that a file holds strict, portable JSON."""
    result = ErrorHandler().validate_input(input_file.read_text(encoding='utf-8'))
    if result.is_valid:
        syntax_warnings = result.warnings
        result = ValidationUtils.validate_portable(_read(input_file))
        result.warnings[:0] = syntax_warnings

    for warning in result.warnings:
        click.echo(f"⚠ {warning}")

    if not result.is_valid:
        click.echo("❌ Not portable:")
        for error in result.errors:
            click.echo(f"   • {error.location}: {error.message}")
        ctx.exit(1)

    click.echo(f"✅ {input_file} is portable JSON")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--extended', '-e', is_flag=True, help='Use the extended type mappings')
@click.pass_context
def roundtrip(ctx: click.Context, input_file: Path, extended: bool):
    """Decode then re-encode a file and report whether it is unchanged."""
    codec = TypeCodec(_select_registry(extended))
    parser = JSONParser()

    def operation():
        data = _read(input_file)
        reencoded = codec.encode(codec.decode(data))
        return parser.serialize(data), parser.serialize(reencoded)

    original, reencoded = _run(ctx, operation)

    if reencoded == original:
        click.echo("✅ Round trip is stable")
    else:
        click.echo("❌ Round trip changed the value")
        ctx.exit(1)


if __name__ == '__main__':
    main()
