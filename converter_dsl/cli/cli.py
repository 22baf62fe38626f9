from pathlib import Path
import click

from datetime import date
from rich import pretty
from rich.console import Console
from rich.table import Table
from textx import metamodel_from_file
from textx.export import metamodel_export

from converter_dsl.api.errors import ConverterGenerationError, SpecError
from converter_dsl.api.extractors import extract_spec
from converter_dsl.api.gen_logging import configure_gen_logging
from converter_dsl.api.generator import generate
from converter_dsl.api.planner import plan_variants
from converter_dsl.api.scanner import scan
from converter_dsl.config import load_config
from converter_dsl.environment import SourceEnvironment
from converter_dsl.language import GRAMMAR_DIR, build_model, collect_source_files

pretty.install()
console = Console()


def _stamp() -> str:
    return f"[{date.today().strftime('%Y-%m-%d')}]"


def _load_environment(paths, config):
    return SourceEnvironment.from_paths(
        paths,
        known_types=config.classpath,
        annotation_parameters=config.annotation_signatures,
    )


@click.group()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="YAML file overriding generator defaults.")
@click.option("-v", "--verbose", is_flag=True, help="Debug output (plans, synthesized functions).")
@click.option("-q", "--quiet", is_flag=True, help="Only warnings and errors.")
@click.pass_context
def cli(context, config_path, verbose, quiet):
    context.ensure_object(dict)
    configure_gen_logging(verbose=verbose, quiet=quiet)
    try:
        context.obj["config"] = load_config(config_path)
    except (OSError, ValueError) as e:
        console.print(f"{_stamp()} Invalid configuration: {e}", style="red")
        context.exit(2)


@cli.command("validate", help="Parse and validate declaration sources.")
@click.pass_context
@click.argument("paths", nargs=-1, required=True)
def validate(context, paths):
    try:
        files = collect_source_files(paths)
        for path in files:
            build_model(str(path))
        console.print(f"{_stamp()} {len(files)} source(s) validated successfully!", style="green")
    except Exception as e:
        console.print(f"{_stamp()} Validation failed with error(s): {e}", style="red")
        context.exit(1)
    else:
        context.exit(0)


@cli.command("inspect", help="Show the converters found and the functions they would get.")
@click.pass_context
@click.argument("paths", nargs=-1, required=True)
def inspect_cmd(context, paths):
    config = context.obj["config"]
    try:
        environment = _load_environment(paths, config)
        valid, deferred = scan(environment, config.annotation)

        table = Table(title="Converters")
        table.add_column("Declaration")
        table.add_column("Name")
        table.add_column("Value type")
        table.add_column("Plan")

        failed = 0
        for descriptor in valid:
            try:
                spec = extract_spec(descriptor, environment, config.annotation)
                entries = plan_variants(spec)
            except SpecError as e:
                failed += 1
                table.add_row(descriptor.qualified_name, "-", "-", f"[red]{e.message}[/red]")
                continue

            plan = ", ".join(
                entry.variant_name + (" (choice)" if entry.has_choice else "") + ("" if entry.is_supported else " (unsupported)")
                for entry in entries
            )
            table.add_row(descriptor.qualified_name, spec.name, spec.value_type.render(), plan or "-")

        for symbol in deferred:
            table.add_row(symbol.qualified_name, "-", "-", "[yellow]deferred[/yellow]")

        console.print(table)
    except Exception as e:
        console.print(f"{_stamp()} Inspect failed with error(s): {e}", style="red")
        context.exit(1)
    else:
        context.exit(1 if failed else 0)


@cli.command("generate", help="Emit <Converter>Functions sources for every annotated converter.")
@click.pass_context
@click.argument("paths", nargs=-1, required=True)
@click.option("--out", "out_dir", default="generated", help="Output directory (default: ./generated)")
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=None, help="Worker threads (default: from config).")
def generate_cmd(context, paths, out_dir, jobs):
    config = context.obj["config"]
    try:
        environment = _load_environment(paths, config)
        out_path = Path(out_dir).resolve()
        report = generate(environment, out_path, config=config, jobs=jobs)
    except ConverterGenerationError as e:
        console.print(f"{_stamp()} Generate failed: {e}", style="red")
        context.exit(1)
    except Exception as e:
        console.print(f"{_stamp()} Generate failed with error(s): {e}", style="red")
        context.exit(1)

    # Failures were already logged by the generator
    summary = f"{_stamp()} {len(report.written)} file(s) emitted to: {out_path}"
    if report.failures:
        summary += f" ({len(report.failures)} declaration(s) failed)"
    console.print(summary, style="green" if report.ok else "yellow")
    context.exit(0 if report.ok else 1)


@cli.command("visualize", help="Export the declaration grammar's metamodel as a GraphViz DOT file.")
@click.pass_context
@click.option("--output", "-o", "output_dir", default="docs", help="Output directory (default: docs)")
def visualize_cmd(context, output_dir):
    try:
        grammar = Path(GRAMMAR_DIR) / "kotlin.tx"
        out_dir = Path(output_dir).resolve()
        out_dir.mkdir(parents=True, exist_ok=True)

        mm = metamodel_from_file(str(grammar), autokwd=True)
        dot_file = out_dir / f"{grammar.stem}_metamodel.dot"
        metamodel_export(mm, str(dot_file))

        console.print(f"{_stamp()} Metamodel written to: {dot_file}", style="green")
    except Exception as e:
        console.print(f"{_stamp()} Visualization failed with: {e}", style="red")
        context.exit(1)
    else:
        context.exit(0)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
