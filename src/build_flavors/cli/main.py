"""Main CLI entry point for build-flavors.

Selects one build flavor from the command line and produces its outputs.
"""

from pathlib import Path
import json
import sys

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from build_flavors import __version__
from build_flavors.engine.build_config import DEFAULT_MODULE_NAME
from build_flavors.engine.build_engine import BuildEngine
from build_flavors.engine.validation_engine import ValidationEngine, ValidationResult
from build_flavors.errors import FlavorError
from build_flavors.flavors.base import FlavorBuilder, FlavorProject
from build_flavors.flavors.loader import DEFAULT_FLAVORS_FILE, FlavorLoader, load_project
from build_flavors.runtime.greeting import Greeting
from build_flavors.selection.settings import DEFAULT_PROPERTIES_FILE, read_selection
from build_flavors.utils.log import configure_logging

console = Console()

LOAD_ERRORS = (FlavorError, ValidationError, yaml.YAMLError, OSError, ValueError)


@click.group()
@click.version_option(version=__version__, prog_name="flavors")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--file", "-f", "flavors_file",
    type=click.Path(dir_okay=False),
    default=DEFAULT_FLAVORS_FILE,
    show_default=True,
    help="Flavors file",
)
@click.option(
    "--properties",
    type=click.Path(dir_okay=False),
    default=DEFAULT_PROPERTIES_FILE,
    show_default=True,
    help="Properties file holding the default flavor=NAME",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, flavors_file: str, properties: str) -> None:
    """Build Flavors - select one environment configuration per build.

    Flavors are declared in a YAML file. Each build resolves exactly one of
    them and exposes only its settings and assets to the application.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["flavors_file"] = flavors_file
    ctx.obj["properties"] = properties
    configure_logging(verbose)


def selection_options(func):
    """Options shared by every command that selects a flavor."""
    func = click.option(
        "-P", "--property", "project_properties",
        multiple=True,
        metavar="KEY=VALUE",
        help="Project property, e.g. -P flavor=production",
    )(func)
    func = click.option("--flavor", help="Flavor to select (overrides -P flavor=...)")(func)
    return func


@cli.command("list")
@click.pass_context
def list_flavors(ctx: click.Context) -> None:
    """List the declared flavors."""
    try:
        project = load_project(ctx.obj["flavors_file"])
        registry = project.build_registry()
    except LOAD_ERRORS as e:
        _fail(ctx, e)

    if not len(registry):
        console.print("[yellow]No flavors declared[/yellow]")
        return

    table = Table(title="Declared Flavors")
    table.add_column("Name", style="cyan")
    table.add_column("Display Name")
    table.add_column("Suffix", style="green")
    table.add_column("Assets", justify="right")
    table.add_column("Default")

    for flavor in registry:
        table.add_row(
            flavor.name,
            flavor.settings.display_name,
            flavor.settings.identifier_suffix or "-",
            str(len(flavor.assets)),
            "*" if flavor.name == registry.default_name else "",
        )

    console.print(table)


@cli.command()
@selection_options
@click.option("--json", "as_json", is_flag=True, help="Print the resolved settings as JSON")
@click.pass_context
def resolve(
    ctx: click.Context,
    flavor: str | None,
    project_properties: tuple[str, ...],
    as_json: bool,
) -> None:
    """Resolve the selected flavor and show its settings."""
    try:
        engine = _engine(ctx)
        config = engine.resolve(_selection(ctx, flavor, project_properties))
        identity = engine.identity()
    except LOAD_ERRORS as e:
        _fail(ctx, e)

    if as_json:
        payload = {
            "flavor": config.flavor,
            "settings": config.as_dict(),
            "application_id": identity.application_id,
            "assets": config.asset_targets(),
        }
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"Flavor: {config.flavor}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key in config.keys():
        table.add_row(key, repr(config.get(key)))
    if identity.base_id:
        table.add_row("applicationId", identity.application_id, style="green")

    console.print(table)


@cli.command()
@selection_options
@click.option("--output", "-o", type=click.Path(file_okay=False), default="./build/flavor", help="Output directory")
@click.option("--module-name", default=DEFAULT_MODULE_NAME, show_default=True, help="Generated settings module file name")
@click.option("--launch", is_flag=True, help="Print the device launch command")
@click.pass_context
def build(
    ctx: click.Context,
    flavor: str | None,
    project_properties: tuple[str, ...],
    output: str,
    module_name: str,
    launch: bool,
) -> None:
    """Resolve the selected flavor and write its build outputs.

    \b
    Writes the generated settings module and copies the flavor's assets into
    OUTPUT/resources. Assets belonging to other flavors are removed from there.

    \b
    Examples:
      flavors build -P flavor=production -o build/flavor
      flavors build --flavor development --launch
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        engine = _engine(ctx)
        result = engine.build(
            _selection(ctx, flavor, project_properties),
            output_dir=output,
            module_name=module_name,
        )
        command = result.identity.launch_command() if launch else None
    except LOAD_ERRORS as e:
        _fail(ctx, e)

    console.print(Panel.fit(
        f"[green]Built flavor '{escape(result.config.flavor)}'[/green]\n\n"
        f"[cyan]Application id:[/cyan] {escape(result.identity.application_id or '-')}\n"
        f"[cyan]Display name:[/cyan] {escape(result.identity.display_name)}\n"
        f"[cyan]Module:[/cyan] {escape(str(result.module_path))}\n"
        f"[cyan]Assets:[/cyan] {len(result.staged_assets)}",
        title="Build Complete",
    ))

    if verbose:
        for path in result.staged_assets:
            console.print(f"  - {escape(str(path))}")

    if command:
        click.echo(" ".join(command))


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False), required=False)
@click.pass_context
def validate(ctx: click.Context, path: str | None) -> None:
    """Validate a flavors file.

    PATH defaults to the file given with --file.
    """
    path = path or ctx.obj["flavors_file"]
    validation_engine = ValidationEngine()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        _fail(ctx, e)

    result = validation_engine.validate_document(data)
    if result.valid:
        try:
            project = FlavorLoader().load_file(path)
        except LOAD_ERRORS as e:
            _fail(ctx, e)
        result = result.merge(validation_engine.validate_project(project))

    _print_validation_result(path, result)
    if not result.valid:
        sys.exit(1)


@cli.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=DEFAULT_FLAVORS_FILE, help="Output file path")
@click.option("--application-id", "-a", default="com.example.app", show_default=True, help="Base application identifier")
@click.option("--name", "-n", default="App", show_default=True, help="Application display name")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(output: str, application_id: str, name: str, force: bool) -> None:
    """Initialize a flavors file with development and production flavors."""
    if Path(output).exists() and not force:
        console.print(f"[red]{escape(output)} already exists (use --force to overwrite)[/red]")
        sys.exit(1)

    project = FlavorProject(
        application_id=application_id,
        default="development",
        flavors=[
            FlavorBuilder("development")
            .description("Local development against the staging backend")
            .display_name(f"{name} Dev")
            .identifier_suffix(".dev")
            .setting("apiBaseUrl", "https://dev.example.com/api")
            .build(),
            FlavorBuilder("production")
            .description("Release builds")
            .display_name(name)
            .setting("apiBaseUrl", "https://example.com/api")
            .build(),
        ],
    )

    FlavorLoader().save_file(project, output)
    console.print(f"[green]Created flavors file: {escape(output)}[/green]")


@cli.command()
@selection_options
@click.pass_context
def greet(ctx: click.Context, flavor: str | None, project_properties: tuple[str, ...]) -> None:
    """Run the sample application with the selected flavor."""
    try:
        config = _engine(ctx).resolve(_selection(ctx, flavor, project_properties))
    except LOAD_ERRORS as e:
        _fail(ctx, e)

    greeting = Greeting(config)
    click.echo(greeting.title)
    click.echo(greeting.greet())


def _engine(ctx: click.Context) -> BuildEngine:
    return BuildEngine(load_project(ctx.obj["flavors_file"]))


def _selection(ctx: click.Context, flavor: str | None, project_properties: tuple[str, ...]) -> str | None:
    return read_selection(
        flavor_option=flavor,
        properties=project_properties,
        properties_file=ctx.obj["properties"],
    )


def _fail(ctx: click.Context, error: Exception) -> None:
    """Report an error and exit with a non-zero status."""
    console.print(f"[red]Error: {escape(str(error))}[/red]", soft_wrap=True)
    if ctx.obj.get("verbose", False):
        import traceback
        console.print(traceback.format_exc(), markup=False)
    sys.exit(1)


def _print_validation_result(name: str, result: ValidationResult) -> None:
    """Print validation results."""
    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    console.print(f"\n{escape(name)}: {status}")

    for issue in result.issues:
        color = {
            "error": "red",
            "warning": "yellow",
            "info": "blue",
        }.get(issue.severity.value, "white")

        console.print(
            f"  [{color}]{issue.severity.value.upper()}[/{color}]: {escape(issue.message)}",
            soft_wrap=True,
        )
        if issue.path:
            console.print(f"    Path: {escape(issue.path)}")


if __name__ == "__main__":
    cli()
