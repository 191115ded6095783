"""CLI entry point for autoclient."""

import sys
from pathlib import Path

import click
import yaml

from autoclient.config import DEFAULT_CONFIG_FILE, ConfigError, load_config
from autoclient.generator.service import DEFAULT_MODULE, ServiceRenderer, output_filename
from autoclient.introspection.base import IntrospectionError, Introspector
from autoclient.introspection.manifest import ManifestIntrospector
from autoclient.introspection.python import PythonIntrospector
from autoclient.parser.base import ClassDescriptor
from autoclient.parser.descriptors import build_class_descriptor

app_dir_option = click.option(
    "--app-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory prepended to the import path to resolve application classes.",
)
manifest_option = click.option(
    "--manifest",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML metadata manifest to read instead of importing the class.",
)


def _use_app_dir(app_dir: Path) -> None:
    path = str(app_dir.resolve())
    if path not in sys.path:
        sys.path.insert(0, path)


def _parse_class(class_name: str, manifest: Path | None) -> ClassDescriptor:
    """Build the parse tree of a class, turning lookup failures into CLI errors."""
    try:
        introspector: Introspector = (
            ManifestIntrospector.from_file(manifest) if manifest else PythonIntrospector()
        )
        return build_class_descriptor(class_name, introspector)
    except (IntrospectionError, ValueError) as e:
        raise click.ClickException(str(e)) from e


def _export(class_name: str, endpoint: str, target_dir: Path, module: str, manifest: Path | None) -> tuple[Path, int]:
    """Generate and write the service of one class. Returns (path, method count)."""
    if not target_dir.is_dir():
        raise click.ClickException(f"Directory {target_dir} does not exist")

    descriptor = _parse_class(class_name, manifest)
    generated = ServiceRenderer().render(class_name, endpoint, descriptor, module)

    path = target_dir / output_filename(class_name)
    try:
        path.write_text(generated, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Could not write to {path}: {e}") from e
    return path, len(descriptor.methods)


@click.group()
def main():
    """AutoClient: generate JavaScript client services from annotated API classes."""
    pass


@main.command()
@click.option("-c", "--config", "config_path", default=DEFAULT_CONFIG_FILE, show_default=True,
              type=click.Path(dir_okay=False, path_type=Path), help="Export configuration file.")
@app_dir_option
def generate(config_path: Path, app_dir: Path):
    """Export every API class listed in the configuration file."""
    _use_app_dir(app_dir)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    click.echo("Exporting controllers:")
    for api in config.apis:
        _export(api.class_name, api.endpoint, api.target_dir, api.module, api.manifest)
        click.echo(f"  {click.style(api.class_name, fg='yellow')}\t- {click.style('exported', fg='green')}")


@main.command()
@click.argument("class_ref")
@click.option("--endpoint", required=True, help="Base URL of the published API methods.")
@click.option("-o", "--output", required=True, type=click.Path(file_okay=False, path_type=Path),
              help="Output directory for the generated service.")
@click.option("--module", default=DEFAULT_MODULE, show_default=True, help="Angular module to register the service on.")
@manifest_option
@app_dir_option
def export(class_ref: str, endpoint: str, output: Path, module: str, manifest: Path | None, app_dir: Path):
    """Generate the client service of a single API class."""
    _use_app_dir(app_dir)
    click.echo(f"Parsing {class_ref}...")

    output.mkdir(parents=True, exist_ok=True)
    path, count = _export(class_ref, endpoint, output, module, manifest)
    click.echo(f"Found {count} API methods.")
    click.echo(f"Service saved to {path}")


@main.command()
@click.argument("class_ref")
@manifest_option
@app_dir_option
def parse(class_ref: str, manifest: Path | None, app_dir: Path):
    """Print the parse tree of an API class as YAML."""
    _use_app_dir(app_dir)
    descriptor = _parse_class(class_ref, manifest)
    click.echo(yaml.safe_dump(descriptor.model_dump(), sort_keys=False, allow_unicode=True), nl=False)
