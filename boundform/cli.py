"""CLI commands for boundform."""

from pathlib import Path

import click
import yaml
from pydantic import create_model

from boundform.forms import FieldSpec, FormError, FormRenderer, Record, RenderOptions, identify


def make_record(type_name: str, record_id=None, attributes: dict | None = None) -> Record:
    """Build a record of a throwaway Record subclass called *type_name*."""
    model = create_model(type_name, __base__=Record)
    return model(id=record_id, **(attributes or {}))


def _record_from_config(config: dict) -> Record:
    if "type" not in config:
        raise click.ClickException("Record entries need a 'type'")
    return make_record(config["type"], config.get("id"), config.get("attributes"))


def load_form_description(path: Path) -> tuple[object, list[FieldSpec], dict]:
    """Parse a YAML form description into (target, field specs, option values)."""
    with open(path, "r") as f:
        description = yaml.safe_load(f) or {}

    options = {
        key: description[key]
        for key in ("url", "method", "model_name", "html", "multipart")
        if key in description
    }
    if "submit" in description:
        options["submit_label"] = description["submit"]

    if "record" in description:
        parents = [_record_from_config(p) for p in description.get("parents", [])]
        target = [*parents, _record_from_config(description["record"])]
        if len(target) == 1:
            target = target[0]
    elif "url" in description:
        target = options.pop("url")
    else:
        raise click.ClickException("Form description needs a 'record' or a 'url'")

    fields = []
    for entry in description.get("fields", []):
        entry = dict(entry)
        if "path" not in entry:
            raise click.ClickException(f"Field entry without a path: {entry}")
        try:
            fields.append(FieldSpec(**entry))
        except (TypeError, ValueError) as e:
            raise click.ClickException(f"Invalid field {entry.get('path')!r}: {e}")

    return target, fields, options


@click.group()
@click.version_option(package_name="boundform")
def cli():
    """boundform - render HTML forms bound to records."""
    pass


@cli.command()
@click.argument("description", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--token", default=None, help="Anti-forgery token to embed")
def render(description, token):
    """Render the form described by a YAML file."""
    target, fields, options = load_form_description(description)
    try:
        form = FormRenderer().render(
            target, fields, RenderOptions(anti_forgery_token=token, **options)
        )
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(form.render())


@cli.command(name="identify")
@click.argument("type_name")
@click.option("--id", "record_id", default=None, help="Identifier of a persisted record")
def identify_command(type_name, record_id):
    """Print the method and URL a record's form submits to."""
    try:
        target = identify(make_record(type_name, record_id))
    except FormError as e:
        raise click.ClickException(str(e))
    click.echo(f"{target.method.value} {target.url}")


if __name__ == "__main__":
    cli()
