import logging
from pathlib import Path

import orjson
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from sumgen.casing import CaseStyle, convert_case
from sumgen.declaration import load_declaration, sample_declaration
from sumgen.errors import GenerationError
from sumgen.generate.config import DERIVE_TARGETS, GeneratorConfig
from sumgen.generate.impl import generate_impl
from sumgen.generate.predicates import predicate_name
from sumgen.model import TypeDescriptor
from sumgen.properties import resolve_variants
from sumgen.template import capture_placeholders

app = typer.Typer(help="Generate predicate and string-conversion methods for sum types.")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log generation decisions."),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)]
        )


def _load(path: Path) -> TypeDescriptor:
    if not path.is_file():
        raise typer.BadParameter(f"Declaration file not found: {path}")
    try:
        return load_declaration(path)
    except (yaml.YAMLError, orjson.JSONDecodeError) as exc:
        raise typer.BadParameter(f"Could not parse {path}: {exc}") from None
    except GenerationError as exc:
        _report(exc)
        raise typer.Exit(code=1) from None


def _report(error: GenerationError, target: str | None = None) -> None:
    prefix = f"[{target}] " if target else ""
    console.print(f"[bold red]error[/] {escape(prefix)}{error.kind}: {escape(str(error))}")


@app.command()
def generate(
    declaration: Path = typer.Argument(..., help="Declaration file (.yaml/.yml or .json)."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the generated module."
    ),
    derive: list[str] | None = typer.Option(
        None, "--derive", "-d", help="Derive target (repeatable): is | to_string."
    ),
    tag_attr: str = typer.Option("tag", "--tag-attr", help="Attribute holding the variant name."),
    values_attr: str = typer.Option(
        "values", "--values-attr", help="Attribute holding the payload tuple."
    ),
) -> None:
    """Generate the derived methods for one declaration."""
    targets = tuple(derive) if derive else DERIVE_TARGETS
    unknown = [t for t in targets if t not in DERIVE_TARGETS]
    if unknown:
        raise typer.BadParameter(
            f"Unknown derive target(s) {unknown}. Choose from {DERIVE_TARGETS}."
        )

    decl = _load(declaration)
    config = GeneratorConfig(tag_attr=tag_attr, values_attr=values_attr, derive=targets)
    result = generate_impl(decl, config)
    if not result.ok:
        for target, error in result.errors.items():
            _report(error, target)
        raise typer.Exit(code=1)

    source = result.to_source()
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(source)
        console.print(f"[bold green]Wrote[/] {decl.name} methods to {output}")
    else:
        typer.echo(source, nl=False)


@app.command()
def check(
    declaration: Path = typer.Argument(..., help="Declaration file (.yaml/.yml or .json)."),
    as_json: bool = typer.Option(False, "--json", help="Emit the resolution as JSON."),
) -> None:
    """Resolve every variant and validate its display template."""
    decl = _load(declaration)
    config = GeneratorConfig()
    try:
        resolved = resolve_variants(decl)
        rows = [
            {
                "variant": r.name,
                "shape": r.variant.shape.kind.value + r.variant.shape.pattern(),
                "predicate": None if r.properties.disabled else predicate_name(r.variant, config),
                "display": r.display,
                "placeholders": capture_placeholders(r.display) if r.display is not None else [],
                "disabled": r.properties.disabled,
                "default": r.properties.default,
            }
            for r in resolved
        ]
    except GenerationError as exc:
        _report(exc.with_location(decl.name))
        raise typer.Exit(code=1) from None

    if as_json:
        payload = {"type": decl.name, "variants": rows}
        typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
        return

    table = Table(title=f"{decl.name} ({decl.case_style})")
    for column in ("variant", "shape", "predicate", "display", "placeholders", "flags"):
        table.add_column(column)
    for row in rows:
        flags = [name for name in ("disabled", "default") if row[name]]
        table.add_row(
            row["variant"],
            row["shape"],
            row["predicate"] or "-",
            escape(repr(row["display"])) if row["display"] is not None else "<field>",
            ", ".join(row["placeholders"]),
            ", ".join(flags),
        )
    console.print(table)


@app.command("case")
def case_command(
    identifier: str = typer.Argument(..., help="Identifier to convert."),
    style: str = typer.Option("snake_case", "--style", "-s", help="Target case style."),
) -> None:
    """Convert an identifier between casing conventions."""
    try:
        case_style = CaseStyle.parse(style)
    except GenerationError as exc:
        raise typer.BadParameter(str(exc)) from None
    typer.echo(convert_case(identifier, case_style))


@app.command()
def sample(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the sample declaration."
    ),
) -> None:
    """Print a sample declaration to start from."""
    text = yaml.safe_dump(sample_declaration(), sort_keys=False)
    if output:
        output.write_text(text)
        console.print(f"[bold green]Wrote sample declaration[/] to {output}")
    else:
        typer.echo(text, nl=False)


if __name__ == "__main__":
    app()
