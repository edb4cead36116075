"""CLI for dashgrid."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from dashgrid import __version__
from dashgrid.layout import (
    BreakpointConfigError,
    ResponsiveGrid,
    bottom,
    correct_bounds,
    get_compactor,
    move_element,
    resize_element,
)
from dashgrid.layout.validate import Severity, validate_layout
from dashgrid.parser.json_layout import (
    GridDocument,
    grid_document_to_json,
    layout_to_json,
    parse_grid_document,
    parse_responsive_document,
)
from dashgrid.parser.model import CompactType, GridConfig, ResizeHandle
from dashgrid.render import render_layout_svg
from dashgrid.themes import THEMES

COMPACT_CHOICES = [t.value for t in CompactType]
HANDLE_CHOICES = [h.value for h in ResizeHandle]


def _load_grid(input_file: Path) -> GridDocument:
    try:
        return parse_grid_document(input_file.read_text())
    except ValueError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


def _apply_overrides(
    doc: GridDocument,
    cols: int | None,
    compact_type: str | None,
    allow_overlap: bool | None,
) -> GridDocument:
    if cols is not None:
        doc.cols = cols
    if compact_type is not None:
        doc.compact_type = CompactType(compact_type)
    if allow_overlap is not None:
        doc.allow_overlap = allow_overlap
    return doc


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text)
    else:
        output.write_text(text + "\n")


def _grid_options(fn):
    fn = click.option("--allow-overlap/--no-allow-overlap", default=None,
                      help="Let items overlap instead of displacing them")(fn)
    fn = click.option("--compact-type", type=click.Choice(COMPACT_CHOICES), default=None,
                      help="Compaction axis (default: from the document, else vertical)")(fn)
    fn = click.option("--cols", type=click.IntRange(min=1), default=None,
                      help="Column count (default: from the document, else 12)")(fn)
    fn = click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
                      help="Write the resulting document here instead of stdout")(fn)
    return fn


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log engine decisions to stderr")
def cli(verbose: bool) -> None:
    """dashgrid: Collision-free layout engine for grid dashboards."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@_grid_options
def compact(
    input_file: Path,
    output: Path | None,
    cols: int | None,
    compact_type: str | None,
    allow_overlap: bool | None,
) -> None:
    """Correct bounds and compact a layout."""
    doc = _apply_overrides(_load_grid(input_file), cols, compact_type, allow_overlap)
    compactor = get_compactor(doc.compact_type, doc.allow_overlap)
    doc.layout = compactor.compact(correct_bounds(doc.layout, doc.cols), doc.cols)
    _emit(grid_document_to_json(doc), output)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.argument("item_id")
@click.argument("x", type=int)
@click.argument("y", type=int)
@click.option("--prevent-collision", is_flag=True,
              help="Reject the move if the target cells are occupied")
@_grid_options
def move(
    input_file: Path,
    item_id: str,
    x: int,
    y: int,
    prevent_collision: bool,
    output: Path | None,
    cols: int | None,
    compact_type: str | None,
    allow_overlap: bool | None,
) -> None:
    """Move ITEM_ID to column X, row Y, then compact."""
    doc = _apply_overrides(_load_grid(input_file), cols, compact_type, allow_overlap)
    compactor = get_compactor(doc.compact_type, doc.allow_overlap)
    layout = compactor.compact(correct_bounds(doc.layout, doc.cols), doc.cols)
    if not any(item.i == item_id for item in layout):
        click.echo(f"Unknown item '{item_id}'", err=True)
        raise SystemExit(1)
    layout = move_element(layout, item_id, x, y, True, prevent_collision,
                          doc.compact_type, doc.cols, doc.allow_overlap)
    doc.layout = compactor.compact(layout, doc.cols)
    _emit(grid_document_to_json(doc), output)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.argument("item_id")
@click.argument("w", type=int)
@click.argument("h", type=int)
@click.option("--handle", type=click.Choice(HANDLE_CHOICES), default="se",
              help="Resize handle being dragged (default: se)")
@click.option("--prevent-collision", is_flag=True,
              help="Reject the resize if the new cells are occupied")
@_grid_options
def resize(
    input_file: Path,
    item_id: str,
    w: int,
    h: int,
    handle: str,
    prevent_collision: bool,
    output: Path | None,
    cols: int | None,
    compact_type: str | None,
    allow_overlap: bool | None,
) -> None:
    """Resize ITEM_ID to W x H grid units, then compact."""
    doc = _apply_overrides(_load_grid(input_file), cols, compact_type, allow_overlap)
    compactor = get_compactor(doc.compact_type, doc.allow_overlap)
    layout = compactor.compact(correct_bounds(doc.layout, doc.cols), doc.cols)
    if not any(item.i == item_id for item in layout):
        click.echo(f"Unknown item '{item_id}'", err=True)
        raise SystemExit(1)
    layout = resize_element(layout, item_id, w, h, handle=handle,
                            prevent_collision=prevent_collision,
                            compact_type=doc.compact_type, cols=doc.cols,
                            allow_overlap=doc.allow_overlap)
    doc.layout = compactor.compact(layout, doc.cols)
    _emit(grid_document_to_json(doc), output)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("--width", type=float, required=True, help="Container width in pixels")
@click.option("--previous", default=None,
              help="Previously active breakpoint to derive a missing layout from")
@click.option("--compact-type", type=click.Choice(COMPACT_CHOICES), default="vertical",
              help="Compaction axis (default: vertical)")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Write the resolved layout here instead of stdout")
def resolve(
    input_file: Path,
    width: float,
    previous: str | None,
    compact_type: str,
    output: Path | None,
) -> None:
    """Pick the breakpoint for WIDTH and print its layout."""
    try:
        doc = parse_responsive_document(input_file.read_text())
        compactor = get_compactor(compact_type)
        start_width = doc.breakpoints[previous] if previous in doc.breakpoints else width
        grid = ResponsiveGrid.create(start_width, doc.layouts, doc.breakpoints,
                                     doc.cols, compactor)
        grid = grid.with_width(width)
    except (ValueError, BreakpointConfigError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Breakpoint: {grid.breakpoint} ({grid.cols} cols)", err=True)
    _emit(layout_to_json(grid.layout), output)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("--cols", type=click.IntRange(min=1), default=None,
              help="Column count to check against (default: from the document)")
def validate(input_file: Path, cols: int | None) -> None:
    """Validate a layout document."""
    doc = _load_grid(input_file)
    violations = validate_layout(doc.layout, cols or doc.cols, doc.allow_overlap)

    errors = [v for v in violations if v.severity is Severity.ERROR]
    for v in violations:
        click.echo(f"  - [{v.severity.value}] {v.message}", err=True)
    if errors:
        click.echo("Validation errors.", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(doc.layout)} items, "
               f"{len(violations)} warnings")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a layout document."""
    doc = _load_grid(input_file)
    layout = correct_bounds(doc.layout, doc.cols)

    click.echo(f"Items: {len(layout)}")
    click.echo(f"Columns: {doc.cols}")
    click.echo(f"Rows: {bottom(layout)}")
    click.echo(f"Compaction: {doc.compact_type.value}"
               f"{' (overlap allowed)' if doc.allow_overlap else ''}")
    statics = [item.i for item in layout if item.static]
    click.echo(f"Static: {', '.join(statics) if statics else '(none)'}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="dark",
              help="Visual theme (default: dark)")
@click.option("--width", type=float, default=1280.0,
              help="Container width in pixels (default: 1280)")
@click.option("--row-height", type=float, default=60.0,
              help="Row height in pixels (default: 60)")
@click.option("--margin", type=float, default=10.0,
              help="Gap between items in pixels (default: 10)")
@click.option("--title", default="", help="Title drawn above the grid")
def render(
    input_file: Path,
    output: Path | None,
    theme: str,
    width: float,
    row_height: float,
    margin: float,
    title: str,
) -> None:
    """Render a layout document to an SVG preview."""
    doc = _load_grid(input_file)
    compactor = get_compactor(doc.compact_type, doc.allow_overlap)
    layout = compactor.compact(correct_bounds(doc.layout, doc.cols), doc.cols)

    config = GridConfig(cols=doc.cols, row_height=row_height,
                        margin=(margin, margin), width=width)
    svg = render_layout_svg(layout, THEMES[theme], config, title=title)

    if output is None:
        output = input_file.with_suffix(".svg")
    output.write_text(svg)
    click.echo(f"Rendered {len(layout)} items, "
               f"{bottom(layout)} rows -> {output}")


if __name__ == "__main__":
    cli()
