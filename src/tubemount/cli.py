"""
Command-line interface for tubemount.

Builds a part from literal parameters and exports it. The output format is
chosen by the file suffix (``.step``, ``.stl``, ...).

Usage:
    tubemount straight -w 20 -d 16,20,16 -s 25,35 -o clamp.step
    tubemount stacked -w 20 -r 16,16 -r 20 --spacing 25 -o stack.stl
    tubemount round -d 16,16 -s 22 -o corner.step
    tubemount tee -m 20 -d 16 -o tee.step
    tubemount plate --dx 40 --dy 30 -o plate.stl
    tubemount layout -d 16,20,16 -s 25,35
"""

from __future__ import annotations

import logging
from pathlib import Path

import cadquery as cq
import click

from . import __version__
from .config import MountConfig
from .layout import LayoutError, tube_offsets
from .parts import (
    PartKind,
    multiple_round,
    multiple_stacked_straight,
    multiple_straight,
    rounded_plate,
    tee_with_side_straight,
)

log = logging.getLogger(__name__)

PART_CHOICE = click.Choice([k.value for k in PartKind])


class NumberList(click.ParamType):
    """Comma-separated numbers; ``-`` or ``none`` stand for a missing entry."""

    name = "numbers"

    def convert(self, value, param, ctx):
        if isinstance(value, list):
            return value
        items = []
        for raw in str(value).split(","):
            raw = raw.strip()
            if not raw:
                continue
            if raw.lower() in ("-", "none"):
                items.append(None)
                continue
            try:
                items.append(float(raw))
            except ValueError:
                self.fail(f"{raw!r} is not a number", param, ctx)
        return items


NUMBERS = NumberList()


def _spacings(values: list | None):
    # A single number is a scalar spacing and gets broadcast
    if values is not None and len(values) == 1 and values[0] is not None:
        return values[0]
    return values


def _export(shape: cq.Shape, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    cq.exporters.export(shape, str(output))
    bb = shape.BoundingBox()
    click.echo(f"Exported {output}")
    click.echo(f"  Size:   {bb.xlen:.2f} x {bb.ylen:.2f} x {bb.zlen:.2f} mm")
    click.echo(f"  Volume: {shape.Volume():.1f} mm³")


def _run(build, output: Path) -> None:
    try:
        shape = build()
    except LayoutError as e:
        raise click.ClickException(str(e)) from None
    log.debug("Writing %s", output)
    _export(shape, output)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "-c", "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with shared dimensions (thickness, screws, ...).",
)
@click.option("--strict", is_flag=True, help="Treat unintended tube overlaps as errors.")
@click.option("--fit-epsilon", type=float, default=None, help="Bore diameter increment in mm.")
@click.option("--verbose", "-v", is_flag=True, help="Log computed layouts.")
@click.pass_context
def cli(ctx: click.Context, config_file: Path | None, strict: bool, fit_epsilon: float | None, verbose: bool):
    """tubemount - 3D-printable clamps and fasteners for electrical tubing."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(name)s: %(message)s")
    try:
        config = MountConfig.from_yaml(config_file) if config_file else MountConfig()
        config = config.with_overrides(fit_epsilon=fit_epsilon, strict=strict or None)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from None
    ctx.obj = config


output_option = click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output file (.step or .stl).",
)
part_option = click.option("--part", "-p", type=PART_CHOICE, default="full", help="Sub-solid to export.")


@cli.command()
@click.option("--width", "-w", type=float, required=True, help="Plate length along the tubes.")
@click.option("--diameters", "-d", type=NUMBERS, required=True, help="Tube diameters, e.g. 16,20,16.")
@click.option("--spacings", "-s", type=NUMBERS, default=None, help="Gap (scalar) or gaps between tubes.")
@click.option("--thick-hull", is_flag=True, help="Hull all tubes into one envelope.")
@part_option
@output_option
@click.pass_obj
def straight(config: MountConfig, width, diameters, spacings, thick_hull, part, output):
    """Clamp for a row of parallel tubes."""
    _run(
        lambda: multiple_straight(
            width, diameters, _spacings(spacings), thick_hull=thick_hull, part=part, config=config,
        ),
        output,
    )


@cli.command()
@click.option("--width", "-w", type=float, required=True, help="Plate length along the tubes.")
@click.option("--row", "-r", "rows", type=NUMBERS, multiple=True, required=True,
              help="Tube diameters of one row, bottom row first (repeat per row).")
@click.option("--spacing", type=float, default=None, help="Gap between tubes in every row.")
@click.option("--spacings-z", type=NUMBERS, default=None, help="Height of each row above the previous one.")
@part_option
@output_option
@click.pass_obj
def stacked(config: MountConfig, width, rows, spacing, spacings_z, part, output):
    """Clamp for several rows of tubes stacked on one plate."""
    _run(
        lambda: multiple_stacked_straight(
            width, list(rows), spacing, spacings_z, part=part, config=config,
        ),
        output,
    )


@cli.command(name="round")
@click.option("--diameters", "-d", type=NUMBERS, required=True, help="Tube diameters, outermost first.")
@click.option("--spacings", "-s", "spacings_x", type=NUMBERS, default=None, help="Spacings along X.")
@click.option("--spacings-y", type=NUMBERS, default=None, help="Spacings along Y (default: same as X).")
@part_option
@output_option
@click.pass_obj
def round_(config: MountConfig, diameters, spacings_x, spacings_y, part, output):
    """Corner fastener turning tubes by 90°."""
    _run(
        lambda: multiple_round(
            diameters, _spacings(spacings_x), _spacings(spacings_y), part=part, config=config,
        ),
        output,
    )


@cli.command()
@click.option("--main", "-m", "main_diameter", type=float, required=True, help="Main tube diameter.")
@click.option("--diameters", "-d", type=NUMBERS, required=True, help="Side tube diameters.")
@click.option("--spacings", "-s", type=NUMBERS, default=None, help="Side tube spacings.")
@click.option("--left/--no-left", default=True, help="Build the -X side set.")
@click.option("--right/--no-right", default=True, help="Build the +X side set.")
@part_option
@output_option
@click.pass_obj
def tee(config: MountConfig, main_diameter, diameters, spacings, left, right, part, output):
    """Tee: straight main tube with side tubes turning in."""
    _run(
        lambda: tee_with_side_straight(
            main_diameter, diameters, _spacings(spacings), left=left, right=right, part=part, config=config,
        ),
        output,
    )


@cli.command()
@click.option("--dx", type=float, required=True, help="Plate size along X.")
@click.option("--dy", type=float, required=True, help="Plate size along Y.")
@click.option("--screws/--no-screws", default=True, help="Drill screw holes.")
@output_option
@click.pass_obj
def plate(config: MountConfig, dx, dy, screws, output):
    """Rounded mounting plate."""
    _run(lambda: rounded_plate(dx, dy, config, screws=screws), output)


@cli.command()
@click.option("--diameters", "-d", type=NUMBERS, required=True, help="Tube diameters.")
@click.option("--spacings", "-s", type=NUMBERS, default=None, help="Gap (scalar) or gaps between tubes.")
@click.pass_obj
def layout(config: MountConfig, diameters, spacings):
    """Print tube offsets and plate extent without building geometry."""
    try:
        result = tube_offsets(diameters, _spacings(spacings), config)
    except LayoutError as e:
        raise click.ClickException(str(e)) from None
    click.echo(f"Extent: {result.extent:g} mm")
    click.echo(f"Borders: {result.inner_border:g} / {result.outer_border:g} mm")
    for i, (d, offset) in enumerate(zip(diameters, result.offsets)):
        click.echo(f"  Tube {i}: d={d:g} at {offset:g} mm")


def main():
    cli()


if __name__ == "__main__":
    main()
