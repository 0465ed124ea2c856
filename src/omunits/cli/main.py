"""Command-line interface for omunits."""

from __future__ import annotations

import json
from typing import Callable, List

import click

from ..conversion import ConversionEngine
from ..core.scales import Scale
from ..core.units import describe, is_unit
from ..errors import OMError
from ..observability import traced
from ..registry import UnitAndScaleRegistry, UnitOrScale
from ..sets import install_si


def _build_registry() -> UnitAndScaleRegistry:
    registry = UnitAndScaleRegistry()
    registry.add_unit_and_scale_set(install_si)
    return registry


def _resolve(
    registry: UnitAndScaleRegistry, label: str, accept: Callable[[object], bool], kind: str
) -> UnitOrScale:
    matches = [item for item in registry.find(label) if accept(item)]
    if not matches:
        raise click.ClickException(f"Unknown {kind} '{label}'.")
    if len(matches) > 1:
        options = ", ".join(sorted(item.identifier for item in matches))
        raise click.ClickException(f"Ambiguous {kind} '{label}', candidates: {options}.")
    return matches[0]


def _is_scale(item: object) -> bool:
    return isinstance(item, Scale)


@click.group()
def cli() -> None:
    """omunits command suite."""


@cli.command("convert")
@click.argument("value", type=float)
@click.argument("source")
@click.argument("target")
@click.option(
    "--scale",
    "on_scale",
    is_flag=True,
    default=False,
    help="Treat SOURCE and TARGET as scales (e.g. temperatures) instead of units.",
)
def convert(value: float, source: str, target: str, on_scale: bool) -> None:
    """Convert VALUE from SOURCE to TARGET, given by identifier, name or symbol."""

    with traced("cli-convert"):
        click.echo(_convert(value, source, target, on_scale))


def _convert(value: float, source: str, target: str, on_scale: bool) -> str:
    registry = _build_registry()
    engine = ConversionEngine()
    accept, kind = (_is_scale, "scale") if on_scale else (is_unit, "unit")
    src = _resolve(registry, source, accept, kind)
    tgt = _resolve(registry, target, accept, kind)
    try:
        if on_scale:
            result = engine.convert_scale(value, src, tgt)
        else:
            result = engine.convert_unit(value, src, tgt)
    except OMError as exc:
        raise click.ClickException(str(exc)) from exc
    return f"{result:.12g} {tgt}"


@cli.command("units")
@click.option("--like", "like", default=None, help="Only list units in the dimension of this unit.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON instead of text.")
def units(like: str | None, as_json: bool) -> None:
    """List the units of the built-in SI set."""

    with traced("cli-units"):
        registry = _build_registry()
    if like is None:
        listed: List = [unit for unit in registry.units() if unit.name]
    else:
        reference = _resolve(registry, like, is_unit, "unit")
        listed = [unit for unit in registry.units_in_dimension(reference.dimension) if unit.name]

    rows = [
        {
            "identifier": unit.identifier,
            "name": unit.name,
            "symbol": describe(unit),
            "dimension": str(unit.dimension),
        }
        for unit in listed
    ]
    if as_json:
        click.echo(json.dumps(rows, indent=2, ensure_ascii=False))
        return
    for row in rows:
        click.echo(f"{row['symbol']:<8} {row['name']:<28} {row['dimension']}")


if __name__ == "__main__":
    cli()
