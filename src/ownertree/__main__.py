"""CLI entry point for ownertree."""

import sys
from typing import Any

import click
import orjson
from loguru import logger

from ownertree.config import LayoutConfig
from ownertree.errors import LayoutConfigError, RecordError
from ownertree.ir.resource_tree import flatten_resource_tree
from ownertree.layout.engine import create_layout_engine
from ownertree.types import Direction, StrategyName

_STRATEGY_NAMES = [s.value for s in StrategyName]


def _load_document(raw: bytes, config: LayoutConfig) -> tuple[list[Any], list[Any]]:
    """Accept either {"nodes": [...], "edges": [...]} or a nested resource-tree list."""
    doc = orjson.loads(raw) if raw.strip() else {"nodes": [], "edges": []}
    if isinstance(doc, list):
        return flatten_resource_tree(doc, config.direction)
    if isinstance(doc, dict):
        return list(doc.get("nodes") or []), list(doc.get("edges") or [])
    raise RecordError("input must be a {nodes, edges} object or a resource-tree list")


def _config_from(raw: bytes, overrides: dict[str, Any]) -> LayoutConfig:
    base: dict[str, Any] = {}
    if raw.strip():
        doc = orjson.loads(raw)
        if isinstance(doc, dict) and isinstance(doc.get("config"), dict):
            base.update(doc["config"])
    base.update({k: v for k, v in overrides.items() if v is not None})
    return LayoutConfig.from_mapping(base)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option(
    "--strategy",
    "-s",
    "strategy",
    type=str,
    default=StrategyName.default().value,
    help=f"Layout strategy ({', '.join(_STRATEGY_NAMES)}); unknown names use hierarchical",
)
@click.option("--direction", "-d", "direction", type=str, default=None, help="Layout direction (TB or LR)")
@click.option("--node-width", "node_width", type=float, default=None, help="Node width in pixels")
@click.option("--node-height", "node_height", type=float, default=None, help="Node height in pixels")
@click.option("--horizontal-spacing", "horizontal_spacing", type=float, default=None, help="Gap between siblings")
@click.option("--vertical-spacing", "vertical_spacing", type=float, default=None, help="Gap between levels")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log layout decisions to stderr")
def main(
    input: str | None,
    strategy: str,
    direction: str | None,
    node_width: float | None,
    node_height: float | None,
    horizontal_spacing: float | None,
    vertical_spacing: float | None,
    output: str | None,
    verbose: bool,
) -> None:
    """Lay out an ownership tree and print positioned nodes and edges as JSON."""
    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("ownertree")

    if input:
        try:
            with open(input, "rb") as f:
                raw = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        raw = sys.stdin.buffer.read()

    if direction is not None:
        try:
            direction = Direction.parse(direction).value
        except ValueError as e:
            click.echo(f"error: {e}", err=True)
            sys.exit(1)

    try:
        config = _config_from(
            raw,
            {
                "direction": direction,
                "node_width": node_width,
                "node_height": node_height,
                "horizontal_spacing": horizontal_spacing,
                "vertical_spacing": vertical_spacing,
            },
        )
        nodes, edges = _load_document(raw, config)
        result = create_layout_engine(strategy, config).layout(nodes, edges)
    except orjson.JSONDecodeError as e:
        click.echo(f"error: invalid JSON: {e}", err=True)
        sys.exit(1)
    except (RecordError, LayoutConfigError) as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    rendered = orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2).decode("utf-8")

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered + "\n")
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered)


if __name__ == "__main__":
    main()
