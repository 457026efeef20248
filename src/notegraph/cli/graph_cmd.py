"""CLI commands for knowledge map analysis and graph fusion."""
from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from notegraph.knowledge_graph.models import FusionStrategy, ValidationError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notegraph",
        description="Knowledge map and graph fusion commands.",
    )
    sub = parser.add_subparsers(dest="subcommand", metavar="SUBCOMMAND")
    sub.required = True

    # analyze
    analyze_p = sub.add_parser("analyze", help="Build a knowledge map from tagged notes.")
    analyze_p.add_argument("notes", type=Path, help='JSON file: [{"id": ..., "tags": [...]}, ...]')
    analyze_p.add_argument("--min-relation", type=float, default=None, help="Co-occurrence threshold.")
    analyze_p.add_argument("--max-level", type=int, default=None, help="Number of node levels.")
    analyze_p.add_argument("--seed", type=int, default=None, help="Seed for node layout positions.")
    analyze_p.add_argument("--contributor", default=None, help="Contributor id for ledger events.")
    analyze_p.add_argument("--json", action="store_true", default=False, help="Print JSON instead of tables.")

    # fuse
    fuse_p = sub.add_parser("fuse", help="Fuse two node sets into one graph.")
    fuse_p.add_argument("source", type=Path, help="JSON file with the source node list.")
    fuse_p.add_argument("target", type=Path, nargs="?", default=None, help="JSON file with the target node list.")
    fuse_p.add_argument(
        "--strategy",
        default=None,
        help="Fusion strategy: " + "|".join(s.value for s in FusionStrategy),
    )
    fuse_p.add_argument("--min-relation", type=float, default=None, help="Relation threshold for smart fusion.")
    fuse_p.add_argument("--source-contributor", default=None, help="Contributor id credited for source nodes.")
    fuse_p.add_argument("--target-contributor", default=None, help="Contributor id credited for target nodes.")
    fuse_p.add_argument("--json", action="store_true", default=False, help="Print JSON instead of tables.")

    return parser


def _print_error(msg: str) -> None:
    print(f"Error: {msg}", file=sys.stderr)


def _load_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _nodes_from_file(data: Any) -> Any:
    """Accept either a bare node list or an object with a ``nodes`` key."""
    if isinstance(data, dict) and "nodes" in data:
        return data["nodes"]
    return data


def _node_table(title: str, nodes: list) -> Table:
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Level", justify="right")
    table.add_column("Importance", justify="right")
    table.add_column("Links", justify="right")
    table.add_column("Contributors", justify="right")
    table.add_column("Sources")
    for node in nodes:
        table.add_row(
            node.name,
            node.category,
            str(node.level),
            str(node.importance),
            str(node.connection_count),
            str(node.contributor_count),
            ",".join(s.value for s in node.sources),
        )
    return table


def _relation_table(relations: list) -> Table:
    table = Table(title="Relations")
    table.add_column("Source", style="cyan")
    table.add_column("Target", style="cyan")
    table.add_column("Type")
    table.add_column("Strength", justify="right")
    for relation in relations:
        table.add_row(
            relation.source_name,
            relation.target_name,
            relation.relation_type,
            f"{relation.strength:.2f}",
        )
    return table


def _cmd_analyze(args: argparse.Namespace) -> int:
    from notegraph.config import Config
    from notegraph.knowledge_graph.knowledge_map import build_knowledge_map
    from notegraph.knowledge_graph.serialization import documents_from_payload, knowledge_map_to_dict

    config = Config.load()
    analysis_config = config.analysis
    seed = args.seed if args.seed is not None else analysis_config.layout_seed

    try:
        payload = _load_json(args.notes)
        if isinstance(payload, dict) and "notes" in payload:
            payload = payload["notes"]
        documents = documents_from_payload(payload, "notes")
        knowledge_map = build_knowledge_map(
            documents,
            min_relation=args.min_relation if args.min_relation is not None else analysis_config.min_relation,
            max_level=args.max_level if args.max_level is not None else analysis_config.max_level,
            contributor_id=args.contributor,
            rng=random.Random(seed),
            canvas_width=analysis_config.canvas_width,
            canvas_height=analysis_config.canvas_height,
        )
    except (OSError, json.JSONDecodeError) as exc:
        _print_error(f"Cannot read {args.notes}: {exc}")
        return 1
    except ValidationError as exc:
        _print_error(str(exc))
        return 1

    if args.json:
        print(json.dumps(knowledge_map_to_dict(knowledge_map), indent=2, ensure_ascii=False))
        return 0

    console = Console()
    summary = knowledge_map.summary()
    console.print("[bold cyan]Knowledge Map[/bold cyan]")
    console.print(f"  Notes:        {summary['total_notes']}")
    console.print(f"  Unique tags:  {summary['unique_tags']}")
    console.print(f"  Relations:    {summary['total_relations']}")
    console.print(f"  Min relation: {summary['min_relation']:.2f}")
    console.print(f"  Max level:    {summary['max_level']}")
    console.print()
    console.print(_node_table("Nodes", knowledge_map.graph.node_list()))
    if knowledge_map.graph.relations:
        console.print(_relation_table(knowledge_map.graph.relations))
    return 0


def _cmd_fuse(args: argparse.Namespace) -> int:
    from notegraph.config import Config
    from notegraph.knowledge_graph.fusion import FusionEngine
    from notegraph.knowledge_graph.serialization import fusion_result_to_dict

    config = Config.load()
    engine = FusionEngine(default_strategy=config.fusion.default_strategy)

    try:
        source = _nodes_from_file(_load_json(args.source))
        target = _nodes_from_file(_load_json(args.target)) if args.target is not None else None
    except (OSError, json.JSONDecodeError) as exc:
        _print_error(f"Cannot read input: {exc}")
        return 1

    try:
        result = engine.fuse(
            source,
            target,
            strategy=args.strategy,
            min_relation=args.min_relation if args.min_relation is not None else config.fusion.min_relation,
            source_contributor=args.source_contributor,
            target_contributor=args.target_contributor,
        )
    except ValidationError as exc:
        _print_error(str(exc))
        return 1

    if args.json:
        print(json.dumps(fusion_result_to_dict(result), indent=2, ensure_ascii=False))
        return 0

    console = Console()
    console.print(f"[bold cyan]Fusion ({result.strategy.value})[/bold cyan]")
    console.print(f"  Nodes:      {len(result.nodes)}")
    console.print(f"  Relations:  {len(result.relations)}")
    console.print(f"  Conflicts:  {len(result.conflicts)}")
    console.print()
    console.print(_node_table("Nodes", result.nodes))
    if result.relations:
        console.print(_relation_table(result.relations))
    if result.conflicts:
        console.print()
        console.print("[bold]Conflicts:[/bold]")
        for conflict in result.conflicts:
            console.print(escape(f"  [{conflict.resolution.value.upper()}] {conflict.node_name}"))
    return 0


def run_graph(argv: list[str]) -> int:
    """Entry point for `notegraph analyze|fuse` subcommands."""
    parser = _build_parser()

    if not argv:
        parser.print_help()
        return 0

    # Let argparse handle --help and errors (raises SystemExit)
    args = parser.parse_args(argv)

    if args.subcommand == "analyze":
        return _cmd_analyze(args)
    elif args.subcommand == "fuse":
        return _cmd_fuse(args)

    parser.print_help()
    return 1
