"""Command-line interface for the stereo orchestrator."""

import argparse
import logging
import sys
from pathlib import Path

from stereoproc.config import DEFAULT_NAME, OrchestratorConfig
from stereoproc.errors import GraphAssemblyError
from stereoproc.pipeline import Orchestrator, ProcessingGraph


def _configure_logging(verbose: bool = False) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_config(config_path: Path) -> OrchestratorConfig:
    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    try:
        return OrchestratorConfig.from_yaml(config_path)
    except Exception as e:
        print(f"Error: Failed to load config: {e}", file=sys.stderr)
        sys.exit(1)


def init_config(
    config_path: Path,
    name: str = DEFAULT_NAME,
    namespace: str = "/",
) -> OrchestratorConfig:
    """Write a default configuration file.

    Args:
        config_path: Where to save the YAML file.
        name: Orchestrator name.
        namespace: Namespace of the stereo camera.

    Returns:
        The generated configuration.
    """
    if config_path.exists():
        print(f"Error: Refusing to overwrite {config_path}", file=sys.stderr)
        sys.exit(1)

    try:
        config = OrchestratorConfig(name=name, namespace=namespace)
    except ValueError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    config.to_yaml(config_path)
    print(f"[OK] Configuration saved to: {config_path}")
    return config


def format_graph(graph: ProcessingGraph) -> str:
    """Render a processing graph as a human-readable listing."""
    lines = [f"Processing graph for {graph.base_name} ({len(graph)} units)", ""]
    for index, unit in enumerate(graph, start=1):
        lines.append(f"{index}. {unit.instance_name}  [{unit.unit_type}]")
        for port, topic in unit.remappings.items():
            lines.append(f"     {port:22s} -> {topic}")
        for key, value in unit.private_params.items():
            lines.append(f"     param {key} = {value!r}")
    return "\n".join(lines)


def plan_command(config_path: Path) -> ProcessingGraph:
    """Print the units that would be loaded, without loading them."""
    config = _load_config(config_path)

    try:
        graph = Orchestrator(config).plan()
    except GraphAssemblyError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(format_graph(graph))
    return graph


def assemble_command(
    config_path: Path,
    verbose: bool = False,
    strict: bool = False,
    namespace: str | None = None,
    params_out: Path | None = None,
) -> ProcessingGraph:
    """Assemble the graph against a dry-run loader and in-memory store.

    Args:
        config_path: Path to the orchestrator config YAML file.
        verbose: If True, set logging to DEBUG level.
        strict: Treat preflight warnings as fatal.
        namespace: Optional namespace override.
        params_out: Optional path for a YAML dump of all parameters.
    """
    _configure_logging(verbose)

    config = _load_config(config_path)

    overrides = {}
    if namespace is not None:
        overrides["namespace"] = namespace
    if strict:
        overrides["strict_preflight"] = True
    if overrides:
        try:
            config = OrchestratorConfig.model_validate(
                {**config.model_dump(), **overrides}
            )
        except ValueError as e:
            print(f"Error: Invalid configuration: {e}", file=sys.stderr)
            sys.exit(1)

    orchestrator = Orchestrator(config)
    try:
        graph = orchestrator.run()
    except GraphAssemblyError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if params_out is not None:
        orchestrator.store.to_yaml(params_out)
        print(f"[OK] Parameters saved to: {params_out}")

    return graph


def main() -> None:
    """Main entry point for the stereoproc CLI."""
    parser = argparse.ArgumentParser(
        prog="stereoproc",
        description="Assemble the stereo image processing graph.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default config file",
    )
    init_parser.add_argument(
        "config",
        type=Path,
        help="Path of the config YAML file to create",
    )
    init_parser.add_argument(
        "--name",
        type=str,
        default=DEFAULT_NAME,
        help=f"Orchestrator name (default: {DEFAULT_NAME})",
    )
    init_parser.add_argument(
        "--namespace",
        type=str,
        default="/",
        help="Stereo camera namespace (default: /)",
    )

    # plan subcommand
    plan_parser = subparsers.add_parser(
        "plan",
        help="Show the units, remappings and parameters without loading",
    )
    plan_parser.add_argument(
        "config",
        type=Path,
        help="Path to orchestrator config YAML file",
    )

    # assemble subcommand
    assemble_parser = subparsers.add_parser(
        "assemble",
        help="Run the full assembly as a dry run",
    )
    assemble_parser.add_argument(
        "config",
        type=Path,
        help="Path to orchestrator config YAML file",
    )
    assemble_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    assemble_parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort when a preflight check fails",
    )
    assemble_parser.add_argument(
        "--namespace",
        type=str,
        default=None,
        help="Override the namespace from the config",
    )
    assemble_parser.add_argument(
        "--params-out",
        type=Path,
        default=None,
        help="Write the propagated parameters to this YAML file",
    )

    args = parser.parse_args()

    # Dispatch
    if args.command == "init":
        init_config(
            config_path=args.config,
            name=args.name,
            namespace=args.namespace,
        )
    elif args.command == "plan":
        plan_command(config_path=args.config)
    elif args.command == "assemble":
        assemble_command(
            config_path=args.config,
            verbose=args.verbose,
            strict=args.strict,
            namespace=args.namespace,
            params_out=args.params_out,
        )
    else:
        parser.print_help()
        sys.exit(1)
