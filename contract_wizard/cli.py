"""Command-line front end: ``python -m contract_wizard.cli``.

Subcommands::

    generate <trait>   render a contract (stdout, a file, or a crate dir)
    invoke <trait>     print the initializer invocation command
    analyze <file>     list entry points, events and their invoke commands
    traits             list scaffold traits and catalog contracts
    fetch <key>        download a reference contract from the catalog
    build <trait>      compile a generated contract on the build server
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from contract_wizard.analyzer.models import LensKind
from contract_wizard.analyzer.source import extract_callable_signatures, find_event_sites
from contract_wizard.build_client import BuildClient
from contract_wizard.catalog import CATALOG_PATHS, ContractCatalog, ReferenceLoader
from contract_wizard.codegen.facade import GeneratorFacade
from contract_wizard.codegen.scaffold import ScaffoldGenerator
from contract_wizard.config import WizardConfig
from contract_wizard.editor import EditorSession
from contract_wizard.project import ProjectModel
from contract_wizard.utils import (
    WizardError,
    console,
    print_error,
    print_signature_table,
    print_source,
    print_success,
    print_summary_table,
    print_warning,
    read_text,
    write_text,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_config(path: str | None) -> WizardConfig:
    if path is None:
        return WizardConfig.from_env()
    try:
        return WizardConfig.load(Path(path))
    except (OSError, ValidationError) as exc:
        raise WizardError(f"Invalid config file {path}: {exc}") from exc


def _catalog(config: WizardConfig) -> ContractCatalog:
    return ContractCatalog(
        api_url=config.catalog.api_url,
        owner=config.catalog.owner,
        repo=config.catalog.repo,
        timeout=config.catalog.timeout,
    )


def _facade(args: argparse.Namespace, config: WizardConfig) -> GeneratorFacade:
    """Facade for ``args.trait``, fetching the catalog source when needed."""
    facade = GeneratorFacade(
        author=config.author if args.author is None else args.author,
        license=config.license if args.license is None else args.license,
        trait=args.trait or config.default_trait,
        name=args.name or config.contract_name,
        cli_tool=config.cli_tool,
        contract_id=config.contract_id,
    )
    if facade.generator_for(facade.trait) is not None:
        return facade
    if facade.trait not in CATALOG_PATHS:
        known = ", ".join(facade.available_traits() + list(CATALOG_PATHS))
        raise WizardError(f"Unknown trait '{facade.trait}'. Known: {known}")

    loader = ReferenceLoader(_catalog(config), on_loaded=facade.set_reference_source)
    asyncio.run(loader.load(facade.trait))
    if facade.trait in loader.errors:
        raise WizardError(loader.errors[facade.trait])
    return facade


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def cmd_generate(args: argparse.Namespace, config: WizardConfig) -> None:
    facade = _facade(args, config)
    code = facade.get_code()

    if args.crate:
        crate = Path(args.crate)
        generator = facade.generator_for(facade.trait) or ScaffoldGenerator(facade.renderer)
        write_text(crate / "Cargo.toml", generator.render_manifest(facade.name))
        write_text(crate / "src" / "lib.rs", code)
        print_success(f"Wrote crate {facade.name} to {crate}")
    elif args.output:
        written = write_text(args.output, code)
        print_success(f"Wrote {facade.trait} contract to {written}")
    else:
        print_source(code)


def cmd_invoke(args: argparse.Namespace, config: WizardConfig) -> None:
    facade = GeneratorFacade(
        name=args.name or config.contract_name,
        cli_tool=config.cli_tool,
        contract_id=config.contract_id,
    )
    params = args.param if args.param else facade.default_params(args.trait)
    command = facade.build_invoke_command(args.trait, facade.name, params)
    if not command:
        raise WizardError(f"Unknown trait '{args.trait}'")
    console.print(command, markup=False, highlight=False)


def cmd_analyze(args: argparse.Namespace, config: WizardConfig) -> None:
    text = read_text(args.file)
    signatures = extract_callable_signatures(text)
    events = find_event_sites(text)
    if not signatures and not events:
        print_warning(f"No entry points or events found in {args.file}")
        return
    print_signature_table(signatures, events, title=f"Contract analysis: {args.file}")

    model = ProjectModel(name=Path(args.file).stem)
    file_id = model.initialize_single_file()
    model.update_file_content(file_id, text)
    session = EditorSession(
        model,
        file_id,
        lambda context, payload: context.invoke_command_for(payload),
        contract_name=args.name or "",
        cli_tool=config.cli_tool,
        contract_id=config.contract_id,
    )
    lens_set = session.mount()
    for lens in lens_set.lenses:
        if lens.kind is LensKind.INVOKE:
            console.rule(f"line {lens.line_number}", style="dim")
            console.print(lens.command(), markup=False, highlight=False)
    session.dispose()


def cmd_traits(args: argparse.Namespace, config: WizardConfig) -> None:
    facade = GeneratorFacade()
    rows: dict[str, str] = {}
    for trait in facade.available_traits():
        generator = facade.generator_for(trait)
        rows[trait] = ", ".join(generator.init_flags)
    for key, path in CATALOG_PATHS.items():
        rows[key] = f"catalog: {path}"
    print_summary_table(rows, title="Contract traits")


def cmd_fetch(args: argparse.Namespace, config: WizardConfig) -> None:
    path = CATALOG_PATHS.get(args.key)
    if path is None:
        raise WizardError(f"Unknown catalog contract '{args.key}'")
    result = asyncio.run(_catalog(config).fetch_source(path))
    if not result.success:
        raise WizardError(result.error or f"Could not fetch {path}")
    if args.output:
        written = write_text(args.output, result.content or "")
        print_success(f"Wrote {path} to {written}")
    else:
        print_source(result.content or "")


def cmd_build(args: argparse.Namespace, config: WizardConfig) -> None:
    facade = _facade(args, config)
    client = BuildClient(base_url=config.build.url, timeout=config.build.timeout)
    result = asyncio.run(client.build(facade.get_code()))
    if not result.success:
        raise WizardError(result.error or "Build failed")
    target = Path(args.output or f"{facade.name}.wasm")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(result.wasm)
    print_success(f"Built {facade.name} ({result.size} bytes) -> {target}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contract-wizard",
        description="Contract Wizard -- Soroban contract scaffolding and invocation helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m contract_wizard.cli generate Voting --name MyVote\n"
            "  python -m contract_wizard.cli invoke Raffle --param GABC --param CDEF\n"
            "  python -m contract_wizard.cli analyze src/lib.rs\n"
        ),
    )
    parser.add_argument("--config", default=None, help="Path to a saved WizardConfig JSON file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def _source_options(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("trait", help="Scaffold trait (e.g. Voting) or catalog key (e.g. voting)")
        sub.add_argument("--name", default=None, help="Contract type name")
        sub.add_argument("--author", default=None, help="Author banner line")
        sub.add_argument("--license", default=None, help="License banner line")

    generate = subparsers.add_parser("generate", help="Render a contract")
    _source_options(generate)
    target = generate.add_mutually_exclusive_group()
    target.add_argument("--output", "-o", default=None, help="Write the source to this file")
    target.add_argument("--crate", default=None, help="Write Cargo.toml and src/lib.rs here")
    generate.set_defaults(handler=cmd_generate)

    invoke = subparsers.add_parser("invoke", help="Print the initializer command")
    invoke.add_argument("trait", help="Scaffold trait")
    invoke.add_argument("--name", default=None, help="Contract type name")
    invoke.add_argument(
        "--param",
        action="append",
        default=[],
        help="Initializer value, in flag order (repeatable)",
    )
    invoke.set_defaults(handler=cmd_invoke)

    analyze = subparsers.add_parser("analyze", help="List entry points and events of a file")
    analyze.add_argument("file", help="Contract source file")
    analyze.add_argument("--name", default=None, help="Override the detected contract name")
    analyze.set_defaults(handler=cmd_analyze)

    traits = subparsers.add_parser("traits", help="List available contract traits")
    traits.set_defaults(handler=cmd_traits)

    fetch = subparsers.add_parser("fetch", help="Download a catalog contract")
    fetch.add_argument("key", choices=sorted(CATALOG_PATHS), help="Catalog contract")
    fetch.add_argument("--output", "-o", default=None, help="Write the source to this file")
    fetch.set_defaults(handler=cmd_fetch)

    build = subparsers.add_parser("build", help="Compile a generated contract")
    _source_options(build)
    build.add_argument("--output", "-o", default=None, help="WASM output path")
    build.set_defaults(handler=cmd_build)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m contract_wizard.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load_config(args.config)
        args.handler(args, config)
    except WizardError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
