"""CLI entrypoint for dunix."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .models import SortMetric

METRICS_HELP = """\b
Metrics:
  nar size        The size of the files within the store path itself, i.e.
                  the size of the output of nix-store --dump.
  closure size    The sum of the nar size of the store path's closure: the
                  path itself and everything it references, directly or
                  transitively.
  removal impact  The space saved from the root's closure if this path's
                  parent no longer depended on it directly. 0 when the path
                  has more than one referrer, since the root still depends
                  on it through another one. Otherwise the nar size of
                  everything in the path's closure that has no referrers
                  outside that closure.
  references      The number of store paths this one references directly.
  referrers       The number of store paths that reference this one directly.
"""


def _build_store(snapshot: Path | None, store_dir: str, nix_store: str):
    from .store import NixStore, NixStoreConfig, SnapshotStore

    if snapshot is not None:
        try:
            return SnapshotStore.from_json(snapshot, store_dir=store_dir)
        except ValueError as e:
            raise click.ClickException(f"Invalid snapshot {snapshot}: {e}") from e
    return NixStore(NixStoreConfig(store_dir=store_dir, nix_store=nix_store))


@click.command(epilog=METRICS_HELP)
@click.version_option(__version__, "-v", "--version", prog_name="dunix")
@click.argument("path", default="result")
@click.option(
    "--sort",
    "-s",
    "sort",
    type=click.Choice([m.value for m in SortMetric], case_sensitive=False),
    default=None,
    envvar="DUNIX_SORT",
    help="Metric by which to sort references [default: removal-impact]",
)
@click.option("--full-path", "-f", is_flag=True, help="Display full store paths")
@click.option(
    "--snapshot",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read path info from `nix path-info --json --recursive` output instead of the store",
)
@click.option(
    "--store-dir",
    type=str,
    default=None,
    envvar="DUNIX_STORE_DIR",
    help="Store directory [default: /nix/store]",
)
@click.option("--print", "print_once", is_flag=True, help="Print the root's breakdown and exit")
@click.option("--json", "output_json", is_flag=True, help="Output the root's breakdown as JSON and exit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file [default: $XDG_CONFIG_HOME/dunix/config.toml]",
)
@click.option("--debug", is_flag=True, help="Log store queries to stderr")
def cli(
    path: str,
    sort: str | None,
    full_path: bool,
    snapshot: Path | None,
    store_dir: str | None,
    print_once: bool,
    output_json: bool,
    config_path: Path | None,
    debug: bool,
) -> None:
    """Disk usage breakdowns for Nix store paths.

    Browse the closure of PATH (default: ./result). Use the arrow keys or
    h/j/k/l to move, enter to descend, g/G to jump, f to toggle full paths,
    n/c/i/r/R to change the sort metric and q to quit.
    """
    from rich.console import Console

    from .closure import build_closure
    from .commands.browse import run_browse
    from .commands.report import run_report
    from .config import load_config, parse_sort_metric
    from .errors import DunixError
    from .navigator import Navigator

    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    err = Console(stderr=True)

    try:
        cfg = load_config(config_path)
        metric = parse_sort_metric(sort) if sort else cfg.sort
        store = _build_store(snapshot, store_dir or cfg.store_dir, cfg.nix_store)

        if debug or not err.is_terminal:
            graph = build_closure(store, path)
        else:
            with err.status("Querying store...") as status:
                graph = build_closure(
                    store,
                    path,
                    on_visit=lambda count, _: status.update(f"Querying store... {count} paths"),
                )
    except click.ClickException:
        raise
    except DunixError as e:
        raise click.ClickException(str(e)) from e
    except Exception as e:
        logging.getLogger(__name__).debug("unexpected failure", exc_info=True)
        raise click.ClickException(f"unexpected error: {e}") from e

    navigator = Navigator(graph.root, sort_metric=metric, full_path=full_path or cfg.full_path)

    try:
        if output_json or print_once:
            exit_code = run_report(navigator, fmt="json" if output_json else "text")
            sys.exit(exit_code)

        run_browse(navigator)
    finally:
        graph.release()


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
