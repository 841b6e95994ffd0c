"""xmlsort CLI — sort XML nodes and attributes in place."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from xmlsort import __version__

console = Console(highlight=False, soft_wrap=True)

USAGE = """\
XmlSorter functionality:
   sort XML-nodes and XML-attributes alphabetically in XML-file
   remove duplicate nodes and attributes

usage1: xmlsort "filename"
usage2: xmlsort "filename" "node;*"
usage3: xmlsort "dir" "ext;*" "node;*"
   "filename": only sort the given file
   "node;*": XML node-names, separate by ';', these nodes are NOT sorted
   "dir": sort all files in this directory and all sub-directories
   "ext;*": file-extensions without '.', separated by ';', only sort files with given extensions
   arguments can be included in double quotes " ", but don't have to be

options:
   --config PATH   read defaults from a YAML file (default: .xmlsort.yaml if present)
   --indent N      spaces per indentation level, 0 writes compact output
   -v, --verbose   log every file and every skipped node
   --version       show the version and exit"""


def _print_usage() -> None:
    console.print(escape(USAGE))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


class _SorterCommand(click.Command):
    """Reports click's own parse errors with the xmlsort usage text."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            console.print(escape(e.format_message()))
            _print_usage()
            ctx.exit(1)


@click.command(
    cls=_SorterCommand,
    add_help_option=False,
    context_settings={"ignore_unknown_options": True},
)
@click.argument("args", nargs=-1)
@click.option("--config", "config_path", default=None, help="YAML settings file")
@click.option("--indent", type=click.IntRange(min=0), default=None, help="Indentation width")
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
@click.option("--help", "-h", "show_help", is_flag=True, help="Show usage and exit")
@click.version_option(version=__version__)
def main(args: tuple[str, ...], config_path: str | None, indent: int | None, verbose: bool, show_help: bool):
    """XmlSorter — sort XML nodes and attributes, removing duplicates."""
    _configure_logging(verbose)

    if show_help or len(args) not in (1, 2, 3):
        _print_usage()
        sys.exit(1)

    try:
        results = _run(args, config_path, indent)
    except Exception as e:
        console.print(escape(str(e)))
        _print_usage()
        sys.exit(1)

    if verbose:
        for result in results:
            console.print(escape(result.summary()))
    changed = sum(1 for r in results if r.changed)
    console.print(f"{changed} of {len(results)} file(s) rewritten")


def _run(args: tuple[str, ...], config_path: str | None, indent: int | None):
    from xmlsort.config import load_settings, split_list
    from xmlsort.walker import TreeWalker

    settings = load_settings(config_path)
    if indent is not None:
        settings = settings.model_copy(update={"indent": " " * indent if indent else None})

    if len(args) == 3:
        path, extensions, names = args
        walker = TreeWalker(split_list(names), settings)
        return walker.process_tree(path, split_list(extensions))

    names = split_list(args[1]) if len(args) == 2 else settings.ignored_names
    walker = TreeWalker(names, settings)
    return [walker.process_file(args[0])]


if __name__ == "__main__":
    main()
