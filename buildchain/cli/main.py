"""The ``buildchain`` command."""

from __future__ import annotations

from typing import IO

import click

from buildchain import __version__
from buildchain.app import run_build_chain, scope_configs
from buildchain.config import OUTPUT_FORMATS, load_config
from buildchain.errors import BuildChainError
from buildchain.loader import load_build_configs, load_image_stream_tags, read_objects
from buildchain.observability.logging import get_logger, setup_logging
from buildchain.selection import select_roots

_LONG_HELP = """Output build dependencies of a specific image repository.

Build configurations are read from JSON documents as printed by
`oc get bc -o json`. Supported output formats are json, dot, and ast.
Tag and namespace are optional; 'latest' and the default namespace are
used when they are not given.

\b
Examples:
    # Dependency tree for the given image repository and tag
    $ oc get bc -o json | buildchain ruby-20-centos7:latest -f - --image-streams is.json

\b
    # Dependency trees for every tag of an image repository
    $ buildchain ruby-20-centos7 --all-tags -f bc.json --image-streams is.json

\b
    # Dependency trees for every watched repository in namespace 'testing', as DOT
    $ buildchain -n testing -o dot -f bc.json

\b
    # Dependency trees for every watched repository in every namespace
    $ buildchain --all -f bc.json
"""


def _check_usage(argument: str | None, all_namespaces: bool, all_tags: bool, has_image_streams: bool) -> None:
    if (argument and all_namespaces) or (not argument and all_tags) or (all_namespaces and all_tags):
        raise click.UsageError(
            "Must pass nothing, an image repository name:tag combination, or specify the --all flag"
        )
    if argument and not has_image_streams:
        raise click.UsageError("--image-streams is required when IMAGE_REPOSITORY is given")


@click.command(help=_LONG_HELP)
@click.argument("image_repository", required=False, metavar="[IMAGE_REPOSITORY[:TAG]]")
@click.option(
    "-f",
    "--filename",
    "buildconfig_files",
    type=click.File("r"),
    multiple=True,
    required=True,
    help="JSON file with BuildConfig objects ('-' for stdin). Repeatable.",
)
@click.option(
    "--image-streams",
    "image_stream_files",
    type=click.File("r"),
    multiple=True,
    help="JSON file with ImageStream objects, used to validate IMAGE_REPOSITORY. Repeatable.",
)
@click.option("-n", "--namespace", default=None, help="Namespace of the image repository.")
@click.option("--all", "all_namespaces", is_flag=True, help="Build dependency trees for all image repositories.")
@click.option("--all-tags", is_flag=True, help="Build dependency trees for all tags of a specific image repository.")
@click.option(
    "-o",
    "--output",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format of dependency tree(s). [default: json]",
)
@click.option("--max-depth", type=click.IntRange(min=1, max=900), default=None, help="Longest trigger chain to follow.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Log level for the JSON log lines written to stderr.",
)
@click.version_option(__version__, prog_name="buildchain")
def cli(
    image_repository: str | None,
    buildconfig_files: tuple[IO[str], ...],
    image_stream_files: tuple[IO[str], ...],
    namespace: str | None,
    all_namespaces: bool,
    all_tags: bool,
    output_format: str | None,
    max_depth: int | None,
    log_level: str | None,
) -> None:
    _check_usage(image_repository, all_namespaces, all_tags, bool(image_stream_files))
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    setup_logging(log_level or config.log.level)
    log = get_logger("cli")
    namespace = namespace or config.namespace

    try:
        objects = [obj for stream in buildconfig_files for obj in read_objects(stream)]
        configs = scope_configs(load_build_configs(objects, namespace), namespace, all_namespaces)
        image_stream_tags = None
        if image_stream_files:
            streams = [obj for stream in image_stream_files for obj in read_objects(stream)]
            image_stream_tags = load_image_stream_tags(streams, namespace)

        roots = select_roots(
            configs,
            namespace,
            argument=image_repository,
            image_stream_tags=image_stream_tags,
            all_tags=all_tags,
        )
        results = run_build_chain(
            configs,
            roots,
            output_format=output_format or config.output.format,
            max_depth=max_depth or config.builder.max_depth,
        )
    except BuildChainError as exc:
        log.error("build_chain_failed", error=str(exc), error_type=type(exc).__name__)
        raise click.ClickException(str(exc)) from exc

    for result in results:
        if result.output is None:
            click.echo(f"{result.repository}:{result.tag} has no dependencies", err=True)
            continue
        click.echo(result.output)
