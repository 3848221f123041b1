import contextlib
import logging
import typing

import click
import rich
import rich.console
import rich.logging
import rich.table

import suio
import suio.core
import suio.core.configuration
import suio.core.dispatcher
import suio.core.file
import suio.core.shell

_pass_shell = click.make_pass_decorator(suio.core.shell.Shell)

_CHUNK_SIZE = 65536


@contextlib.contextmanager
def _errors():
    try:
        yield
    except (OSError, EOFError, ValueError, suio.core.configuration.Error) as error:
        raise click.ClickException(str(error)) from error


@click.option(
    "--configuration",
    "-c",
    "configuration",
    envvar=suio.core.configuration.ENVIRONMENT_VARIABLE,
    default=None,
    type=click.Path(dir_okay=False),
    help="Path of the configuration file.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose",
    is_flag=True,
    default=False,
    help="Log backend selection and shell commands.",
)
@click.group()
@click.pass_context
def main(ctx: click.Context, configuration: typing.Optional[str], verbose: bool):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[rich.logging.RichHandler(console=rich.console.Console(stderr=True))],
        )

    with _errors():
        ctx.obj = suio.core.shell.from_configuration(
            suio.core.configuration.load(configuration),
        )


def _file(path: str, privileged: bool) -> "suio.core.file.File":
    return suio.core.file.File(path, privileged=privileged)


@main.command(name="info", help="Show how a file is accessed.")
@click.option(
    "--privileged",
    "-p",
    "privileged",
    is_flag=True,
    default=False,
    help="Always access the file through the privileged shell.",
)
@click.argument("path")
@_pass_shell
def _info(shell: "suio.core.shell.Shell", path: str, privileged: bool):
    table = rich.table.Table()

    table.add_column("Path")
    table.add_column("Backend")
    table.add_column("Length")

    with _errors(), suio.core.dispatcher.open(
        _file(path, privileged), "r", shell=shell
    ) as handle:
        table.add_row(
            str(handle.file),
            "privileged" if handle.privileged else "direct",
            str(handle.length()),
        )

    rich.console.Console().print(table)


@main.command(name="read", help="Write the content of a file to stdout.")
@click.option("--offset", "-o", "offset", type=click.IntRange(min=0), default=0)
@click.option("--length", "-l", "length", type=click.IntRange(min=0), default=None)
@click.option("--privileged", "-p", "privileged", is_flag=True, default=False)
@click.argument("path")
@_pass_shell
def _read(
    shell: "suio.core.shell.Shell",
    path: str,
    offset: int,
    length: typing.Optional[int],
    privileged: bool,
):
    output = click.get_binary_stream("stdout")

    with _errors(), suio.core.dispatcher.open(
        _file(path, privileged), "r", shell=shell
    ) as handle:
        handle.seek(offset)

        if length is None:
            output.write(handle.read())
        else:
            output.write(handle.read_fully(length))

    output.flush()


@main.command(name="write", help="Write stdin into a file at an offset.")
@click.option("--offset", "-o", "offset", type=click.IntRange(min=0), default=0)
@click.option("--privileged", "-p", "privileged", is_flag=True, default=False)
@click.argument("path")
@_pass_shell
def _write(
    shell: "suio.core.shell.Shell",
    path: str,
    offset: int,
    privileged: bool,
):
    source = click.get_binary_stream("stdin")

    with _errors(), suio.core.dispatcher.open(
        _file(path, privileged), "rw", shell=shell
    ) as handle:
        handle.seek(offset)

        while True:
            chunk = source.read(_CHUNK_SIZE)
            if len(chunk) == 0:
                break

            handle.write(chunk)


@main.command(name="truncate", help="Truncate or extend a file.")
@click.option("--privileged", "-p", "privileged", is_flag=True, default=False)
@click.argument("path")
@click.argument("length", type=click.IntRange(min=0))
@_pass_shell
def _truncate(
    shell: "suio.core.shell.Shell",
    path: str,
    length: int,
    privileged: bool,
):
    with _errors(), suio.core.dispatcher.open(
        _file(path, privileged), "rw", shell=shell
    ) as handle:
        handle.set_length(length)


if __name__ == "__main__":
    main()
