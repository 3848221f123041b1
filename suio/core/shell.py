import logging
import shlex
import subprocess
import typing

_DEFAULT_COMMAND = [
    "sudo",
    "-n",
]

_DEFAULT_BLOCK_SIZE = 65536

logger = logging.getLogger(__name__)


class Error(OSError):
    pass


class CommandError(Error):
    def __init__(self, arguments, returncode, stderr):
        message = (stderr or b"").decode("utf-8", errors="replace").strip()

        super().__init__(
            "Command {} failed with exit code {}{}".format(
                shlex.join(arguments),
                returncode,
                ": {}".format(message) if len(message) > 0 else "",
            )
        )

        self.__arguments = arguments
        self.__returncode = returncode

    @property
    def arguments(self) -> typing.List[str]:
        return self.__arguments

    @property
    def returncode(self) -> int:
        return self.__returncode


class NotAvailableError(Error):
    def __init__(self, program):
        super().__init__("Program {} is not available".format(program))


class Shell:
    """
    Privileged execution context.

    Every call runs one program behind the elevation prefix, for example
    ``sudo -n``. An empty prefix runs programs with the privileges of the
    calling process.
    """

    def __init__(
        self,
        command: typing.Optional[typing.List[str]] = None,
        block_size: int = _DEFAULT_BLOCK_SIZE,
    ):
        if command is None:
            command = list(_DEFAULT_COMMAND)
        elif not isinstance(command, list) or not all(
            map(lambda x: isinstance(x, str), command)
        ):
            raise ValueError("command must be instance of list of str")

        if not isinstance(block_size, int) or block_size <= 0:
            raise ValueError("block_size must be a positive int")

        self.__command = command
        self.__block_size = block_size

    @property
    def command(self) -> typing.List[str]:
        return self.__command

    @property
    def block_size(self) -> int:
        return self.__block_size

    def run(
        self,
        arguments: typing.List[str],
        input: typing.Optional[bytes] = None,
    ) -> "subprocess.CompletedProcess":
        command = [
            *self.command,
            *arguments,
        ]

        logger.debug("Executing %s", shlex.join(command))

        try:
            return subprocess.run(
                command,
                input=input,
                stdin=subprocess.DEVNULL if input is None else None,
                capture_output=True,
                check=False,
            )
        except FileNotFoundError as error:
            raise NotAvailableError(command[0]) from error

    def execute(
        self,
        arguments: typing.List[str],
        input: typing.Optional[bytes] = None,
    ) -> bytes:
        result = self.run(arguments, input=input)

        if result.returncode != 0:
            raise CommandError(
                [*self.command, *arguments],
                result.returncode,
                result.stderr,
            )

        return result.stdout


def from_configuration(configuration: typing.Mapping[str, typing.Any]) -> "Shell":
    return Shell(
        command=list(configuration["shell"]["command"]),
        block_size=configuration["shell"]["block_size"],
    )
