import logging
import math
import os
import typing

import suio
import suio.core
import suio.core.backend
import suio.core.file
import suio.core.mode
import suio.core.shell

_STATE_SCRIPT = (
    'if [ -d "$1" ]; then echo directory; '
    'elif [ -e "$1" ]; then echo exists; '
    "else echo missing; fi"
)

_DIRECTORY = "directory"
_EXISTS = "exists"
_MISSING = "missing"

logger = logging.getLogger(__name__)


def _state(shell: "suio.core.shell.Shell", path: str) -> str:
    return (
        shell.execute(["sh", "-c", _STATE_SCRIPT, "sh", path])
        .decode("utf-8")
        .strip()
    )


def _block_size(position: int, size: int, maximum: int) -> int:
    return math.gcd(math.gcd(position, size), maximum)


def _absolute(file: "suio.core.file.File") -> str:
    return os.path.abspath(str(file.path))


class Backend(suio.core.backend.Backend):
    """
    Backend executing each operation as one command in a privileged shell.

    There is no cursor on the other side of the shell, so the position is
    kept here and handed to every dd invocation.
    """

    def __init__(
        self,
        file: "suio.core.file.File",
        shell: "suio.core.shell.Shell",
    ):
        self.__file = file
        self.__shell = shell
        self.__position = 0

    @property
    def file(self) -> "suio.core.file.File":
        return self.__file

    @property
    def shell(self) -> "suio.core.shell.Shell":
        return self.__shell

    @property
    def privileged(self) -> bool:
        return True

    @property
    def _path(self) -> str:
        return _absolute(self.__file)

    def seek(self, position: int):
        self.__position = position

    def tell(self) -> int:
        return self.__position

    def length(self) -> int:
        output = self.__shell.execute(["wc", "-c", "--", self._path])
        return int(output.split()[0])

    def set_length(self, length: int):
        self.__shell.execute(["truncate", "-s", str(length), "--", self._path])

        if self.__position > length:
            self.__position = length

    def fileno(self) -> int:
        raise suio.core.backend.NoDescriptorError(self.__file)

    def channel(self) -> typing.BinaryIO:
        raise suio.core.backend.NoDescriptorError(self.__file)

    def read(self, size: int) -> bytes:
        if size == 0:
            return b""

        block_size = _block_size(
            self.__position, max(size, 0), self.__shell.block_size
        )

        arguments = [
            "dd",
            "if={}".format(self._path),
            "bs={}".format(block_size),
            "skip={}".format(self.__position // block_size),
        ]

        # Without count, dd copies up to the end of the file.
        if size > 0:
            arguments.append("count={}".format(size // block_size))

        data = self.__shell.execute(arguments)

        self.__position += len(data)

        return data

    def write(self, data: bytes) -> int:
        data = bytes(data)

        if len(data) == 0:
            return 0

        block_size = _block_size(self.__position, len(data), self.__shell.block_size)

        self.__shell.execute(
            [
                "dd",
                "of={}".format(self._path),
                "ibs={}".format(block_size),
                "obs={}".format(block_size),
                "seek={}".format(self.__position // block_size),
                "conv=notrunc",
            ],
            input=data,
        )

        self.__position += len(data)

        return len(data)

    def close(self):
        pass


class Factory:
    def __init__(self, shell: "suio.core.shell.Shell"):
        if not isinstance(shell, suio.core.shell.Shell):
            raise ValueError("shell must be instance of Shell")

        self.__shell = shell

    @property
    def shell(self) -> "suio.core.shell.Shell":
        return self.__shell

    def __call__(
        self,
        file: "suio.core.file.File",
        mode: "suio.core.mode.Mode",
    ) -> "Backend":
        mode = mode.coerce()
        path = _absolute(file)
        state = _state(self.__shell, path)

        if state == _DIRECTORY:
            raise suio.core.backend.NotRegularFileError(file)
        elif state == _MISSING:
            if not mode.writable:
                raise suio.core.backend.NotFoundError(file)

            logger.debug("Creating %s through privileged shell", path)

            try:
                self.__shell.execute(["touch", "--", path])
            except suio.core.shell.CommandError as error:
                raise suio.core.backend.NotFoundError(file) from error

        return Backend(file, self.__shell)
