import errno
import typing

import suio
import suio.core
import suio.core.backend
import suio.core.data
import suio.core.file
import suio.core.mode


class ClosedError(ValueError):
    def __init__(self, file):
        super().__init__("I/O operation on closed file {}".format(file))


class NotWritableError(OSError):
    def __init__(self, file):
        super().__init__(errno.EBADF, "File not open for writing", str(file))


class NegativeValueError(ValueError):
    def __init__(self, name, value):
        super().__init__("{} must not be negative, got {}".format(name, value))


class Handle(
    suio.core.data.Input,
    suio.core.data.Output,
    suio.core.data.Closeable,
):
    """
    Random access file bound to exactly one backend for its lifetime.

    Closing is idempotent. Every other operation on a closed handle raises
    ClosedError.
    """

    def __init__(
        self,
        backend: "suio.core.backend.Backend",
        mode: "suio.core.mode.Mode",
    ):
        if not isinstance(backend, suio.core.backend.Backend):
            raise ValueError("backend must be instance of Backend")

        self.__backend = backend
        self.__mode = mode
        self.__closed = False

    def __repr__(self) -> str:
        return "Handle({!r}, mode={!r}, privileged={!r})".format(
            str(self.__backend.file),
            str(self.__mode),
            self.__backend.privileged,
        )

    @property
    def file(self) -> "suio.core.file.File":
        return self.__backend.file

    @property
    def mode(self) -> "suio.core.mode.Mode":
        return self.__mode

    @property
    def privileged(self) -> bool:
        return self.__backend.privileged

    @property
    def closed(self) -> bool:
        return self.__closed

    def _backend(self) -> "suio.core.backend.Backend":
        if self.__closed:
            raise ClosedError(self.__backend.file)

        return self.__backend

    def _writable_backend(self) -> "suio.core.backend.Backend":
        backend = self._backend()

        if not self.__mode.writable:
            raise NotWritableError(backend.file)

        return backend

    def seek(self, position: int):
        if position < 0:
            raise NegativeValueError("position", position)

        self._backend().seek(position)

    def tell(self) -> int:
        return self._backend().tell()

    get_file_pointer = tell

    def length(self) -> int:
        return self._backend().length()

    def set_length(self, length: int):
        if length < 0:
            raise NegativeValueError("length", length)

        self._writable_backend().set_length(length)

    def fileno(self) -> int:
        return self._backend().fileno()

    def channel(self) -> typing.BinaryIO:
        return self._backend().channel()

    def read(self, size: int = -1) -> bytes:
        if size is None:
            size = -1

        return self._backend().read(size)

    def write(self, data) -> int:
        return self._writable_backend().write(data)

    def close(self):
        if self.__closed:
            return

        self.__closed = True
        self.__backend.close()
