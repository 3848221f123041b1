import errno
import io
import os
import typing


class NotFoundError(FileNotFoundError):
    def __init__(self, file):
        super().__init__(errno.ENOENT, os.strerror(errno.ENOENT), str(file))


class NotRegularFileError(IsADirectoryError):
    def __init__(self, file):
        super().__init__(errno.EISDIR, "Not a regular file", str(file))


class NoDescriptorError(io.UnsupportedOperation):
    def __init__(self, file):
        super().__init__(
            "File {} is accessed through a privileged shell and has no native "
            "descriptor".format(file)
        )


class Backend:
    """
    Operations every backend offers. Positions and lengths are validated by
    the handle before they reach a backend.
    """

    @property
    def file(self) -> "suio.core.file.File":
        raise NotImplementedError()

    @property
    def privileged(self) -> bool:
        raise NotImplementedError()

    def seek(self, position: int):
        raise NotImplementedError()

    def tell(self) -> int:
        raise NotImplementedError()

    def length(self) -> int:
        raise NotImplementedError()

    def set_length(self, length: int):
        raise NotImplementedError()

    def fileno(self) -> int:
        raise NotImplementedError()

    def channel(self) -> typing.BinaryIO:
        raise NotImplementedError()

    def read(self, size: int) -> bytes:
        raise NotImplementedError()

    def write(self, data: bytes) -> int:
        raise NotImplementedError()

    def close(self):
        raise NotImplementedError()


Factory = typing.Callable[
    ["suio.core.file.File", "suio.core.mode.Mode"],
    Backend,
]
