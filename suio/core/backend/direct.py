import io
import os
import typing

import suio
import suio.core
import suio.core.backend
import suio.core.file
import suio.core.mode


class Backend(suio.core.backend.Backend):
    def __init__(
        self,
        file: "suio.core.file.File",
        handle: io.FileIO,
    ):
        self.__file = file
        self.__handle = handle

    @property
    def file(self) -> "suio.core.file.File":
        return self.__file

    @property
    def privileged(self) -> bool:
        return False

    def seek(self, position: int):
        self.__handle.seek(position, os.SEEK_SET)

    def tell(self) -> int:
        return self.__handle.tell()

    def length(self) -> int:
        return os.fstat(self.__handle.fileno()).st_size

    def set_length(self, length: int):
        position = self.__handle.tell()
        self.__handle.truncate(length)

        if position > length:
            self.__handle.seek(length, os.SEEK_SET)

    def fileno(self) -> int:
        return self.__handle.fileno()

    def channel(self) -> typing.BinaryIO:
        return self.__handle

    def read(self, size: int) -> bytes:
        data = self.__handle.read(size)

        if data is None:
            return b""

        return data

    def write(self, data: bytes) -> int:
        view = memoryview(data).cast("B")
        written = 0

        while written < len(view):
            written += self.__handle.write(view[written:])

        return written

    def close(self):
        self.__handle.close()


def create(
    file: "suio.core.file.File",
    mode: "suio.core.mode.Mode",
) -> "Backend":
    descriptor = os.open(str(file.path), mode.flags(), 0o666)

    try:
        handle = io.FileIO(descriptor, mode.file_mode(), closefd=True)
    except Exception:
        os.close(descriptor)
        raise

    return Backend(file, handle)
