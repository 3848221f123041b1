import os
import pathlib
import typing


class InvalidFileError(TypeError):
    def __init__(self, value):
        super().__init__(
            "file must be instance of File, str or PathLike, not {}".format(
                type(value).__name__
            )
        )


class File:
    def __init__(
        self,
        path: typing.Union[str, os.PathLike],
        privileged: bool = False,
    ):
        if isinstance(path, File):
            path = path.path
        elif isinstance(path, (str, os.PathLike)):
            path = pathlib.Path(path)
        else:
            raise InvalidFileError(path)

        if not isinstance(privileged, bool):
            raise ValueError("privileged must be instance of bool")

        self.__path = path
        self.__privileged = privileged

    def __str__(self) -> str:
        return str(self.__path)

    def __fspath__(self) -> str:
        return str(self.__path)

    def __repr__(self) -> str:
        return "File({!r}, privileged={!r})".format(str(self.__path), self.__privileged)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, File)
            and other.path == self.path
            and other.privileged == self.privileged
        )

    def __hash__(self) -> int:
        return hash((self.__path, self.__privileged))

    @property
    def path(self) -> pathlib.Path:
        return self.__path

    @property
    def privileged(self) -> bool:
        return self.__privileged

    def as_privileged(self) -> "File":
        if self.privileged:
            return self

        return File(self.path, privileged=True)


def of(value: typing.Union[str, os.PathLike, "File"]) -> "File":
    if isinstance(value, File):
        return value

    return File(value)
