import os
import typing

READ = "r"
READ_WRITE = "rw"
READ_WRITE_SYNC = "rws"
READ_WRITE_DATA_SYNC = "rwd"

_ALL = (
    READ,
    READ_WRITE,
    READ_WRITE_SYNC,
    READ_WRITE_DATA_SYNC,
)


class InvalidModeError(ValueError):
    def __init__(self, value):
        super().__init__(
            'Illegal mode "{}" must be one of "r", "rw", "rws", or "rwd"'.format(value)
        )


class Mode:
    def __init__(self, value: str):
        if value not in _ALL:
            raise InvalidModeError(value)

        self.__value = value

    def __str__(self) -> str:
        return self.__value

    def __repr__(self) -> str:
        return "Mode({!r})".format(self.__value)

    def __eq__(self, other) -> bool:
        return isinstance(other, Mode) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.__value)

    @property
    def value(self) -> str:
        return self.__value

    @property
    def writable(self) -> bool:
        return self.__value != READ

    @property
    def synchronous(self) -> bool:
        return self.__value == READ_WRITE_SYNC

    @property
    def data_synchronous(self) -> bool:
        return self.__value == READ_WRITE_DATA_SYNC

    def coerce(self) -> "Mode":
        """
        Mode as seen through a mediated channel: rws and rwd cannot offer
        anything beyond plain read-write there.
        """
        if self.writable:
            return Mode(READ_WRITE)

        return self

    def flags(self) -> int:
        if not self.writable:
            return os.O_RDONLY

        flags = os.O_RDWR | os.O_CREAT

        if self.synchronous:
            flags |= os.O_SYNC
        elif self.data_synchronous:
            flags |= getattr(os, "O_DSYNC", os.O_SYNC)

        return flags

    def file_mode(self) -> str:
        if self.writable:
            return "r+b"

        return "rb"


def parse(value: typing.Union[str, "Mode"]) -> "Mode":
    if isinstance(value, Mode):
        return value
    elif not isinstance(value, str):
        raise InvalidModeError(value)

    return Mode(value)
