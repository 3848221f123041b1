"""
Capability sets composed by handles.

All multi-byte primitives use big-endian (network) byte order.
"""
import struct
import typing

_BYTE = struct.Struct(">b")
_UNSIGNED_BYTE = struct.Struct(">B")
_SHORT = struct.Struct(">h")
_UNSIGNED_SHORT = struct.Struct(">H")
_INT = struct.Struct(">i")
_UNSIGNED_INT = struct.Struct(">I")
_LONG = struct.Struct(">q")
_UNSIGNED_LONG = struct.Struct(">Q")
_FLOAT = struct.Struct(">f")
_DOUBLE = struct.Struct(">d")

_LINE_FEED = b"\n"
_CARRIAGE_RETURN = b"\r"

_UNSIGNED_SHORT_MAX = 0xFFFF


class EndOfFileError(EOFError):
    def __init__(self, requested, received):
        super().__init__(
            "Requested {} bytes but only {} remain".format(requested, received)
        )
        self.__requested = requested
        self.__received = received

    @property
    def requested(self) -> int:
        return self.__requested

    @property
    def received(self) -> int:
        return self.__received


class StringTooLongError(ValueError):
    def __init__(self, length):
        super().__init__(
            "Encoded string of {} bytes exceeds {} bytes".format(
                length, _UNSIGNED_SHORT_MAX
            )
        )


class Input:
    """
    Byte reader. Subclasses provide read, seek and tell.
    """

    def read(self, size: int = -1) -> bytes:
        raise NotImplementedError()

    def seek(self, position: int):
        raise NotImplementedError()

    def tell(self) -> int:
        raise NotImplementedError()

    def readinto(self, buffer) -> int:
        view = memoryview(buffer).cast("B")
        data = self.read(len(view))
        view[: len(data)] = data
        return len(data)

    def read_fully(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must not be negative")

        chunks = []
        remaining = size

        while remaining > 0:
            chunk = self.read(remaining)
            if len(chunk) == 0:
                raise EndOfFileError(size, size - remaining)

            chunks.append(chunk)
            remaining -= len(chunk)

        return b"".join(chunks)

    def skip_bytes(self, count: int) -> int:
        if count <= 0:
            return 0

        position = self.tell()
        length = self.length()
        target = min(position + count, max(length, position))

        self.seek(target)

        return target - position

    def length(self) -> int:
        raise NotImplementedError()

    def _unpack(self, structure: struct.Struct) -> typing.Any:
        return structure.unpack(self.read_fully(structure.size))[0]

    def read_boolean(self) -> bool:
        return self._unpack(_UNSIGNED_BYTE) != 0

    def read_byte(self) -> int:
        return self._unpack(_BYTE)

    def read_unsigned_byte(self) -> int:
        return self._unpack(_UNSIGNED_BYTE)

    def read_short(self) -> int:
        return self._unpack(_SHORT)

    def read_unsigned_short(self) -> int:
        return self._unpack(_UNSIGNED_SHORT)

    def read_char(self) -> str:
        return chr(self._unpack(_UNSIGNED_SHORT))

    def read_int(self) -> int:
        return self._unpack(_INT)

    def read_long(self) -> int:
        return self._unpack(_LONG)

    def read_float(self) -> float:
        return self._unpack(_FLOAT)

    def read_double(self) -> float:
        return self._unpack(_DOUBLE)

    def read_utf(self) -> str:
        length = self.read_unsigned_short()
        return self.read_fully(length).decode("utf-8")

    def read_line(self) -> typing.Optional[str]:
        """
        Read bytes up to a line terminator (\\n, \\r or \\r\\n) and return
        them as latin-1 text without the terminator. Returns None at the end
        of the file when nothing was read.
        """
        line = bytearray()
        terminated = False

        while True:
            current = self.read(1)

            if len(current) == 0:
                break
            elif current == _LINE_FEED:
                terminated = True
                break
            elif current == _CARRIAGE_RETURN:
                terminated = True
                position = self.tell()
                if self.read(1) not in (_LINE_FEED, b""):
                    self.seek(position)
                break

            line.extend(current)

        if not terminated and len(line) == 0:
            return None

        return line.decode("latin-1")


class Output:
    """
    Byte writer. Subclasses provide write.
    """

    def write(self, data) -> int:
        raise NotImplementedError()

    def _pack(self, structure: struct.Struct, value: typing.Any):
        self.write(structure.pack(value))

    def write_boolean(self, value: bool):
        self._pack(_UNSIGNED_BYTE, 1 if value else 0)

    def write_byte(self, value: int):
        self._pack(_UNSIGNED_BYTE, value & 0xFF)

    def write_short(self, value: int):
        self._pack(_UNSIGNED_SHORT, value & 0xFFFF)

    def write_char(self, value: typing.Union[str, int]):
        if isinstance(value, str):
            value = ord(value)

        self._pack(_UNSIGNED_SHORT, value & 0xFFFF)

    def write_int(self, value: int):
        self._pack(_UNSIGNED_INT, value & 0xFFFFFFFF)

    def write_long(self, value: int):
        self._pack(_UNSIGNED_LONG, value & 0xFFFFFFFFFFFFFFFF)

    def write_float(self, value: float):
        self._pack(_FLOAT, value)

    def write_double(self, value: float):
        self._pack(_DOUBLE, value)

    def write_bytes(self, value: str):
        self.write(bytes(ord(x) & 0xFF for x in value))

    def write_chars(self, value: str):
        self.write(b"".join(_UNSIGNED_SHORT.pack(ord(x) & 0xFFFF) for x in value))

    def write_utf(self, value: str):
        encoded = value.encode("utf-8")

        if len(encoded) > _UNSIGNED_SHORT_MAX:
            raise StringTooLongError(len(encoded))

        self.write(_UNSIGNED_SHORT.pack(len(encoded)) + encoded)


class Closeable:
    def close(self):
        raise NotImplementedError()

    @property
    def closed(self) -> bool:
        raise NotImplementedError()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
