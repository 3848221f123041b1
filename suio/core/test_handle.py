import io
import os
import pathlib
import tempfile
import unittest

import suio
import suio.core
import suio.core.backend
import suio.core.backend.direct
import suio.core.file
import suio.core.handle
import suio.core.mode


def _open(path, mode):
    mode = suio.core.mode.parse(mode)
    file = suio.core.file.File(path)

    return suio.core.handle.Handle(
        suio.core.backend.direct.create(file, mode),
        mode,
    )


class TestDirectHandle(unittest.TestCase):
    def setUp(self):
        self._directory = tempfile.TemporaryDirectory()
        self._path = pathlib.Path(self._directory.name, "file")
        self._path.write_bytes(b"0123456789")

    def tearDown(self):
        self._directory.cleanup()

    def test_length(self):
        with _open(self._path, "r") as handle:
            self.assertEqual(handle.length(), self._path.stat().st_size)

    def test_not_privileged(self):
        with _open(self._path, "r") as handle:
            self.assertFalse(handle.privileged)

    def test_seek(self):
        with _open(self._path, "r") as handle:
            for position in range(handle.length() + 1):
                handle.seek(position)
                self.assertEqual(handle.tell(), position)
                self.assertEqual(handle.get_file_pointer(), position)

    def test_seek_beyond_length(self):
        with _open(self._path, "r") as handle:
            handle.seek(100)
            self.assertEqual(handle.tell(), 100)
            self.assertEqual(handle.read(4), b"")

    def test_seek_negative(self):
        with _open(self._path, "r") as handle:
            with self.assertRaises(ValueError):
                handle.seek(-1)

    def test_read(self):
        with _open(self._path, "r") as handle:
            handle.seek(3)
            self.assertEqual(handle.read(4), b"3456")
            self.assertEqual(handle.tell(), 7)
            self.assertEqual(handle.read(), b"789")

    def test_round_trip(self):
        with _open(self._path, "rw") as handle:
            handle.seek(4)
            handle.write(b"abc")
            self.assertEqual(handle.tell(), 7)
            handle.seek(4)
            self.assertEqual(handle.read_fully(3), b"abc")

        self.assertEqual(self._path.read_bytes(), b"0123abc789")

    def test_write_extends(self):
        with _open(self._path, "rw") as handle:
            handle.seek(12)
            handle.write(b"xy")
            self.assertEqual(handle.length(), 14)
            handle.seek(10)
            self.assertEqual(handle.read(2), b"\x00\x00")

    def test_set_length_extend(self):
        with _open(self._path, "rw") as handle:
            handle.set_length(16)
            self.assertEqual(handle.length(), 16)
            handle.seek(10)
            self.assertEqual(handle.read_fully(6), b"\x00" * 6)

    def test_set_length_truncate_moves_pointer(self):
        with _open(self._path, "rw") as handle:
            handle.seek(8)
            handle.set_length(4)
            self.assertEqual(handle.length(), 4)
            self.assertEqual(handle.tell(), 4)

    def test_set_length_keeps_pointer(self):
        with _open(self._path, "rw") as handle:
            handle.seek(2)
            handle.set_length(4)
            self.assertEqual(handle.tell(), 2)

    def test_descriptor(self):
        with _open(self._path, "r") as handle:
            self.assertEqual(os.fstat(handle.fileno()).st_size, 10)
            self.assertIsInstance(handle.channel(), io.FileIO)

    def test_read_only_write(self):
        with _open(self._path, "r") as handle:
            with self.assertRaises(suio.core.handle.NotWritableError):
                handle.write(b"x")

            with self.assertRaises(suio.core.handle.NotWritableError):
                handle.set_length(0)

        self.assertEqual(self._path.read_bytes(), b"0123456789")

    def test_read_write_creates(self):
        path = pathlib.Path(self._directory.name, "created")

        with _open(path, "rw") as handle:
            self.assertEqual(handle.length(), 0)

        self.assertTrue(path.exists())

    def test_synchronous_modes(self):
        for mode in ["rws", "rwd"]:
            with _open(self._path, mode) as handle:
                handle.write_int(7)
                handle.seek(0)
                self.assertEqual(handle.read_int(), 7)

    def test_missing(self):
        with self.assertRaises(FileNotFoundError):
            _open(pathlib.Path(self._directory.name, "missing"), "r")

    def test_directory(self):
        with self.assertRaises(IsADirectoryError):
            _open(self._directory.name, "r")

    def test_close_idempotent(self):
        handle = _open(self._path, "r")
        descriptor = handle.fileno()

        handle.close()
        handle.close()

        self.assertTrue(handle.closed)

        with self.assertRaises(OSError):
            os.fstat(descriptor)

    def test_closed_operations(self):
        handle = _open(self._path, "rw")
        handle.close()

        for operation in [
            lambda: handle.seek(0),
            handle.tell,
            handle.length,
            lambda: handle.set_length(0),
            handle.fileno,
            handle.channel,
            handle.read,
            lambda: handle.write(b"x"),
            handle.read_int,
        ]:
            with self.assertRaises(suio.core.handle.ClosedError):
                operation()

    def test_close_after_failure(self):
        handle = _open(self._path, "r")

        with self.assertRaises(EOFError):
            with handle:
                handle.seek(8)
                handle.read_long()

        self.assertTrue(handle.closed)


class TestHandle(unittest.TestCase):
    def test_backend_required(self):
        with self.assertRaises(ValueError):
            suio.core.handle.Handle(object(), suio.core.mode.Mode("r"))


if __name__ == "main":  # pragma: no cover
    unittest.main()
