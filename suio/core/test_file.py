import pathlib
import unittest

import suio
import suio.core
import suio.core.file


class TestFile(unittest.TestCase):
    def test_ordinary(self):
        file = suio.core.file.File("/tmp/file")
        self.assertFalse(file.privileged)
        self.assertEqual(file.path, pathlib.Path("/tmp/file"))
        self.assertEqual(str(file), "/tmp/file")

    def test_as_privileged(self):
        file = suio.core.file.File("/tmp/file")
        privileged = file.as_privileged()
        self.assertTrue(privileged.privileged)
        self.assertEqual(privileged.path, file.path)
        self.assertFalse(file.privileged)

    def test_as_privileged_keeps_instance(self):
        file = suio.core.file.File("/tmp/file", privileged=True)
        self.assertIs(file.as_privileged(), file)

    def test_of_string(self):
        self.assertEqual(
            suio.core.file.of("/tmp/file"),
            suio.core.file.File(pathlib.Path("/tmp/file")),
        )

    def test_of_file(self):
        file = suio.core.file.File("/tmp/file", privileged=True)
        self.assertIs(suio.core.file.of(file), file)

    def test_invalid(self):
        with self.assertRaises(TypeError):
            suio.core.file.File(42)

    def test_invalid_marker(self):
        with self.assertRaises(ValueError):
            suio.core.file.File("/tmp/file", privileged="yes")


if __name__ == "main":  # pragma: no cover
    unittest.main()
