import os
import pathlib
import tempfile
import unittest
import unittest.mock

import suio
import suio.core
import suio.core.configuration


class TestConfiguration(unittest.TestCase):
    def setUp(self):
        self._directory = tempfile.TemporaryDirectory()
        self._path = pathlib.Path(self._directory.name, "suio.yaml")

    def tearDown(self):
        self._directory.cleanup()

    def test_missing_file(self):
        self.assertEqual(
            suio.core.configuration.load(self._path),
            suio.core.configuration.DEFAULTS,
        )

    def test_empty_file(self):
        self._path.write_text("")
        self.assertEqual(
            suio.core.configuration.load(self._path),
            suio.core.configuration.DEFAULTS,
        )

    def test_partial(self):
        self._path.write_text("shell:\n  block_size: 4096\n")
        configuration = suio.core.configuration.load(self._path)

        self.assertEqual(configuration["shell"]["block_size"], 4096)
        self.assertEqual(configuration["shell"]["command"], ["sudo", "-n"])

    def test_command_replaced(self):
        self._path.write_text("shell:\n  command: [doas]\n")
        configuration = suio.core.configuration.load(self._path)

        self.assertEqual(configuration["shell"]["command"], ["doas"])

    def test_defaults_untouched(self):
        self._path.write_text("shell:\n  command: []\n")
        suio.core.configuration.load(self._path)

        self.assertEqual(
            suio.core.configuration.DEFAULTS["shell"]["command"],
            ["sudo", "-n"],
        )

    def test_invalid_block_size(self):
        self._path.write_text("shell:\n  block_size: 0\n")

        with self.assertRaises(suio.core.configuration.InvalidConfigurationError):
            suio.core.configuration.load(self._path)

    def test_unknown_key(self):
        self._path.write_text("cache: true\n")

        with self.assertRaises(suio.core.configuration.InvalidConfigurationError):
            suio.core.configuration.load(self._path)

    def test_not_a_mapping(self):
        self._path.write_text("- sudo\n")

        with self.assertRaises(suio.core.configuration.InvalidConfigurationError):
            suio.core.configuration.load(self._path)

    def test_malformed(self):
        self._path.write_text("shell: [\n")

        with self.assertRaises(suio.core.configuration.InvalidConfigurationError):
            suio.core.configuration.load(self._path)

    def test_environment(self):
        with unittest.mock.patch.dict(
            os.environ,
            {suio.core.configuration.ENVIRONMENT_VARIABLE: str(self._path)},
        ):
            self.assertEqual(suio.core.configuration.path(), self._path)

    def test_default_path(self):
        with unittest.mock.patch.dict(
            os.environ,
            {suio.core.configuration.ENVIRONMENT_VARIABLE: ""},
        ):
            self.assertEqual(
                suio.core.configuration.path(),
                suio.core.configuration.DEFAULT_PATH.expanduser(),
            )


if __name__ == "main":  # pragma: no cover
    unittest.main()
