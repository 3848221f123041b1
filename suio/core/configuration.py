import os
import pathlib
import typing

import cerberus
import mergedeep
import ruamel
import ruamel.yaml
import ruamel.yaml.error
import toolz

ENVIRONMENT_VARIABLE = "SUIO_CONFIGURATION"

DEFAULT_PATH = pathlib.Path("~", ".config", "suio", "suio.yaml")

DEFAULTS = {
    "shell": {
        "command": [
            "sudo",
            "-n",
        ],
        "block_size": 65536,
    },
}

SCHEMA = {
    "shell": {
        "type": "dict",
        "allow_unknown": False,
        "schema": {
            "command": {
                "type": "list",
                "schema": {
                    "type": "string",
                    "empty": False,
                },
            },
            "block_size": {
                "type": "integer",
                "min": 1,
            },
        },
    },
}


class Error(RuntimeError):
    pass


class InvalidConfigurationError(Error):
    def __init__(self, errors, path=None):
        if path is None:
            super().__init__("Invalid configuration: {}".format(errors))
        else:
            super().__init__("Invalid configuration {}: {}".format(path, errors))

        self.__errors = errors

    @property
    def errors(self):
        return self.__errors


class Validator(cerberus.Validator):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        if isinstance(self.error_handler, cerberus.errors.ToyErrorHandler):
            self.error_handler = cerberus.errors.BasicErrorHandler()


def path() -> pathlib.Path:
    value = os.environ.get(ENVIRONMENT_VARIABLE)

    if value is None or len(value) == 0:
        return DEFAULT_PATH.expanduser()

    return pathlib.Path(value).expanduser()


def read(
    configuration: typing.Optional[typing.Mapping[str, typing.Any]],
    source: typing.Optional[pathlib.Path] = None,
) -> typing.Dict[str, typing.Any]:
    if configuration is None:
        configuration = {}

    if not isinstance(configuration, typing.Mapping):
        raise InvalidConfigurationError("document must be a mapping", source)

    validator = Validator(SCHEMA, allow_unknown=False)

    if not validator.validate(dict(toolz.valmap(_plain, configuration))):
        raise InvalidConfigurationError(validator.errors, source)

    return mergedeep.merge(
        {},
        DEFAULTS,
        validator.document,
        strategy=mergedeep.Strategy.REPLACE,
    )


def load(
    source: typing.Optional[typing.Union[str, pathlib.Path]] = None,
) -> typing.Dict[str, typing.Any]:
    if source is None:
        source = path()

    source = pathlib.Path(source)

    data = None

    if source.exists():
        try:
            data = ruamel.yaml.YAML(typ="safe").load(source)
        except ruamel.yaml.error.YAMLError as error:
            raise InvalidConfigurationError(str(error), source) from error

    return read(data, source)


def _plain(value):
    if isinstance(value, typing.Mapping):
        return dict(toolz.valmap(_plain, value))
    elif isinstance(value, (list, tuple)):
        return list(map(_plain, value))

    return value
