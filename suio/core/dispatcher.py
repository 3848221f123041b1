import logging
import os
import typing

import suio
import suio.core
import suio.core.backend
import suio.core.backend.direct
import suio.core.backend.privileged
import suio.core.configuration
import suio.core.file
import suio.core.handle
import suio.core.mode
import suio.core.shell

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Chooses the backend of a new handle.

    Files marked as privileged always go through the privileged factory.
    Other files are opened directly, and only a direct open failing with
    FileNotFoundError is retried once through the privileged factory, since
    that is how a path visible to a more privileged context shows up to the
    caller. Every other failure is raised unchanged.
    """

    def __init__(
        self,
        direct: "suio.core.backend.Factory",
        privileged: "suio.core.backend.Factory",
    ):
        self.__direct = direct
        self.__privileged = privileged

    def open(
        self,
        file: typing.Union[str, os.PathLike, "suio.core.file.File"],
        mode: typing.Union[str, "suio.core.mode.Mode"],
    ) -> "suio.core.handle.Handle":
        mode = suio.core.mode.parse(mode)
        file = suio.core.file.of(file)

        if file.privileged:
            logger.debug("Opening %s with mode %s through privileged shell", file, mode)
            return suio.core.handle.Handle(self.__privileged(file, mode), mode)

        backend = None

        try:
            backend = self.__direct(file, mode)
        except FileNotFoundError:
            logger.debug(
                "%s not found with direct access, retrying through privileged shell",
                file,
            )

        if backend is None:
            backend = self.__privileged(file.as_privileged(), mode)
        else:
            logger.debug("Opened %s with mode %s directly", file, mode)

        return suio.core.handle.Handle(backend, mode)


# pylint: disable=redefined-builtin
def open(
    file: typing.Union[str, os.PathLike, "suio.core.file.File"],
    mode: typing.Union[str, "suio.core.mode.Mode"],
    shell: typing.Optional["suio.core.shell.Shell"] = None,
) -> "suio.core.handle.Handle":
    def privileged(file, mode):
        current = shell

        if current is None:
            current = suio.core.shell.from_configuration(
                suio.core.configuration.load(),
            )

        return suio.core.backend.privileged.Factory(current)(file, mode)

    return Dispatcher(
        suio.core.backend.direct.create,
        privileged,
    ).open(file, mode)
