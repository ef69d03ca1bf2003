"""Optimize a single icon and copy it into dev-host templates."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, List

from ..config import SendConfig
from ..logging import get_logger, log_command

logger = get_logger("send")

FLAG_BIG = "b"
FLAG_SMALL = "s"
FLAG_404 = "4"
FLAG_TR = "t"
KNOWN_FLAGS = frozenset({FLAG_BIG, FLAG_SMALL, FLAG_404, FLAG_TR})

TMP_PREFIX = "_tmp_"

_INLINE_BLOCKS = "tmpl/everything/blocks/common-all"


@dataclass(frozen=True)
class SendRequest:
    """One icon and the places it should be delivered to."""

    file_name: Path
    service: str
    dev: str
    instance: str
    flags: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def extension(self) -> str:
        return self.file_name.name.rsplit(".", 1)[-1]

    @property
    def tr(self) -> bool:
        return FLAG_TR in self.flags

    @property
    def tmp_file(self) -> Path:
        return self.file_name.with_name(f"{TMP_PREFIX}{self.file_name.name}")


@dataclass(frozen=True)
class Destination:
    """A remote template slot for the icon."""

    label: str
    host: str
    path: str

    @property
    def remote(self) -> str:
        return f"{self.host}:{self.path}"


@dataclass
class SendResult:
    """Outcome of a send run."""

    sent: List[Destination] = field(default_factory=list)
    failed: List[Destination] = field(default_factory=list)
    aborted: bool = False


def parse_instance(value: str) -> tuple[str, str]:
    """Split ``v25d1`` into the dev box (``v25``) and instance (``d1``)."""
    dev = value.split("d", 1)[0]
    return dev, value[len(dev):]


def parse_flags(value: str) -> FrozenSet[str]:
    flags = frozenset(value.lstrip("-"))
    unknown = sorted(flags - KNOWN_FLAGS)
    if unknown:
        logger.warning("Ignoring unknown flags: %s", ", ".join(unknown))
    return flags & KNOWN_FLAGS


def destinations(request: SendRequest, config: SendConfig | None = None) -> List[Destination]:
    """Return the destinations selected by the request flags, in b, s, 4 order."""
    config = config or SendConfig()
    host = config.host_template.format(dev=request.dev, instance=request.instance)
    root = config.remote_root_template.format(dev=request.dev, instance=request.instance)
    tr = "_tr" if request.tr else ""
    ext = request.extension

    result: List[Destination] = []
    if FLAG_BIG in request.flags:
        result.append(
            Destination(
                label=f"Big {ext} icon for all",
                host=host,
                path=f"{root}/{_INLINE_BLOCKS}/services-main/services-main.inline/"
                f"{request.service}{tr}.{ext}",
            )
        )
    if FLAG_SMALL in request.flags:
        result.append(
            Destination(
                label=f"Small {ext} icon for all",
                host=host,
                path=f"{root}/{_INLINE_BLOCKS}/services-all/services-all.inline/"
                f"{request.service}_small{tr}.{ext}",
            )
        )
    if FLAG_404 in request.flags:
        result.append(
            Destination(
                label=f"{ext} icon for 404",
                host=host,
                path=f"{root}/tmpl/white/blocks/404/services/services.inline/"
                f"service-{request.service}{tr}.{ext}",
            )
        )
    return result


class IconSender:
    """Runs chmod, cp, the optimizers and scp for a single icon."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        config: SendConfig | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self.config = config or SendConfig()

    def send(self, request: SendRequest) -> SendResult:
        result = SendResult()
        source = str(request.file_name)
        tmp_file = str(request.tmp_file)

        self._step(["chmod", "664", source])
        if not self._step(["cp", source, tmp_file]):
            result.aborted = True
            return result

        try:
            if not self._optimize(request.extension, tmp_file):
                result.aborted = True
                return result
            for destination in destinations(request, self.config):
                if self._step(["scp", tmp_file, destination.remote]):
                    logger.info("%s sent", destination.label)
                    result.sent.append(destination)
                else:
                    result.failed.append(destination)
        finally:
            request.tmp_file.unlink(missing_ok=True)
        return result

    # ------------------------------------------------------------------
    # Helpers

    def _optimize(self, extension: str, tmp_file: str) -> bool:
        if extension == "svg":
            for _ in range(self.config.svgo_passes):
                if not self._step(
                    ["svgo", "-i", tmp_file, "-o", tmp_file, "--multipass", "-p", "2"]
                ):
                    return False
            return True
        if extension == "png":
            return self._step(["optipng", tmp_file, "-o7"])
        logger.warning("Only svg and png icons can be sent, got .%s", extension)
        return False

    def _step(self, args: Iterable[str]) -> bool:
        command = list(args)
        log_command(logger, command)
        try:
            output = self._runner(command)
        except subprocess.CalledProcessError as exc:
            _log_output(exc.stdout, exc.stderr)
            logger.error("%s exited with status %s", command[0], exc.returncode)
            return False
        except OSError as exc:
            logger.error("Failed to run %s: %s", command[0], exc)
            return False
        _log_output(output, None)
        return True

    @staticmethod
    def _default_runner(args: Iterable[str]) -> str:
        completed = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=True,
        )
        if completed.stderr:
            logger.debug("%s", completed.stderr.strip())
        return completed.stdout


def _log_output(stdout: object, stderr: object) -> None:
    if stdout:
        logger.info("%s", str(stdout).strip())
    if stderr:
        logger.error("%s", str(stderr).strip())


__all__ = [
    "Destination",
    "IconSender",
    "SendRequest",
    "SendResult",
    "destinations",
    "parse_flags",
    "parse_instance",
]
