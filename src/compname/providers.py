"""
Computer name providers.

Each provider wraps one facility of the operating system that knows the
human-readable computer name. :meth:`HostNameProvider.get_computer_name`
never raises for an unavailable name; it logs the reason and returns ``None``.

Example:

.. code-block:: python

    provider = select_provider(Settings())
    name = provider.get_computer_name()

"""

import ctypes
import logging
import os
import platform
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, List

from .settings import ProviderName, Settings
from .utils import NameUnavailable, get_hostname, to_text

logger = logging.getLogger(__name__)

MACHINE_INFO_FILE = Path("/etc/machine-info")

MAX_COMPUTERNAME_LENGTH = 15
"Longest NetBIOS computer name on Windows, without the terminating NUL."


class HostNameProvider:
    """Base class for computer name providers."""

    name: str = "base"

    def get_computer_name(self) -> str | None:
        """
        Return the computer name, or ``None`` if it is not available.
        """
        try:
            return to_text(self.query())
        except NameUnavailable as e:
            logger.debug("%s: %s", self.name, e)
            return None

    def query(self) -> str | bytes | None:
        """Ask the platform for the raw name."""
        raise NotImplementedError("Subclasses must implement this method")

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class CommandProvider(HostNameProvider):
    """
    Provider that reads the name from the output of a command.
    """

    command: List[str] = []

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout

    def run_command(self, command: List[str]) -> bytes:
        """
        Run a command and return its output without the trailing line break.

        :param command: Command to run as a list of strings.
        """
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise NameUnavailable(f"Command {command[0]!r} not found") from e
        except subprocess.TimeoutExpired as e:
            raise NameUnavailable(f"Command {' '.join(command)!r} timed out after {self.timeout} seconds") from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", "replace").strip() if e.stderr else ""
            raise NameUnavailable(f"Command {' '.join(command)!r} failed with {e.returncode}: {stderr}") from e
        except OSError as e:
            raise NameUnavailable(f"Failed to run {' '.join(command)!r}: {e}") from e

        return result.stdout.removesuffix(b"\n").removesuffix(b"\r")

    def query(self) -> bytes:
        return self.run_command(self.command)


class ScutilProvider(CommandProvider):
    """
    macOS computer name from the System Configuration dynamic store.
    """

    name = "scutil"
    command = ["scutil", "--get", "ComputerName"]


class HostnamectlProvider(CommandProvider):
    """
    Linux pretty hostname as managed by systemd-hostnamed.

    Falls back to reading ``PRETTY_HOSTNAME`` from ``/etc/machine-info`` when
    ``hostnamectl`` is not installed or fails, as it does without systemd.
    """

    name = "hostnamectl"
    command = ["hostnamectl", "--pretty"]

    def __init__(self, timeout: float = 5.0, machine_info: Path = MACHINE_INFO_FILE):
        super().__init__(timeout)
        self.machine_info = machine_info

    def query(self) -> bytes:
        if shutil.which(self.command[0]):
            try:
                return self.run_command(self.command)
            except NameUnavailable as e:
                logger.debug("%s, reading %s", e, self.machine_info)
        else:
            logger.debug("hostnamectl not found, reading %s", self.machine_info)

        return self.read_machine_info()

    def read_machine_info(self) -> bytes:
        """
        Read ``PRETTY_HOSTNAME`` from the machine-info file.
        """
        try:
            with self.machine_info.open("rb") as f:
                lines = f.read().splitlines()
        except FileNotFoundError as e:
            raise NameUnavailable(f"File not found: {self.machine_info}") from e
        except OSError as e:
            raise NameUnavailable(f"Failed to read {self.machine_info}: {e}") from e

        for line in lines:
            key, sep, value = line.strip().partition(b"=")
            if sep and key == b"PRETTY_HOSTNAME":
                value = value.strip()
                # Values may be shell quoted
                if len(value) >= 2 and value[:1] == value[-1:] and value[:1] in (b'"', b"'"):
                    value = value[1:-1]
                return value

        raise NameUnavailable(f"PRETTY_HOSTNAME not set in {self.machine_info}")


def load_kernel32():
    """Return the Windows kernel32 library. Raises on other platforms."""
    return ctypes.windll.kernel32


class WindowsProvider(HostNameProvider):
    """
    Windows computer name from ``GetComputerNameW``.

    The ``COMPUTERNAME`` environment variable is only used when kernel32 can
    not be loaded, as it can be overridden by the caller.
    """

    name = "windows"

    def query(self) -> str | None:
        try:
            kernel32 = load_kernel32()
        except (AttributeError, OSError) as e:
            logger.debug("kernel32 not available (%s), reading COMPUTERNAME", e)
            return os.environ.get("COMPUTERNAME")

        size = ctypes.c_ulong(MAX_COMPUTERNAME_LENGTH + 1)
        buffer = ctypes.create_unicode_buffer(size.value)

        if not kernel32.GetComputerNameW(buffer, ctypes.pointer(size)):
            raise NameUnavailable(f"GetComputerNameW failed with error {kernel32.GetLastError()}")

        # On success size holds the name length without the NUL
        return buffer.value[:size.value]


class SocketProvider(HostNameProvider):
    """
    Network hostname of the system.
    """

    name = "socket"

    def query(self) -> str:
        try:
            return get_hostname()
        except OSError as e:
            raise NameUnavailable(f"gethostname failed: {e}") from e


class StaticProvider(HostNameProvider):
    """
    Provider returning a fixed value.
    """

    name = "static"

    def __init__(self, value: str | bytes | None):
        self.value = value

    def query(self) -> str | bytes | None:
        return self.value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.value!r}>"


class FallbackProvider(HostNameProvider):
    """
    Try providers in order and return the first name found.
    """

    name = "fallback"

    def __init__(self, providers: Iterable[HostNameProvider]):
        self.providers = list(providers)

    def get_computer_name(self) -> str | None:
        for provider in self.providers:
            name = provider.get_computer_name()
            if name is not None:
                return name
            logger.debug("No name from %r, trying next provider", provider)
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.providers!r}>"


def create_provider(name: ProviderName, timeout: float = 5.0) -> HostNameProvider:
    """
    Create a provider by name.

    :param name: Provider name. ``auto`` is resolved from the running platform.
    :param timeout: Timeout for command based providers.
    """

    if name is ProviderName.AUTO:
        name = platform_provider_name()

    match name:
        case ProviderName.SCUTIL:
            return ScutilProvider(timeout)
        case ProviderName.HOSTNAMECTL:
            return HostnamectlProvider(timeout)
        case ProviderName.WINDOWS:
            return WindowsProvider()
        case ProviderName.SOCKET:
            return SocketProvider()
        case _:
            raise ValueError(f"Unknown provider {name!r}")


def platform_provider_name(system: str | None = None) -> ProviderName:
    """
    Return the provider used for the platform.

    :param system: Platform name as returned by :func:`platform.system`.
    """
    system = system if system is not None else platform.system()

    match system.lower():
        case "darwin":
            return ProviderName.SCUTIL
        case "linux":
            return ProviderName.HOSTNAMECTL
        case "windows":
            return ProviderName.WINDOWS
        case _:
            return ProviderName.SOCKET


def select_provider(settings: Settings) -> HostNameProvider:
    """
    Build the provider described by the settings.
    """
    provider = create_provider(settings.PROVIDER, settings.COMMAND_TIMEOUT)

    if settings.FALLBACK and not isinstance(provider, SocketProvider):
        provider = FallbackProvider([provider, SocketProvider()])

    logger.debug("Using provider %r", provider)
    return provider
