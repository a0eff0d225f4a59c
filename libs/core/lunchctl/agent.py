"""Launch agent facade: configuration plus lifecycle in one object."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from lunchctl_logging import get_logger

from lunchctl.errors import RemoveFailed
from lunchctl.models.config import LaunchctlConfig
from lunchctl.models.launchctl import LaunchAgentConfig
from lunchctl.process_manager import paths
from lunchctl.process_manager.launchctl_manager import LaunchctlManager
from lunchctl.process_manager.plist_generator import PlistGenerator


@runtime_checkable
class LaunchControllable(Protocol):
    """Something launchctl can load, unload and query."""

    def bootstrap(self) -> None: ...

    def boot_out(self) -> None: ...

    def is_running(self) -> bool: ...


class LaunchAgent(LaunchAgentConfig):
    """A macOS launch agent.

    Launch agents start user-level processes at login or on demand. Each is
    described by a plist in ``~/Library/LaunchAgents`` named after its
    label and is managed through ``launchctl``.

    The object holds configuration only. Whether a plist exists, or the job
    is loaded or running, is asked of the filesystem and launchd on every
    call and never remembered.

    ``launchctl_config`` controls how launchctl is invoked. It is None by
    default, meaning the built-in settings; applications that load a config
    file assign it on the class or on one agent.

    Example:
        agent = LaunchAgent.new("co.example.sleeper")
        agent.program_arguments = ["/bin/sleep", "60"]
        agent.write()
        agent.bootstrap()
    """

    launchctl_config: LaunchctlConfig | None = None

    @staticmethod
    def exists(label: str) -> bool:
        """Check if a plist for ``label`` exists."""
        return paths.exists(label)

    @classmethod
    def from_file(cls, label: str) -> "LaunchAgent":
        """Load an agent from ``~/Library/LaunchAgents`` by label.

        Raises:
            NotFound: If there is no plist for the label
            MalformedDescriptor: If the plist cannot be parsed
            MissingLabel: If the plist has no 'Label' key
        """
        return PlistGenerator.read_plist(paths.descriptor_path(label), factory=cls)

    def path(self) -> Path:
        """Path to this agent's plist file."""
        return paths.descriptor_path(self.label)

    def write(self) -> None:
        """Write the plist to the user's LaunchAgents directory, replacing any existing one."""
        path = self.path()
        PlistGenerator.write_plist(self, path)
        get_logger('agent').info("plist written", label=self.label, path=str(path))

    def bootstrap(self) -> None:
        """Load the plist currently on disk into launchd."""
        self._manager().bootstrap()

    def boot_out(self) -> None:
        """Unload the agent; succeeds if it is not loaded."""
        self._manager().boot_out()

    def is_running(self) -> bool:
        """Check if the agent has a live process."""
        return self._manager().is_running()

    def get_pid(self) -> int | None:
        """PID of the agent's process, or None."""
        return self._manager().get_pid()

    def kickstart(self) -> None:
        """Restart the loaded agent."""
        self._manager().kickstart()

    def remove(self) -> None:
        """Unload the agent and delete its plist.

        Raises:
            BootOutFailed: If the agent is loaded and cannot be unloaded
            RemoveFailed: If the plist exists but cannot be deleted
        """
        self.boot_out()

        path = self.path()
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise RemoveFailed(path, str(e)) from e
        get_logger('agent').info("plist removed", label=self.label, path=str(path))

    def _manager(self) -> LaunchctlManager:
        return LaunchctlManager(self.label, config=self.launchctl_config or LaunchctlConfig())
