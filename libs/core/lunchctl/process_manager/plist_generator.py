"""Plist generator for macOS launch agent configuration."""

import os
import plistlib
import tempfile
from pathlib import Path
from typing import Any, Callable, TypeVar
from xml.parsers.expat import ExpatError

from lunchctl.errors import (
    DirectoryCreationFailed,
    InvalidLabel,
    MalformedDescriptor,
    MissingLabel,
    NotFound,
    WriteFailed,
)
from lunchctl.models.launchctl import DEV_NULL, LaunchAgentConfig, ProcessType

T = TypeVar("T", bound=LaunchAgentConfig)

PLIST_FILE_MODE = 0o644


class PlistGenerator:
    """Converts launch agent configuration to and from plist files."""

    @staticmethod
    def generate_plist(config: LaunchAgentConfig) -> dict[str, Any]:
        """Generate a plist dictionary from configuration.

        Args:
            config: Launch agent configuration

        Returns:
            Dictionary suitable for plistlib serialization
        """
        plist_dict: dict[str, Any] = {
            "Label": config.label,
            "ProgramArguments": list(config.program_arguments),
            "RunAtLoad": config.run_at_load,
            "KeepAlive": config.keep_alive,
            "StandardOutPath": config.standard_out_path,
            "StandardErrorPath": config.standard_error_path,
            "ProcessType": ProcessType(config.process_type).value,
        }

        if config.working_directory is not None:
            plist_dict["WorkingDirectory"] = config.working_directory

        if config.environment_variables:
            plist_dict["EnvironmentVariables"] = dict(config.environment_variables)

        return plist_dict

    @staticmethod
    def serialize(config: LaunchAgentConfig) -> bytes:
        """Serialize configuration as an XML plist.

        Keys are sorted so the same configuration always yields the same bytes.
        """
        return plistlib.dumps(
            PlistGenerator.generate_plist(config),
            fmt=plistlib.FMT_XML,
            sort_keys=True,
        )

    @staticmethod
    def parse_plist(
        data: Any,
        factory: Callable[..., T] = LaunchAgentConfig,
        path: Path | None = None,
    ) -> T:
        """Rebuild a launch agent from a plist dictionary.

        Keys the launch agent does not model are ignored.

        Args:
            data: Decoded plist contents
            factory: Class to instantiate (LaunchAgentConfig or a subclass)
            path: File the data came from, for error messages

        Returns:
            Launch agent configuration

        Raises:
            MissingLabel: If there is no 'Label' key
            MalformedDescriptor: If a known key holds a value of the wrong type
        """
        if not isinstance(data, dict):
            raise MalformedDescriptor(path, "top-level object is not a dictionary")
        if "Label" not in data:
            raise MissingLabel(path)

        def get(key: str, kind: type | tuple[type, ...], default: Any) -> Any:
            value = data.get(key, default)
            if value is not default and not isinstance(value, kind):
                raise MalformedDescriptor(
                    path, f"'{key}' has unexpected type {type(value).__name__}"
                )
            return value

        label = get("Label", str, None)
        arguments = get("ProgramArguments", list, [])
        if not all(isinstance(arg, str) for arg in arguments):
            raise MalformedDescriptor(path, "'ProgramArguments' must only hold strings")

        environment = get("EnvironmentVariables", dict, {})
        if not all(isinstance(v, str) for v in environment.values()):
            raise MalformedDescriptor(path, "'EnvironmentVariables' values must be strings")

        try:
            process_type = ProcessType.parse(
                get("ProcessType", str, ProcessType.STANDARD.value)
            )
        except ValueError as e:
            raise MalformedDescriptor(path, str(e)) from e

        try:
            return factory(
                label=label,
                program_arguments=list(arguments),
                run_at_load=get("RunAtLoad", bool, False),
                keep_alive=get("KeepAlive", bool, False),
                standard_out_path=get("StandardOutPath", str, DEV_NULL),
                standard_error_path=get("StandardErrorPath", str, DEV_NULL),
                process_type=process_type,
                working_directory=get("WorkingDirectory", str, None),
                environment_variables=dict(environment),
            )
        except InvalidLabel as e:
            raise MalformedDescriptor(path, str(e)) from e

    @staticmethod
    def deserialize(
        data: bytes,
        factory: Callable[..., T] = LaunchAgentConfig,
        path: Path | None = None,
    ) -> T:
        """Parse XML or binary plist bytes into a launch agent.

        Raises:
            MalformedDescriptor: If the bytes are not a plist
            MissingLabel: If there is no 'Label' key
        """
        try:
            contents = plistlib.loads(data)
        except (ValueError, ExpatError, AttributeError, IndexError, TypeError) as e:
            raise MalformedDescriptor(path, f"not a valid plist ({e})") from e
        return PlistGenerator.parse_plist(contents, factory=factory, path=path)

    @staticmethod
    def write_plist(config: LaunchAgentConfig, output_path: Path) -> None:
        """Write a plist file from configuration.

        The bytes go to a temporary file next to ``output_path`` which is
        then renamed over it, so readers see either the old or the new file.

        Args:
            config: Launch agent configuration
            output_path: Path where the plist file will be written

        Raises:
            DirectoryCreationFailed: If the parent directory cannot be created
            WriteFailed: If the configuration cannot be serialized or the file cannot be written
        """
        directory = output_path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationFailed(directory, str(e)) from e

        # plistlib refuses control characters in strings
        try:
            payload = PlistGenerator.serialize(config)
        except ValueError as e:
            raise WriteFailed(output_path, str(e)) from e

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{output_path.name}.", suffix=".tmp", dir=directory
            )
        except (OSError, ValueError) as e:
            raise WriteFailed(output_path, str(e)) from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, PLIST_FILE_MODE)
            os.replace(tmp_name, output_path)
        except (OSError, ValueError) as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise WriteFailed(output_path, str(e)) from e

    @staticmethod
    def read_plist(
        path: Path,
        factory: Callable[..., T] = LaunchAgentConfig,
    ) -> T:
        """Read a plist file.

        Args:
            path: Path to the plist file
            factory: Class to instantiate (LaunchAgentConfig or a subclass)

        Returns:
            Launch agent configuration

        Raises:
            NotFound: If the plist file doesn't exist
            MalformedDescriptor: If the file is not a valid launch agent plist
        """
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise NotFound(path) from e
        return PlistGenerator.deserialize(data, factory=factory, path=path)
