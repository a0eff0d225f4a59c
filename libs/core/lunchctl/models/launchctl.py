import os
from dataclasses import dataclass, field
from enum import Enum

from lunchctl.errors import InvalidLabel

DEV_NULL = "/dev/null"


class ProcessType(str, Enum):
    """launchd resource classification for a job.

    BACKGROUND jobs are throttled so they do not disturb the user,
    STANDARD is what launchd assumes when the key is absent, ADAPTIVE jobs
    move between background and interactive based on XPC activity and
    INTERACTIVE jobs run without resource limits, like apps.
    """

    BACKGROUND = "Background"
    STANDARD = "Standard"
    ADAPTIVE = "Adaptive"
    INTERACTIVE = "Interactive"

    @classmethod
    def parse(cls, value: str) -> "ProcessType":
        """Look up a process type by name, ignoring case."""
        for member in cls:
            if member.value.lower() == str(value).lower():
                return member
        raise ValueError(f"invalid process type: {value!r}")


@dataclass
class LaunchAgentConfig:
    """Configuration for a macOS launch agent.

    The label is fixed at construction; it names both the plist file and
    the launchd job. Every other field may be reassigned before writing.

    Attributes:
        label: Unique identifier for the launch agent (e.g., 'co.example.myapp')
        program_arguments: Executable path followed by its arguments
        run_at_load: Whether launchd starts the job as soon as it is loaded
        keep_alive: Whether launchd restarts the job when it exits
        standard_out_path: File receiving the job's stdout
        standard_error_path: File receiving the job's stderr
        process_type: launchd resource classification
        working_directory: Working directory for the process
        environment_variables: Environment variables for the process
    """

    label: str
    program_arguments: list[str] = field(default_factory=list)
    run_at_load: bool = False
    keep_alive: bool = False
    standard_out_path: str = DEV_NULL
    standard_error_path: str = DEV_NULL
    process_type: ProcessType = ProcessType.STANDARD
    working_directory: str | None = None
    environment_variables: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.label, str) or not self.label.strip():
            raise InvalidLabel(self.label)
        if os.sep in self.label or self.label in (".", ".."):
            raise InvalidLabel(self.label)

    def __setattr__(self, name, value):
        if name == "label" and "label" in self.__dict__:
            raise AttributeError("label cannot be changed after construction")
        super().__setattr__(name, value)

    @classmethod
    def new(cls, label: str):
        """Create a launch agent with every field but the label defaulted."""
        return cls(label=label)


@dataclass
class LaunchctlResult:
    """Result from a launchctl invocation.

    Attributes:
        success: Whether launchctl exited with status 0
        message: stdout on success, otherwise stderr (or stdout if empty)
        exit_code: Exit code from launchctl command
        stdout: Captured standard output
        stderr: Captured error output
    """

    success: bool
    message: str
    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""
