"""Describe a launch agent in one constructor call, then run it through its lifecycle."""

import time

from lunchctl import LaunchAgent


def main():
    label = f"co.example.lunchctl.keywords.{int(time.time())}"

    agent = LaunchAgent(
        label=label,
        program_arguments=["/usr/bin/tail", "-f", "/dev/null"],
        keep_alive=True,
        run_at_load=True,
    )

    print(f"Writing plist to {agent.path()}")
    agent.write()

    print(f"Bootstrapping '{agent.label}'")
    agent.bootstrap()

    time.sleep(0.3)
    print(f"Is running: {agent.is_running()}")

    print(f"Booting out '{agent.label}'")
    agent.boot_out()

    print(f"Removing plist {agent.path()}")
    agent.remove()


if __name__ == "__main__":
    main()
