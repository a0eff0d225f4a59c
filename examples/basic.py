"""Write, load, query, unload and remove a throwaway launch agent."""

import time

from lunchctl import LaunchAgent


def main():
    # Unique label so an existing agent is never touched
    label = f"co.example.lunchctl.basic.{int(time.time())}"

    agent = LaunchAgent.new(label)
    agent.program_arguments = ["/usr/bin/tail", "-f", "/dev/null"]
    agent.keep_alive = True
    agent.run_at_load = True

    print(f"Writing plist to {agent.path()}")
    agent.write()

    print(f"Bootstrapping '{agent.label}'")
    agent.bootstrap()

    # launchd needs a moment to spawn the job
    time.sleep(0.3)
    print(f"Is running: {agent.is_running()} (pid {agent.get_pid()})")

    print(f"Booting out '{agent.label}'")
    agent.boot_out()

    print(f"Removing plist {agent.path()}")
    agent.remove()


if __name__ == "__main__":
    main()
