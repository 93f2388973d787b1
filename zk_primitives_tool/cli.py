"""CLI entry point for zk-primitives-tool.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from zk_primitives_tool import __version__
from zk_primitives_tool.coordination.commands.watch_commands import (
    children_command,
    watch_command,
)
from zk_primitives_tool.coordination.commands.work_commands import (
    work_complete_command,
    work_create_command,
    work_get_command,
    work_list_command,
)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """A CLI that provides ZooKeeper coordination primitives as composable CLI commands"""
    pass


@main.group("coordination")
def coordination() -> None:
    """Membership watching and work records on ZooKeeper"""
    pass


# Register membership commands
coordination.add_command(children_command)
coordination.add_command(watch_command)

# Register work commands
coordination.add_command(work_create_command)
coordination.add_command(work_complete_command)
coordination.add_command(work_get_command)
coordination.add_command(work_list_command)

if __name__ == "__main__":
    main()
