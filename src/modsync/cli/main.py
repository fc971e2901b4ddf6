"""
modsync CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import collect, deps, plan, run, show


@click.group()
@click.version_option(package_name="modsync")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """modsync: Mod Directory Builder.

    Collects declared mods and their libraries into a directory laid out
    for a mod-loading runtime: shared libraries at the root, private
    libraries in one folder per mod.

    \b
    Quick Start:
      modsync collect          # Sync build/mods with modsync.toml
      modsync plan             # Show the layout without writing
      modsync deps tree        # Show mods and their classpaths
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
main.add_command(collect.collect)
main.add_command(plan.plan)
main.add_command(deps.deps)
main.add_command(run.run)
main.add_command(show.show)

if __name__ == "__main__":
    main()
