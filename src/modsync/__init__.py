"""
modsync - Mod Directory Builder.

modsync turns a declared set of mod dependencies into the directory a
mod-loading runtime reads at startup. Shared libraries land at the root
of the output directory, libraries private to a single mod land in that
mod's own folder, and anything the host application already ships is
left out.

Key Components:
- core: Dependency model, resolution, partitioning, layout and sync
- cli: Command line interface (collect, plan, deps, run, show)
"""

__version__ = "0.3.0"
