"""Frontends - ways to use histfile from an interactive program.

Submodules:
    prompt  prompt_toolkit History backed by a FileHistory
    cli/    The ``histfile`` command-line interface
"""
