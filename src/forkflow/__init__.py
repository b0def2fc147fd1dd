"""forkflow CLI entry point.

This package provides a Click-based CLI that forks a repository, prepares a
local checkout and sets up a feature branch ready for a pull request. See
`forkflow --help` for details.
"""
