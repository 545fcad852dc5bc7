"""Source tree discovery."""

from dirarchiver.source.discover import SourceNode, resolve_source_root, walk_source_tree

__all__ = ["SourceNode", "resolve_source_root", "walk_source_tree"]
