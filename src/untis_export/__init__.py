"""untis-export: publish Untis substitution exports to a remote endpoint."""

__version__ = "0.1.0"
