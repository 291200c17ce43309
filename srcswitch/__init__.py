"""Switch package sources of systems and tools to mirror sites."""

__version__ = "0.1.0"