"""Multi-NIC networking helpers: IP handling, HNS policies, API types and echo tools."""

__version__ = "1.2.6"