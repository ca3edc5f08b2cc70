"""OpenClass: classroom content sharing API and client data layer."""

__version__ = "1.0.0"
