"""Shared Quotebox packages.

This namespace exposes helper modules that can be imported by any
application inside the repository. Individual packages should keep their
public API small and well-documented to encourage reuse.
"""
