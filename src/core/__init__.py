"""Core domain package for chatfilter.

Core contains rule compilation, censoring, and duplicate tracking without any
host-client or storage-specific code, keeping the filtering logic portable.
"""
