"""Adapters connecting the core processor to files, transcripts and consoles."""
