"""Command-line interface for npcaffect."""
