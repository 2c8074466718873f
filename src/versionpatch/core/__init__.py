"""Core version patching logic."""
