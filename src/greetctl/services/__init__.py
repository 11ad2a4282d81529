"""Service layer — commands, their registry and runner, returning Result.

Services may import from config, events and output ports.
They must never import from cli or commands.
"""
