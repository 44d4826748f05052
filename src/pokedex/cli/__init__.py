"""Typer sub-command groups mounted on the root ``pokedex`` application."""
