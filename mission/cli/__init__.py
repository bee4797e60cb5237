"""Command surface: one subcommand per (entity, verb) pair."""
