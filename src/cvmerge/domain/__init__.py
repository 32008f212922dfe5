"""Pure domain layer: snapshot model, conflict detection and merging."""
