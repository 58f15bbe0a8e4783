"""Command layer: argument collection, dispatch and output rendering."""
