"""Generate Graphviz DOT documents from JSON data-model descriptions."""

__version__ = "1.0.0"
