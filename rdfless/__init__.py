"""A colorful pretty printer for RDF: parsers for Turtle, TriG, N-Triples and N-Quads, and a colored formatter."""

__version__ = "0.1.9"
__all__ = ["__version__"]