"""twig - a toy in-memory branch and commit shell."""

__version__ = "0.1.0"
