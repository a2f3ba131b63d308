"""Word counting, random text generation, and simple and positional inverted indexes over text files."""

__version__ = "0.1.0"
__all__ = ["wordcount", "filegen", "simple_index", "positional_index"]