"""Read and write the header fields of Fallout 1, Fallout 2 and Fallout 3 save files."""

__version__ = "2.1.0"