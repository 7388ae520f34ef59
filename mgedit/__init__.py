"""In-memory buffers, windows, search, kill ring, undo, word commands and
ctags tables for an Emacs-style text editor."""

__version__ = "0.1.0"