"""
bulkrename - rename many files at once with regular expressions.

Walks a directory tree, selects paths with a matcher regex, rewrites them
with a renamer regex and a replacement string, previews the result and
applies it on confirmation.
"""

__version__ = "0.1.0"
