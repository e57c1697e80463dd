"""Decrypt 'able'-compressed AIFC sound files into plain AIFC."""

__version__ = "1.0.0"