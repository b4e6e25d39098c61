"""
Gated Mint CLI Commands Package
"""

__all__ = ['collection', 'mint', 'uri', 'config']
