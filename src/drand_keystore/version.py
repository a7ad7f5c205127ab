"""Version information for drand keystore"""

__version__ = "0.1.0"
