"""
nexuslookup - external knowledge lookup engine for chat agents.
"""

__version__ = "0.1.0"
