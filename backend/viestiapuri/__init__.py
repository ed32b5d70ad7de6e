"""Viestiapuri: tekoälychatin välityspalvelin ja palauteseinä."""

__version__ = "0.1"
