"""Illness-spreading cellular automaton on a toroidal grid."""

__version__ = '0.1.0'
