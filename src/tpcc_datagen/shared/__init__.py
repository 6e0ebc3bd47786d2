"""Shared models, constants, exceptions and logging setup for the TPC-C generator."""
