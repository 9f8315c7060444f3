"""Core interfaces/abstractions.

Contracts (Protocol) implemented by concrete adapters, so the Core depends
on abstractions and can be tested without real files or tokens.
"""
