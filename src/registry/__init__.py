"""Registry clients.

- crates.py: crates.io version lookup and candidate list construction
"""
