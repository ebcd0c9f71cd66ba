"""Search engine layer — Pluggable index backends.

Built-in engines:
  - mongodb: MongoDB collections with text indexes, queried via aggregation

Implement ``SearchEngine`` to connect your own index backend.
"""
