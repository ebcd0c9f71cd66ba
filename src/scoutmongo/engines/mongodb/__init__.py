"""MongoDB engine — Collections as search indexes, queried through aggregation."""

from scoutmongo.engines.mongodb.engine import MongoDBEngine

__all__ = ["MongoDBEngine"]
