from scoutmongo.observability.logging import setup_logging

__all__ = ["setup_logging"]
