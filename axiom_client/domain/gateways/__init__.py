from .transport import ITransport

__all__ = ["ITransport"]
