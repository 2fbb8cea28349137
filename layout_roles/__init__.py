# Register passes on package import so the registry is populated for any entry point.
from . import passes  # noqa: F401

__all__: list[str] = []
