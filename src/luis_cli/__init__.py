"""luis-cli — command-line client for the LUIS authoring API.

Resolves ``<verb> <resource>`` commands against a static operation
catalog and dispatches them over HTTP with a strict layered architecture.
"""

from luis_cli.version import __version__

__all__: list[str] = ["__version__"]
