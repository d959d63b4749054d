"""Built-in CLI sub-commands: ``query``, ``serve`` and ``config``."""
