"""
Optional integrations with web frameworks.

Import explicitly, e.g. `from gatekeep.integrations.fastapi import require`,
so FastAPI is only needed by apps that use it.
"""
