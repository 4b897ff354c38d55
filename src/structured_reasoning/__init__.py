"""
structured-reasoning: an MCP server for sequential thinking and brainstorming.

This package keeps in-memory reasoning sessions and exposes them through MCP
tools. A thought run is a numbered sequence of thoughts in which later
thoughts may revise or branch from earlier ones. A brainstorming session
carries a topic and its ideas through six phases, from preparation to action
planning.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
