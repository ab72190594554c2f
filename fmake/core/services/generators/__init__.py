"""
Generators — render the auxiliary files a framework bundle needs.

Each generator module exposes a ``render_*()`` function returning text
and a ``generate_*()`` function wrapping it in a ``GeneratedFile``.
"""
