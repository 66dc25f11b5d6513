"""Templating — kida filters for rendering location values.

Requires the ``templates`` extra (``pip install perch[templates]``).
"""
