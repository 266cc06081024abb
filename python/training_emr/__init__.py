"""
Training EMR

Classroom sandbox for practicing patient chart entry. Each account keeps its
own mock patient collection in a local JSON store.
"""

__version__ = "1.0.0"
