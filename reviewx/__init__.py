"""
ReviewX Code Review API

A small backend service that reviews a pasted code snippet with a
Gemini model and returns the review as text.
"""

__version__ = "1.0.0"
__author__ = "ReviewX Team"
